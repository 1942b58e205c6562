"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class FacturacionAPIError(DomainException):
    """Billing data store returned an error, is unavailable, or sent malformed rows"""

    pass


class AnalisisInvalidoError(DomainException):
    """Risk analysis is missing required data and cannot be saved"""

    pass
