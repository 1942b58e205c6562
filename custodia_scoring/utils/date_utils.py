"""Date manipulation utilities"""

from datetime import date, datetime, timedelta


def parse_fecha(value: str) -> date:
    """Parse an ISO date or timestamp (as returned by PostgREST) into a date"""
    if len(value) == 10:
        return date.fromisoformat(value)
    return datetime.fromisoformat(value.replace("Z", "+00:00")).date()


def dias_entre(inicio: date, fin: date) -> int:
    """Whole days from inicio to fin (negative if fin is earlier)"""
    return (fin - inicio).days


def en_ventana(fecha: date, hoy: date, dias: int) -> bool:
    """True if fecha falls within the trailing `dias` days ending on hoy (inclusive)"""
    return hoy - timedelta(days=dias) <= fecha <= hoy
