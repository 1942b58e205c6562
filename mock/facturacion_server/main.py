from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pathlib import Path
import json
import os

app = FastAPI(title="Mock Billing Store (PostgREST)", version="1.0.0")
# Support both local development and Docker
DATA_DIR = Path("/facturacion_stub") if os.path.exists("/facturacion_stub") else Path(__file__).resolve().parents[1] / "facturacion_stub"

RESERVED_PARAMS = {"select", "order", "limit"}


def matches(row: dict, column: str, expr: str) -> bool:
    op, _, value = expr.partition(".")
    current = row.get(column)
    current = "" if current is None else str(current)
    if op == "eq":
        return current == value
    if op == "neq":
        return current != value
    raise HTTPException(status_code=400, detail=f"unsupported operator {op}")


@app.get("/health")
def health(): return {"status": "ok"}

@app.get("/rest/v1/{table}")
def select(table: str, request: Request):
    file = DATA_DIR / f"{table}.json"
    if not file.exists():
        raise HTTPException(status_code=404, detail="relation does not exist")
    rows = json.loads(file.read_text())

    params = request.query_params
    for column, expr in params.items():
        if column not in RESERVED_PARAMS:
            rows = [r for r in rows if matches(r, column, expr)]

    if "order" in params:
        column, _, direction = params["order"].partition(".")
        rows.sort(key=lambda r: r.get(column) or "", reverse=direction == "desc")
    if "limit" in params:
        rows = rows[: int(params["limit"])]
    if "select" in params and params["select"] != "*":
        columns = params["select"].split(",")
        rows = [{c: r.get(c) for c in columns} for r in rows]

    return JSONResponse(content=rows)
