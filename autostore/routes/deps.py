from __future__ import annotations

from typing import Iterator

from fastapi import HTTPException, Request

from ..db import open_connection
from ..errors import InvalidConditionError, StoreInUseError
from ..services.config_svc import Policy, get_config
from ..services.inventory_svc import Outcome, Repository


def get_repo(request: Request) -> Iterator[Repository]:
    """One connection per request, closed when the response is done."""
    cfg = getattr(request.app.state, "cfg", None) or get_config()
    conn = open_connection(apply_schema=False)
    try:
        yield Repository(conn, Policy.from_config(cfg), user=cfg["operator"])
    finally:
        if conn is not None:
            conn.close()


def raise_for_outcome(out: Outcome) -> Outcome:
    """NOT_FOUND -> 404, refused store delete -> 409, anything else failing -> 400."""
    if out.ok:
        return out
    if out.not_found:
        raise HTTPException(status_code=404, detail=out.message)
    if isinstance(out.error, StoreInUseError):
        raise HTTPException(status_code=409, detail=str(out.error))
    if isinstance(out.error, InvalidConditionError):
        raise HTTPException(status_code=400, detail=str(out.error))
    raise HTTPException(status_code=400, detail=out.message or str(out.error))
