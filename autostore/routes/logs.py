from __future__ import annotations

from fastapi import APIRouter, Depends

from ..services.inventory_svc import Repository
from .deps import get_repo, raise_for_outcome

router = APIRouter()


@router.get("/api/logs/search")
def api_logs_search(
    page: int = 1,
    size: int = 20,
    action: str | None = None,
    query: str | None = None,
    ts_from: str | None = None,
    ts_to: str | None = None,
    repo: Repository = Depends(get_repo),
):
    out = raise_for_outcome(repo.operation_log(query, action, page, size, ts_from=ts_from, ts_to=ts_to))
    return {"total": out.rows, "items": out.items}
