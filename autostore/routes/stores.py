from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..domain.models import Store
from ..services.inventory_svc import Repository
from .deps import get_repo, raise_for_outcome

router = APIRouter()


class StoreCreate(BaseModel):
    code: int
    name: str
    address: str


class StoreUpdate(BaseModel):
    name: str
    address: str


@router.get("/api/stores")
def api_store_list(repo: Repository = Depends(get_repo)):
    out = raise_for_outcome(repo.read_all_stores())
    return {"items": [s.to_dict() for s in out.items]}


@router.post("/api/stores", status_code=201)
def api_store_create(body: StoreCreate, repo: Repository = Depends(get_repo)):
    out = raise_for_outcome(repo.create_store(Store(**body.model_dump())))
    return {"message": "ok", "item": out.item.to_dict()}


@router.get("/api/stores/{code}")
def api_store_get(code: int, repo: Repository = Depends(get_repo)):
    out = raise_for_outcome(repo.get_store(code))
    return out.item.to_dict()


@router.put("/api/stores/{code}")
def api_store_update(code: int, body: StoreUpdate, repo: Repository = Depends(get_repo)):
    out = raise_for_outcome(repo.update_store(code, body.name, body.address))
    return {"message": "ok", "rows": out.rows, "item": out.item.to_dict()}


@router.delete("/api/stores/{code}")
def api_store_delete(code: int, repo: Repository = Depends(get_repo)):
    out = raise_for_outcome(repo.delete_store(code))
    return {"message": "ok", "rows": out.rows}


@router.get("/api/stores/{code}/vehicles")
def api_store_vehicles(code: int, repo: Repository = Depends(get_repo)):
    out = raise_for_outcome(repo.read_vehicles_by_store(code))
    return {"items": [v.to_dict() for v in out.items]}
