from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..domain.models import Vehicle
from ..services.inventory_svc import Outcome, Repository
from .deps import get_repo, raise_for_outcome

router = APIRouter()


class VehicleUpdate(BaseModel):
    brand: str
    model: str
    year: int
    store_id: int
    price: float
    condition: str  # NEW | SEMI_NEW | USED | DAMAGED


class VehicleCreate(VehicleUpdate):
    code: int


def _item_response(out: Outcome) -> dict:
    res = {"message": "ok", "rows": out.rows, "item": out.item.to_dict()}
    if out.warning is not None:
        res["warning"] = str(out.warning)
    return res


@router.get("/api/vehicles")
def api_vehicle_list(repo: Repository = Depends(get_repo)):
    out = raise_for_outcome(repo.read_all_vehicles())
    return {"items": [v.to_dict() for v in out.items]}


@router.post("/api/vehicles", status_code=201)
def api_vehicle_create(body: VehicleCreate, repo: Repository = Depends(get_repo)):
    out = raise_for_outcome(repo.create_vehicle(Vehicle(**body.model_dump())))
    return _item_response(out)


@router.get("/api/vehicles/{code}")
def api_vehicle_get(code: int, repo: Repository = Depends(get_repo)):
    out = raise_for_outcome(repo.get_vehicle(code))
    return out.item.to_dict()


@router.put("/api/vehicles/{code}")
def api_vehicle_update(code: int, body: VehicleUpdate, repo: Repository = Depends(get_repo)):
    out = raise_for_outcome(
        repo.update_vehicle(code, body.brand, body.model, body.year, body.store_id, body.price, body.condition)
    )
    return _item_response(out)


@router.delete("/api/vehicles/{code}")
def api_vehicle_delete(code: int, repo: Repository = Depends(get_repo)):
    out = raise_for_outcome(repo.delete_vehicle(code))
    return {"message": "ok", "rows": out.rows}
