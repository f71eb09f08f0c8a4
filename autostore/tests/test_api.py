import sqlite3
from types import SimpleNamespace

import pytest

from autostore.routes.deps import get_repo
from autostore.services import inventory_svc


def test_health_and_version(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json().get("status") == "ok"

    v = client.get("/version")
    assert v.status_code == 200
    assert v.json().get("app") == "autostore-api"


def test_store_and_vehicle_flow(client):
    r = client.post("/api/stores", json={"code": 1, "name": "A", "address": "X"})
    assert r.status_code == 201

    r = client.post(
        "/api/vehicles",
        json={"code": 10, "brand": "Fiat", "model": "Uno", "year": 2010, "store_id": 1, "price": 1000, "condition": "SEMI_NOVO"},
    )
    assert r.status_code == 201
    body = r.json()
    assert body["item"]["price"] == 950.0
    assert body["item"]["condition"] == "SEMI_NEW"
    assert "warning" not in body

    items = client.get("/api/stores/1/vehicles").json()["items"]
    assert len(items) == 1 and items[0]["code"] == 10 and items[0]["price"] == 950.0

    r = client.put(
        "/api/vehicles/10",
        json={"brand": "Fiat", "model": "Uno", "year": 2010, "store_id": 1, "price": 900, "condition": "DAMAGED"},
    )
    assert r.status_code == 200
    assert client.get("/api/vehicles/10").json()["price"] == 900.0

    assert client.get("/api/vehicles").json()["items"][0]["code"] == 10
    assert client.get("/api/stores").json()["items"] == [{"code": 1, "name": "A", "address": "X"}]

    r = client.put("/api/stores/1", json={"name": "A2", "address": "X2"})
    assert r.status_code == 200 and r.json()["item"]["name"] == "A2"

    assert client.delete("/api/vehicles/10").status_code == 200
    assert client.delete("/api/stores/1").status_code == 200


def test_not_found_is_404(client):
    assert client.get("/api/vehicles/404").status_code == 404
    assert client.get("/api/stores/404").status_code == 404
    assert client.delete("/api/vehicles/404").status_code == 404
    r = client.put("/api/stores/404", json={"name": "n", "address": "a"})
    assert r.status_code == 404


def test_duplicate_is_400_and_unknown_condition_warns(client):
    client.post("/api/stores", json={"code": 1, "name": "A", "address": "X"})
    r = client.post("/api/stores", json={"code": 1, "name": "A", "address": "X"})
    assert r.status_code == 400

    r = client.post(
        "/api/vehicles",
        json={"code": 3, "brand": "a", "model": "b", "year": 2000, "store_id": 1, "price": 100, "condition": "MINT"},
    )
    assert r.status_code == 201
    assert r.json()["item"]["price"] == 100.0
    assert "MINT" in r.json()["warning"]


def test_logs_search(client):
    client.post("/api/stores", json={"code": 7, "name": "Loja", "address": "Rua"})
    res = client.get("/api/logs/search", params={"action": "STORE_CREATE"}).json()
    assert res["total"] == 1
    assert res["items"][0]["entity_id"] == "7"


def test_logs_search_storage_failure_is_400(client, monkeypatch):
    def locked(*args, **kwargs):
        raise sqlite3.OperationalError("database is locked")

    monkeypatch.setattr(inventory_svc, "search_logs", locked)
    r = client.get("/api/logs/search")
    assert r.status_code == 400
    assert "database is locked" in r.json()["detail"]


def test_each_request_gets_its_own_connection(tmp_db_path):
    request = SimpleNamespace(app=SimpleNamespace(state=SimpleNamespace(cfg=None)))
    gen_a, gen_b = get_repo(request), get_repo(request)
    repo_a, repo_b = next(gen_a), next(gen_b)
    assert repo_a.conn is not None and repo_b.conn is not None
    assert repo_a.conn is not repo_b.conn

    conn_a = repo_a.conn
    gen_a.close()
    gen_b.close()
    with pytest.raises(sqlite3.ProgrammingError):
        conn_a.execute("SELECT 1")


def test_failed_request_does_not_undo_other_writes(client):
    client.post("/api/stores", json={"code": 1, "name": "A", "address": "X"})
    body = {"code": 10, "brand": "Fiat", "model": "Uno", "year": 2010, "store_id": 1, "price": 1000, "condition": "NEW"}
    assert client.post("/api/vehicles", json=body).status_code == 201
    assert client.post("/api/vehicles", json=body).status_code == 400
    r = client.put(
        "/api/vehicles/10",
        json={"brand": "Fiat", "model": "Uno", "year": 2010, "store_id": 1, "price": 500, "condition": "NEW"},
    )
    assert r.status_code == 200
    assert client.get("/api/vehicles/10").json()["price"] == 500.0
