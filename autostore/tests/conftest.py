import os
import sys
import sqlite3
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


@pytest.fixture(scope="session")
def tmp_db_path(tmp_path_factory):
    path = tmp_path_factory.mktemp("db") / "autostore_test.db"
    # Point autostore to this temp DB
    os.environ["AUTOSTORE_DB_PATH"] = str(path)
    from autostore.db import ensure_schema
    conn = sqlite3.connect(str(path))
    try:
        ensure_schema(conn)
    finally:
        conn.close()
    return str(path)


@pytest.fixture(autouse=True)
def _clean_db(tmp_db_path):
    # Clean tables before each test for isolation
    # Safety: ensure we only ever wipe the temp DB, never a real one
    assert os.environ.get("AUTOSTORE_DB_PATH") == tmp_db_path, "Refusing to clean non-temp DB"
    conn = sqlite3.connect(tmp_db_path)
    try:
        for t in ("vehicle", "store", "operation_log"):
            conn.execute(f"DELETE FROM {t}")
        conn.commit()
    finally:
        conn.close()
    yield


@pytest.fixture()
def conn(tmp_db_path):
    from autostore.db import open_connection
    c = open_connection(tmp_db_path)
    assert c is not None
    yield c
    c.close()


@pytest.fixture()
def make_repo(conn):
    from autostore.services.config_svc import Policy
    from autostore.services.inventory_svc import Repository

    def _make(**policy):
        return Repository(conn, Policy(**policy))
    return _make


@pytest.fixture()
def repo(make_repo):
    return make_repo()


@pytest.fixture()
def client(tmp_db_path):
    from fastapi.testclient import TestClient
    from autostore.api import app
    # context manager runs startup/shutdown, so each test gets a fresh connection
    with TestClient(app) as c:
        yield c
