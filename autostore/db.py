from __future__ import annotations

# autostore/db.py
import logging
import os
import sqlite3
from contextlib import contextmanager
from typing import Iterator

import yaml

from .logs import ensure_log_schema

logger = logging.getLogger(__name__)

# DB path resolution order:
# 1) env AUTOSTORE_DB_PATH (highest)
# 2) config.yaml test_db_path (when running under tests)
# 3) config.yaml db_path
# 4) fallback: <project root>/autostore.db
_PROJECT_ROOT = os.path.dirname(os.path.dirname(__file__))
_ROOT_DB = os.path.join(_PROJECT_ROOT, "autostore.db")
# Applied on every start; no migrations.
SCHEMA = """
CREATE TABLE IF NOT EXISTS store (
  code INTEGER PRIMARY KEY,
  name TEXT,
  address TEXT
);

CREATE TABLE IF NOT EXISTS vehicle (
  code INTEGER PRIMARY KEY,
  brand TEXT,
  model TEXT,
  year INTEGER,
  store_id INTEGER,
  price REAL,
  condition TEXT
);

CREATE INDEX IF NOT EXISTS idx_vehicle_store ON vehicle(store_id);
"""


def default_config_path() -> str:
    return os.environ.get("AUTOSTORE_CONFIG") or os.path.join(_PROJECT_ROOT, "config.yaml")


def read_config_yaml(path: str | None = None) -> dict:
    cfg_path = path or default_config_path()
    if not os.path.exists(cfg_path):
        return {}
    try:
        with open(cfg_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("config %s unreadable, using defaults: %s", cfg_path, e)
        return {}
    return cfg if isinstance(cfg, dict) else {}


def get_db_path(config_path: str | None = None) -> str:
    env_path = os.environ.get("AUTOSTORE_DB_PATH")
    cfg = read_config_yaml(config_path)
    cfg_db = cfg.get("db_path")
    cfg_test = cfg.get("test_db_path")
    is_test = (os.environ.get("APP_ENV") == "test") or (os.environ.get("PYTEST_CURRENT_TEST") is not None)

    if env_path:
        path = env_path
    elif is_test and isinstance(cfg_test, str) and cfg_test.strip():
        path = cfg_test.strip()
    elif isinstance(cfg_db, str) and cfg_db.strip():
        path = cfg_db.strip()
    else:
        path = _ROOT_DB

    if not os.path.isabs(path) and path != ":memory:":
        path = os.path.join(_PROJECT_ROOT, path)
    if path != ":memory:":
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    return path


def _connect(path: str) -> sqlite3.Connection:
    conn = sqlite3.connect(
        path,
        detect_types=sqlite3.PARSE_DECLTYPES | sqlite3.PARSE_COLNAMES,
        check_same_thread=False,
    )
    conn.execute("PRAGMA foreign_keys = ON;")
    conn.row_factory = sqlite3.Row
    return conn


def ensure_schema(conn: sqlite3.Connection) -> None:
    """Create store/vehicle (and the audit table) if missing."""
    conn.executescript(SCHEMA)
    ensure_log_schema(conn)
    conn.commit()


def open_connection(
    db_path: str | None = None,
    config_path: str | None = None,
    apply_schema: bool = True,
) -> sqlite3.Connection | None:
    """
    Open a connection and (by default) make sure the schema exists.
    On failure the error is logged and None is returned; callers hand that to
    the Repository, whose operations then report StorageError outcomes.
    """
    path = db_path or get_db_path(config_path)
    conn = None
    try:
        conn = _connect(path)
        if apply_schema:
            ensure_schema(conn)
    except sqlite3.Error as e:
        if conn is not None:
            conn.close()
        logger.error("database %s not connected: %s", path, e)
        return None
    logger.debug("database %s connected", path)
    return conn


@contextmanager
def get_conn(db_path: str | None = None) -> Iterator[sqlite3.Connection]:
    """
    Short-lived connection for scripts and tests. Uses the explicit db_path,
    otherwise get_db_path(). foreign_keys on, row_factory = Row.
    """
    conn = _connect(db_path or get_db_path())
    try:
        yield conn
    finally:
        conn.close()
