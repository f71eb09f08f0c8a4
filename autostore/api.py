"""
FastAPI app entry point aggregating per-entity routers under autostore/routes.
Keep as `uvicorn autostore.api:app`.

Each request gets its own short-lived connection (routes/deps.get_repo);
startup only makes sure the schema exists.
"""
from __future__ import annotations

import logging

from fastapi import FastAPI

from .db import open_connection
from .services.config_svc import get_config

logger = logging.getLogger(__name__)

app = FastAPI(title="autostore-api", version="0.1.0")


@app.on_event("startup")
def on_startup():
    app.state.cfg = get_config()
    conn = open_connection()
    if conn is None:
        logger.error("api started without a usable database")
        return
    conn.close()


# Include routers (split by entity)
from .routes import base as base_routes
from .routes import stores as stores_routes
from .routes import vehicles as vehicles_routes
from .routes import logs as logs_routes

app.include_router(base_routes.router)
app.include_router(stores_routes.router)
app.include_router(vehicles_routes.router)
app.include_router(logs_routes.router)
