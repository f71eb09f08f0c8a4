from __future__ import annotations

import datetime as dt
import os
import sqlite3

import pandas as pd

from ..errors import StorageError
from ..repository import store_repo
from .inventory_svc import Repository

STORE_COLUMNS = ["code", "name", "address"]
VEHICLE_COLUMNS = ["code", "brand", "model", "year", "store_id", "price", "condition"]
SUMMARY_COLUMNS = ["code", "name", "vehicles", "total_price", "avg_price"]


def vehicles_frame(vehicles) -> pd.DataFrame:
    return pd.DataFrame([v.to_dict() for v in vehicles], columns=VEHICLE_COLUMNS)


def stores_frame(stores) -> pd.DataFrame:
    return pd.DataFrame([s.to_dict() for s in stores], columns=STORE_COLUMNS)


def build_report(repo: Repository) -> dict[str, pd.DataFrame]:
    """Stores, vehicles and a per-store summary. Raises StorageError if any read fails."""
    stores = repo.read_all_stores()
    if not stores.ok:
        raise stores.error or StorageError(stores.message)
    vehicles = repo.read_all_vehicles()
    if not vehicles.ok:
        raise vehicles.error or StorageError(vehicles.message)

    # summary straight from SQL so stores without vehicles still show up
    try:
        rows = store_repo.summary(repo.conn)
    except sqlite3.Error as e:
        raise StorageError(f"summary not built: {e}") from e
    summary = pd.DataFrame([dict(r) for r in rows], columns=SUMMARY_COLUMNS)
    summary["avg_price"] = summary["avg_price"].fillna(0.0)

    return {
        "stores": stores_frame(stores.items),
        "vehicles": vehicles_frame(vehicles.items),
        "summary": summary,
    }


def export_report(report: dict[str, pd.DataFrame], out_dir: str, date: str | None = None) -> list[str]:
    date = date or dt.datetime.now().strftime("%Y%m%d")
    os.makedirs(out_dir, exist_ok=True)
    paths = []
    for name, df in report.items():
        path = os.path.join(out_dir, f"{name}_{date}.csv")
        df.to_csv(path, index=False, encoding="utf-8-sig")
        paths.append(path)
    return paths
