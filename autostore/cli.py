"""
Vehicle & store inventory, console menu.

Options:
  1  Add vehicle               6  List stores
  2  Add store                 7  List vehicles of a store
  3  Update vehicle            8  Delete vehicle
  4  Update store              9  Delete store
  5  List vehicles            10  Operation log
                              11  Export inventory report
  0  Exit

Numbers are read with int()/float() as typed; a malformed number raises
ValueError and ends the program.
"""
from __future__ import annotations

import argparse
import logging
import sys

import pandas as pd

from .db import open_connection
from .domain.depreciation import CONDITIONS
from .domain.models import Store, Vehicle
from .errors import AutostoreError
from .services.config_svc import Policy, get_config
from .services.inventory_svc import Outcome, Repository
from .services.report_svc import build_report, export_report, stores_frame, vehicles_frame

logger = logging.getLogger(__name__)

MENU = """
--- Inventory Menu ---
1. Add vehicle
2. Add store
3. Update vehicle
4. Update store
5. List vehicles
6. List stores
7. List vehicles of a store
8. Delete vehicle
9. Delete store
10. Operation log
11. Export inventory report
0. Exit"""

CONDITION_PROMPT = " | ".join(CONDITIONS)


def show_outcome(out: Outcome):
    if out.warning is not None:
        print(f"Warning: {out.warning}")
    if out.ok:
        print(out.message or "Done.")
    elif out.not_found:
        print(out.message or "Not found (0 rows affected).")
    else:
        print(f"Error: {out.message or out.error}")


def show_frame(df: pd.DataFrame, title: str):
    print(f"\n=== {title} ===")
    if df.empty:
        print("(empty)")
    else:
        print(df.to_string(index=False))


# ---------------- Actions ----------------

def add_vehicle(repo: Repository):
    code = int(input("Vehicle code: "))
    brand = input("Brand: ")
    model = input("Model: ")
    year = int(input("Year: "))
    store_id = int(input("Store id: "))
    price = float(input("Price: "))
    condition = input(f"Condition ({CONDITION_PROMPT}): ")
    out = repo.create_vehicle(Vehicle(code, brand, model, year, store_id, price, condition))
    show_outcome(out)
    if out.ok:
        print(f"Stored price: {out.item.price:,.2f}")


def add_store(repo: Repository):
    code = int(input("Store code: "))
    name = input("Store name: ")
    address = input("Store address: ")
    show_outcome(repo.create_store(Store(code, name, address)))


def update_vehicle(repo: Repository):
    code = int(input("Code of the vehicle to update: "))
    brand = input("New brand: ")
    model = input("New model: ")
    year = int(input("New year: "))
    store_id = int(input("New store id: "))
    price = float(input("New price: "))
    condition = input(f"New condition ({CONDITION_PROMPT}): ")
    show_outcome(repo.update_vehicle(code, brand, model, year, store_id, price, condition))


def update_store(repo: Repository):
    code = int(input("Code of the store to update: "))
    name = input("New name: ")
    address = input("New address: ")
    show_outcome(repo.update_store(code, name, address))


def list_vehicles(repo: Repository):
    out = repo.read_all_vehicles()
    if out.ok:
        show_frame(vehicles_frame(out.items), "Vehicles")
    else:
        show_outcome(out)


def list_stores(repo: Repository):
    out = repo.read_all_stores()
    if out.ok:
        show_frame(stores_frame(out.items), "Stores")
    else:
        show_outcome(out)


def list_store_vehicles(repo: Repository):
    store_id = int(input("Store id: "))
    out = repo.read_vehicles_by_store(store_id)
    if not out.ok:
        show_outcome(out)
        return
    if not out.items:
        print(f"No vehicles for store {store_id}.")
        return
    for v in out.items:
        print()
        print(v.describe())


def delete_vehicle(repo: Repository):
    code = int(input("Code of the vehicle to delete: "))
    show_outcome(repo.delete_vehicle(code))


def delete_store(repo: Repository):
    code = int(input("Code of the store to delete (it must have no vehicles): "))
    show_outcome(repo.delete_store(code))


def operation_log(repo: Repository):
    out = repo.operation_log(page=1, size=20)
    if not out.ok:
        show_outcome(out)
        return
    df = pd.DataFrame(out.items, columns=["ts", "action", "entity_type", "entity_id", "result", "err_msg"])
    show_frame(df, f"Operation log (last {len(out.items)} of {out.rows})")


def export_inventory(repo: Repository, out_dir: str):
    try:
        report = build_report(repo)
    except AutostoreError as e:
        print(f"Error: {e}")
        return
    show_frame(report["stores"], "Stores")
    show_frame(report["vehicles"], "Vehicles")
    show_frame(report["summary"], "Summary")
    for path in export_report(report, out_dir):
        print(f"CSV written: {path}")


# ---------------- Entry ----------------

def run_menu(repo: Repository, export_dir: str = "exports"):
    actions = {
        1: add_vehicle,
        2: add_store,
        3: update_vehicle,
        4: update_store,
        5: list_vehicles,
        6: list_stores,
        7: list_store_vehicles,
        8: delete_vehicle,
        9: delete_store,
        10: operation_log,
        11: lambda r: export_inventory(r, export_dir),
    }
    while True:
        print(MENU)
        choice = int(input("Choose an option: "))
        if choice == 0:
            print("Exiting...")
            break
        action = actions.get(choice)
        if action is None:
            print("Invalid option.")
            continue
        action(repo)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Vehicle & store inventory (SQLite)")
    parser.add_argument("--config", default=None, help="config.yaml path")
    parser.add_argument("--db", default=None, help="database file, overrides config")
    args = parser.parse_args(argv)

    cfg = get_config(args.config)
    logging.basicConfig(
        level=getattr(logging, cfg["log_level"], logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    conn = open_connection(args.db, args.config)
    if conn is None:
        print("Database not connected; every operation will fail.")
    repo = Repository(conn, Policy.from_config(cfg), user=cfg["operator"])
    try:
        run_menu(repo, cfg["export_dir"])
    finally:
        if conn is not None:
            conn.close()


if __name__ == "__main__":
    main()
