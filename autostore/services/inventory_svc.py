from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass, field
from typing import Any, Callable

from ..domain.depreciation import apply_depreciation, normalize_condition
from ..domain.models import Store, Vehicle
from ..errors import AutostoreError, InvalidConditionError, StorageError, StoreInUseError
from ..logs import LogContext, search_logs
from ..repository import store_repo, vehicle_repo
from .config_svc import Policy

logger = logging.getLogger(__name__)

OK = "OK"
NOT_FOUND = "NOT_FOUND"
ERROR = "ERROR"


@dataclass
class Outcome:
    """Result of a Repository operation; the caller decides how to show it."""
    status: str = OK
    rows: int = 0
    items: list = field(default_factory=list)
    error: AutostoreError | None = None
    warning: InvalidConditionError | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status == OK

    @property
    def not_found(self) -> bool:
        return self.status == NOT_FOUND

    @property
    def item(self) -> Any:
        return self.items[0] if self.items else None


class Repository:
    """
    Vehicle/store access over one injected connection.

    Every operation contains its own failures: sqlite errors (and a missing
    connection) come back as ERROR outcomes carrying a StorageError, zero
    affected rows on update/delete come back as NOT_FOUND. Mutations are
    committed one by one and recorded in operation_log.
    """

    def __init__(self, conn: sqlite3.Connection | None, policy: Policy | None = None, user: str = "owner"):
        self.conn = conn
        self.policy = policy or Policy()
        self.user = user

    # ---- plumbing ----

    def _connection(self) -> sqlite3.Connection:
        if self.conn is None:
            raise StorageError("database not connected")
        return self.conn

    def _failed(self, log: LogContext | None, what: str, exc: Exception) -> Outcome:
        err = exc if isinstance(exc, StorageError) else StorageError(str(exc))
        if err is not exc:
            err.__cause__ = exc
        if self.conn is not None:
            try:
                self.conn.rollback()
            except sqlite3.Error:
                pass
        logger.error("%s: %s", what, err)
        if log is not None:
            log.write(self.conn, ERROR, str(err))
        return Outcome(ERROR, error=err, message=f"{what}: {err}")

    def _read(self, what: str, fetch: Callable[[sqlite3.Connection], list], mapper) -> Outcome:
        try:
            rows = fetch(self._connection())
        except (sqlite3.Error, StorageError) as e:
            return self._failed(None, what, e)
        items = [mapper(r) for r in rows]
        return Outcome(OK, rows=len(items), items=items)

    def _write(self, log: LogContext, what: str, run: Callable[[sqlite3.Connection], int], done: str, missing: str) -> Outcome:
        try:
            conn = self._connection()
            rows = run(conn)
            conn.commit()
        except (sqlite3.Error, StorageError) as e:
            return self._failed(log, what, e)
        if rows == 0:
            log.write(self.conn, NOT_FOUND)
            return Outcome(NOT_FOUND, rows=0, message=missing)
        log.write(self.conn, OK)
        return Outcome(OK, rows=rows, message=done)

    def _vet_condition(self, condition: str, depreciate: bool, price: float):
        """(condition, price, warning) or raises InvalidConditionError under strict policy."""
        try:
            canonical = normalize_condition(condition)
        except InvalidConditionError as e:
            if self.policy.strict_condition:
                raise
            logger.warning("%s, keeping price %.2f", e, price)
            return condition, float(price), e
        if depreciate:
            return canonical, apply_depreciation(canonical, price), None
        return canonical, float(price), None

    # ---- vehicles ----

    def create_vehicle(self, v: Vehicle) -> Outcome:
        log = LogContext("VEHICLE_CREATE", self.user)
        log.set_entity("VEHICLE", v.code)
        log.set_payload(v.to_dict())
        try:
            condition, price, warning = self._vet_condition(v.condition, True, v.price)
        except InvalidConditionError as e:
            log.write(self.conn, ERROR, str(e))
            return Outcome(ERROR, error=e, message=f"Vehicle {v.code} rejected: {e}")

        stored = Vehicle(v.code, v.brand, v.model, v.year, v.store_id, price, condition)
        try:
            conn = self._connection()
            rows = vehicle_repo.insert_vehicle(
                conn, stored.code, stored.brand, stored.model, stored.year, stored.store_id, stored.price, stored.condition
            )
            conn.commit()
        except (sqlite3.Error, StorageError) as e:
            return self._failed(log, f"Vehicle {v.code} not created", e)

        log.set_after(stored.to_dict())
        log.write(self.conn, OK, str(warning) if warning else None)
        return Outcome(OK, rows=rows, items=[stored], warning=warning, message="Vehicle created.")

    def read_all_vehicles(self) -> Outcome:
        return self._read("Vehicles not listed", vehicle_repo.list_all, Vehicle.from_row)

    def read_vehicles_by_store(self, store_id: int) -> Outcome:
        return self._read(
            f"Vehicles of store {store_id} not listed",
            lambda conn: vehicle_repo.list_by_store(conn, store_id),
            Vehicle.from_row,
        )

    def get_vehicle(self, code: int) -> Outcome:
        try:
            row = vehicle_repo.get_one(self._connection(), code)
        except (sqlite3.Error, StorageError) as e:
            return self._failed(None, f"Vehicle {code} not read", e)
        if row is None:
            return Outcome(NOT_FOUND, message=f"Vehicle {code} not found.")
        return Outcome(OK, rows=1, items=[Vehicle.from_row(row)])

    def update_vehicle(
        self,
        code: int,
        brand: str,
        model: str,
        year: int,
        store_id: int,
        price: float,
        condition: str,
    ) -> Outcome:
        log = LogContext("VEHICLE_UPDATE", self.user)
        log.set_entity("VEHICLE", code)
        log.set_payload({"brand": brand, "model": model, "year": year, "store_id": store_id, "price": price, "condition": condition})
        try:
            condition, price, warning = self._vet_condition(condition, self.policy.depreciate_on_update, price)
        except InvalidConditionError as e:
            log.write(self.conn, ERROR, str(e))
            return Outcome(ERROR, error=e, message=f"Vehicle {code} rejected: {e}")

        def run(conn):
            before = vehicle_repo.get_one(conn, code)
            if before is not None:
                log.set_before(dict(before))
            return vehicle_repo.update_vehicle(conn, code, brand, model, year, store_id, price, condition)

        out = self._write(log, f"Vehicle {code} not updated", run, "Vehicle updated.", f"Vehicle {code} not found.")
        if out.ok:
            out.items = [Vehicle(code, brand, model, year, store_id, price, condition)]
            out.warning = warning
        return out

    def delete_vehicle(self, code: int) -> Outcome:
        log = LogContext("VEHICLE_DELETE", self.user)
        log.set_entity("VEHICLE", code)

        def run(conn):
            before = vehicle_repo.get_one(conn, code)
            if before is not None:
                log.set_before(dict(before))
            return vehicle_repo.delete_vehicle(conn, code)

        return self._write(log, f"Vehicle {code} not deleted", run, "Vehicle deleted.", f"Vehicle {code} not found.")

    # ---- stores ----

    def create_store(self, s: Store) -> Outcome:
        log = LogContext("STORE_CREATE", self.user)
        log.set_entity("STORE", s.code)
        log.set_payload(s.to_dict())
        out = self._write(
            log,
            f"Store {s.code} not created",
            lambda conn: store_repo.insert_store(conn, s.code, s.name, s.address),
            "Store created.",
            f"Store {s.code} not created.",
        )
        if out.ok:
            out.items = [s]
        return out

    def read_all_stores(self) -> Outcome:
        return self._read("Stores not listed", store_repo.list_all, Store.from_row)

    def get_store(self, code: int) -> Outcome:
        try:
            row = store_repo.get_one(self._connection(), code)
        except (sqlite3.Error, StorageError) as e:
            return self._failed(None, f"Store {code} not read", e)
        if row is None:
            return Outcome(NOT_FOUND, message=f"Store {code} not found.")
        return Outcome(OK, rows=1, items=[Store.from_row(row)])

    def update_store(self, code: int, name: str, address: str) -> Outcome:
        log = LogContext("STORE_UPDATE", self.user)
        log.set_entity("STORE", code)
        log.set_payload({"name": name, "address": address})

        def run(conn):
            before = store_repo.get_one(conn, code)
            if before is not None:
                log.set_before(dict(before))
            return store_repo.update_store(conn, code, name, address)

        out = self._write(log, f"Store {code} not updated", run, "Store updated.", f"Store {code} not found.")
        if out.ok:
            out.items = [Store(code, name, address)]
        return out

    def delete_store(self, code: int) -> Outcome:
        log = LogContext("STORE_DELETE", self.user)
        log.set_entity("STORE", code)

        def run(conn):
            if self.policy.restrict_store_delete:
                n = vehicle_repo.count_by_store(conn, code)
                if n > 0:
                    raise StoreInUseError(code, n)
            before = store_repo.get_one(conn, code)
            if before is not None:
                log.set_before(dict(before))
            return store_repo.delete_store(conn, code)

        return self._write(log, f"Store {code} not deleted", run, "Store deleted.", f"Store {code} not found.")

    # ---- audit ----

    def operation_log(
        self,
        q: str | None = None,
        action: str | None = None,
        page: int = 1,
        size: int = 20,
        ts_from: str | None = None,
        ts_to: str | None = None,
    ) -> Outcome:
        try:
            total, items = search_logs(self._connection(), q, action, ts_from, ts_to, page, size)
        except (sqlite3.Error, StorageError) as e:
            return self._failed(None, "Operation log not read", e)
        return Outcome(OK, rows=total, items=items)
