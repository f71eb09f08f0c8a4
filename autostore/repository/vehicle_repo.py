from __future__ import annotations

from sqlite3 import Connection

_COLUMNS = "code, brand, model, year, store_id, price, condition"


def insert_vehicle(
    conn: Connection,
    code: int,
    brand: str,
    model: str,
    year: int,
    store_id: int,
    price: float,
    condition: str,
) -> int:
    cur = conn.execute(
        f"INSERT INTO vehicle({_COLUMNS}) VALUES(?,?,?,?,?,?,?)",
        (code, brand, model, year, store_id, price, condition),
    )
    return cur.rowcount


def list_all(conn: Connection):
    return conn.execute(f"SELECT {_COLUMNS} FROM vehicle").fetchall()


def list_by_store(conn: Connection, store_id: int):
    return conn.execute(f"SELECT {_COLUMNS} FROM vehicle WHERE store_id=?", (store_id,)).fetchall()


def get_one(conn: Connection, code: int):
    return conn.execute(f"SELECT {_COLUMNS} FROM vehicle WHERE code=?", (code,)).fetchone()


def update_vehicle(
    conn: Connection,
    code: int,
    brand: str,
    model: str,
    year: int,
    store_id: int,
    price: float,
    condition: str,
) -> int:
    cur = conn.execute(
        "UPDATE vehicle SET brand=?, model=?, year=?, store_id=?, price=?, condition=? WHERE code=?",
        (brand, model, year, store_id, price, condition, code),
    )
    return cur.rowcount


def delete_vehicle(conn: Connection, code: int) -> int:
    return conn.execute("DELETE FROM vehicle WHERE code=?", (code,)).rowcount


def count_by_store(conn: Connection, store_id: int) -> int:
    return int(conn.execute("SELECT COUNT(1) AS c FROM vehicle WHERE store_id=?", (store_id,)).fetchone()["c"])
