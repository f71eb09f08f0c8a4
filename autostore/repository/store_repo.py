from sqlite3 import Connection


def insert_store(conn: Connection, code: int, name: str, address: str) -> int:
    cur = conn.execute(
        "INSERT INTO store(code, name, address) VALUES(?,?,?)",
        (code, name, address),
    )
    return cur.rowcount


def list_all(conn: Connection):
    return conn.execute("SELECT code, name, address FROM store").fetchall()


def get_one(conn: Connection, code: int):
    return conn.execute("SELECT code, name, address FROM store WHERE code=?", (code,)).fetchone()


def update_store(conn: Connection, code: int, name: str, address: str) -> int:
    cur = conn.execute(
        "UPDATE store SET name=?, address=? WHERE code=?",
        (name, address, code),
    )
    return cur.rowcount


def delete_store(conn: Connection, code: int) -> int:
    return conn.execute("DELETE FROM store WHERE code=?", (code,)).rowcount


def summary(conn: Connection):
    """Per-store vehicle count and price totals, stores without vehicles included."""
    sql = (
        "SELECT s.code, s.name, COUNT(v.code) AS vehicles, "
        "COALESCE(SUM(v.price), 0) AS total_price, AVG(v.price) AS avg_price "
        "FROM store s LEFT JOIN vehicle v ON v.store_id = s.code "
        "GROUP BY s.code, s.name ORDER BY s.code"
    )
    return conn.execute(sql).fetchall()
