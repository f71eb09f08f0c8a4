from autostore.logs import LogContext, search_logs


def test_write_and_search(conn):
    log = LogContext("STORE_CREATE", user="tester")
    log.set_entity("STORE", 3)
    log.set_payload({"code": 3, "name": "Loja Três"})
    log.set_after({"code": 3})
    log.write(conn, "OK")

    LogContext("VEHICLE_DELETE").write(conn, "NOT_FOUND")

    total, items = search_logs(conn, None, None, None, None, 1, 10)
    assert total == 2
    # newest first
    assert items[0]["action"] == "VEHICLE_DELETE"
    rec = items[1]
    assert rec["user"] == "tester"
    assert rec["entity_id"] == "3"
    assert "Loja Três" in rec["payload_json"]
    assert rec["latency_ms"] >= 0

    total, items = search_logs(conn, "Três", None, None, None, 1, 10)
    assert total == 1 and items[0]["action"] == "STORE_CREATE"

    total, _ = search_logs(conn, None, "VEHICLE_DELETE", None, None, 1, 10)
    assert total == 1


def test_write_without_connection_does_not_raise():
    LogContext("VEHICLE_CREATE").write(None, "ERROR", "not connected")


def test_write_on_closed_connection_does_not_raise(tmp_db_path):
    import sqlite3
    c = sqlite3.connect(tmp_db_path)
    c.close()
    LogContext("VEHICLE_CREATE").write(c, "OK")
