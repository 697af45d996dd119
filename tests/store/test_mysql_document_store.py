import json

import mysql.connector
import pytest

from src.hr_console.hr_console.core.enums import ChangeType
from src.hr_console.hr_console.core.exceptions import ConcurrencyError, StoreError
from src.hr_console.hr_console.database.bootstrap import _iter_sql_statements, _strip_create_db_and_use
from src.hr_console.hr_console.store.mysql_document_store import MySQLDocumentStore


class FakeCursor:
    def __init__(self, conn):
        self._conn = conn
        self._rows = []

    def execute(self, sql, params=()):
        statement = " ".join(sql.split())
        self._conn.executed.append((statement, params))
        if self._conn.fail_on and statement.startswith(self._conn.fail_on):
            raise self._conn.error
        self._rows = self._conn.selects.pop(0) if statement.startswith("SELECT") else []

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def fetchall(self):
        return list(self._rows)

    def close(self):
        pass


class FakeConnection:
    """Scripted connection: each SELECT returns the next entry of `selects`."""

    def __init__(self, selects=(), *, fail_on=None, error=None):
        self.selects = list(selects)
        self.fail_on = fail_on
        self.error = error
        self.executed = []
        self.committed = False
        self.rolled_back = False

    def cursor(self, dictionary=False):
        return FakeCursor(self)

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        pass


class FakeConnectionFactory:
    def __init__(self, conn):
        self.conn = conn

    def connect(self):
        return self.conn


def _row(doc_id, data, version):
    return {"collection": "things", "doc_id": doc_id, "data": json.dumps(data), "version": version}


def test_set_inserts_new_document_and_publishes():
    conn = FakeConnection(selects=[[]])
    store = MySQLDocumentStore(FakeConnectionFactory(conn))
    sub = store.subscribe("things")

    assert store.set("things", "a", {"x": 1}) == 1

    assert conn.executed[0][0].endswith("FOR UPDATE")
    assert conn.executed[1][0].startswith("INSERT INTO documents")
    assert conn.executed[1][1] == ("things", "a", '{"x": 1}', 1)
    assert conn.committed
    assert [(e.change_type, e.version) for e in sub.drain()] == [(ChangeType.ADDED, 1)]


def test_merge_updates_existing_row():
    conn = FakeConnection(selects=[[{"data": '{"counts": {"p": 1}, "name": "a"}', "version": 3}]])
    store = MySQLDocumentStore(FakeConnectionFactory(conn))

    assert store.set("things", "a", {"counts": {"h": 2}}, merge=True, expected_version=3) == 4

    sql, params = conn.executed[1]
    assert sql.startswith("UPDATE documents")
    assert json.loads(params[0]) == {"counts": {"p": 1, "h": 2}, "name": "a"}
    assert params[1] == 4


def test_version_mismatch_rolls_back():
    conn = FakeConnection(selects=[[{"data": "{}", "version": 5}]])
    store = MySQLDocumentStore(FakeConnectionFactory(conn))

    with pytest.raises(ConcurrencyError):
        store.set("things", "a", {"x": 1}, expected_version=4)

    assert conn.rolled_back
    assert not conn.committed
    assert len(conn.executed) == 1


def test_duplicate_insert_is_a_conflict():
    conn = FakeConnection(selects=[[]], fail_on="INSERT", error=mysql.connector.IntegrityError("Duplicate entry"))
    store = MySQLDocumentStore(FakeConnectionFactory(conn))

    with pytest.raises(ConcurrencyError):
        store.create("things", "a", {"x": 1})


def test_connector_errors_become_store_errors():
    conn = FakeConnection(fail_on="SELECT", error=mysql.connector.Error("gone away"))
    store = MySQLDocumentStore(FakeConnectionFactory(conn))

    with pytest.raises(StoreError):
        store.get("things", "a")


def test_get_and_list_decode_rows():
    conn = FakeConnection(
        selects=[
            [_row("a", {"x": 1}, 2)],
            [_row("emp_1_2024-03-01", {}, 1), _row("emp_1_2024-03-02", {}, 1)],
        ]
    )
    store = MySQLDocumentStore(FakeConnectionFactory(conn))

    doc = store.get("things", "a")
    docs = store.list("things", prefix="emp_1_2024-03-")

    assert (doc.data, doc.version) == ({"x": 1}, 2)
    assert [d.doc_id for d in docs] == ["emp_1_2024-03-01", "emp_1_2024-03-02"]
    assert conn.executed[1][1] == ("things", "emp\\_1\\_2024-03-%")


def test_delete_missing_document_returns_false():
    conn = FakeConnection(selects=[[]])
    store = MySQLDocumentStore(FakeConnectionFactory(conn))

    assert store.delete("things", "a") is False


def test_schema_statements_are_split():
    sql = _strip_create_db_and_use(
        "CREATE DATABASE IF NOT EXISTS x;\nUSE x;\n"
        "CREATE TABLE t (a VARCHAR(3) DEFAULT ';');\n"
        "INSERT INTO t VALUES ('a;b');"
    )

    assert list(_iter_sql_statements(sql)) == [
        "CREATE TABLE t (a VARCHAR(3) DEFAULT ';')",
        "INSERT INTO t VALUES ('a;b')",
    ]
