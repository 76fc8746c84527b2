"""Shared fakes: DB-API connections that record every acquire and release."""
import os
import sqlite3
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
os.environ["PROJECT_ROOT"] = str(ROOT)


class FakeCursor:
    def __init__(self, conn):
        self.conn = conn
        self.description = None
        self.rowcount = -1
        self._rows = []

    def execute(self, sql):
        self.conn.events.append(("execute", sql))
        if self.conn.fail_execute:
            raise RuntimeError("syntax error at or near \"SELEC\"")
        if sql.strip().lower().startswith("select") and self.conn.columns:
            self.description = [(c, None, None, None, None, None, None) for c in self.conn.columns]
            self._rows = list(self.conn.rows)
        else:
            self.rowcount = 1

    def fetchone(self):
        if self.conn.fail_fetch:
            raise RuntimeError("connection lost")
        return self._rows.pop(0) if self._rows else None

    def close(self):
        self.conn.events.append("cursor_close")
        if self.conn.fail_cursor_close:
            raise RuntimeError("cursor close failed")


class FakeConnection:
    def __init__(self, columns=(), rows=(), fail_execute=False, fail_fetch=False,
                 fail_cursor_close=False, fail_close=False):
        self.columns = list(columns)
        self.rows = list(rows)
        self.fail_execute = fail_execute
        self.fail_fetch = fail_fetch
        self.fail_cursor_close = fail_cursor_close
        self.fail_close = fail_close
        self.events = []
        self.closed = False

    def cursor(self):
        self.events.append("cursor_open")
        return FakeCursor(self)

    def close(self):
        self.events.append("close")
        if self.fail_close:
            raise RuntimeError("close failed")
        self.closed = True

    def cursors_balanced(self):
        return self.events.count("cursor_open") == self.events.count("cursor_close")


@pytest.fixture
def fake_connection():
    return FakeConnection(columns=["A", "B"], rows=[("1", "2"), ("3", "4")])


@pytest.fixture
def sqlite_connection():
    conn = sqlite3.connect(":memory:")
    conn.execute("CREATE TABLE canciones (titulo TEXT, anio INTEGER)")
    conn.execute("INSERT INTO canciones VALUES ('Bohemian Rhapsody', 1975), ('Imagine', 1971)")
    yield conn
    conn.close()


@pytest.fixture
def make_connection():
    return FakeConnection


@pytest.fixture
def broken_config_root(tmp_path, monkeypatch):
    config_dir = tmp_path / "src" / "config"
    config_dir.mkdir(parents=True)
    (config_dir / "config.yaml").write_text("connection: [unclosed\n", encoding="utf-8")
    monkeypatch.setenv("PROJECT_ROOT", str(tmp_path))
    return tmp_path
