"""Shared fakes for the repository and service tests."""

import re

import pytest


def squash(sql: str) -> str:
    """Collapse whitespace so assertions can match SQL fragments."""
    return re.sub(r"\s+", " ", sql).strip()


class FakeCursor:
    def __init__(self, conn):
        self.conn = conn
        self._rows = []
        self.rowcount = -1

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False

    def execute(self, sql, params=None):
        self.conn.executed.append((squash(sql), params))
        if self.conn.fail_on and self.conn.fail_on in sql:
            raise self.conn.error
        result = self.conn.results.pop(0) if self.conn.results else []
        if isinstance(result, int):
            self._rows, self.rowcount = [], result
        else:
            self._rows, self.rowcount = list(result), len(result)

    def fetchall(self):
        return self._rows

    def fetchone(self):
        return self._rows[0] if self._rows else None


class FakeConnection:
    """
    Scripted connection. Each `execute` consumes the next entry of `results`:
    a list of row tuples, or an int used as the rowcount of a write.
    """

    def __init__(self, results=None):
        self.results = list(results or [])
        self.executed = []
        self.commits = 0
        self.rollbacks = 0
        self.fail_on = None
        self.error = None

    def cursor(self):
        return FakeCursor(self)

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1

    def fail_when(self, fragment, error):
        self.fail_on = fragment
        self.error = error

    @property
    def statements(self):
        return [sql for sql, _ in self.executed]


class FakeDatabase:
    """Stands in for db.connection.Database; hands out a single FakeConnection."""

    def __init__(self, conn=None):
        self.conn = conn or FakeConnection()
        self.borrowed = 0
        self.released = 0

    def get_connection(self):
        self.borrowed += 1
        return self.conn

    def release_connection(self, conn):
        self.released += 1


@pytest.fixture
def fake_db():
    return FakeDatabase()
