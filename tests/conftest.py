"""
Shared fixtures: deterministic value sources and an in-memory stand-in
for the psycopg_pool connection pool.
"""

import random
from contextlib import contextmanager

import psycopg
import pytest

from persistence import PersistenceFacade


class FixedValues:
    """Value source that hands out a fixed sequence, then repeats the last."""

    def __init__(self, *values):
        self.values = list(values)
        self.calls = []

    def randrange(self, start, stop):
        self.calls.append((start, stop))
        if len(self.values) > 1:
            return self.values.pop(0)
        return self.values[0]


class FakeCursor:
    def __init__(self, pool):
        self.pool = pool
        self._rows = []

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, sql, params=None):
        if self.pool.fail_with is not None:
            raise self.pool.fail_with
        self.pool.executed.append((sql, params))
        if sql.lstrip().upper().startswith("SELECT"):
            self._rows = list(self.pool.rows)

    def fetchall(self):
        return self._rows


class FakeConnection:
    def __init__(self, pool):
        self.pool = pool

    def cursor(self):
        return FakeCursor(self.pool)


class FakePool:
    """Just enough of psycopg_pool.ConnectionPool for the facade."""

    def __init__(self, conninfo="", **kwargs):
        self.conninfo = conninfo
        self.kwargs = kwargs
        self.rows = []
        self.executed = []
        self.fail_with = None
        self.closed = False

    @contextmanager
    def connection(self):
        yield FakeConnection(self)

    def close(self):
        self.closed = True


@pytest.fixture
def fake_pool():
    return FakePool()


@pytest.fixture
def facade(fake_pool):
    def factory(conninfo, **kwargs):
        fake_pool.conninfo = conninfo
        fake_pool.kwargs = kwargs
        return fake_pool
    return PersistenceFacade("host=test dbname=test", max_size=3, pool_factory=factory)


@pytest.fixture
def broken_facade(fake_pool):
    fake_pool.fail_with = psycopg.OperationalError("connection refused")
    return PersistenceFacade("host=test dbname=test", pool_factory=lambda conninfo, **kw: fake_pool)


@pytest.fixture
def client(monkeypatch, facade):
    import main

    monkeypatch.setattr(main, "facade", facade)
    monkeypatch.setattr(main, "value_source", FixedValues(42))
    monkeypatch.setattr(main, "quiz_rng", random.Random(7))
    main.app.config["TESTING"] = True
    with main.app.test_client() as c:
        yield c
