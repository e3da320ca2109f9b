"""
Tests for persistence/facade.py, against an in-memory pool.
"""

import threading

import psycopg
from psycopg_pool import PoolTimeout

from persistence import PersistenceFacade
from persistence.facade import INSERT_QUIZ_RESULT, SELECT_STRUCTURES


class TestFetch:
    def test_returns_rows(self, facade, fake_pool):
        fake_pool.rows = [{"id": "array", "name": "Array"}]
        result = facade.fetch_all_structures()
        assert result.ok
        assert result.records == [{"id": "array", "name": "Array"}]
        assert fake_pool.executed == [(SELECT_STRUCTURES, None)]

    def test_pool_created_lazily_with_ceiling(self, facade, fake_pool):
        assert facade._pool is None
        facade.fetch_all_structures()
        assert fake_pool.conninfo == "host=test dbname=test"
        assert fake_pool.kwargs["max_size"] == 3

    def test_connectivity_error_degrades(self, broken_facade):
        result = broken_facade.fetch_all_structures()
        assert not result.ok
        assert result.records == []
        assert result.error.reason == "connectivity"

    def test_pool_timeout_degrades(self, facade, fake_pool):
        fake_pool.fail_with = PoolTimeout("no connection available")
        assert facade.fetch_all_structures().error.reason == "connectivity"

    def test_pool_open_failure_degrades(self):
        def factory(conninfo, **kwargs):
            raise psycopg.OperationalError("bad host")
        result = PersistenceFacade("host=nowhere", pool_factory=factory).fetch_all_structures()
        assert result.error.reason == "connectivity"


class TestRecordQuizResult:
    def test_inserts_row(self, facade, fake_pool):
        result = facade.record_quiz_result("tree", 3, "a@example.com")
        assert result.success
        assert fake_pool.executed == [(INSERT_QUIZ_RESULT, ("tree", 3, "a@example.com"))]

    def test_duplicates_allowed(self, facade, fake_pool):
        facade.record_quiz_result("tree", 3, "a@example.com", submission_key="k1")
        facade.record_quiz_result("tree", 3, "a@example.com", submission_key="k1")
        assert len(fake_pool.executed) == 2

    def test_write_failure(self, broken_facade):
        result = broken_facade.record_quiz_result("tree", 3, "a@example.com")
        assert not result.success
        assert result.error.reason == "write-failure"

    def test_open_failure_is_write_failure(self):
        def factory(conninfo, **kwargs):
            raise psycopg.OperationalError("bad host")
        result = PersistenceFacade("host=nowhere", pool_factory=factory).record_quiz_result("tree", 1, "x@y")
        assert result.error.reason == "write-failure"

    def test_unhashable_key_does_not_raise(self, facade, fake_pool):
        result = facade.record_quiz_result("tree", 2, "a@example.com", submission_key=["a"])
        assert result.success
        assert facade._in_flight == set()
        assert len(fake_pool.executed) == 1

    def test_key_released_after_failure(self, broken_facade, fake_pool):
        broken_facade.record_quiz_result("tree", 1, "x@y", submission_key="k")
        fake_pool.fail_with = None
        assert broken_facade.record_quiz_result("tree", 1, "x@y", submission_key="k").success

    def test_concurrent_same_key_refused(self, facade, fake_pool):
        entered = threading.Event()
        release = threading.Event()
        original = facade._insert_quiz_result

        def slow_insert(*args):
            entered.set()
            release.wait(timeout=5)
            original(*args)

        facade._insert_quiz_result = slow_insert
        results = []
        worker = threading.Thread(
            target=lambda: results.append(facade.record_quiz_result("queue", 2, "a@b", submission_key="same"))
        )
        worker.start()
        assert entered.wait(timeout=5)

        second = facade.record_quiz_result("queue", 2, "a@b", submission_key="same")
        release.set()
        worker.join(timeout=5)

        assert not second.success
        assert second.error.reason == "in-flight"
        assert results[0].success
        assert len(fake_pool.executed) == 1


class TestClose:
    def test_close_releases_pool(self, facade, fake_pool):
        facade.fetch_all_structures()
        facade.close()
        assert fake_pool.closed
        assert facade._pool is None
