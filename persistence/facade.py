"""
facade.py — Persistence Facade
===============================
The two database operations the app needs, behind a pooled PostgreSQL
connection:

    fetch_all_structures()                       – read, idempotent
    record_quiz_result(structure_id, score, …)   – append-only write

Neither raises.  Failures are logged and folded into a result object so a
dead database degrades one panel instead of taking the page down.
At most one attempt per call; no retries.

The pool is created lazily on first use and capped at `max_size`
connections.  A pool factory can be injected for tests.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Set

import psycopg
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool, PoolTimeout

logger = logging.getLogger(__name__)

SELECT_STRUCTURES = "SELECT * FROM data_structures ORDER BY id"
INSERT_QUIZ_RESULT = (
    "INSERT INTO quiz_results (structure_id, score, user_email) VALUES (%s, %s, %s)"
)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------
class PersistenceError(Exception):
    reason = "persistence"


class ConnectivityError(PersistenceError):
    reason = "connectivity"


class WriteFailure(PersistenceError):
    reason = "write-failure"


class SubmissionInFlight(PersistenceError):
    reason = "in-flight"


@dataclass(frozen=True)
class ErrorInfo:
    reason:  str
    message: str

    @classmethod
    def from_exc(cls, exc: PersistenceError) -> "ErrorInfo":
        return cls(reason=exc.reason, message=str(exc))


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class FetchResult:
    records: List[Dict[str, Any]] = field(default_factory=list)
    error:   Optional[ErrorInfo]  = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class WriteResult:
    success: bool                = False
    error:   Optional[ErrorInfo] = None


# ---------------------------------------------------------------------------
# Facade
# ---------------------------------------------------------------------------
class PersistenceFacade:
    """
    Attributes:
        conninfo      : libpq connection string.
        max_size      : Pool connection ceiling.
        timeout       : Seconds to wait for a free connection.
        pool_factory  : Callable(conninfo, **kwargs) → pool; ConnectionPool by default.
    """

    def __init__(
        self,
        conninfo: str,
        max_size: int = 10,
        timeout: float = 5.0,
        pool_factory: Optional[Callable[..., Any]] = None,
    ):
        self.conninfo = conninfo
        self.max_size = max_size
        self.timeout = timeout
        self.pool_factory = pool_factory or ConnectionPool
        self._pool = None
        self._pool_lock = threading.Lock()
        self._in_flight: Set[str] = set()
        self._in_flight_lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings) -> "PersistenceFacade":
        return cls(
            settings.conninfo,
            max_size=settings.db_pool_max,
            timeout=settings.db_connect_timeout,
        )

    # ------------------------------------------------------------------
    # Pool
    # ------------------------------------------------------------------
    def _get_pool(self):
        with self._pool_lock:
            if self._pool is None:
                try:
                    self._pool = self.pool_factory(
                        self.conninfo,
                        min_size=1,
                        max_size=self.max_size,
                        timeout=self.timeout,
                        kwargs={"row_factory": dict_row},
                        open=True,
                    )
                except (psycopg.Error, PoolTimeout) as exc:
                    raise ConnectivityError(f"could not open connection pool: {exc}") from exc
            return self._pool

    def close(self) -> None:
        with self._pool_lock:
            if self._pool is not None:
                self._pool.close()
                self._pool = None

    # ------------------------------------------------------------------
    # Read path
    # ------------------------------------------------------------------
    def _select_structures(self) -> List[Dict[str, Any]]:
        pool = self._get_pool()
        try:
            with pool.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(SELECT_STRUCTURES)
                    return [dict(row) for row in cur.fetchall()]
        except (psycopg.Error, PoolTimeout) as exc:
            raise ConnectivityError(str(exc)) from exc

    def fetch_all_structures(self) -> FetchResult:
        try:
            return FetchResult(records=self._select_structures())
        except PersistenceError as exc:
            logger.exception("DB error while fetching structures")
            return FetchResult(error=ErrorInfo.from_exc(exc))

    # ------------------------------------------------------------------
    # Write path
    # ------------------------------------------------------------------
    def _insert_quiz_result(self, structure_id: str, score: float, user_email: str) -> None:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(INSERT_QUIZ_RESULT, (structure_id, score, user_email))
        except ConnectivityError as exc:
            raise WriteFailure(str(exc)) from exc
        except (psycopg.Error, PoolTimeout) as exc:
            raise WriteFailure(str(exc)) from exc

    def record_quiz_result(
        self,
        structure_id: str,
        score: float,
        user_email: str,
        submission_key: Optional[str] = None,
    ) -> WriteResult:
        """
        Insert one quiz_results row.  Duplicates are allowed; only the same
        `submission_key` running concurrently is refused.
        """
        try:
            self._claim(submission_key)
        except SubmissionInFlight as exc:
            logger.warning("quiz submission %s already in flight", submission_key)
            return WriteResult(error=ErrorInfo.from_exc(exc))

        try:
            self._insert_quiz_result(structure_id, score, user_email)
        except PersistenceError as exc:
            logger.exception("DB error while saving quiz result for %s", structure_id)
            return WriteResult(error=ErrorInfo.from_exc(exc))
        finally:
            self._release(submission_key)

        logger.info("saved quiz result: structure=%s score=%s", structure_id, score)
        return WriteResult(success=True)

    # ------------------------------------------------------------------
    # In-flight guard
    # ------------------------------------------------------------------
    def _claim(self, key: Optional[str]) -> None:
        if key is None:
            return
        key = str(key)
        with self._in_flight_lock:
            if key in self._in_flight:
                raise SubmissionInFlight(f"submission {key} is already being saved")
            self._in_flight.add(key)

    def _release(self, key: Optional[str]) -> None:
        if key is None:
            return
        key = str(key)
        with self._in_flight_lock:
            self._in_flight.discard(key)
