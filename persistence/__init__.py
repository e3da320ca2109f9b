"""
persistence/
------------
Database boundary.  The visualizer core never imports this package; only
the web layer does.

    from persistence import PersistenceFacade, FetchResult, WriteResult
"""

from persistence.facade import (
    PersistenceFacade,
    PersistenceError,
    ConnectivityError,
    WriteFailure,
    SubmissionInFlight,
    ErrorInfo,
    FetchResult,
    WriteResult,
)

__all__ = [
    "PersistenceFacade",
    "PersistenceError",
    "ConnectivityError",
    "WriteFailure",
    "SubmissionInFlight",
    "ErrorInfo",
    "FetchResult",
    "WriteResult",
]
