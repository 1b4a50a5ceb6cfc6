"""Translate driver errors into the engine's error taxonomy."""

import logging

from sqlalchemy import exc as sa_exc

from repertorium.domain.shared.error import (
    InfrastructureError,
    StorageError,
    TransientConflictError,
)

logger = logging.getLogger(__name__)

# serialization_failure, deadlock_detected, lock_not_available, query_canceled (statement timeout)
TRANSIENT_SQLSTATES = frozenset({"40001", "40P01", "55P03", "57014"})

SQLITE_TRANSIENT_MESSAGES = (
    "database is locked",
    "database table is locked",
    "database is busy",
)


def _sqlstate(error: sa_exc.DBAPIError) -> str | None:
    orig = error.orig
    for candidate in (orig, getattr(orig, "__cause__", None)):
        if candidate is None:
            continue
        for attr in ("sqlstate", "pgcode"):
            code = getattr(candidate, attr, None)
            if isinstance(code, str) and code:
                return code
    return None


def is_transient(error: BaseException) -> bool:
    """True when retrying the whole transaction may succeed."""
    if isinstance(error, sa_exc.TimeoutError):
        # Connection pool exhausted under load
        return True
    if not isinstance(error, sa_exc.DBAPIError):
        return False
    code = _sqlstate(error)
    if code is not None:
        return code in TRANSIENT_SQLSTATES
    message = str(error.orig).lower()
    return any(m in message for m in SQLITE_TRANSIENT_MESSAGES)


def translate_db_error(error: BaseException) -> InfrastructureError:
    """Map a SQLAlchemy error to TransientConflictError or StorageError."""
    if is_transient(error):
        return TransientConflictError(f"Transient storage conflict: {error}")
    if isinstance(error, sa_exc.IntegrityError):
        logger.error("Integrity violation in register storage: %s", error)
        return StorageError(f"Register integrity violation: {error.orig}", code="INTEGRITY")
    return StorageError(f"Register storage failure: {error}")
