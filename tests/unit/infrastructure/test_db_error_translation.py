"""Unit tests for driver error translation."""

import sqlite3

import pytest
from sqlalchemy import exc as sa_exc

from repertorium.domain.shared.error import StorageError, TransientConflictError
from repertorium.infrastructure.persistence.errors import is_transient, translate_db_error


class FakePgError(Exception):
    def __init__(self, message: str, sqlstate: str) -> None:
        super().__init__(message)
        self.sqlstate = sqlstate


def _pg_error(sqlstate: str) -> sa_exc.DBAPIError:
    return sa_exc.OperationalError("UPDATE register_counters ...", {}, FakePgError("boom", sqlstate))


class TestTranslateDbError:
    @pytest.mark.parametrize("sqlstate", ["40001", "40P01", "55P03", "57014"])
    def test_postgres_lock_and_serialization_failures_are_transient(self, sqlstate: str):
        error = translate_db_error(_pg_error(sqlstate))

        assert isinstance(error, TransientConflictError)

    def test_other_postgres_errors_are_storage_errors(self):
        error = translate_db_error(_pg_error("53300"))  # too_many_connections

        assert isinstance(error, StorageError)

    @pytest.mark.parametrize("message", ["database is locked", "database table is locked"])
    def test_sqlite_lock_is_transient(self, message: str):
        exc = sa_exc.OperationalError("INSERT ...", {}, sqlite3.OperationalError(message))

        assert is_transient(exc)
        assert isinstance(translate_db_error(exc), TransientConflictError)

    def test_sqlite_disk_failure_is_storage_error(self):
        exc = sa_exc.OperationalError("INSERT ...", {}, sqlite3.OperationalError("disk I/O error"))

        error = translate_db_error(exc)

        assert isinstance(error, StorageError)
        assert error.code == "STORAGE_ERROR"

    def test_integrity_violation_is_storage_error(self):
        exc = sa_exc.IntegrityError(
            "INSERT ...", {}, sqlite3.IntegrityError("UNIQUE constraint failed")
        )

        error = translate_db_error(exc)

        assert isinstance(error, StorageError)
        assert error.code == "INTEGRITY"

    def test_pool_timeout_is_transient(self):
        assert is_transient(sa_exc.TimeoutError("QueuePool limit reached"))
