"""Unit tests for mapping register errors to HTTP responses."""

import pytest

from repertorium.application.api.v1.errors import map_register_error
from repertorium.domain.shared.error import (
    ContentionError,
    NotFoundError,
    StorageError,
    ValidationError,
)


class TestMapRegisterError:
    def test_validation_error_is_422_with_field(self):
        exc = map_register_error(ValidationError("At least one appearer", field="appearer_names"))

        assert exc.status_code == 422
        assert exc.detail["field"] == "appearer_names"
        assert exc.detail["code"] == "VALIDATION_ERROR"

    @pytest.mark.parametrize(
        ("error", "status"),
        [
            (NotFoundError("missing"), 404),
            (StorageError("database unavailable"), 503),
        ],
    )
    def test_status_codes(self, error, status: int):
        assert map_register_error(error).status_code == status

    def test_contention_asks_client_to_retry(self):
        exc = map_register_error(ContentionError("busy", attempts=5))

        assert exc.status_code == 503
        assert exc.headers == {"Retry-After": "1"}
        assert exc.detail["code"] == "CONTENTION"
        assert exc.detail["attempts"] == 5
