"""Error hierarchy for the register engine.

Error layers:
- RegisterError: Base class for all engine errors
- DomainError: Business rule violations, validation failures (4xx responses)
- InfrastructureError: Storage failures and lock contention (503 responses)

These errors are mapped to HTTP responses by the global exception handler in app.py.
"""


class RegisterError(Exception):
    """Base class for all register engine errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors (business logic violations - typically 4xx)
# =============================================================================


class DomainError(RegisterError):
    """Base class for domain/business errors."""


class NotFoundError(DomainError):
    """Resource not found."""


class ValidationError(DomainError):
    """Input validation failed. Never consumes a register number."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field


# =============================================================================
# Infrastructure Errors (system-level failures - typically 503)
# =============================================================================


class InfrastructureError(RegisterError):
    """Base class for infrastructure/system errors."""


class StorageError(InfrastructureError):
    """Persistence backend is unavailable or failed. Requires operator attention."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message, code=code or "STORAGE_ERROR")


class TransientConflictError(InfrastructureError):
    """A unit of work hit a retryable conflict (lock wait, serialization failure).

    Raised by the persistence layer; the register writer retries the whole
    unit of work when it sees one.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message, code="TRANSIENT_CONFLICT")


class ContentionError(InfrastructureError):
    """Retry budget exhausted while competing for a counter. Safe to resubmit."""

    def __init__(self, message: str, attempts: int) -> None:
        super().__init__(message, code="CONTENTION")
        self.attempts = attempts


class ConfigurationError(InfrastructureError):
    """System misconfiguration detected."""
