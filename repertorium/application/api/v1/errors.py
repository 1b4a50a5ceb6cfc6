"""Centralized error transformation for API routes.

Maps register errors (domain and infrastructure) to HTTPException responses.
"""

from typing import Any

from fastapi import HTTPException

from repertorium.domain.shared.error import (
    ContentionError,
    DomainError,
    InfrastructureError,
    NotFoundError,
    RegisterError,
    ValidationError,
)

DOMAIN_ERROR_STATUS_MAP: dict[type[DomainError], int] = {
    NotFoundError: 404,
    ValidationError: 422,
}

# Seconds a client should wait before resubmitting after contention
RETRY_AFTER_SECONDS = 1


def map_register_error(error: RegisterError) -> HTTPException:
    """Map a register error to an HTTPException.

    Args:
        error: The register error to map.

    Returns:
        HTTPException with appropriate status code and detail.
    """
    detail: dict[str, Any] = {
        "code": error.code,
        "message": error.message,
    }

    if isinstance(error, ContentionError):
        detail["attempts"] = error.attempts
        return HTTPException(
            status_code=503,
            detail=detail,
            headers={"Retry-After": str(RETRY_AFTER_SECONDS)},
        )

    if isinstance(error, InfrastructureError):
        return HTTPException(status_code=503, detail=detail)

    if isinstance(error, DomainError):
        status_code = DOMAIN_ERROR_STATUS_MAP.get(type(error), 400)
        if isinstance(error, ValidationError) and error.field is not None:
            detail["field"] = error.field
        return HTTPException(status_code=status_code, detail=detail)

    # Fallback for unknown RegisterError subclasses
    return HTTPException(status_code=500, detail=detail)
