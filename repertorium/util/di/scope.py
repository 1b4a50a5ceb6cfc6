"""Custom Dishka scopes for the register service."""

from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """Dependency injection scopes.

    Hierarchy: APP -> UOW

    - APP: Application lifetime (engine, caches, services)
    - UOW: One HTTP request or CLI command
    """

    APP = new_scope("APP")
    UOW = new_scope("UOW")
