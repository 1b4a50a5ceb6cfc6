from repertorium.util.di.base import Provider
from repertorium.util.di.scope import Scope

__all__ = ["Provider", "Scope"]
