from dishka import Provider as DishkaProvider

from repertorium.util.di.scope import Scope


class Provider(DishkaProvider):
    """Base for all DI providers. Anything not scoped explicitly lives for the app."""

    scope = Scope.APP
