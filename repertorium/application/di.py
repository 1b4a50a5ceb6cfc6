from dishka import AsyncContainer, from_context, make_async_container
from starlette.requests import Request

from repertorium.config import Config
from repertorium.domain.register.util.di import RegisterProvider
from repertorium.infrastructure.persistence import PersistenceProvider
from repertorium.util.di.base import Provider
from repertorium.util.di.scope import Scope


class ContextProvider(Provider):
    config = from_context(provides=Config, scope=Scope.APP)
    request = from_context(provides=Request, scope=Scope.UOW)


def create_container(config: Config | None = None) -> AsyncContainer:
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    return make_async_container(
        ContextProvider(),
        PersistenceProvider(),
        RegisterProvider(),
        context={Config: config},
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )
