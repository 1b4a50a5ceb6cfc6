from repertorium.application.api.v1.routes import klapper, register

__all__ = ["klapper", "register"]
