from repertorium.domain.register.util.di.provider import RegisterProvider

__all__ = ["RegisterProvider"]
