from repertorium.infrastructure.persistence.di import PersistenceProvider

__all__ = ["PersistenceProvider"]
