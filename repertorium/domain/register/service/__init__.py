from repertorium.domain.register.service.numbering import NumberingPolicy
from repertorium.domain.register.service.projector import IndexProjector, first_letter
from repertorium.domain.register.service.reader import RegisterReader
from repertorium.domain.register.service.stats_cache import StatsCache
from repertorium.domain.register.service.writer import RegisterWriter, RetryPolicy

__all__ = [
    "IndexProjector",
    "NumberingPolicy",
    "RegisterReader",
    "RegisterWriter",
    "RetryPolicy",
    "StatsCache",
    "first_letter",
]
