from dishka import provide

from repertorium.config import Config
from repertorium.domain.register.command.amend_entry import AmendRegisterEntryHandler
from repertorium.domain.register.command.create_entry import CreateRegisterEntryHandler
from repertorium.domain.register.port.read_store import RegisterReadStore
from repertorium.domain.register.port.unit_of_work import UnitOfWorkFactory
from repertorium.domain.register.query.get_entry import GetRegisterEntryHandler
from repertorium.domain.register.query.get_stats import GetRegisterStatsHandler
from repertorium.domain.register.query.letter_counts import GetLetterCountsHandler
from repertorium.domain.register.query.list_entries import ListRegisterEntriesHandler
from repertorium.domain.register.query.list_index import ListIndexEntriesHandler
from repertorium.domain.register.service.numbering import NumberingPolicy
from repertorium.domain.register.service.projector import IndexProjector
from repertorium.domain.register.service.reader import RegisterReader
from repertorium.domain.register.service.stats_cache import StatsCache
from repertorium.domain.register.service.writer import RegisterWriter, RetryPolicy
from repertorium.util.di.base import Provider
from repertorium.util.di.scope import Scope


class RegisterProvider(Provider):
    @provide(scope=Scope.APP)
    def get_numbering_policy(self, config: Config) -> NumberingPolicy:
        return NumberingPolicy(
            default_office_id=config.numbering.default_office_id,
            separate_land_registry_pool=config.numbering.separate_land_registry_pool,
        )

    @provide(scope=Scope.APP)
    def get_retry_policy(self, config: Config) -> RetryPolicy:
        return RetryPolicy(
            max_attempts=config.numbering.max_attempts,
            backoff_base=config.numbering.backoff_base,
            backoff_max=config.numbering.backoff_max,
        )

    @provide(scope=Scope.APP)
    def get_stats_cache(self, config: Config) -> StatsCache:
        return StatsCache(ttl_seconds=config.numbering.stats_cache_ttl)

    projector = provide(IndexProjector, scope=Scope.APP)

    # Services are stateless apart from the shared stats cache, so one per app
    @provide(scope=Scope.APP)
    def get_register_writer(
        self,
        uow_factory: UnitOfWorkFactory,
        numbering: NumberingPolicy,
        projector: IndexProjector,
        retry: RetryPolicy,
        stats_cache: StatsCache,
    ) -> RegisterWriter:
        return RegisterWriter(
            uow_factory=uow_factory,
            numbering=numbering,
            projector=projector,
            retry=retry,
            stats_cache=stats_cache,
        )

    @provide(scope=Scope.APP)
    def get_register_reader(
        self,
        store: RegisterReadStore,
        stats_cache: StatsCache,
    ) -> RegisterReader:
        return RegisterReader(store=store, stats_cache=stats_cache)

    # Command Handlers
    create_entry_handler = provide(CreateRegisterEntryHandler, scope=Scope.UOW)
    amend_entry_handler = provide(AmendRegisterEntryHandler, scope=Scope.UOW)

    # Query Handlers
    list_entries_handler = provide(ListRegisterEntriesHandler, scope=Scope.UOW)
    list_index_handler = provide(ListIndexEntriesHandler, scope=Scope.UOW)
    get_entry_handler = provide(GetRegisterEntryHandler, scope=Scope.UOW)
    get_stats_handler = provide(GetRegisterStatsHandler, scope=Scope.UOW)
    letter_counts_handler = provide(GetLetterCountsHandler, scope=Scope.UOW)
