"""
Agenda bootstrap

Wires settings, logging, the remote store adapter, the duration ledger and
the auto-completion scheduler into a single object the presentation layer
can hold on to.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from agenda.config.settings import Settings, get_settings
from agenda.core.shared.logger import configure_logging
from agenda.domains.physician_calendar.application import (
    AppointmentBook,
    AutoCompletionSweep,
    CalendarQueries,
    CompleteAppointmentUseCase,
    DurationLedger,
    IAppointmentStore,
    IDurationStore,
    InFlightRegistry,
    OpenSlotsBatchUseCase,
    OpenSlotUseCase,
    RefreshAppointmentsUseCase,
)
from agenda.domains.physician_calendar.domain.value_objects import SchedulingPolicy
from agenda.domains.physician_calendar.infrastructure import (
    AutoCompletionScheduler,
    InMemoryDurationStore,
    RedisDurationStore,
    RemoteAppointmentStoreClient,
)

logger = logging.getLogger(__name__)


@dataclass
class PhysicianAgenda:
    """Everything the UI needs for one physician's session."""

    settings: Settings
    policy: SchedulingPolicy
    store: IAppointmentStore
    book: AppointmentBook
    ledger: DurationLedger
    in_flight: InFlightRegistry
    queries: CalendarQueries
    refresh: RefreshAppointmentsUseCase
    open_slot: OpenSlotUseCase
    open_slots: OpenSlotsBatchUseCase
    complete: CompleteAppointmentUseCase
    sweep: AutoCompletionSweep
    scheduler: AutoCompletionScheduler
    _owns_store: bool = field(default=False, repr=False)

    async def start(self) -> None:
        """Open the remote store, load the agenda and start the sweep."""
        if self._owns_store and isinstance(self.store, RemoteAppointmentStoreClient):
            await self.store.open()
        result = await self.refresh.execute()
        if not result.success:
            logger.warning(f"Initial agenda load failed: {result.error_message}")
        await self.scheduler.start()

    async def stop(self) -> None:
        await self.scheduler.stop()
        if self._owns_store and isinstance(self.store, RemoteAppointmentStoreClient):
            await self.store.close()

    async def __aenter__(self) -> "PhysicianAgenda":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.stop()


def build_duration_store(settings: Settings) -> IDurationStore:
    if settings.DURATION_LEDGER_BACKEND == "redis":
        return RedisDurationStore.from_settings(settings)
    return InMemoryDurationStore()


def build_agenda(
    settings: Settings | None = None,
    store: IAppointmentStore | None = None,
    duration_store: IDurationStore | None = None,
    clock: Callable[[], datetime] = datetime.now,
    configure_logs: bool = True,
) -> PhysicianAgenda:
    """Compose a PhysicianAgenda.

    Args:
        settings: Settings to use (defaults to the cached application settings)
        store: Remote store; an httpx client built from settings when omitted
        duration_store: Ledger storage; chosen by DURATION_LEDGER_BACKEND when omitted
        clock: Source of "now", injectable for tests
        configure_logs: Whether to configure root logging from settings
    """
    settings = settings or get_settings()
    if configure_logs:
        configure_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)

    policy = SchedulingPolicy.from_settings(settings)
    owns_store = store is None
    remote_store: IAppointmentStore = store or RemoteAppointmentStoreClient(
        base_url=settings.REMOTE_STORE_BASE_URL,
        token=settings.REMOTE_STORE_TOKEN,
        timeout_seconds=settings.REMOTE_STORE_TIMEOUT,
    )

    ledger = DurationLedger(
        duration_store or build_duration_store(settings),
        retention_days=settings.DURATION_LEDGER_RETENTION_DAYS,
        max_entries=settings.DURATION_LEDGER_MAX_ENTRIES,
        default_duration=policy.default_duration_minutes,
    )
    book = AppointmentBook()
    in_flight = InFlightRegistry()

    refresh = RefreshAppointmentsUseCase(remote_store, book, ledger, policy, clock=clock)
    complete = CompleteAppointmentUseCase(remote_store, book, in_flight)
    sweep = AutoCompletionSweep(book, ledger, in_flight, complete, policy, clock=clock)
    scheduler = AutoCompletionScheduler(
        sweep,
        refresh,
        interval_seconds=settings.AUTO_COMPLETE_CHECK_INTERVAL_SECONDS,
        refresh_delay_seconds=settings.AUTO_COMPLETE_REFRESH_DELAY_SECONDS,
        enabled=settings.AUTO_COMPLETE_ENABLED,
    )

    logger.info(f"Agenda built (ledger backend={settings.DURATION_LEDGER_BACKEND})")
    return PhysicianAgenda(
        settings=settings,
        policy=policy,
        store=remote_store,
        book=book,
        ledger=ledger,
        in_flight=in_flight,
        queries=CalendarQueries(book, ledger, policy),
        refresh=refresh,
        open_slot=OpenSlotUseCase(remote_store, book, ledger, policy, refresh=refresh, clock=clock),
        open_slots=OpenSlotsBatchUseCase(remote_store, book, ledger, policy, refresh=refresh, clock=clock),
        complete=complete,
        sweep=sweep,
        scheduler=scheduler,
        _owns_store=owns_store,
    )
