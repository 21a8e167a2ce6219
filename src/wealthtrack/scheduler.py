"""Background scheduler that re-runs recurring catch-up while the host app is open."""

from __future__ import annotations

from datetime import date, datetime
from typing import Callable, Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from .config import BaseConfig
from .domain.accounts import Portfolio
from .logging_config import get_logger
from .services.engine import CatchUpResult, catch_up

logger = get_logger("scheduler")

CATCH_UP_JOB_ID = "recurring_catch_up"

PortfolioProvider = Callable[[], Portfolio]
CatchUpSink = Callable[[CatchUpResult], None]


class CatchUpScheduler:
    """Periodically applies due recurring occurrences.

    The scheduler owns no state: ``provider`` returns the current portfolio
    and ``sink`` receives the caught-up result, which the caller persists.
    The sink is only invoked when something was applied.
    """

    def __init__(
        self,
        provider: PortfolioProvider,
        sink: CatchUpSink,
        *,
        config: Optional[BaseConfig] = None,
        clock: Callable[[], date | datetime] = datetime.now,
    ):
        """Initialize the scheduler.

        Args:
            provider: Returns the portfolio snapshot to advance
            sink: Receives results that applied at least one occurrence
            config: Supplies CATCH_UP_INTERVAL_MINUTES (defaults to BaseConfig())
            clock: Returns "now"; injectable for tests
        """
        self.provider = provider
        self.sink = sink
        self.config = config or BaseConfig()
        self.clock = clock
        self.scheduler: Optional[BackgroundScheduler] = None

    @property
    def running(self) -> bool:
        return self.scheduler is not None

    def start(self) -> None:
        """Run one catch-up immediately, then schedule it on an interval."""
        if self.scheduler is not None:
            logger.warning("Scheduler already running")
            return

        self.run_once()

        self.scheduler = BackgroundScheduler()
        minutes = self.config.CATCH_UP_INTERVAL_MINUTES
        self.scheduler.add_job(
            func=self.run_once,
            trigger=IntervalTrigger(minutes=minutes),
            id=CATCH_UP_JOB_ID,
            name="Recurring catch-up",
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        self.scheduler.start()
        logger.info("Scheduled recurring catch-up every %d minutes", minutes)

    def stop(self) -> None:
        """Stop the background scheduler gracefully."""
        if self.scheduler is not None:
            self.scheduler.shutdown(wait=True)
            self.scheduler = None
            logger.info("Background scheduler stopped")

    def run_once(self) -> Optional[CatchUpResult]:
        """Execute one catch-up pass synchronously.

        Returns:
            The result when occurrences were applied, otherwise None
        """
        try:
            result = catch_up(self.provider(), now=self.clock())
            if not result.changed:
                logger.debug("Recurring catch-up found nothing due")
                return None
            self.sink(result)
            return result
        except Exception:
            # A failing job must not kill the scheduler thread; the next tick retries.
            logger.exception("Recurring catch-up failed")
            if self.scheduler is None:
                raise
            return None


def create_scheduler(
    provider: PortfolioProvider,
    sink: CatchUpSink,
    *,
    config: Optional[BaseConfig] = None,
    auto_start: bool = False,
) -> CatchUpScheduler:
    """Create and optionally start a catch-up scheduler."""
    scheduler = CatchUpScheduler(provider, sink, config=config)
    if auto_start:
        scheduler.start()
    return scheduler


__all__ = ["CATCH_UP_JOB_ID", "CatchUpScheduler", "create_scheduler"]
