from datetime import timedelta
import logging
import threading

from apscheduler.schedulers.background import BackgroundScheduler
from django.conf import settings

from notifications.services.expirations import (
    Clock,
    ExpirationConfig,
    ExpirationCycle,
)

logger = logging.getLogger(__name__)


class ExpirationScheduler:
    """
    Owns the single timer that drives the document expiration check.

    Idle -> (warm-up) -> Running -> WaitingForNextRun -> Running -> ...

    - Optional catch-up run shortly after start
    - Daily run at the configured local hour, then every 24 hours
    - run_now() for admin-triggered checks, sharing the same lock
      and the same same-day dedup as the timer
    """

    CATCH_UP_JOB_ID = "document_expiration_catch_up"
    DAILY_JOB_ID = "document_expiration_daily"

    IDLE = "idle"
    WARMING_UP = "warming_up"
    RUNNING = "running"
    WAITING = "waiting"

    def __init__(self, config=None, clock=None, cycle_factory=None, scheduler=None):
        # Raises ConfigurationError before anything is scheduled
        self.config = config or ExpirationConfig.from_settings()
        self.clock = clock or Clock()
        self.cycle_factory = cycle_factory or self._default_cycle
        self._scheduler = scheduler
        self._lock = threading.Lock()
        self._started = False

        self.state = self.IDLE
        self.last_summary = None

    def _default_cycle(self):
        return ExpirationCycle(config=self.config, clock=self.clock)

    @property
    def running(self):
        return self._started

    def next_trigger(self, now=None):
        return self.clock.next_trigger(self.config.trigger_hour, now)

    # --------------------------------------------
    # TIMER
    # --------------------------------------------
    def start(self, paused=False):
        if self._started:
            logger.info("Expiration scheduler already running, skipping start")
            return

        if self._scheduler is None:
            self._scheduler = BackgroundScheduler(timezone=settings.TIME_ZONE)

        now = self.clock.now()

        if self.config.run_immediately_on_start:
            warmup = timedelta(seconds=self.config.startup_warmup_seconds)
            self.state = self.WARMING_UP
            self._scheduler.add_job(
                self._run_scheduled,
                trigger="date",
                run_date=now + warmup,
                id=self.CATCH_UP_JOB_ID,
                replace_existing=True,
                max_instances=1,
            )
            logger.info(
                "Startup expiration check scheduled in %s seconds",
                self.config.startup_warmup_seconds
            )
        else:
            self.state = self.WAITING

        # Fixed 24h cadence from the first trigger, no wall-clock recompute
        first_run = self.next_trigger(now)
        self._scheduler.add_job(
            self._run_scheduled,
            trigger="interval",
            hours=24,
            start_date=first_run,
            id=self.DAILY_JOB_ID,
            replace_existing=True,
            max_instances=1,      # Prevent overlapping runs
            coalesce=True,        # Merge missed runs if server was down
        )

        self._scheduler.start(paused=paused)
        self._started = True

        logger.info(f"Scheduled expiry check for {first_run:%Y-%m-%d %H:%M:%S %Z}")

    def shutdown(self, wait=False):
        if self._scheduler is not None and self._started:
            self._scheduler.shutdown(wait=wait)
        self._started = False
        self.state = self.IDLE

    # --------------------------------------------
    # RUNS
    # --------------------------------------------
    def run_now(self):
        """
        Run one full expiration cycle and return its CycleSummary.

        Serialized with timer runs; a second run on the same local
        day creates no new notifications.
        """
        with self._lock:
            self.state = self.RUNNING
            try:
                summary = self.cycle_factory().run()
            finally:
                self.state = self.WAITING

            self.last_summary = summary
            return summary

    def _run_scheduled(self):
        now = self.clock.now()
        logger.info(f"Running scheduled expiration check at {now:%Y-%m-%d %H:%M:%S}")

        try:
            self.run_now()
        except Exception:
            # Never let one bad cycle cancel the next tick
            logger.exception("Scheduled expiration check failed")


# ============================================================
# GLOBAL SAFETY LOCK
# One scheduler per process, shared by the timer and run_now()
# ============================================================
_scheduler = None
_scheduler_lock = threading.Lock()


def get_scheduler():
    global _scheduler

    with _scheduler_lock:
        if _scheduler is None:
            _scheduler = ExpirationScheduler()
        return _scheduler


def start_scheduler():
    """
    Start the expiration scheduler safely.

    - Respects ENABLE_SCHEDULER setting
    - Prevents double start (Django autoreload, imports)
    - Single-process only; multiple instances rely on the
      notification unique constraint to avoid duplicates
    """
    if not getattr(settings, "ENABLE_SCHEDULER", False):
        logger.info("Expiration scheduler disabled via settings (ENABLE_SCHEDULER=False)")
        return None

    scheduler = get_scheduler()
    scheduler.start()
    return scheduler
