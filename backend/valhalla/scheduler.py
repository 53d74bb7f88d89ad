"""Background jobs running inside the API process."""

import logging

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from valhalla.services.accrual_service import AccrualService
from valhalla.utils.money import to_decimal

logger = logging.getLogger(__name__)


def run_accrual(app) -> dict:
    """One accrual pass against the app's store."""
    service = AccrualService(
        app.extensions["store"],
        daily_rate=to_decimal(app.config["DAILY_REWARD_RATE"]),
    )
    return service.accrue()


def start_scheduler(app) -> BackgroundScheduler | None:
    """Start the accrual job if ACCRUAL_ENABLED is set.

    The store lives in process memory, so the job has to run in the same
    process that serves requests.
    """
    if not app.config.get("ACCRUAL_ENABLED"):
        logger.info("Reward accrual disabled")
        return None

    scheduler = BackgroundScheduler(daemon=True)

    # Reward accrual every ACCRUAL_INTERVAL_MINUTES
    scheduler.add_job(
        run_accrual,
        IntervalTrigger(minutes=app.config["ACCRUAL_INTERVAL_MINUTES"]),
        args=[app],
        id="reward_accrual",
        max_instances=1,
        coalesce=True,
    )

    scheduler.start()
    logger.info(
        f"Reward accrual scheduled every {app.config['ACCRUAL_INTERVAL_MINUTES']} min"
    )
    return scheduler
