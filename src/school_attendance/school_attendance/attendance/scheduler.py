from __future__ import annotations

import logging

from apscheduler.schedulers.background import BackgroundScheduler

from ..core.constants import DEFAULT_RECONCILE_INTERVAL_MINUTES, DEFAULT_SCHOOL_TIMEZONE
from .reconciler import MissingCheckoutReconciler

logger = logging.getLogger(__name__)

JOB_ID = "missing-checkout-sweep"


def start_reconciliation_scheduler(
    reconciler: MissingCheckoutReconciler,
    *,
    interval_minutes: int = DEFAULT_RECONCILE_INTERVAL_MINUTES,
    timezone: str = DEFAULT_SCHOOL_TIMEZONE,
) -> BackgroundScheduler:
    """Run the sweep in a background thread until the process exits.

    Missed runs collapse into one and a slow sweep is never overlapped by
    the next tick.
    """
    scheduler = BackgroundScheduler(
        timezone=timezone,
        job_defaults={
            "coalesce": True,
            "max_instances": 1,
            "misfire_grace_time": 60 * interval_minutes,
        },
    )
    scheduler.add_job(reconciler.run_sweep, "interval", minutes=interval_minutes, id=JOB_ID, replace_existing=True)
    scheduler.start()
    logger.info("missing-checkout sweep scheduled every %s minutes", interval_minutes)
    return scheduler
