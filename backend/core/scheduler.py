"""
Scheduler for background tasks like the debounced form auto-save
"""
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.jobstores.base import JobLookupError
from datetime import datetime, timedelta
from typing import Callable, Sequence
import logging

logger = logging.getLogger(__name__)

# Global scheduler instance
scheduler = BackgroundScheduler()


def schedule_once(sched, job_id: str, func: Callable, delay_seconds: float, args: Sequence = ()):
    """
    Run ``func`` once after ``delay_seconds``.

    Re-using ``job_id`` replaces the pending job, so a burst of calls ends in
    a single run after the last one (trailing edge).
    """
    run_date = datetime.now() + timedelta(seconds=delay_seconds)
    return sched.add_job(
        func,
        trigger='date',
        args=list(args),
        run_date=run_date,
        id=job_id,
        name=f'Debounced {job_id}',
        replace_existing=True,
        misfire_grace_time=None,
    )


def cancel_job(sched, job_id: str) -> bool:
    """Remove a pending job. Returns False when nothing was scheduled."""
    try:
        sched.remove_job(job_id)
        return True
    except JobLookupError:
        return False


def start_scheduler():
    """Start the background scheduler"""
    try:
        if not scheduler.running:
            scheduler.start()
            logger.info("✅ Background scheduler started successfully")
    except Exception as e:
        logger.error(f"❌ Failed to start scheduler: {e}", exc_info=True)


def shutdown_scheduler():
    """Shutdown the scheduler gracefully"""
    try:
        if scheduler.running:
            scheduler.shutdown(wait=False)
            logger.info("✅ Scheduler shut down successfully")
    except Exception as e:
        logger.error(f"❌ Error shutting down scheduler: {e}", exc_info=True)
