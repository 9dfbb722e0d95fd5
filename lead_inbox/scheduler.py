"""
APScheduler job runner for periodic inbox polling.
"""

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from lead_inbox.core.logging import get_logger
from lead_inbox.service import CycleInProgressError, LeadMonitorService

log = get_logger(__name__)

# Global scheduler instance
_scheduler: BackgroundScheduler | None = None


def monitor_emails_job(service: LeadMonitorService) -> None:
    """Scheduled job: run one polling cycle.

    Runs unattended, so every failure is logged and swallowed. If a manual
    cycle is already running this tick is skipped.
    """
    log.info("scheduled_job_starting", job="monitor_emails")
    try:
        report = service.run_cycle(wait=False)
        log.info("scheduled_job_complete", job="monitor_emails", processed=report.processed_count)
    except CycleInProgressError:
        log.info("scheduled_cycle_skipped", reason="cycle already running")
    except Exception as e:
        log.error("scheduled_job_error", job="monitor_emails", error=str(e))


def start_scheduler(service: LeadMonitorService, interval_minutes: int = 2) -> BackgroundScheduler:
    """
    Start the background polling scheduler.

    Args:
        service: Service whose cycle the job runs
        interval_minutes: How often to poll (default: 2)

    Returns:
        The scheduler instance
    """
    global _scheduler

    if _scheduler is not None:
        log.warning("scheduler_already_running")
        return _scheduler

    _scheduler = BackgroundScheduler()
    _scheduler.add_job(
        monitor_emails_job,
        trigger=IntervalTrigger(minutes=interval_minutes),
        args=[service],
        id="monitor_emails",
        name="Poll inbox for new leads",
        replace_existing=True,
        max_instances=1,
        coalesce=True,
    )

    _scheduler.start()
    log.info("scheduler_started", interval_minutes=interval_minutes)

    return _scheduler


def stop_scheduler():
    """Stop the background scheduler."""
    global _scheduler

    if _scheduler is not None:
        _scheduler.shutdown(wait=False)
        _scheduler = None
        log.info("scheduler_stopped")


def get_scheduler() -> BackgroundScheduler | None:
    """Get the current scheduler instance."""
    return _scheduler
