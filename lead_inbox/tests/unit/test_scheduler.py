"""Unit tests for the polling scheduler."""

from unittest.mock import MagicMock

from lead_inbox.core.models import CycleReport
from lead_inbox.scheduler import get_scheduler, monitor_emails_job, start_scheduler, stop_scheduler
from lead_inbox.service import CycleInProgressError


class TestMonitorEmailsJob:
    """Tests for the scheduled job body."""

    def test_runs_cycle_without_waiting(self):
        service = MagicMock()
        service.run_cycle.return_value = CycleReport()

        monitor_emails_job(service)

        service.run_cycle.assert_called_once_with(wait=False)

    def test_skips_when_cycle_in_progress(self):
        service = MagicMock()
        service.run_cycle.side_effect = CycleInProgressError("busy")

        monitor_emails_job(service)  # does not raise

    def test_swallows_cycle_failure(self):
        service = MagicMock()
        service.run_cycle.side_effect = RuntimeError("mailbox unavailable")

        monitor_emails_job(service)  # does not raise


class TestSchedulerLifecycle:
    """Tests for start_scheduler() / stop_scheduler()."""

    def test_start_registers_single_job(self, service):
        scheduler = start_scheduler(service, interval_minutes=2)
        try:
            assert get_scheduler() is scheduler
            assert start_scheduler(service) is scheduler

            job = scheduler.get_job("monitor_emails")
            assert job is not None
            assert job.max_instances == 1
            assert job.coalesce is True
            assert job.trigger.interval.total_seconds() == 120
        finally:
            stop_scheduler()

        assert get_scheduler() is None
