from datetime import timedelta

from src.school_attendance.school_attendance.attendance.scheduler import JOB_ID, start_reconciliation_scheduler


class _Reconciler:
    def run_sweep(self, now=None):
        return 0


def test_scheduler_runs_sweep_on_interval_without_overlap():
    scheduler = start_reconciliation_scheduler(_Reconciler(), interval_minutes=15, timezone="Asia/Jakarta")
    try:
        job = scheduler.get_job(JOB_ID)

        assert job is not None
        assert job.trigger.interval == timedelta(minutes=15)
        assert job.coalesce is True
        assert job.max_instances == 1
    finally:
        scheduler.shutdown(wait=False)
