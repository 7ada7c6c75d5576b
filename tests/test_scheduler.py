from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from conftest import run
from healthbot.utils.scheduler import JobScheduler

IST = ZoneInfo("Asia/Kolkata")


def at(day, hour, minute):
    return datetime(2026, 10, day, hour, minute, tzinfo=IST)


def make_scheduler(now=None):
    return JobScheduler(timezone=IST, clock=lambda: now or at(18, 10, 7))


async def noop():
    return None


@pytest.mark.parametrize("cron, expected", [
    ("0 * * * *", at(18, 11, 0)),
    ("0 */6 * * *", at(18, 12, 0)),
    ("0 8 * * *", at(19, 8, 0)),
    ("0 2 * * *", at(19, 2, 0)),
])
def test_next_run_follows_cron_in_reporting_timezone(cron, expected):
    scheduler = make_scheduler()
    scheduler.add_job("job", cron, noop)

    next_run = scheduler.next_run("job")

    assert next_run == expected
    assert scheduler.get_status()["jobs"][0]["next_run"] == expected.isoformat()


def test_add_job_rejects_duplicates_and_bad_cron():
    scheduler = make_scheduler()
    scheduler.add_job("hourly", "0 * * * *", noop)

    with pytest.raises(ValueError):
        scheduler.add_job("hourly", "0 * * * *", noop)
    with pytest.raises(ValueError):
        scheduler.add_job("broken", "* * * *", noop)


def test_run_job_records_success_and_failure():
    scheduler = make_scheduler()

    async def ok():
        return {"processed": 3}

    async def broken():
        raise RuntimeError("boom")

    scheduler.add_job("ok", "0 * * * *", ok)
    scheduler.add_job("broken", "0 * * * *", broken)

    assert run(scheduler.run_job("ok")) == {"processed": 3}
    with pytest.raises(RuntimeError):
        run(scheduler.run_job("broken"))
    with pytest.raises(KeyError):
        run(scheduler.run_job("missing"))

    jobs = {job["name"]: job for job in scheduler.get_status()["jobs"]}
    assert jobs["ok"]["last_status"] == "success"
    assert jobs["ok"]["last_run"] == at(18, 10, 7).isoformat()
    assert jobs["broken"]["last_status"] == "failed"
    assert jobs["broken"]["last_error"] == "boom"
    assert not jobs["broken"]["running"]


def test_scheduled_run_records_failure_without_raising():
    scheduler = make_scheduler()

    async def broken():
        raise RuntimeError("fetch down")

    scheduler.add_job("broken", "0 * * * *", broken)

    assert run(scheduler.run_scheduled("broken")) is None
    assert scheduler.jobs["broken"].last_status == "failed"


def test_start_hands_jobs_to_apscheduler_and_stop_shuts_down():
    async def scenario():
        scheduler = JobScheduler(timezone=IST)
        scheduler.add_job("daily", "0 8 * * *", noop, "morning run")
        await scheduler.start()
        await scheduler.start()  # second start is ignored
        scheduled = scheduler.scheduler.get_job("daily")
        status = scheduler.get_status()
        await scheduler.stop()
        return scheduled, status, scheduler.started

    scheduled, status, running_after_stop = run(scenario())

    assert scheduled is not None
    assert scheduled.name == "morning run"
    assert scheduled.next_run_time.hour == 8
    assert status["running"] is True
    assert status["jobs"][0]["next_run"] == scheduled.next_run_time.isoformat()
    assert running_after_stop is False
