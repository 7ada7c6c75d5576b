from dataclasses import dataclass
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from healthbot.utils.gen_utils import get_reporting_timezone
from healthbot.utils.logger import get_scheduler_logger

logger = get_scheduler_logger()

JobFunc = Callable[[], Awaitable[Any]]

# A run delayed by more than this (event loop busy, process suspended) is skipped
MISFIRE_GRACE_SECONDS = 300


@dataclass
class Job:
    name: str
    cron: str
    trigger: CronTrigger
    func: JobFunc
    description: str = ""
    last_run: Optional[datetime] = None
    last_status: Optional[str] = None
    last_result: Any = None
    last_error: Optional[str] = None
    running: bool = False


class JobScheduler:
    """
    Runs coroutine jobs on cron schedules with APScheduler's asyncio scheduler.

    Outcome of each run (last run, status, error) is tracked here, in memory
    only, and is lost on restart. Jobs can also be triggered by name.
    """

    def __init__(self, timezone=None, clock: Optional[Callable[[], datetime]] = None):
        self.timezone = timezone or get_reporting_timezone()
        self.clock = clock or (lambda: datetime.now(self.timezone))
        self.scheduler = AsyncIOScheduler(timezone=self.timezone)
        self.jobs: Dict[str, Job] = {}

    @property
    def started(self) -> bool:
        return self.scheduler.running

    def add_job(self, name: str, cron: str, func: JobFunc, description: str = "") -> Job:
        if name in self.jobs:
            raise ValueError(f"Job '{name}' already registered")
        trigger = CronTrigger.from_crontab(cron, timezone=self.timezone)
        job = Job(name=name, cron=cron, trigger=trigger, func=func, description=description)
        self.jobs[name] = job
        logger.info(f"Registered job {name} ({cron}), next run {self.next_run(name)}")
        return job

    async def start(self):
        """Hand every registered job to APScheduler and start it on the running loop"""
        if self.started:
            logger.warning("Scheduler already running")
            return

        logger.info(f"Starting scheduler with {len(self.jobs)} jobs")
        for job in self.jobs.values():
            self.scheduler.add_job(
                self.run_scheduled,
                trigger=job.trigger,
                args=[job.name],
                id=job.name,
                name=job.description or job.name,
                replace_existing=True,
                max_instances=1,
                coalesce=True,
                misfire_grace_time=MISFIRE_GRACE_SECONDS,
            )
        self.scheduler.start()

    async def stop(self):
        if self.started:
            self.scheduler.shutdown(wait=False)
            logger.info("Scheduler stopped")

    async def run_scheduled(self, name: str):
        """Entry point for cron fires. Failures are already logged and recorded by run_job."""
        await self.run_job(name, raise_errors=False)

    async def run_job(self, name: str, raise_errors: bool = True) -> Any:
        """
        Run a job now and record the outcome. Errors are logged and recorded,
        then re-raised to the caller unless raise_errors is False.
        """
        job = self.jobs.get(name)
        if job is None:
            raise KeyError(name)

        job.running = True
        job.last_run = self.clock()
        logger.info(f"Running job {name}")
        try:
            result = await job.func()
        except Exception as e:
            job.last_status = "failed"
            job.last_error = str(e)
            logger.error(f"Job {name} failed: {e}")
            if raise_errors:
                raise
            return None
        else:
            job.last_status = "success"
            job.last_error = None
            job.last_result = result
            logger.info(f"Job {name} finished: {result}")
            return result
        finally:
            job.running = False

    def next_run(self, name: str) -> Optional[datetime]:
        job = self.jobs[name]
        if self.started:
            scheduled = self.scheduler.get_job(name)
            if scheduled is not None:
                return scheduled.next_run_time
        return job.trigger.get_next_fire_time(None, self.clock())

    def job_status(self, job: Job) -> Dict[str, Any]:
        next_run = self.next_run(job.name)
        return {
            "name": job.name,
            "schedule": job.cron,
            "description": job.description,
            "next_run": next_run.isoformat() if next_run else None,
            "last_run": job.last_run.isoformat() if job.last_run else None,
            "last_status": job.last_status,
            "last_error": job.last_error,
            "running": job.running,
        }

    def get_status(self) -> Dict[str, Any]:
        return {
            "running": self.started,
            "timezone": str(self.timezone),
            "jobs": [self.job_status(job) for job in self.jobs.values()],
        }
