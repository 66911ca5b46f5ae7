from dataclasses import dataclass
from types import MappingProxyType
from typing import Awaitable, Callable, Iterable, Iterator, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from quizmaster.exceptions import JobSkipped, StoreError, UnknownJob
from quizmaster.log import get_logger
from quizmaster.model.job_logs import JobStatus
from quizmaster.repeated_tasks.context import JobContext
from quizmaster.repeated_tasks.job_log import log_job
from quizmaster.repeated_tasks.maintenance import collect_metrics, database_cleanup, health_check
from quizmaster.repeated_tasks.reminders import daily_reminder, weekly_report
from quizmaster.repeated_tasks.reports import admin_daily_report

log = get_logger(__name__)

JobHandler = Callable[[JobContext], Awaitable[str]]


@dataclass(frozen=True)
class JobDefinition:
    """
    One scheduled job.

    schedule is a five field cron expression: minute hour day-of-month month
    day-of-week, with day-of-week 0 meaning Sunday. log_start=False leaves
    out the STARTED row, for heartbeats that only record COMPLETED.
    """

    name: str
    schedule: str
    handler: JobHandler
    description: str
    manual: bool = True
    log_start: bool = True
    timezone: str = "UTC"

    def __post_init__(self):
        if len(self.schedule.split()) != 5:
            raise ValueError(f"Job {self.name} needs a five field cron schedule, got {self.schedule!r}")

    @property
    def log_name(self) -> str:
        return self.name.upper().replace("-", "_")


JOB_TABLE = (
    JobDefinition("daily-reminder", "0 9 * * *", daily_reminder, "Daily Reminder: 9:00 AM UTC"),
    JobDefinition("weekly-report", "0 10 * * 0", weekly_report, "Weekly Report: Sunday 10:00 AM UTC"),
    JobDefinition("admin-daily-report", "0 8 * * *", admin_daily_report, "Admin Report: 8:00 AM UTC"),
    JobDefinition("collect-metrics", "0 0 * * *", collect_metrics, "Metrics Collection: Midnight UTC"),
    JobDefinition("database-cleanup", "0 2 * * 0", database_cleanup, "Database Cleanup: Sunday 2:00 AM UTC"),
    JobDefinition("health-check", "0 * * * *", health_check, "Health Check: Every hour", manual=False, log_start=False),
)


class JobRegistry:
    """Read-only lookup over the job table."""

    def __init__(self, jobs: Iterable[JobDefinition]):
        table = {}
        for job in jobs:
            if job.name in table:
                raise ValueError(f"Duplicate job name: {job.name}")
            table[job.name] = job
        self._jobs = MappingProxyType(table)

    def __iter__(self) -> Iterator[JobDefinition]:
        return iter(self._jobs.values())

    def __len__(self) -> int:
        return len(self._jobs)

    def get(self, name: str) -> Optional[JobDefinition]:
        return self._jobs.get(name)

    def names(self) -> List[str]:
        return list(self._jobs)

    def manual_names(self) -> List[str]:
        return [job.name for job in self if job.manual]


JOB_REGISTRY = JobRegistry(JOB_TABLE)


class JobRunner:
    """
    Runs jobs from a registry with the STARTED -> COMPLETED/SKIPPED/ERROR protocol.

    trigger() is the manual entry point and only accepts manual jobs;
    run() is what the cron firings call and accepts every registered job.
    Both await the job and re-raise its failure.
    """

    def __init__(self, registry: JobRegistry, context: JobContext):
        self.registry = registry
        self.context = context

    async def trigger(self, job_name: str) -> None:
        job = self.registry.get(job_name)
        if job is None or not job.manual:
            raise UnknownJob(job_name)

        log.info(f"Executing job: {job_name}")
        await self._execute(job)
        log.info(f"Job {job_name} execution completed")

    async def run(self, job_name: str) -> None:
        job = self.registry.get(job_name)
        if job is None:
            raise UnknownJob(job_name)
        await self._execute(job)

    async def _execute(self, job: JobDefinition) -> None:
        if job.log_start:
            await log_job(self.context, job.log_name, JobStatus.STARTED)
        try:
            details = await job.handler(self.context)
        except JobSkipped as e:
            await log_job(self.context, job.log_name, JobStatus.SKIPPED, e.detail)
            return
        except SQLAlchemyError as e:
            await log_job(self.context, job.log_name, JobStatus.ERROR, str(e))
            raise StoreError(str(e)) from e
        except Exception as e:
            await log_job(self.context, job.log_name, JobStatus.ERROR, str(e))
            raise
        await log_job(self.context, job.log_name, JobStatus.COMPLETED, details)
