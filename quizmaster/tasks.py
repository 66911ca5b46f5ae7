import asyncio

from sqlalchemy.pool import NullPool

from quizmaster.celery_app import RUN_SCHEDULED_JOB_TASK, celery_app
from quizmaster.config import settings
from quizmaster.database.session import SQLALCHEMY_DATABASE_URL, get_async_engine
from quizmaster.log import get_logger
from quizmaster.repeated_tasks.context import build_job_context
from quizmaster.repeated_tasks.registry import JOB_REGISTRY, JobRunner

log = get_logger(__name__)


async def fire_job(job_name: str) -> None:
    # asyncio.run gives every firing its own loop, so pooled connections can't be reused
    engine = get_async_engine(SQLALCHEMY_DATABASE_URL, poolclass=NullPool)
    try:
        runner = JobRunner(JOB_REGISTRY, build_job_context(engine, settings))
        await runner.run(job_name)
    finally:
        await engine.dispose()


@celery_app.task(name=RUN_SCHEDULED_JOB_TASK)
def run_scheduled_job(job_name: str):
    log.info(f"Cron firing for job: {job_name}")
    asyncio.run(fire_job(job_name))
