from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from quizmaster.database.db import get_async_db
from quizmaster.log import get_logger
from quizmaster.model.job_logs import JobLog, JobStatus
from quizmaster.repeated_tasks.context import JobContext

log = get_logger(__name__)

DEFAULT_LOG_LIMIT = 50


async def log_job(ctx: JobContext, job_name: str, status: JobStatus, details: str = "") -> None:
    """
    Append one row to job_logs.

    Each row is written in its own session, so an ERROR row still lands when
    the job's own session is unusable. A failed write is reported through the
    logger only and the job carries on, so a run can end up with a COMPLETED
    row and no STARTED row.
    """
    timestamp = ctx.clock()
    log.info(f"JOB: {job_name} - {status.value} {details}".rstrip())

    try:
        async with get_async_db(ctx.session_factory) as db:
            db.add(JobLog(job_name=job_name, status=status.value, details=details, executed_at=timestamp))
            await db.commit()
    except SQLAlchemyError as e:
        log.error(f"Could not record {status.value} for job {job_name}: {e}")


async def get_recent_job_logs(db: AsyncSession, limit: int = DEFAULT_LOG_LIMIT) -> List[JobLog]:
    result = await db.execute(
        select(JobLog)
        .order_by(JobLog.executed_at.desc(), JobLog.id.desc())
        .limit(limit)
    )
    return list(result.scalars().all())
