from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from quizmaster.exceptions import UnknownJob
from quizmaster.log import get_logger
from quizmaster.model.system_metrics import SystemMetric
from quizmaster.repeated_tasks.job_log import get_recent_job_logs
from quizmaster.repeated_tasks.registry import JobRunner
from quizmaster.schema.admin_schema import JobLogOut, JobLogsOut, JobRunOut, SystemMetricOut, SystemMetricsOut

log = get_logger(__name__)


async def list_job_logs_logic(db: AsyncSession, limit: int) -> JobLogsOut:
    logs = await get_recent_job_logs(db, limit)
    return JobLogsOut(logs=[JobLogOut.model_validate(entry) for entry in logs])


async def run_job_logic(runner: JobRunner, job_name: str) -> JobRunOut:
    """Run a job by name and wait for it to finish.

    Raises:
        HTTPException: 400 for an unknown job name, 500 when the job fails.
        The failure detail is only recorded in the job log.
    """
    try:
        await runner.trigger(job_name)
    except UnknownJob as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        log.error(f"Manual run of {job_name} failed: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Job execution failed")

    return JobRunOut(message=f"Job {job_name} executed successfully")


async def list_metrics_logic(db: AsyncSession, days: int) -> SystemMetricsOut:
    result = await db.execute(
        select(SystemMetric).order_by(SystemMetric.metric_date.desc()).limit(days)
    )
    return SystemMetricsOut(metrics=[SystemMetricOut.model_validate(m) for m in result.scalars().all()])
