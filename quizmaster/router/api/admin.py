from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from quizmaster.database import get_db
from quizmaster.model.users import User
from quizmaster.repeated_tasks.registry import JobRunner
from quizmaster.router.api.logics.admin_logic import list_job_logs_logic, list_metrics_logic, run_job_logic
from quizmaster.router.dependencies import get_current_admin, get_job_runner, get_limit_param
from quizmaster.schema.admin_schema import JobLogsOut, JobRunOut, SystemMetricsOut

router = APIRouter()


############
### Jobs ###
############
@router.get("/jobs", response_model=JobLogsOut, status_code=status.HTTP_200_OK)
async def list_job_logs(
    limit: int = Depends(get_limit_param),
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    return await list_job_logs_logic(db, limit)


@router.post("/jobs/{job_name}/run", response_model=JobRunOut, status_code=status.HTTP_200_OK)
async def run_job(
    job_name: str,
    runner: JobRunner = Depends(get_job_runner),
    admin: User = Depends(get_current_admin),
):
    return await run_job_logic(runner, job_name)


###############
### Metrics ###
###############
@router.get("/metrics", response_model=SystemMetricsOut, status_code=status.HTTP_200_OK)
async def list_metrics(
    days: int = Query(30, gt=0, le=365),
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    return await list_metrics_logic(db, days)
