import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from quizmaster.config import settings
from quizmaster.database.db import ENGINE
from quizmaster.log import get_logger
from quizmaster.repeated_tasks.context import build_job_context
from quizmaster.repeated_tasks.registry import JOB_REGISTRY, JobRunner
from quizmaster.router import (
    quizzes_router,
    users_router,
    admin_router,
)

log = get_logger(__name__)


async def collect_initial_metrics(runner: JobRunner, delay: float) -> None:
    """Take today's metrics snapshot shortly after startup; a no-op when one exists."""
    await asyncio.sleep(delay)
    try:
        await runner.run("collect-metrics")
    except Exception as e:
        # already recorded as ERROR in job_logs
        log.error(f"Initial metrics collection failed: {e}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    runner = JobRunner(JOB_REGISTRY, build_job_context(ENGINE, settings))
    app.state.job_runner = runner

    background_tasks = set()
    if settings.ENABLE_JOBS:
        log.info("Job scheduler initialized with the following jobs:")
        for job in JOB_REGISTRY:
            log.info(f"   {job.description} ({job.schedule} {job.timezone})")
        task = asyncio.create_task(collect_initial_metrics(runner, settings.INITIAL_METRICS_DELAY_SECONDS))
        background_tasks.add(task)
        task.add_done_callback(background_tasks.discard)
    else:
        log.info("Job system disabled")

    yield

    for task in background_tasks:
        task.cancel()
    if background_tasks:
        await asyncio.gather(*background_tasks, return_exceptions=True)
    await ENGINE.dispose()


app = FastAPI(
    lifespan=lifespan,
    title=settings.PROJECT_NAME,
    version=settings.API_VERSION
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        settings.FRONTEND_URL,
        "http://localhost:3000",  # For local development
        "http://localhost:5173",  # For Vite development
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(quizzes_router, prefix="/quizzes", tags=["Quizzes"])
app.include_router(users_router, prefix="/users", tags=["User"])
app.include_router(admin_router, prefix="/admin", tags=["Admin"])

#####################
### Root Endpoint ###
#####################
@app.get("/")
def read_root():
    return {"QuizMaster": settings.PROJECT_NAME, "Environment": settings.ENV, "Version": settings.API_VERSION}
