from datetime import timedelta

from sqlalchemy import delete, select, text

from quizmaster.database.db import get_async_db
from quizmaster.exceptions import JobSkipped
from quizmaster.model.job_logs import JobLog
from quizmaster.model.system_metrics import SystemMetric
from quizmaster.repeated_tasks.context import JobContext
from quizmaster.repeated_tasks.stats import average_score, count_attempts, count_attempts_on, count_quizzes, count_users

JOB_LOG_RETENTION = timedelta(days=30)


async def collect_metrics(ctx: JobContext) -> str:
    """Snapshot system-wide totals once per UTC day."""
    now = ctx.clock()
    today = now.date()

    async with get_async_db(ctx.session_factory) as db:
        existing = await db.scalar(select(SystemMetric.id).where(SystemMetric.metric_date == today))
        if existing is not None:
            raise JobSkipped("Already collected today")

        db.add(SystemMetric(
            metric_date=today,
            total_users=await count_users(db),
            total_quizzes=await count_quizzes(db),
            total_attempts=await count_attempts(db),
            daily_attempts=await count_attempts_on(db, now),
            average_score=await average_score(db),
        ))
        await db.commit()

    return f"Metrics saved for {today.isoformat()}"


async def database_cleanup(ctx: JobContext) -> str:
    cutoff = ctx.clock() - JOB_LOG_RETENTION

    async with get_async_db(ctx.session_factory) as db:
        result = await db.execute(delete(JobLog).where(JobLog.executed_at < cutoff))
        await db.commit()
        removed = result.rowcount

    # VACUUM refuses to run inside a transaction block
    async with ctx.engine.connect() as conn:
        conn = await conn.execution_options(isolation_level="AUTOCOMMIT")
        await conn.execute(text("VACUUM"))

    return f"Removed {removed} old logs and vacuumed database"


async def health_check(ctx: JobContext) -> str:
    return f"System running at {ctx.clock().isoformat()}"
