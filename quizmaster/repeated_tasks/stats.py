from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from quizmaster.model.attempts import Attempt
from quizmaster.model.quizzes import Quiz
from quizmaster.model.users import User, ROLE_USER
from quizmaster.time_util import day_bounds

# score * 100 / total_questions per attempt; attempts with no questions are left out of the mean
SCORE_PERCENTAGE = Attempt.score * 100.0 / func.nullif(Attempt.total_questions, 0)


async def count_users(db: AsyncSession) -> int:
    return await db.scalar(select(func.count(User.id)).where(User.role == ROLE_USER)) or 0


async def count_quizzes(db: AsyncSession) -> int:
    return await db.scalar(select(func.count(Quiz.id))) or 0


async def count_attempts(db: AsyncSession) -> int:
    return await db.scalar(select(func.count(Attempt.id))) or 0


async def count_attempts_on(db: AsyncSession, moment: datetime) -> int:
    start, end = day_bounds(moment)
    return await db.scalar(
        select(func.count(Attempt.id)).where(Attempt.completed_at >= start, Attempt.completed_at < end)
    ) or 0


async def average_score(db: AsyncSession) -> float:
    value = await db.scalar(select(func.avg(SCORE_PERCENTAGE)))
    return float(value) if value is not None else 0.0
