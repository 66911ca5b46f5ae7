from datetime import datetime, timedelta
from typing import List

from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from quizmaster.database.db import get_async_db
from quizmaster.log import get_logger
from quizmaster.model.attempts import Attempt
from quizmaster.model.user_preferences import UserPreference
from quizmaster.model.users import User, ROLE_USER
from quizmaster.repeated_tasks.context import JobContext
from quizmaster.repeated_tasks.stats import SCORE_PERCENTAGE, count_quizzes
from quizmaster.mail.dispatcher import Recipient
from quizmaster.scoring import round_half_up

log = get_logger(__name__)

ACTIVITY_WINDOW = timedelta(hours=24)
REMINDER_THROTTLE = timedelta(hours=20)
WEEKLY_WINDOW = timedelta(days=7)


######################
### Daily reminder ###
######################

async def find_reminder_recipients(db: AsyncSession, now: datetime) -> List[Recipient]:
    """
    Users who opted into reminders (no preference row counts as opted in),
    have not finished a quiz in the last 24 hours, and were not reminded in
    the last 20 hours.
    """
    recent_attempt = (
        select(Attempt.id)
        .where(Attempt.user_id == User.id, Attempt.completed_at > now - ACTIVITY_WINDOW)
        .exists()
    )
    result = await db.execute(
        select(User.id, User.email, User.username)
        .outerjoin(UserPreference, UserPreference.user_id == User.id)
        .where(
            User.role == ROLE_USER,
            ~recent_attempt,
            func.coalesce(UserPreference.email_reminders, True) == True,  # noqa: E712
            or_(
                UserPreference.last_reminder_sent.is_(None),
                UserPreference.last_reminder_sent < now - REMINDER_THROTTLE,
            ),
        )
        .order_by(User.id)
    )
    return [Recipient(id=row.id, email=row.email, username=row.username) for row in result.all()]


async def mark_reminder_sent(db: AsyncSession, user_id: int, now: datetime) -> None:
    """Upsert last_reminder_sent, keeping the user's other preferences. Best effort."""
    try:
        preference = await db.get(UserPreference, user_id)
        if preference is None:
            preference = UserPreference(user_id=user_id, email_reminders=True)
            db.add(preference)
        preference.last_reminder_sent = now
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        log.warning(f"Could not update last reminder for user {user_id}: {e}")


async def daily_reminder(ctx: JobContext) -> str:
    now = ctx.clock()
    async with get_async_db(ctx.session_factory) as db:
        users = await find_reminder_recipients(db, now)
        if not users:
            return "No users need reminders"

        available_quizzes = await count_quizzes(db)

        async def get_data(user: Recipient):
            await mark_reminder_sent(db, user.id, now)
            return {"username": user.username, "available_quizzes": available_quizzes}

        results = await ctx.mailer.send_bulk_emails(users, "daily_reminder", get_data)

    success_count = sum(1 for r in results if r.success)
    return f"Sent {success_count}/{len(users)} reminders"


#####################
### Weekly report ###
#####################

async def find_weekly_report_recipients(db: AsyncSession) -> List[Recipient]:
    result = await db.execute(
        select(User.id, User.email, User.username)
        .outerjoin(UserPreference, UserPreference.user_id == User.id)
        .where(
            User.role == ROLE_USER,
            func.coalesce(UserPreference.weekly_reports, True) == True,  # noqa: E712
        )
        .order_by(User.id)
    )
    return [Recipient(id=row.id, email=row.email, username=row.username) for row in result.all()]


async def get_weekly_stats(db: AsyncSession, user_id: int, now: datetime) -> dict:
    row = (
        await db.execute(
            select(func.count(Attempt.id).label("quizzes_completed"), func.avg(SCORE_PERCENTAGE).label("average_score"))
            .where(Attempt.user_id == user_id, Attempt.completed_at > now - WEEKLY_WINDOW)
        )
    ).one()
    return {
        "quizzes_completed": row.quizzes_completed or 0,
        "average_score": round_half_up(row.average_score),
    }


async def weekly_report(ctx: JobContext) -> str:
    now = ctx.clock()
    async with get_async_db(ctx.session_factory) as db:
        users = await find_weekly_report_recipients(db)

        async def get_data(user: Recipient):
            return {"username": user.username, "stats": await get_weekly_stats(db, user.id, now)}

        results = await ctx.mailer.send_bulk_emails(users, "weekly_report", get_data)

    success_count = sum(1 for r in results if r.success)
    return f"Sent {success_count}/{len(users)} reports"
