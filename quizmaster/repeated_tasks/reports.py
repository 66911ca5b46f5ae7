from sqlalchemy import select

from quizmaster.database.db import get_async_db
from quizmaster.model.users import User, ROLE_ADMIN
from quizmaster.repeated_tasks.context import JobContext
from quizmaster.repeated_tasks.stats import average_score, count_attempts, count_attempts_on, count_users
from quizmaster.scoring import round_half_up


async def admin_daily_report(ctx: JobContext) -> str:
    """Send the same system overview to every admin. Admins are fetched before any stats."""
    now = ctx.clock()
    async with get_async_db(ctx.session_factory) as db:
        admins = (await db.execute(select(User.email, User.username).where(User.role == ROLE_ADMIN))).all()

        stats_data = {
            "username": "Admin",
            "report_date": now.date().isoformat(),
            "total_users": await count_users(db),
            "total_attempts": await count_attempts(db),
            "today_attempts": await count_attempts_on(db, now),
            "average_score": round_half_up(await average_score(db)),
        }

    for admin in admins:
        await ctx.mailer.send_email(admin.email, "admin_daily_report", stats_data)

    return f"Sent to {len(admins)} admins"
