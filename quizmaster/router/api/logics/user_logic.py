from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from quizmaster.model.attempts import Attempt
from quizmaster.model.quizzes import Quiz
from quizmaster.model.user_preferences import UserPreference
from quizmaster.model.users import User
from quizmaster.schema.quiz_schema import AttemptOut, AttemptsOut
from quizmaster.schema.user_schema import PreferencesOut, PreferencesUpdate


async def get_preferences_logic(db: AsyncSession, user: User) -> PreferencesOut:
    """Stored preferences, or the defaults for a user who never saved any."""
    preference = await db.get(UserPreference, user.id)
    if preference is None:
        return PreferencesOut()
    return PreferencesOut.model_validate(preference)


async def update_preferences_logic(db: AsyncSession, user: User, update: PreferencesUpdate) -> PreferencesOut:
    preference = await db.get(UserPreference, user.id)
    if preference is None:
        preference = UserPreference(user_id=user.id, last_reminder_sent=None)
        db.add(preference)

    # last_reminder_sent belongs to the reminder job and is left alone
    preference.email_reminders = update.email_reminders
    preference.reminder_time = update.reminder_time
    preference.weekly_reports = update.weekly_reports
    await db.commit()
    return PreferencesOut.model_validate(preference)


async def get_attempt_history_logic(db: AsyncSession, user: User) -> AttemptsOut:
    result = await db.execute(
        select(
            Attempt.id,
            Attempt.quiz_id,
            Quiz.title.label("quiz_title"),
            Attempt.score,
            Attempt.total_questions,
            Attempt.time_taken,
            Attempt.completed_at,
        )
        .join(Quiz, Quiz.id == Attempt.quiz_id)
        .where(Attempt.user_id == user.id)
        .order_by(Attempt.completed_at.desc(), Attempt.id.desc())
    )
    return AttemptsOut(attempts=[AttemptOut.model_validate(row) for row in result.all()])
