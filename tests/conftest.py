import os
from datetime import datetime

import pytest

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENABLE_JOBS", "false")
os.environ["AWS_ACCESS_KEY_ID"] = ""
os.environ["AWS_SECRET_ACCESS_KEY"] = ""

from sqlalchemy import select  # noqa: E402

from quizmaster.database.base_class import Base  # noqa: E402
from quizmaster.database.session import get_async_engine, get_async_session  # noqa: E402
from quizmaster.exceptions import DeliveryError  # noqa: E402
from quizmaster.mail.aws_ses import MailTransport  # noqa: E402
from quizmaster.mail.dispatcher import EmailDispatcher  # noqa: E402
from quizmaster.model.attempts import Attempt  # noqa: E402
from quizmaster.model.job_logs import JobLog  # noqa: E402
from quizmaster.model.questions import Question  # noqa: E402
from quizmaster.model.quizzes import Quiz  # noqa: E402
from quizmaster.model.user_preferences import UserPreference  # noqa: E402
from quizmaster.model.users import User  # noqa: E402
from quizmaster.repeated_tasks.context import JobContext  # noqa: E402
from quizmaster.repeated_tasks.registry import JOB_REGISTRY, JobRunner  # noqa: E402

NOW = datetime(2026, 10, 18, 12, 0, 0)


class RecordingTransport(MailTransport):
    """Keeps every message instead of sending it; rejects addresses listed in fail_for."""

    def __init__(self, fail_for=()):
        self.sent = []
        self.fail_for = set(fail_for)

    async def send(self, email, subject, body_html):
        if email in self.fail_for:
            raise DeliveryError(f"Address rejected: {email}")
        self.sent.append({"email": email, "subject": subject, "html": body_html})
        return f"msg-{len(self.sent)}"

    @property
    def recipients(self):
        return [message["email"] for message in self.sent]


class Factory:
    def __init__(self, session_factory):
        self.session_factory = session_factory

    async def _save(self, obj):
        async with self.session_factory() as db:
            db.add(obj)
            await db.commit()
        return obj

    async def user(self, username, role="user", **kwargs):
        return await self._save(User(
            username=username,
            email=kwargs.pop("email", f"{username}@example.com"),
            hashed_password="not-a-real-hash",
            role=role,
            created_at=kwargs.pop("created_at", NOW),
            **kwargs,
        ))

    async def quiz(self, title="Python Basics", answers=("a", "b", "c", "d", "a"), points=1):
        quiz = await self._save(Quiz(title=title, category="Programming", difficulty="Beginner", time_limit=600))
        async with self.session_factory() as db:
            db.add_all([
                Question(
                    quiz_id=quiz.id,
                    question=f"Question {i}",
                    option_a="A", option_b="B", option_c="C", option_d="D",
                    correct_answer=answer,
                    points=points,
                )
                for i, answer in enumerate(answers, start=1)
            ])
            await db.commit()
        return quiz

    async def attempt(self, user, quiz, score, total_questions, completed_at=NOW, time_taken=120):
        return await self._save(Attempt(
            user_id=user.id,
            quiz_id=quiz.id,
            score=score,
            total_questions=total_questions,
            time_taken=time_taken,
            completed_at=completed_at,
        ))

    async def preference(self, user, **kwargs):
        return await self._save(UserPreference(user_id=user.id, **kwargs))

    async def job_log(self, job_name, status, executed_at, details=""):
        return await self._save(JobLog(job_name=job_name, status=status, details=details, executed_at=executed_at))

    async def all(self, model, *order_by):
        async with self.session_factory() as db:
            result = await db.execute(select(model).order_by(*(order_by or (model.id,))))
            return list(result.scalars().all())


@pytest.fixture
async def engine(tmp_path):
    engine = get_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'quiz.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return get_async_session(engine)


@pytest.fixture
def factory(session_factory):
    return Factory(session_factory)


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def mailer(transport):
    return EmailDispatcher(transport, frontend_url="http://quiz.test", send_delay=0)


@pytest.fixture
def job_context(engine, session_factory, mailer):
    return JobContext(engine=engine, session_factory=session_factory, mailer=mailer, clock=lambda: NOW)


@pytest.fixture
def runner(job_context):
    return JobRunner(JOB_REGISTRY, job_context)
