from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from quizmaster.config import Settings
from quizmaster.database.session import get_async_session
from quizmaster.mail.aws_ses import build_transport
from quizmaster.mail.dispatcher import EmailDispatcher
from quizmaster.time_util import utcnow


@dataclass(frozen=True)
class JobContext:
    """Resources a job handler runs against. Built once per process (or per Celery firing)."""

    engine: AsyncEngine
    session_factory: async_sessionmaker
    mailer: EmailDispatcher
    clock: Callable[[], datetime] = utcnow


def build_job_context(engine: AsyncEngine, _settings: Settings) -> JobContext:
    mailer = EmailDispatcher(
        build_transport(_settings),
        frontend_url=_settings.FRONTEND_URL,
        send_delay=_settings.EMAIL_SEND_DELAY_SECONDS,
    )
    return JobContext(engine=engine, session_factory=get_async_session(engine), mailer=mailer)
