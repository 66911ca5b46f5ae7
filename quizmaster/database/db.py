from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from quizmaster.database.session import SQLALCHEMY_DATABASE_URL, get_async_engine, get_async_session
from quizmaster.log import get_logger

log = get_logger(__name__)

ENGINE = get_async_engine(SQLALCHEMY_DATABASE_URL)
SessionLocal = get_async_session(ENGINE)


async def get_db() -> AsyncGenerator[AsyncSession, None]:  # pragma: no cover
    """
    Yields a database session for the lifetime of one request.

    Yields:
        AsyncSession: A database session object.
    """
    async with SessionLocal() as db:
        yield db


@asynccontextmanager
async def get_async_db(session_factory: Optional[async_sessionmaker] = None) -> AsyncGenerator[AsyncSession, None]:
    """
    One-off session for background work. Rolls back when the body raises.

    Parameters:
        session_factory (async_sessionmaker): Factory to open the session from,
        SessionLocal when omitted.
    """
    session = (session_factory or SessionLocal)()
    try:
        yield session
    except Exception:
        await session.rollback()
        raise
    finally:
        try:
            await session.close()
        except Exception as e:
            log.error(f"Error closing session: {e}")
