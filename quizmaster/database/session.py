from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from quizmaster.config import Settings, settings


def build_sqlalchemy_database_url_from_settings(_settings: Settings) -> str:
    """
    Builds a SQLAlchemy URL based on the provided settings.

    Parameters:
        _settings (Settings): An instance of the Settings class
        containing the PostgreSQL connection details.

    Returns:
        str: DATABASE_URL when it is set, otherwise an asyncpg URL
        assembled from the POSTGRES_* settings.
    """
    if _settings.DATABASE_URL:
        return _settings.DATABASE_URL
    return (
        f"postgresql+asyncpg://{_settings.POSTGRES_USER}:{_settings.POSTGRES_PASSWORD}"
        f"@{_settings.POSTGRES_HOST}:{_settings.POSTGRES_PORT}/{_settings.POSTGRES_DB}"
    )


def get_async_engine(database_url: str, echo=False, **kwargs) -> AsyncEngine:
    """
    Creates and returns an AsyncEngine for the given database URL.

    Parameters:
        database_url (str): The URL of the database to connect to.
        echo (bool): Whether or not to enable echoing of SQL statements.
        **kwargs: Passed through to create_async_engine. When no poolclass
        is given, PostgreSQL engines get a small bounded pool.

    Returns:
        AsyncEngine: The engine object representing the database connection.
    """
    if database_url.startswith("postgresql") and "poolclass" not in kwargs:
        kwargs.setdefault("pool_size", 3)
        kwargs.setdefault("max_overflow", 5)
        kwargs.setdefault("pool_timeout", 30)
        kwargs.setdefault("pool_recycle", 300)     # recycle connections every 5 minutes
        kwargs.setdefault("pool_pre_ping", True)
    return create_async_engine(database_url, echo=echo, **kwargs)


def get_async_session(engine: AsyncEngine) -> async_sessionmaker:
    """
    Returns an async sessionmaker bound to the engine.
    """
    return async_sessionmaker(
        bind=engine,
        expire_on_commit=False,
        autoflush=False,
    )


SQLALCHEMY_DATABASE_URL = build_sqlalchemy_database_url_from_settings(settings)
