# create_tables.py
import asyncio

from sqlalchemy import inspect

from quizmaster import model  # noqa: F401  registers every table on Base
from quizmaster.database.base_class import Base
from quizmaster.database.db import ENGINE


async def create_tables():
    async with ENGINE.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        table_names = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
    await ENGINE.dispose()
    print("Tables created.")
    print("Existing tables:", table_names)


if __name__ == "__main__":
    asyncio.run(create_tables())
