"""Integration fixtures: a real SQLAlchemy database on SQLite (aiosqlite).

Each test gets its own database file, so tests never share rows.
"""

import pytest_asyncio

from src.infrastructure.persistence.database import Database


@pytest_asyncio.fixture
async def database(tmp_path):
    db = Database(database_url=f"sqlite+aiosqlite:///{tmp_path / 'hypea.db'}")
    await db.create_all()
    yield db
    await db.drop_all()
    await db.close()


@pytest_asyncio.fixture
async def session(database):
    async with database.get_session() as session:
        yield session
