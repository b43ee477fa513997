import os

# Settings are required at import time; point them at a dummy server.
os.environ.setdefault("DB_HOST", "localhost")
os.environ.setdefault("DB_PORT", "5432")
os.environ.setdefault("DB_USER", "postgres")
os.environ.setdefault("DB_PASSWORD", "postgres")
os.environ.setdefault("DB_NAME", "csv_importer_test")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from csv_importer.database import Base, create_session_factory
from csv_importer.main import create_app
import csv_importer.models  # noqa: F401

# In-memory database shared by every session of one engine
TEST_DATABASE_URL = "sqlite+aiosqlite://"

VALID_CSV = b"todo_name,note\nBuy groceries,Milk and bread\nCall dentist,Schedule appointment"


def make_test_engine():
    return create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )


@pytest.fixture
def app():
    """Application wired to a fresh in-memory database."""
    return create_app(engine=make_test_engine())


@pytest.fixture
def client(app):
    """Test client; entering it runs startup, which creates the tables."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
async def db_session():
    """Session on a fresh in-memory database with the tables created."""
    engine = make_test_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with create_session_factory(engine)() as session:
        yield session

    await engine.dispose()


def upload(client: TestClient, content: bytes, name: str = "Test Event", filename: str = "todos.csv"):
    """POST a CSV file to the event creation endpoint."""
    return client.post(
        "/api/v1/event",
        data={"name": name},
        files={"csvfile": (filename, content, "text/csv")},
    )
