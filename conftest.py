import pytest
from fastapi.testclient import TestClient

from config import Settings
from database import Database
from main import create_app


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'books.db'}"


@pytest.fixture
async def db_session(database_url):
    database = Database(database_url)
    await database.connect()
    async with database.session() as session:
        yield session
    await database.disconnect()


@pytest.fixture
def client(database_url):
    app = create_app(Settings(DATABASE_URL=database_url))
    with TestClient(app) as c:
        yield c
