import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from gateway.config import Settings
from gateway.database import DatabasePools
from gateway.main import create_app

ORIGIN = "https://client.example"


def make_settings(db_url: str, **overrides) -> Settings:
    values = {
        "admin_database_url": db_url,
        "guest_database_url": db_url,
        "allowed_origin": ORIGIN,
        "db_pool_size": 2,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'gateway.db'}"


@pytest.fixture
def broken_db_url(tmp_path):
    # Parent directory does not exist, so every checkout fails.
    return f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'gateway.db'}"


@pytest.fixture
def settings(db_url):
    return make_settings(db_url)


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c


@pytest_asyncio.fixture
async def pools(settings):
    pools = DatabasePools.create(settings)
    yield pools
    await pools.dispose()
