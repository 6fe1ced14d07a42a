import os
import tempfile

# Settings are read at import time, so configure them before the app is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="campaign-calendar-uploads-"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

import campaign_calendar.models  # noqa: F401
from campaign_calendar.api.deps import get_client_address
from campaign_calendar.db import get_session
from campaign_calendar.main import app
from campaign_calendar.services.access import AccessTable
from campaign_calendar.services.permissions import store_access_table

ADMIN_ADDRESS = "192.168.1.10"
OUTSIDER_ADDRESS = "203.0.113.7"


class FakeNetwork:
    """Stands in for the connection peer address of the next requests."""

    def __init__(self, address: str = ADMIN_ADDRESS):
        self.address = address


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def network() -> FakeNetwork:
    return FakeNetwork()


@pytest.fixture
def seed_access(session):
    def _seed(elevated=(), departments=None) -> AccessTable:
        table = AccessTable(elevated, departments or {})
        store_access_table(session, table)
        return table

    return _seed


@pytest.fixture
def client(session, network, seed_access):
    """Test client whose default caller is an administrator."""
    seed_access(elevated=[ADMIN_ADDRESS])

    app.dependency_overrides[get_session] = lambda: session
    app.dependency_overrides[get_client_address] = lambda: network.address
    yield TestClient(app)
    app.dependency_overrides.clear()
