import pytest
import fakeredis
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from workbench.main import app
from workbench.db import Base, get_db
from workbench.infra import redis_client
from workbench.models import Workspace
from workbench.rate_limit import limiter

# --- Test Database Setup ---

SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

# StaticPool keeps the single in-memory connection shared across sessions
engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def setup_database():
    """Create tables before each test, drop after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def mock_redis():
    # Editor sessions go to an in-process fake instead of a real server
    redis_client._redis_sync = fakeredis.FakeRedis(decode_responses=True)
    redis_client._redis_sync.flushall()
    yield redis_client._redis_sync
    redis_client._redis_sync = None


@pytest.fixture(autouse=True)
def reset_rate_limits():
    # limiter storage is process-wide; every test starts with a fresh budget
    limiter.reset()
    yield


@pytest.fixture
def client():
    """Test client with DB override."""
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def db_session():
    """Direct database session for setup."""
    session = TestingSessionLocal()
    yield session
    session.close()


@pytest.fixture
def workspace(db_session):
    ws = Workspace(id="00000000-0000-0000-0000-000000000000", slug="test", name="Test Workspace")
    db_session.add(ws)
    db_session.commit()
    db_session.refresh(ws)
    return ws


@pytest.fixture
def auth_headers(workspace):
    return {"X-Workspace-Id": workspace.id, "X-User-Id": "user-1"}
