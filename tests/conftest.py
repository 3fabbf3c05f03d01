"""
Pytest configuration and fixtures.
"""

import os

# Settings are read at import time, so they must be in place before the app is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ADMIN_SECRET"] = "test-secret"
os.environ["RATE_LIMIT_REQUESTS"] = "100000"
os.environ["REDIS_URL"] = "redis://127.0.0.1:1/0"

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from prompt_strength.db import Base, get_db
from prompt_strength import models   # registers tables on Base.metadata
from prompt_strength.schemas import Lever, ModelConfig
from prompt_strength.services.config_service import ConfigService
from prompt_strength.services.defaults import DEFAULT_LEVERS, DEFAULT_MODELS


@pytest.fixture
def engine():
    """Create an isolated in-memory database engine."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()

@pytest.fixture
def db_session(engine):
    """Create a test database session seeded with the default rubric."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    ConfigService.seed_defaults(session)
    yield session
    session.rollback()
    session.close()

@pytest.fixture
def client(db_session):
    """API client wired to the seeded test session."""
    from fastapi.testclient import TestClient
    from prompt_strength.main import app

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()

@pytest.fixture
def default_levers():
    return [Lever.model_validate(data) for data in DEFAULT_LEVERS]

@pytest.fixture
def default_models():
    return [ModelConfig.model_validate(data) for data in DEFAULT_MODELS]

@pytest.fixture
def claude(default_models):
    return next(m for m in default_models if m.id == "claude")

def make_lever(lever_id="task-clarity", patterns=("alpha", "beta", "gamma"), weight=10, priority=1, **extra):
    """Build a small lever for focused tests."""
    data = {
        "id": lever_id,
        "name": lever_id.replace("-", " ").title(),
        "weight": weight,
        "patterns": list(patterns),
        "feedback": {"missing": f"{lever_id} missing", "weak": f"{lever_id} weak", "good": f"{lever_id} good"},
        "priority": priority,
    }
    data.update(extra)
    return Lever.model_validate(data)

@pytest.fixture
def lever_factory():
    return make_lever

@pytest.fixture
def admin_headers():
    return {"x-admin-secret": "test-secret"}
