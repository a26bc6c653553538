import os

from cryptography.fernet import Fernet

# Configure before the application modules read their settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("SETTINGS_ENCRYPTION_KEY", Fernet.generate_key().decode())
os.environ["GOOGLE_API_KEY"] = "test-google-api-key"
os.environ.pop("REDIS_URL", None)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from socialiser.auth import get_current_user  # noqa: E402
from socialiser.database import Base, get_db  # noqa: E402
from socialiser.domain.assistant.router import get_generator_factory, rate_limit_ai  # noqa: E402
from socialiser.main import app  # noqa: E402
from socialiser.models import Activity, CoreValue, Friend, User  # noqa: E402


class FakeGenerator:
    """Stands in for GeminiGenerator; replays queued texts or exceptions"""

    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.calls = []
        self.prompts = []

    async def __call__(self, model, prompt, use_tools):
        self.calls.append((model, use_tools))
        self.prompts.append(prompt)
        if not self.responses:
            raise RuntimeError("503 model unavailable")
        outcome = self.responses.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    yield session
    session.close()


@pytest.fixture
def user(db):
    user = User(
        firebase_uid="uid-host",
        email="host@example.com",
        name="Host",
        preferences={"defaultLocation": "Boulder, CO", "socialLocation": "Denver, CO"},
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def other_user(db):
    user = User(firebase_uid="uid-other", email="other@example.com", name="Other", preferences={})
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def activity(db, user):
    activity = Activity(user_id=user.id, name="Hiking", description="Trails and views")
    db.add(activity)
    db.commit()
    db.refresh(activity)
    return activity


@pytest.fixture
def value(db, user):
    value = CoreValue(user_id=user.id, name="Adventure", description="Trying new things")
    db.add(value)
    db.commit()
    db.refresh(value)
    return value


@pytest.fixture
def friends(db, user):
    rows = [Friend(user_id=user.id, name=name) for name in ("Alice", "Bob", "Cara")]
    db.add_all(rows)
    db.commit()
    for row in rows:
        db.refresh(row)
    return rows


@pytest.fixture
def foreign_friend(db, other_user):
    friend = Friend(user_id=other_user.id, name="Mallory")
    db.add(friend)
    db.commit()
    db.refresh(friend)
    return friend


@pytest.fixture
def fake_generator():
    return FakeGenerator()


@pytest.fixture
def client(db, user, fake_generator):
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_current_user] = lambda: user
    app.dependency_overrides[rate_limit_ai] = lambda: None
    app.dependency_overrides[get_generator_factory] = lambda: (lambda api_key: fake_generator)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def public_client(db):
    """Client without an authenticated user, for invite links"""
    app.dependency_overrides[get_db] = lambda: db
    yield TestClient(app)
    app.dependency_overrides.clear()
