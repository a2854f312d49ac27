"""Pytest configuration and fixtures."""

import os

os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key-for-flashdeck-tests-0123456789"

from collections.abc import Callable, Generator
from typing import Any

import jwt
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

from flashdeck.config import get_settings
from flashdeck.database import Base, create_database_engine, get_db
from flashdeck.main import app
from flashdeck.models import Card, Deck

TEST_USER_ID = "user_test_owner"
OTHER_USER_ID = "user_test_other"

# Create test engine (in-memory SQLite shared across threads, foreign keys on)
test_engine = create_database_engine("sqlite:///:memory:")

# Create test session factory
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    # Create all tables
    Base.metadata.create_all(bind=test_engine)

    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        # Drop all tables after test
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, Any, None]:
    """Create a test client with database session."""

    def override_get_db() -> Generator[Session, None, None]:
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def make_token() -> Callable[..., str]:
    """Mint tokens the way the external auth provider would."""
    settings = get_settings()

    def _make_token(user_id: str = TEST_USER_ID, **claims: Any) -> str:
        payload = {"sub": user_id, **claims}
        return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)

    return _make_token


@pytest.fixture
def auth_headers(make_token: Callable[..., str]) -> dict[str, str]:
    """Authorization header for the test user."""
    return {"Authorization": f"Bearer {make_token(TEST_USER_ID)}"}


@pytest.fixture
def other_auth_headers(make_token: Callable[..., str]) -> dict[str, str]:
    """Authorization header for a second user who owns nothing of the test user's."""
    return {"Authorization": f"Bearer {make_token(OTHER_USER_ID)}"}


@pytest.fixture
def test_deck(db_session: Session) -> Deck:
    """Create a deck owned by the test user."""
    deck = Deck(owner_id=TEST_USER_ID, name="Spanish", description="Common verbs")
    db_session.add(deck)
    db_session.commit()
    db_session.refresh(deck)
    return deck


@pytest.fixture
def test_card(db_session: Session, test_deck: Deck) -> Card:
    """Create a card in the test user's deck."""
    card = Card(deck_id=test_deck.id, front="hola", back="hello")
    db_session.add(card)
    db_session.commit()
    db_session.refresh(card)
    return card


def create_deck(db_session: Session, owner_id: str, name: str = "Deck") -> Deck:
    """Insert a deck directly, bypassing the repositories."""
    deck = Deck(owner_id=owner_id, name=name)
    db_session.add(deck)
    db_session.commit()
    db_session.refresh(deck)
    return deck


def create_card(db_session: Session, deck_id: int, front: str = "front", back: str = "back") -> Card:
    """Insert a card directly, bypassing the repositories."""
    card = Card(deck_id=deck_id, front=front, back=back)
    db_session.add(card)
    db_session.commit()
    db_session.refresh(card)
    return card
