"""Ownership isolation tests for the deck and card repositories."""

import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest
from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

from flashdeck import models
from flashdeck.database import Base, create_database_engine
from flashdeck.domain.common.exceptions import ValidationError
from flashdeck.domain.common.value_objects import CardId, DeckId, UserId
from flashdeck.domain.decks.entities.deck import Deck
from flashdeck.infrastructure.decks.repositories import CardRepository, DeckRepository
from tests.conftest import OTHER_USER_ID, TEST_USER_ID

OWNER = UserId(TEST_USER_ID)
STRANGER = UserId(OTHER_USER_ID)


@pytest.fixture
def deck_repository(db_session: Session) -> DeckRepository:
    return DeckRepository(db_session)


@pytest.fixture
def card_repository(db_session: Session) -> CardRepository:
    return CardRepository(db_session)


class TestDeckRepository:
    def test_create_stamps_caller_as_owner(self, deck_repository: DeckRepository) -> None:
        deck = deck_repository.create(OWNER, "Spanish", "Verbs")

        assert deck.id.value > 0
        assert deck.owner_id == OWNER
        assert deck.created_at == deck.updated_at

    def test_create_rejects_blank_name(self, deck_repository: DeckRepository) -> None:
        with pytest.raises(ValidationError):
            deck_repository.create(OWNER, "   ")

    def test_reads_are_scoped_to_owner(self, deck_repository: DeckRepository) -> None:
        deck = deck_repository.create(OWNER, "Spanish")

        assert deck_repository.find_by_id(deck.id, OWNER) == deck
        assert deck_repository.find_by_id(deck.id, STRANGER) is None
        assert deck_repository.list_for_user(STRANGER) == []
        assert [d.id for d in deck_repository.list_for_user(OWNER)] == [deck.id]

    def test_list_orders_by_updated_at_desc(self, deck_repository: DeckRepository) -> None:
        older = deck_repository.create(OWNER, "Older")
        newer = deck_repository.create(OWNER, "Newer")

        assert [d.id for d in deck_repository.list_for_user(OWNER)] == [newer.id, older.id]

        deck_repository.update(older.id, OWNER, name="Older, touched")

        assert [d.id for d in deck_repository.list_for_user(OWNER)] == [older.id, newer.id]

    def test_update_by_stranger_changes_nothing(self, deck_repository: DeckRepository) -> None:
        deck = deck_repository.create(OWNER, "Spanish")

        assert deck_repository.update(deck.id, STRANGER, name="Hijacked") is None
        assert deck_repository.find_by_id(deck.id, OWNER).name == "Spanish"

    def test_update_blank_description_clears_it(self, deck_repository: DeckRepository) -> None:
        deck = deck_repository.create(OWNER, "Spanish", "Verbs")

        updated = deck_repository.update(deck.id, OWNER, description="  ")

        assert updated is not None
        assert updated.description is None
        assert updated.name == "Spanish"

    def test_delete_by_stranger_returns_false(
        self, deck_repository: DeckRepository, card_repository: CardRepository
    ) -> None:
        deck = deck_repository.create(OWNER, "Spanish")
        card_repository.create(deck.id, OWNER, "hola", "hello")

        assert deck_repository.delete(deck.id, STRANGER) is False
        assert deck_repository.find_by_id(deck.id, OWNER) is not None
        assert len(card_repository.list_for_deck(deck.id, OWNER)) == 1

    def test_delete_removes_cards(
        self,
        db_session: Session,
        deck_repository: DeckRepository,
        card_repository: CardRepository,
    ) -> None:
        deck = deck_repository.create(OWNER, "Spanish")
        card_repository.create(deck.id, OWNER, "hola", "hello")
        card_repository.create(deck.id, OWNER, "adios", "bye")

        assert deck_repository.delete(deck.id, OWNER) is True
        assert deck_repository.find_by_id(deck.id, OWNER) is None
        assert db_session.query(models.Card).count() == 0
    def test_out_of_range_id_is_absent(self, deck_repository: DeckRepository) -> None:
        deck_id = DeckId(2**63)

        assert deck_repository.find_by_id(deck_id, OWNER) is None
        assert deck_repository.update(deck_id, OWNER, name="x") is None
        assert deck_repository.delete(deck_id, OWNER) is False


class TestCardRepository:
    def test_cards_listed_in_creation_order(
        self, deck_repository: DeckRepository, card_repository: CardRepository
    ) -> None:
        deck = deck_repository.create(OWNER, "Spanish")
        a = card_repository.create(deck.id, OWNER, "A", "a")
        b = card_repository.create(deck.id, OWNER, "B", "b")
        c = card_repository.create(deck.id, OWNER, "C", "c")

        cards = card_repository.list_for_deck(deck.id, OWNER)

        assert [card.id for card in cards] == [a.id, b.id, c.id]

    def test_foreign_deck_lists_no_cards(
        self, deck_repository: DeckRepository, card_repository: CardRepository
    ) -> None:
        deck = deck_repository.create(OWNER, "Spanish")
        card_repository.create(deck.id, OWNER, "hola", "hello")

        assert card_repository.list_for_deck(deck.id, STRANGER) == []
        assert card_repository.list_for_deck(DeckId(99999), OWNER) == []

    def test_create_in_foreign_deck_returns_none(
        self,
        db_session: Session,
        deck_repository: DeckRepository,
        card_repository: CardRepository,
    ) -> None:
        deck = deck_repository.create(OWNER, "Spanish")

        assert card_repository.create(deck.id, STRANGER, "hola", "hello") is None
        assert db_session.query(models.Card).count() == 0

    def test_card_reads_and_writes_follow_deck_owner(
        self, deck_repository: DeckRepository, card_repository: CardRepository
    ) -> None:
        deck = deck_repository.create(OWNER, "Spanish")
        card = card_repository.create(deck.id, OWNER, "hola", "hello")
        assert card is not None

        assert card_repository.find_by_id(card.id, STRANGER) is None
        assert card_repository.update(card.id, STRANGER, front="changed") is None
        assert card_repository.delete(card.id, STRANGER) is None
        assert card_repository.find_by_id(card.id, OWNER) == card

    def test_update_touches_only_given_side(
        self, deck_repository: DeckRepository, card_repository: CardRepository
    ) -> None:
        deck = deck_repository.create(OWNER, "Spanish")
        card = card_repository.create(deck.id, OWNER, "hola", "hello")

        updated = card_repository.update(card.id, OWNER, back="hi")

        assert updated is not None
        assert updated.front == "hola"
        assert updated.back == "hi"
        assert updated.updated_at > card.updated_at

    def test_delete_returns_removed_card(
        self, deck_repository: DeckRepository, card_repository: CardRepository
    ) -> None:
        deck = deck_repository.create(OWNER, "Spanish")
        card = card_repository.create(deck.id, OWNER, "hola", "hello")

        removed = card_repository.delete(card.id, OWNER)

        assert removed is not None
        assert removed.id == card.id
        assert removed.deck_id == deck.id
        assert card_repository.find_by_id(CardId(card.id.value), OWNER) is None
    def test_out_of_range_ids_are_absent(self, card_repository: CardRepository) -> None:
        card_id = CardId(2**63)

        assert card_repository.list_for_deck(DeckId(2**63), OWNER) == []
        assert card_repository.create(DeckId(2**63), OWNER, "hola", "hello") is None
        assert card_repository.find_by_id(card_id, OWNER) is None
        assert card_repository.update(card_id, OWNER, front="x") is None
        assert card_repository.delete(card_id, OWNER) is None


class TestEndToEndOwnership:
    """One user builds a deck; a second user can't see it."""

    def test_spanish_deck_scenario(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        other_auth_headers: dict[str, str],
    ) -> None:
        deck = client.post(
            "/api/v1/actions/decks/create", json={"name": "Spanish"}, headers=auth_headers
        ).json()["data"]
        card = client.post(
            "/api/v1/actions/cards/create",
            json={"deck_id": deck["id"], "front": "hola", "back": "hello"},
            headers=auth_headers,
        ).json()["data"]

        assert deck["id"] == 1
        assert card["id"] == 1

        foreign = client.get(f"/api/v1/decks/{deck['id']}", headers=other_auth_headers)
        assert foreign.status_code == status.HTTP_404_NOT_FOUND

        own_decks = client.get("/api/v1/decks", headers=auth_headers).json()["decks"]
        assert [d["id"] for d in own_decks] == [deck["id"]]
        assert client.get("/api/v1/decks", headers=other_auth_headers).json()["decks"] == []


class TestConcurrentWrites:
    """Writers racing on one deck, each with its own connection."""

    def test_only_owner_update_lands(self, tmp_path: Path) -> None:
        engine = create_database_engine(f"sqlite:///{tmp_path / 'flashdeck.db'}")
        Base.metadata.create_all(bind=engine)
        session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
        try:
            with session_factory() as session:
                deck_id = DeckRepository(session).create(OWNER, "Spanish").id

            barrier = threading.Barrier(2)

            def rename(user_id: UserId, name: str) -> Deck | None:
                with session_factory() as session:
                    barrier.wait(timeout=10)
                    return DeckRepository(session).update(deck_id, user_id, name=name)

            with ThreadPoolExecutor(max_workers=2) as pool:
                owner_future = pool.submit(rename, OWNER, "Spanish verbs")
                stranger_future = pool.submit(rename, STRANGER, "Hijacked")
                owner_result = owner_future.result(timeout=30)
                stranger_result = stranger_future.result(timeout=30)

            assert owner_result is not None
            assert stranger_result is None
            with session_factory() as session:
                stored = DeckRepository(session).find_by_id(deck_id, OWNER)
            assert stored is not None
            assert stored.name == "Spanish verbs"
        finally:
            Base.metadata.drop_all(bind=engine)
            engine.dispose()
