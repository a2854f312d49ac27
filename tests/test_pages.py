"""Tests for the server-rendered pages and their form endpoints."""

from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from flashdeck import models
from tests.conftest import OTHER_USER_ID, TEST_USER_ID, create_card, create_deck


class TestDashboardPage:
    """Test suite for GET /dashboard."""

    def test_redirects_anonymous_visitor_to_sign_in(self, client: TestClient) -> None:
        """Test pages fail closed with a redirect, not an error."""
        response = client.get("/dashboard", follow_redirects=False)

        assert response.status_code == status.HTTP_303_SEE_OTHER
        assert response.headers["location"] == "/sign-in"

    def test_lists_own_decks_only(
        self, client: TestClient, db_session: Session, auth_headers: dict[str, str]
    ) -> None:
        """Test the dashboard shows the caller's decks and nobody else's."""
        create_deck(db_session, TEST_USER_ID, "Spanish")
        create_deck(db_session, OTHER_USER_ID, "Secret deck")

        response = client.get("/dashboard", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.headers["cache-control"] == "no-store"
        assert "Spanish" in response.text
        assert "Secret deck" not in response.text

    def test_empty_state(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        """Test a user without decks sees the empty state."""
        response = client.get("/dashboard", headers=auth_headers)

        assert "No decks yet" in response.text


class TestDeckForms:
    """Test suite for the deck form endpoints."""

    def test_create_deck_redirects_to_dashboard(
        self, client: TestClient, db_session: Session, auth_headers: dict[str, str]
    ) -> None:
        """Test a valid form creates the deck and redirects."""
        response = client.post(
            "/decks",
            data={"name": "German", "description": ""},
            headers=auth_headers,
            follow_redirects=False,
        )

        assert response.status_code == status.HTTP_303_SEE_OTHER
        assert response.headers["location"] == "/dashboard"
        assert "/dashboard" in response.headers["x-invalidated-paths"]
        deck = db_session.query(models.Deck).one()
        assert deck.name == "German"
        assert deck.description is None

    def test_create_deck_shows_field_errors(
        self, client: TestClient, db_session: Session, auth_headers: dict[str, str]
    ) -> None:
        """Test an invalid form re-renders the dashboard with the error."""
        response = client.post(
            "/decks",
            data={"name": "", "description": "kept"},
            headers=auth_headers,
            follow_redirects=False,
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT
        assert "Name is required" in response.text
        assert "kept" in response.text
        assert db_session.query(models.Deck).count() == 0

    def test_create_deck_anonymous(self, client: TestClient, db_session: Session) -> None:
        """Test an anonymous form post is redirected and nothing is stored."""
        response = client.post("/decks", data={"name": "German"}, follow_redirects=False)

        assert response.status_code == status.HTTP_303_SEE_OTHER
        assert response.headers["location"] == "/sign-in"
        assert db_session.query(models.Deck).count() == 0

    def test_edit_deck(
        self,
        client: TestClient,
        db_session: Session,
        test_deck: models.Deck,
        auth_headers: dict[str, str],
    ) -> None:
        """Test editing a deck redirects back to its page."""
        deck_id = test_deck.id

        response = client.post(
            f"/decks/{deck_id}/edit",
            data={"name": "Spanish II", "description": "Verbs"},
            headers=auth_headers,
            follow_redirects=False,
        )

        assert response.status_code == status.HTTP_303_SEE_OTHER
        assert response.headers["location"] == f"/decks/{deck_id}"
        db_session.expire_all()
        assert db_session.get(models.Deck, deck_id).name == "Spanish II"

    def test_edit_foreign_deck_renders_not_found(
        self, client: TestClient, test_deck: models.Deck, other_auth_headers: dict[str, str]
    ) -> None:
        """Test another user's edit gets the generic not-found page."""
        response = client.post(
            f"/decks/{test_deck.id}/edit",
            data={"name": "Hijacked"},
            headers=other_auth_headers,
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert "Deck not found or access denied" in response.text

    def test_delete_deck(
        self,
        client: TestClient,
        db_session: Session,
        test_card: models.Card,
        auth_headers: dict[str, str],
    ) -> None:
        """Test deleting a deck from its page returns to the dashboard."""
        response = client.post(
            f"/decks/{test_card.deck_id}/delete", headers=auth_headers, follow_redirects=False
        )

        assert response.status_code == status.HTTP_303_SEE_OTHER
        assert response.headers["location"] == "/dashboard"
        assert db_session.query(models.Card).count() == 0


class TestDeckPage:
    """Test suite for GET /decks/:id."""

    def test_shows_deck_and_cards(
        self, client: TestClient, test_card: models.Card, auth_headers: dict[str, str]
    ) -> None:
        """Test the deck page lists its cards."""
        response = client.get(f"/decks/{test_card.deck_id}", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        assert "Spanish" in response.text
        assert "hola" in response.text
        assert "Ready to study?" in response.text

    def test_foreign_and_missing_decks_look_the_same(
        self, client: TestClient, test_deck: models.Deck, other_auth_headers: dict[str, str]
    ) -> None:
        """Test not-found and access-denied render the same page."""
        foreign = client.get(f"/decks/{test_deck.id}", headers=other_auth_headers)
        missing = client.get("/decks/99999", headers=other_auth_headers)
        malformed = client.get("/decks/not-a-number", headers=other_auth_headers)

        assert foreign.status_code == status.HTTP_404_NOT_FOUND
        assert missing.status_code == status.HTTP_404_NOT_FOUND
        assert malformed.status_code == status.HTTP_404_NOT_FOUND
        assert foreign.text == missing.text == malformed.text
    def test_out_of_range_id_renders_not_found(
        self, client: TestClient, auth_headers: dict[str, str]
    ) -> None:
        """Test an id too large to be stored renders the not-found page."""
        deck_page = client.get("/decks/99999999999999999999", headers=auth_headers)
        study_page = client.get("/decks/99999999999999999999/study", headers=auth_headers)

        assert deck_page.status_code == status.HTTP_404_NOT_FOUND
        assert study_page.status_code == status.HTTP_404_NOT_FOUND
        assert "Deck not found or access denied" in deck_page.text


class TestCardForms:
    """Test suite for the card form endpoints."""

    def test_add_card(
        self,
        client: TestClient,
        db_session: Session,
        test_deck: models.Deck,
        auth_headers: dict[str, str],
    ) -> None:
        """Test adding a card redirects back to the deck page."""
        deck_id = test_deck.id

        response = client.post(
            f"/decks/{deck_id}/cards",
            data={"front": "gato", "back": "cat"},
            headers=auth_headers,
            follow_redirects=False,
        )

        assert response.status_code == status.HTTP_303_SEE_OTHER
        assert response.headers["location"] == f"/decks/{deck_id}"
        assert db_session.query(models.Card).filter_by(front="gato").count() == 1

    def test_add_card_shows_field_errors(
        self, client: TestClient, test_deck: models.Deck, auth_headers: dict[str, str]
    ) -> None:
        """Test a card without a back re-renders the deck page with the error."""
        response = client.post(
            f"/decks/{test_deck.id}/cards",
            data={"front": "gato", "back": ""},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT
        assert "Back content is required" in response.text
        assert "gato" in response.text

    def test_edit_card(
        self,
        client: TestClient,
        db_session: Session,
        test_card: models.Card,
        auth_headers: dict[str, str],
    ) -> None:
        """Test editing a card redirects to its deck."""
        card_id, deck_id = test_card.id, test_card.deck_id

        response = client.post(
            f"/cards/{card_id}/edit",
            data={"front": "hola", "back": "hi"},
            headers=auth_headers,
            follow_redirects=False,
        )

        assert response.status_code == status.HTTP_303_SEE_OTHER
        assert response.headers["location"] == f"/decks/{deck_id}"
        db_session.expire_all()
        assert db_session.get(models.Card, card_id).back == "hi"

    def test_edit_card_shows_field_errors(
        self, client: TestClient, test_card: models.Card, auth_headers: dict[str, str]
    ) -> None:
        """Test clearing a card side re-renders the deck page."""
        response = client.post(
            f"/cards/{test_card.id}/edit",
            data={"front": "", "back": "hello"},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT
        assert "Front content is required" in response.text

    def test_delete_card(
        self,
        client: TestClient,
        db_session: Session,
        test_card: models.Card,
        auth_headers: dict[str, str],
    ) -> None:
        """Test deleting a card redirects to its deck."""
        card_id, deck_id = test_card.id, test_card.deck_id

        response = client.post(
            f"/cards/{card_id}/delete", headers=auth_headers, follow_redirects=False
        )

        assert response.status_code == status.HTTP_303_SEE_OTHER
        assert response.headers["location"] == f"/decks/{deck_id}"
        assert db_session.query(models.Card).count() == 0

    def test_delete_foreign_card(
        self,
        client: TestClient,
        db_session: Session,
        test_card: models.Card,
        other_auth_headers: dict[str, str],
    ) -> None:
        """Test another user's delete renders not found and keeps the card."""
        response = client.post(f"/cards/{test_card.id}/delete", headers=other_auth_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert "Card not found or access denied" in response.text
        assert db_session.query(models.Card).count() == 1


class TestStudyPage:
    """Test suite for the study session pages."""

    def test_empty_deck_redirects_to_deck_page(
        self, client: TestClient, test_deck: models.Deck, auth_headers: dict[str, str]
    ) -> None:
        """Test a deck with no cards can't be studied."""
        response = client.get(
            f"/decks/{test_deck.id}/study", headers=auth_headers, follow_redirects=False
        )

        assert response.status_code == status.HTTP_303_SEE_OTHER
        assert response.headers["location"] == f"/decks/{test_deck.id}"

    def test_starts_on_first_card_front(
        self,
        client: TestClient,
        db_session: Session,
        test_deck: models.Deck,
        auth_headers: dict[str, str],
    ) -> None:
        """Test a session starts at the first card with the answer hidden."""
        create_card(db_session, test_deck.id, "uno", "first answer")
        create_card(db_session, test_deck.id, "dos", "two")

        response = client.get(f"/decks/{test_deck.id}/study", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        assert "uno" in response.text
        assert "first answer" not in response.text
        assert "1 of 2" in response.text

    def test_next_is_ignored_until_revealed(
        self,
        client: TestClient,
        db_session: Session,
        test_deck: models.Deck,
        auth_headers: dict[str, str],
    ) -> None:
        """Test advancing with the answer hidden keeps the current card."""
        create_card(db_session, test_deck.id, "uno", "first answer")
        create_card(db_session, test_deck.id, "dos", "two")

        response = client.post(
            f"/decks/{test_deck.id}/study",
            data={"action": "next", "position": "0", "revealed": "0", "visited": ""},
            headers=auth_headers,
        )

        assert "1 of 2" in response.text
        assert "uno" in response.text

    def test_flip_then_next(
        self,
        client: TestClient,
        db_session: Session,
        test_deck: models.Deck,
        auth_headers: dict[str, str],
    ) -> None:
        """Test revealing and advancing through the deck to completion."""
        first = create_card(db_session, test_deck.id, "uno", "first answer")
        deck_id = test_deck.id

        flipped = client.post(
            f"/decks/{deck_id}/study",
            data={"action": "flip", "position": "0", "revealed": "0"},
            headers=auth_headers,
        )
        assert "first answer" in flipped.text

        completed = client.post(
            f"/decks/{deck_id}/study",
            data={"action": "next", "position": "0", "revealed": "1"},
            headers=auth_headers,
        )
        assert "Study Complete!" in completed.text
        assert f'name="visited" value="{first.id}"' in completed.text

    def test_foreign_deck_study_not_found(
        self, client: TestClient, test_card: models.Card, other_auth_headers: dict[str, str]
    ) -> None:
        """Test another user's deck can't be studied."""
        response = client.get(f"/decks/{test_card.deck_id}/study", headers=other_auth_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND
