"""Server-rendered pages and the HTML form endpoints behind them.

Forms post to the same mutation handlers as the JSON action API. A successful
submission redirects (303); a validation failure re-renders the page with the
field errors next to their inputs.
"""

import logging
from collections.abc import Callable
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from flashdeck.application.common.result import ActionFailure, FailureReason
from flashdeck.application.decks.actions.base import DASHBOARD_PATH
from flashdeck.application.decks.actions.deck_actions import DECK_NOT_FOUND_MESSAGE
from flashdeck.config import TEMPLATES_DIR, Settings, get_settings
from flashdeck.core import Container
from flashdeck.domain.common.value_objects import MAX_ID
from flashdeck.domain.decks.entities.deck import Deck
from flashdeck.domain.study import StudySession
from flashdeck.exceptions import CardNotFoundError, DeckNotFoundError
from flashdeck.infrastructure.common.di import RequestContainer
from flashdeck.infrastructure.common.responses import failure_status_code, invalidation_headers
from flashdeck.infrastructure.common.revalidation import RequestPathRevalidator
from flashdeck.infrastructure.identity.dependencies import OptionalUserId

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pages"], include_in_schema=False)

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

AppSettings = Annotated[Settings, Depends(get_settings)]
FormField = Annotated[str, Form()]

NO_STORE = {"Cache-Control": "no-store"}
TRUTHY_FORM_VALUES = frozenset({"1", "true", "on", "yes"})


def render_page(
    request: Request,
    name: str,
    context: dict[str, Any],
    status_code: int = status.HTTP_200_OK,
) -> HTMLResponse:
    """Render a template; pages always reflect the latest data."""
    settings = get_settings()
    return templates.TemplateResponse(
        request,
        name,
        {"project_name": settings.PROJECT_NAME, "sign_in_url": settings.SIGN_IN_URL, **context},
        status_code=status_code,
        headers=NO_STORE,
    )


def redirect_to(url: str, revalidator: RequestPathRevalidator | None = None) -> RedirectResponse:
    headers = dict(NO_STORE)
    if revalidator is not None:
        headers.update(invalidation_headers(revalidator))
    return RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER, headers=headers)


def sign_in_redirect(settings: Settings) -> RedirectResponse:
    return redirect_to(settings.SIGN_IN_URL)


def not_found_page(request: Request, message: str = DECK_NOT_FOUND_MESSAGE) -> HTMLResponse:
    return render_page(
        request, "not_found.html", {"message": message}, status_code=status.HTTP_404_NOT_FOUND
    )


def parse_id(value: str) -> int | None:
    """Parse a positive integer id from a path segment."""
    try:
        parsed = int(value)
    except ValueError:
        return None
    return parsed if 0 < parsed <= MAX_ID else None


def parse_flag(value: str) -> bool:
    return value.strip().lower() in TRUTHY_FORM_VALUES


def parse_visited(value: str) -> list[int]:
    """Parse the comma-separated visited card ids, skipping junk."""
    ids = []
    for part in value.split(","):
        part = part.strip()
        if part.isdigit():
            ids.append(int(part))
    return ids


def handle_failure(
    request: Request,
    failure: ActionFailure,
    settings: Settings,
    rerender: Callable[[int, ActionFailure], Response],
) -> Response:
    """Turn a handler failure into the matching page response."""
    if failure.reason is FailureReason.UNAUTHENTICATED:
        return sign_in_redirect(settings)
    if failure.reason is FailureReason.NOT_FOUND:
        return not_found_page(request, failure.error)
    return rerender(failure_status_code(failure), failure)


def render_dashboard(
    request: Request,
    container: Container,
    user_id: str,
    status_code: int = status.HTTP_200_OK,
    form: dict[str, str] | None = None,
    failure: ActionFailure | None = None,
) -> HTMLResponse:
    decks = container.deck_query_use_case().list_decks(user_id)
    return render_page(
        request,
        "dashboard.html",
        {
            "decks": decks,
            "form": form or {},
            "errors": (failure.field_errors or {}) if failure else {},
            "error": failure.error if failure else None,
        },
        status_code=status_code,
    )


def render_deck(
    request: Request,
    container: Container,
    user_id: str,
    deck_id: int,
    status_code: int = status.HTTP_200_OK,
    **forms: Any,
) -> HTMLResponse:
    """
    Render the deck detail page.

    ``forms`` carries the submitted values and errors of whichever form
    failed: ``deck_form``/``deck_errors``, ``card_form``/``card_errors`` or
    ``edit_card_id``/``edit_card_form``/``edit_card_errors``, plus ``error``.
    """
    try:
        result = container.deck_query_use_case().get_deck_with_cards(user_id, deck_id)
    except DeckNotFoundError as e:
        return not_found_page(request, e.message)

    context: dict[str, Any] = {
        "deck": result.deck,
        "cards": result.cards,
        "deck_form": {},
        "deck_errors": {},
        "card_form": {},
        "card_errors": {},
        "edit_card_id": None,
        "edit_card_form": {},
        "edit_card_errors": {},
        "error": None,
    }
    context.update(forms)
    return render_page(request, "deck.html", context, status_code=status_code)


def render_card_deck(
    request: Request,
    container: Container,
    user_id: str,
    card_id: int,
    status_code: int,
    **forms: Any,
) -> HTMLResponse:
    """Render the deck page of the deck a card belongs to."""
    try:
        card = container.deck_query_use_case().get_card(user_id, card_id)
    except CardNotFoundError as e:
        return not_found_page(request, e.message)
    return render_deck(request, container, user_id, card.deck_id.value, status_code, **forms)


def render_study(request: Request, deck: Deck, session: StudySession) -> HTMLResponse:
    visited = ",".join(str(card_id.value) for card_id in sorted(session.visited, key=int))
    return render_page(
        request,
        "study.html",
        {"deck": deck, "session": session, "visited": visited},
    )


@router.get("/", response_class=HTMLResponse)
def landing(request: Request, user_id: OptionalUserId) -> Response:
    """Landing page; signed-in users go straight to their dashboard."""
    if user_id is not None:
        return redirect_to(DASHBOARD_PATH)
    return render_page(request, "landing.html", {})


@router.get("/dashboard", response_class=HTMLResponse)
def dashboard(
    request: Request, user_id: OptionalUserId, container: RequestContainer, settings: AppSettings
) -> Response:
    """List the caller's decks with the create-deck form."""
    if user_id is None:
        return sign_in_redirect(settings)
    return render_dashboard(request, container, user_id)


@router.post("/decks")
def create_deck_form(
    request: Request,
    user_id: OptionalUserId,
    container: RequestContainer,
    settings: AppSettings,
    name: FormField = "",
    description: FormField = "",
) -> Response:
    if user_id is None:
        return sign_in_redirect(settings)

    form = {"name": name, "description": description}
    result = container.deck_actions().create_deck(user_id, form)
    if isinstance(result, ActionFailure):
        return handle_failure(
            request,
            result,
            settings,
            lambda code, failure: render_dashboard(
                request, container, user_id, code, form=form, failure=failure
            ),
        )
    return redirect_to(DASHBOARD_PATH, container.path_revalidator())


@router.get("/decks/{deck_id}", response_class=HTMLResponse)
def deck_detail(
    request: Request,
    deck_id: str,
    user_id: OptionalUserId,
    container: RequestContainer,
    settings: AppSettings,
) -> Response:
    """Deck page with its cards and the deck/card management forms."""
    if user_id is None:
        return sign_in_redirect(settings)
    parsed_id = parse_id(deck_id)
    if parsed_id is None:
        return not_found_page(request)
    return render_deck(request, container, user_id, parsed_id)


@router.post("/decks/{deck_id}/edit")
def edit_deck_form(
    request: Request,
    deck_id: str,
    user_id: OptionalUserId,
    container: RequestContainer,
    settings: AppSettings,
    name: FormField = "",
    description: FormField = "",
) -> Response:
    if user_id is None:
        return sign_in_redirect(settings)
    parsed_id = parse_id(deck_id)
    if parsed_id is None:
        return not_found_page(request)

    form = {"name": name, "description": description}
    result = container.deck_actions().update_deck(user_id, {"id": parsed_id, **form})
    if isinstance(result, ActionFailure):
        return handle_failure(
            request,
            result,
            settings,
            lambda code, failure: render_deck(
                request,
                container,
                user_id,
                parsed_id,
                code,
                deck_form=form,
                deck_errors=failure.field_errors or {},
                error=failure.error,
            ),
        )
    return redirect_to(f"/decks/{parsed_id}", container.path_revalidator())


@router.post("/decks/{deck_id}/delete")
def delete_deck_form(
    request: Request,
    deck_id: str,
    user_id: OptionalUserId,
    container: RequestContainer,
    settings: AppSettings,
) -> Response:
    if user_id is None:
        return sign_in_redirect(settings)
    parsed_id = parse_id(deck_id)
    if parsed_id is None:
        return not_found_page(request)

    result = container.deck_actions().delete_deck(user_id, {"id": parsed_id})
    if isinstance(result, ActionFailure):
        return handle_failure(
            request,
            result,
            settings,
            lambda code, failure: render_deck(
                request, container, user_id, parsed_id, code, error=failure.error
            ),
        )
    return redirect_to(DASHBOARD_PATH, container.path_revalidator())


@router.post("/decks/{deck_id}/cards")
def create_card_form(
    request: Request,
    deck_id: str,
    user_id: OptionalUserId,
    container: RequestContainer,
    settings: AppSettings,
    front: FormField = "",
    back: FormField = "",
) -> Response:
    if user_id is None:
        return sign_in_redirect(settings)
    parsed_id = parse_id(deck_id)
    if parsed_id is None:
        return not_found_page(request)

    form = {"front": front, "back": back}
    result = container.card_actions().create_card(user_id, {"deck_id": parsed_id, **form})
    if isinstance(result, ActionFailure):
        return handle_failure(
            request,
            result,
            settings,
            lambda code, failure: render_deck(
                request,
                container,
                user_id,
                parsed_id,
                code,
                card_form=form,
                card_errors=failure.field_errors or {},
                error=failure.error,
            ),
        )
    return redirect_to(f"/decks/{parsed_id}", container.path_revalidator())


@router.post("/cards/{card_id}/edit")
def edit_card_form(
    request: Request,
    card_id: str,
    user_id: OptionalUserId,
    container: RequestContainer,
    settings: AppSettings,
    front: FormField = "",
    back: FormField = "",
) -> Response:
    if user_id is None:
        return sign_in_redirect(settings)
    parsed_id = parse_id(card_id)
    if parsed_id is None:
        return not_found_page(request, CardNotFoundError().message)

    form = {"front": front, "back": back}
    result = container.card_actions().update_card(user_id, {"id": parsed_id, **form})
    if isinstance(result, ActionFailure):
        return handle_failure(
            request,
            result,
            settings,
            lambda code, failure: render_card_deck(
                request,
                container,
                user_id,
                parsed_id,
                code,
                edit_card_id=parsed_id,
                edit_card_form=form,
                edit_card_errors=failure.field_errors or {},
                error=failure.error,
            ),
        )
    return redirect_to(f"/decks/{result.data.deck_id.value}", container.path_revalidator())


@router.post("/cards/{card_id}/delete")
def delete_card_form(
    request: Request,
    card_id: str,
    user_id: OptionalUserId,
    container: RequestContainer,
    settings: AppSettings,
) -> Response:
    if user_id is None:
        return sign_in_redirect(settings)
    parsed_id = parse_id(card_id)
    if parsed_id is None:
        return not_found_page(request, CardNotFoundError().message)

    result = container.card_actions().delete_card(user_id, {"id": parsed_id})
    if isinstance(result, ActionFailure):
        return handle_failure(
            request,
            result,
            settings,
            lambda code, failure: render_card_deck(
                request, container, user_id, parsed_id, code, error=failure.error
            ),
        )
    return redirect_to(f"/decks/{result.data.deck_id.value}", container.path_revalidator())


@router.get("/decks/{deck_id}/study", response_class=HTMLResponse)
def study(
    request: Request,
    deck_id: str,
    user_id: OptionalUserId,
    container: RequestContainer,
    settings: AppSettings,
) -> Response:
    """
    Start a study session over the deck's cards.

    A deck without cards can't be studied; the caller is sent back to the
    deck page to add some.
    """
    if user_id is None:
        return sign_in_redirect(settings)
    parsed_id = parse_id(deck_id)
    if parsed_id is None:
        return not_found_page(request)

    try:
        result = container.deck_query_use_case().get_deck_with_cards(user_id, parsed_id)
    except DeckNotFoundError as e:
        return not_found_page(request, e.message)
    if not result.cards:
        return redirect_to(f"/decks/{parsed_id}")

    return render_study(request, result.deck, StudySession.start(result.cards))


@router.post("/decks/{deck_id}/study", response_class=HTMLResponse)
def study_step(
    request: Request,
    deck_id: str,
    user_id: OptionalUserId,
    container: RequestContainer,
    settings: AppSettings,
    action: FormField = "",
    position: FormField = "0",
    revealed: FormField = "",
    visited: FormField = "",
    complete: FormField = "",
) -> Response:
    """
    Apply one study transition.

    Session state round-trips through hidden form fields and is checked
    against the current card list before the transition is applied.
    """
    if user_id is None:
        return sign_in_redirect(settings)
    parsed_id = parse_id(deck_id)
    if parsed_id is None:
        return not_found_page(request)

    try:
        result = container.deck_query_use_case().get_deck_with_cards(user_id, parsed_id)
    except DeckNotFoundError as e:
        return not_found_page(request, e.message)
    if not result.cards:
        return redirect_to(f"/decks/{parsed_id}")

    try:
        parsed_position = int(position)
    except ValueError:
        parsed_position = -1
    session = StudySession.restore(
        result.cards,
        position=parsed_position,
        revealed=parse_flag(revealed),
        visited_ids=parse_visited(visited),
        complete=parse_flag(complete),
    )

    transitions: dict[str, Callable[[], bool]] = {
        "flip": session.flip,
        "next": session.advance,
        "previous": session.retreat,
        "restart": session.restart,
    }
    transition = transitions.get(action)
    if transition is None or not transition():
        logger.debug(f"Ignored study action {action!r} on deck {parsed_id}")

    return render_study(request, result.deck, session)
