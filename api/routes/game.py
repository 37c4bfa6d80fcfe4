"""Game API endpoints."""

import time
from fastapi import APIRouter, HTTPException, Header
from typing import Annotated

from api.schemas import (
    CardResponse,
    CardViewResponse,
    FoundationMoveRequest,
    GameStateResponse,
    TableauMoveRequest,
)
from api.session import create_session, get_session_store
from config import config
from solitaire.cards import Card, Suit
from solitaire.game import EventType, GameEngine, InDiscard, InFoundation, InTableau
from solitaire.tableau import StackIndex

router = APIRouter()

# Session data keys
SESSION_KEY_GAME = "game"
SESSION_KEY_CREATED_AT = "created_at"
SESSION_KEY_LAST_ACTIVITY = "last_activity"

CARD_NOT_AVAILABLE = "Card is not available to move"


def _new_engine() -> GameEngine:
    """Deal a new game using the configured deck settings."""
    return GameEngine(
        deck=config.game.make_deck(),
        check_invariants=config.game.check_invariants,
    )


def _parse_card(code: str) -> Card:
    """Parse a card code, rejecting bad input with a 400."""
    try:
        return Card.from_string(code)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None


async def _save_game(session_id: str, game: GameEngine) -> None:
    """Store the game in the session, extending the session's lifetime."""
    store = get_session_store()
    session_data = await store.get(session_id) or {}
    session_data[SESSION_KEY_GAME] = game
    session_data[SESSION_KEY_LAST_ACTIVITY] = int(time.time())
    if SESSION_KEY_CREATED_AT not in session_data:
        session_data[SESSION_KEY_CREATED_AT] = int(time.time())
    await store.set(session_id, session_data)


async def _get_game(session_id: str) -> GameEngine:
    """Get the game for a live session."""
    session_data = await get_session_store().get(session_id)
    if not session_data or SESSION_KEY_GAME not in session_data:
        raise HTTPException(status_code=404, detail="Unknown or expired session")
    return session_data[SESSION_KEY_GAME]


def _require_visible(game: GameEngine, card: Card) -> None:
    """
    Reject a move for a card the player cannot see.

    Only the discard top, foundation tops and face-up tableau cards can be
    moved. Every other card gets the same answer so that a failed move does
    not reveal where a hidden card is.
    """
    source = game.locate(card)
    if isinstance(source, InDiscard):
        visible = game.get_discard_pile_top() == card
    elif isinstance(source, InFoundation):
        visible = game.get_top_pile_card(source.suit) == card
    elif isinstance(source, InTableau):
        visible = any(v.face_up and v.card == card for v in game.get_stack_at(source.index))
    else:
        visible = False
    if not visible:
        raise HTTPException(status_code=400, detail=CARD_NOT_AVAILABLE)


def _card_to_response(card: Card) -> CardResponse:
    """Convert a Card to CardResponse."""
    return CardResponse(
        rank=str(card.rank),
        suit=card.suit.name,
        color=card.color.name,
        code=str(card),
    )


def _game_state_response(game: GameEngine) -> GameStateResponse:
    """Convert game state to response."""
    discard_top = None
    if not game.is_empty_discard_pile():
        discard_top = _card_to_response(game.get_discard_pile_top())

    foundations = {
        suit.name: (
            _card_to_response(game.get_top_pile_card(suit))
            if game.has_top_pile_card(suit)
            else None
        )
        for suit in Suit
    }

    tableau = [
        [
            CardViewResponse(
                card=_card_to_response(view.card) if view.face_up else None,
                face_up=view.face_up,
            )
            for view in game.get_stack_at(index)
        ]
        for index in StackIndex
    ]

    return GameStateResponse(
        deck_size=game.deck_size(),
        discard_size=len(game.discard_pile()),
        discard_top=discard_top,
        foundations=foundations,
        tableau=tableau,
        moves=sum(1 for e in game.history if e.event_type != EventType.GAME_STARTED),
    )


@router.post("/new")
async def new_game(
    session_id: Annotated[str | None, Header(alias="X-Session-ID")] = None,
) -> dict[str, str]:
    """Create a new game session, or deal a new game for an existing one."""
    if session_id is None or await get_session_store().get(session_id) is None:
        session_id = await create_session()

    await _save_game(session_id, _new_engine())

    return {"session_id": session_id}


@router.get("/state")
async def get_state(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> GameStateResponse:
    """Get current game state."""
    game = await _get_game(session_id)
    return _game_state_response(game)


@router.post("/discard")
async def discard(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> GameStateResponse:
    """Turn the top card of the deck onto the discard pile."""
    game = await _get_game(session_id)

    if game.is_empty_deck():
        raise HTTPException(status_code=400, detail="Deck is empty")

    game.discard()
    await _save_game(session_id, game)
    return _game_state_response(game)


@router.post("/foundation")
async def move_to_foundation(
    request: FoundationMoveRequest,
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> GameStateResponse:
    """Move a card from the discard pile or the tableau to its foundation."""
    game = await _get_game(session_id)
    card = _parse_card(request.card)
    _require_visible(game, card)

    if not game.can_move_to_suit_stack(card, card.suit):
        raise HTTPException(status_code=400, detail=f"Cannot move {card} to its foundation")

    game.move_to_suit_stack(card)
    await _save_game(session_id, game)
    return _game_state_response(game)


@router.post("/tableau")
async def move_to_tableau(
    request: TableauMoveRequest,
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> GameStateResponse:
    """Move a card, and every card stacked on it, onto a tableau pile."""
    game = await _get_game(session_id)
    card = _parse_card(request.card)
    index = StackIndex(request.index)
    _require_visible(game, card)

    if not game.can_drop_on_stack(card, index):
        raise HTTPException(status_code=400, detail=f"Cannot drop {card} on pile {index}")

    source = game.locate(card)
    if isinstance(source, InTableau):
        cards = game.get_sequence(card, source.index)
    else:
        cards = [card]

    game.drop_to_stack(cards, index)
    await _save_game(session_id, game)
    return _game_state_response(game)
