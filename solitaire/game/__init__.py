"""Game engine and change notification."""

from solitaire.game.events import GameEvent, EventType, EventEmitter
from solitaire.game.zones import InDeck, InDiscard, InFoundation, InTableau, Zone
from solitaire.game.engine import GameEngine, get_engine, reset_engine

__all__ = [
    "GameEvent",
    "EventType",
    "EventEmitter",
    "InDeck",
    "InDiscard",
    "InFoundation",
    "InTableau",
    "Zone",
    "GameEngine",
    "get_engine",
    "reset_engine",
]
