"""Core Klondike rules engine - 100% UI-agnostic."""

from solitaire.cards import Card, Color, Deck, Rank, Suit
from solitaire.errors import InvariantError, PreconditionError, SolitaireError
from solitaire.foundation import FoundationManager
from solitaire.tableau import CardView, StackIndex, TableauManager

__all__ = [
    "Card",
    "Color",
    "Deck",
    "Rank",
    "Suit",
    "SolitaireError",
    "PreconditionError",
    "InvariantError",
    "FoundationManager",
    "CardView",
    "StackIndex",
    "TableauManager",
]
