"""Where a card is: exactly one of deck, discard pile, foundation or tableau."""

from dataclasses import dataclass

from solitaire.cards import Suit
from solitaire.tableau import StackIndex


@dataclass(frozen=True)
class InDeck:
    """The card is still in the deck."""

    def __str__(self) -> str:
        return "deck"


@dataclass(frozen=True)
class InDiscard:
    """The card is somewhere in the discard pile."""

    def __str__(self) -> str:
        return "discard pile"


@dataclass(frozen=True)
class InFoundation:
    """The card is on the foundation for ``suit``."""

    suit: Suit

    def __str__(self) -> str:
        return f"{self.suit.name.lower()} foundation"


@dataclass(frozen=True)
class InTableau:
    """The card is in tableau pile ``index``."""

    index: StackIndex

    def __str__(self) -> str:
        return f"{self.index.name.lower()} tableau pile"


Zone = InDeck | InDiscard | InFoundation | InTableau
