"""Foundation piles where completed suits accumulate from Ace to King."""

from solitaire.cards import Card, Suit
from solitaire.errors import PreconditionError


class FoundationManager:
    """
    Four single-suit piles built upward from Ace.

    The pile a card goes to is chosen by its suit, so suits never mix.
    """

    def __init__(self) -> None:
        self._piles: dict[Suit, list[Card]] = {}
        self.initialize()

    def initialize(self) -> None:
        """Empty all four piles."""
        self._piles = {suit: [] for suit in Suit}

    def is_empty(self, suit: Suit) -> bool:
        """Check if the pile for ``suit`` has no cards."""
        return not self._piles[suit]

    def peek(self, suit: Suit) -> Card:
        """Return the top card of the pile for ``suit``."""
        if self.is_empty(suit):
            raise PreconditionError(f"Foundation for {suit.name} is empty")
        return self._piles[suit][-1]

    def can_push(self, card: Card) -> bool:
        """Check if ``card`` is the next card its pile expects."""
        pile = self._piles[card.suit]
        if not pile:
            return card.is_ace
        return card.rank.follows(pile[-1].rank)

    def push(self, card: Card) -> None:
        """Place ``card`` on the pile for its suit."""
        if not self.can_push(card):
            raise PreconditionError(f"Cannot place {card} on the {card.suit.name} foundation")
        self._piles[card.suit].append(card)

    def pop(self, suit: Suit) -> Card:
        """Remove and return the top card of the pile for ``suit``."""
        if self.is_empty(suit):
            raise PreconditionError(f"Foundation for {suit.name} is empty")
        return self._piles[suit].pop()

    def cards(self, suit: Suit) -> tuple[Card, ...]:
        """Return the pile for ``suit``, bottom to top."""
        return tuple(self._piles[suit])

    def contains(self, card: Card) -> bool:
        return card in self._piles[card.suit]

    def total_cards(self) -> int:
        """Return the number of cards across all four piles."""
        return sum(len(pile) for pile in self._piles.values())
