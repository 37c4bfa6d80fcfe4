"""Card and Deck classes - immutable card representations."""

from dataclasses import dataclass
from enum import Enum, auto
from random import Random
from typing import Iterator

from solitaire.errors import PreconditionError


class Color(Enum):
    """Card colors."""

    BLACK = auto()
    RED = auto()


class Suit(Enum):
    """Card suits."""

    CLUBS = auto()
    DIAMONDS = auto()
    HEARTS = auto()
    SPADES = auto()

    def __str__(self) -> str:
        symbols = {
            Suit.CLUBS: "♣",
            Suit.DIAMONDS: "♦",
            Suit.HEARTS: "♥",
            Suit.SPADES: "♠",
        }
        return symbols[self]

    @property
    def color(self) -> Color:
        """Return the color of this suit."""
        if self in (Suit.DIAMONDS, Suit.HEARTS):
            return Color.RED
        return Color.BLACK


class Rank(Enum):
    """Card ranks, Ace low."""

    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    def __str__(self) -> str:
        if 2 <= self.value <= 10:
            return str(self.value)
        return {
            Rank.ACE: "A",
            Rank.JACK: "J",
            Rank.QUEEN: "Q",
            Rank.KING: "K",
        }[self]

    def follows(self, other: "Rank") -> bool:
        """Check if this rank is exactly one above ``other``."""
        return self.value == other.value + 1


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def color(self) -> Color:
        """Return the color of the card's suit."""
        return self.suit.color

    @property
    def is_ace(self) -> bool:
        """Check if this card is an Ace."""
        return self.rank == Rank.ACE

    @property
    def is_king(self) -> bool:
        """Check if this card is a King."""
        return self.rank == Rank.KING

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a string like '2♣', 'AS', 'Kh', '10D'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str = s[:-1]
        suit_str = s[-1]

        rank_map = {
            "A": Rank.ACE,
            "1": Rank.ACE,
            "2": Rank.TWO,
            "3": Rank.THREE,
            "4": Rank.FOUR,
            "5": Rank.FIVE,
            "6": Rank.SIX,
            "7": Rank.SEVEN,
            "8": Rank.EIGHT,
            "9": Rank.NINE,
            "10": Rank.TEN,
            "T": Rank.TEN,
            "J": Rank.JACK,
            "Q": Rank.QUEEN,
            "K": Rank.KING,
        }

        suit_map = {
            "C": Suit.CLUBS,
            "♣": Suit.CLUBS,
            "D": Suit.DIAMONDS,
            "♦": Suit.DIAMONDS,
            "H": Suit.HEARTS,
            "♥": Suit.HEARTS,
            "S": Suit.SPADES,
            "♠": Suit.SPADES,
        }

        if rank_str not in rank_map:
            raise ValueError(f"Invalid rank: {rank_str}")
        if suit_str not in suit_map:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(rank_map[rank_str], suit_map[suit_str])


def full_deck() -> list[Card]:
    """Return the 52 cards in canonical order (by suit, then rank)."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


class Deck:
    """A standard 52-card deck. The top of the deck is the end of the list."""

    def __init__(self, rng: Random | None = None, shuffled: bool = True) -> None:
        """
        Initialize a new deck in canonical order.

        Args:
            rng: Random number generator for shuffling
            shuffled: If False, shuffle() only restores canonical order so the
                cards drawn can be predicted
        """
        self._rng = rng or Random()
        self._shuffled = shuffled
        self._cards: list[Card] = []
        self.reset()

    def reset(self) -> None:
        """Reset deck to all 52 cards in order."""
        self._cards = full_deck()

    def shuffle(self) -> None:
        """Restore all 52 cards and put them in random order."""
        self.reset()
        if self._shuffled:
            self._rng.shuffle(self._cards)

    def draw(self) -> Card:
        """Draw a card from the top of the deck."""
        if not self._cards:
            raise PreconditionError("Cannot draw from empty deck")
        return self._cards.pop()

    def peek(self) -> Card:
        """Return the top card without removing it."""
        if not self._cards:
            raise PreconditionError("Cannot peek at empty deck")
        return self._cards[-1]

    def size(self) -> int:
        """Return the number of cards remaining."""
        return len(self._cards)

    @property
    def is_empty(self) -> bool:
        return not self._cards

    @property
    def is_shuffled(self) -> bool:
        """Whether shuffle() randomises the order."""
        return self._shuffled

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

    def __contains__(self, card: object) -> bool:
        return card in self._cards
