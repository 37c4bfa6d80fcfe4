"""Tableau piles where cards are built down in alternating colors."""

from dataclasses import dataclass, field
from enum import Enum

from solitaire.cards import Card, Deck
from solitaire.errors import PreconditionError


class StackIndex(Enum):
    """The seven tableau piles, left to right."""

    FIRST = 0
    SECOND = 1
    THIRD = 2
    FOURTH = 3
    FIFTH = 4
    SIXTH = 5
    SEVENTH = 6

    def __str__(self) -> str:
        return self.name.title()


@dataclass(frozen=True, slots=True)
class CardView:
    """A card as the presentation layer sees it."""

    card: Card
    face_up: bool


@dataclass
class _Pile:
    """Cards bottom to top; the first ``hidden`` of them are face down."""

    cards: list[Card] = field(default_factory=list)
    hidden: int = 0

    @property
    def top(self) -> Card | None:
        return self.cards[-1] if self.cards else None

    def is_face_up(self, position: int) -> bool:
        return position >= self.hidden

    def reveal_top(self) -> None:
        """Turn the top card face up if it is face down."""
        if self.cards and self.hidden >= len(self.cards):
            self.hidden = len(self.cards) - 1


class TableauManager:
    """
    The seven working piles of a Klondike layout.

    Only the face-up run at the top of a pile can be moved. A card may be
    dropped on a pile whose top card is face up, of the opposite color and
    exactly one rank higher; an empty pile accepts only a King.
    """

    def __init__(self) -> None:
        self._piles: dict[StackIndex, _Pile] = {}
        self.clear()

    def clear(self) -> None:
        """Remove every card from every pile."""
        self._piles = {index: _Pile() for index in StackIndex}

    def initialize(self, deck: Deck) -> None:
        """
        Deal a new layout from ``deck``.

        Pile N receives N cards, dealt in rounds from left to right. Only the
        last card dealt to each pile is face up.
        """
        self.clear()
        indexes = list(StackIndex)
        for start in range(len(indexes)):
            for index in indexes[start:]:
                self._piles[index].cards.append(deck.draw())
        for pile in self._piles.values():
            pile.hidden = len(pile.cards) - 1

    def can_drop_on_stack(self, card: Card, index: StackIndex) -> bool:
        """Check if ``card`` may be placed on top of pile ``index``."""
        pile = self._piles[index]
        top = pile.top
        if top is None:
            return card.is_king
        return (
            pile.is_face_up(len(pile.cards) - 1)
            and top.color != card.color
            and top.rank.follows(card.rank)
        )

    def get_sequence(self, card: Card, index: StackIndex) -> list[Card]:
        """
        Get ``card`` and every card stacked on it in pile ``index``.

        Returns:
            A non-empty list, bottom to top
        """
        pile = self._piles[index]
        try:
            position = pile.cards.index(card)
        except ValueError:
            raise PreconditionError(f"{card} is not in the {index} pile") from None
        if not pile.is_face_up(position):
            raise PreconditionError(f"{card} is face down")
        return pile.cards[position:]

    def push(self, card: Card, index: StackIndex) -> None:
        """Place ``card`` face up on top of pile ``index``."""
        self._piles[index].cards.append(card)

    def pop_top_card(self, card: Card) -> None:
        """
        Remove ``card`` from the pile it tops.

        A face-down card exposed by the removal is turned face up.
        """
        for pile in self._piles.values():
            if pile.top == card:
                pile.cards.pop()
                pile.reveal_top()
                return
        raise PreconditionError(f"{card} is not on top of a tableau pile")

    def find(self, card: Card) -> StackIndex | None:
        """Return the pile holding ``card``, if any."""
        for index, pile in self._piles.items():
            if card in pile.cards:
                return index
        return None

    def is_in_stacks(self, card: Card) -> bool:
        return self.find(card) is not None

    def is_visible(self, card: Card) -> bool:
        """Check if ``card`` is face up in one of the piles."""
        index = self.find(card)
        if index is None:
            return False
        pile = self._piles[index]
        return pile.is_face_up(pile.cards.index(card))

    def get_stack(self, index: StackIndex) -> tuple[CardView, ...]:
        """Return the views of pile ``index``, bottom to top."""
        pile = self._piles[index]
        return tuple(
            CardView(card, pile.is_face_up(position))
            for position, card in enumerate(pile.cards)
        )

    def cards(self, index: StackIndex) -> tuple[Card, ...]:
        return tuple(self._piles[index].cards)

    def total_cards(self) -> int:
        """Return the number of cards across all seven piles."""
        return sum(len(pile.cards) for pile in self._piles.values())
