"""Pytest fixtures for solitaire engine tests."""

import pytest
from random import Random

from solitaire.cards import Card, Deck, full_deck
from solitaire.game import GameEngine
from solitaire.tableau import StackIndex


def deal_positions() -> list[StackIndex]:
    """Pile receiving each of the 28 cards dealt, in draw order."""
    indexes = list(StackIndex)
    return [index for start in range(len(indexes)) for index in indexes[start:]]


class ArrangedRandom:
    """Stands in for Random; shuffle() puts the cards in a fixed order."""

    def __init__(self, order: list[Card]) -> None:
        self._order = order

    def shuffle(self, x: list[Card]) -> None:
        assert sorted(x, key=repr) == sorted(self._order, key=repr)
        x[:] = self._order


def arranged_deck(
    tops: dict[StackIndex, Card] | None = None,
    draws: list[Card] | None = None,
) -> Deck:
    """
    Build a deck that deals ``tops`` as the face-up tableau cards and then
    yields ``draws`` first from the remaining deck.
    """
    tops = tops or {}
    draws = draws or []
    pinned = set(tops.values()) | set(draws)
    spare = iter(c for c in full_deck() if c not in pinned)

    positions = deal_positions()
    last_deal = {index: i for i, index in enumerate(positions)}
    draw_order = []
    for i, index in enumerate(positions):
        if index in tops and last_deal[index] == i:
            draw_order.append(tops[index])
        else:
            draw_order.append(next(spare))
    draw_order.extend(draws)
    draw_order.extend(spare)

    # The deck draws from the end of its list
    return Deck(rng=ArrangedRandom(list(reversed(draw_order))))


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def deck(rng):
    """A shuffled deck."""
    d = Deck(rng=rng)
    d.shuffle()
    return d


@pytest.fixture
def ordered_deck():
    """A deck that deals in canonical order."""
    return Deck(shuffled=False)


@pytest.fixture
def engine(rng):
    """A new game with invariant checking on."""
    return GameEngine(deck=Deck(rng=rng), check_invariants=True)


@pytest.fixture
def ordered_engine():
    """
    A game dealt from an unshuffled deck.

    Tops, left to right: K♠ 6♠ K♥ 8♥ 4♥ A♥ Q♦. The deck then draws J♦ first.
    """
    return GameEngine(deck=Deck(shuffled=False), check_invariants=True)


@pytest.fixture
def notifications():
    """A listener that counts its calls."""

    class Counter:
        def __init__(self) -> None:
            self.count = 0

        def __call__(self) -> None:
            self.count += 1

    return Counter()


@pytest.fixture
def card():
    """Shorthand card factory: card('8D')."""
    return Card.from_string


@pytest.fixture
def make_deck():
    """Factory for decks that deal a chosen layout."""
    return arranged_deck
