"""Klondike game engine: the only component that mutates game state."""

import logging
import threading
from typing import Sequence

from solitaire.cards import Card, Deck, Suit, full_deck
from solitaire.errors import InvariantError, PreconditionError
from solitaire.foundation import FoundationManager
from solitaire.game.events import EventEmitter, EventType, GameEvent, Listener
from solitaire.game.zones import InDeck, InDiscard, InFoundation, InTableau, Zone
from solitaire.tableau import CardView, StackIndex, TableauManager

logger = logging.getLogger(__name__)


class GameEngine:
    """
    Facade over the deck, the discard pile, the foundations and the tableau.

    This is the core game logic, completely UI-agnostic. Every change goes
    through discard(), move_to_suit_stack(), drop_to_stack() or reset(), each
    of which runs under one engine-wide lock and notifies listeners exactly
    once on success. Each card is always in exactly one zone.

    Foundation and tableau managers own their own ordering rules; they do not
    notify anybody.
    """

    def __init__(
        self,
        deck: Deck | None = None,
        check_invariants: bool = False,
    ) -> None:
        """
        Create and deal a new game.

        Args:
            deck: Deck to play with (a shuffled deck if not provided)
            check_invariants: Verify the card partition after every change
        """
        self._deck = deck if deck is not None else Deck()
        self._discard: list[Card] = []
        self._foundations = FoundationManager()
        self._tableau = TableauManager()
        self._check = check_invariants
        self._lock = threading.RLock()
        self.events = EventEmitter()
        self._initialize()

    def _initialize(self) -> None:
        self._deck.shuffle()
        self._discard.clear()
        self._foundations.initialize()
        self._tableau.initialize(self._deck)

    def add_listener(self, listener: Listener) -> None:
        """Register a zero-argument callable run after every state change."""
        self.events.subscribe(listener)

    def _notify(self, event_type: EventType, **data) -> None:
        if self._check:
            self.check_invariants()
        self.events.emit_new(event_type, **data)

    def reset(self) -> None:
        """Shuffle the same 52 cards and deal a new game."""
        with self._lock:
            self._initialize()
            logger.debug("New game dealt")
            self._notify(EventType.GAME_STARTED)

    # Queries

    def is_empty_deck(self) -> bool:
        """Check if the deck has no card left in it."""
        return self._deck.is_empty

    def is_empty_discard_pile(self) -> bool:
        """Check if the discard pile has no card in it."""
        return not self._discard

    def deck_size(self) -> int:
        return self._deck.size()

    def get_discard_pile_top(self) -> Card:
        """Return the top card of the discard pile."""
        if not self._discard:
            raise PreconditionError("Discard pile is empty")
        return self._discard[-1]

    def discard_pile(self) -> tuple[Card, ...]:
        """Return the discard pile, bottom to top."""
        return tuple(self._discard)

    def has_top_pile_card(self, suit: Suit) -> bool:
        """Check if the foundation for ``suit`` has a card."""
        return not self._foundations.is_empty(suit)

    def get_top_pile_card(self, suit: Suit) -> Card:
        """Return the top card of the foundation for ``suit``."""
        return self._foundations.peek(suit)

    def get_foundation(self, suit: Suit) -> tuple[Card, ...]:
        """Return the foundation for ``suit``, bottom to top."""
        return self._foundations.cards(suit)

    def get_stack_at(self, index: StackIndex) -> tuple[CardView, ...]:
        """Return the presentation view of tableau pile ``index``."""
        return self._tableau.get_stack(index)

    def can_drop_on_stack(self, card: Card, index: StackIndex) -> bool:
        """Check if ``card`` may be placed on tableau pile ``index``."""
        return self._tableau.can_drop_on_stack(card, index)

    def get_sequence(self, card: Card, index: StackIndex) -> list[Card]:
        """
        Get the sequence made of ``card`` and every card stacked on it.

        Returns:
            A non-empty list of cards, bottom to top
        """
        return self._tableau.get_sequence(card, index)

    def locate(self, card: Card) -> Zone:
        """
        Find the zone currently holding ``card``.

        Raises:
            InvariantError: If no zone holds the card
        """
        if card in self._discard:
            return InDiscard()
        if self._foundations.contains(card):
            return InFoundation(card.suit)
        index = self._tableau.find(card)
        if index is not None:
            return InTableau(index)
        if card in self._deck:
            return InDeck()
        logger.error("Card %s is in no zone", card)
        raise InvariantError(f"{card} is in no zone")

    # Moves

    def discard(self) -> None:
        """Draw the top card of the deck and place it on the discard pile."""
        with self._lock:
            if self.is_empty_deck():
                logger.debug("Rejected discard: deck is empty")
                raise PreconditionError("Cannot discard from an empty deck")
            card = self._deck.draw()
            self._discard.append(card)
            logger.debug("Discarded %s", card)
            self._notify(EventType.CARD_DISCARDED, card=str(card))

    def can_move_to_suit_stack(self, card: Card, suit: Suit) -> bool:
        """
        Check if ``card`` can go on top of the foundation for ``suit``.

        Only true if its rank is immediately above that of the card currently
        on the foundation, or if it is an Ace. Where the card currently is
        does not matter.
        """
        if card.suit != suit:
            return False
        if card.is_ace:
            return True
        if self._foundations.is_empty(suit):
            return False
        return card.rank.follows(self._foundations.peek(suit).rank)

    def move_to_suit_stack(self, card: Card) -> None:
        """
        Move ``card`` from the discard pile or the tableau to its foundation.

        Raises:
            PreconditionError: If the move is not legal or the card is not
                on top of the discard pile or of a tableau pile
        """
        with self._lock:
            if not self.can_move_to_suit_stack(card, card.suit):
                logger.debug("Rejected foundation move of %s", card)
                raise PreconditionError(f"Cannot move {card} to its foundation")
            source = self.locate(card)
            if isinstance(source, InFoundation):
                raise PreconditionError(f"{card} is already on a foundation")
            self._detach(card, source)
            self._foundations.push(card)
            logger.debug("Moved %s from %s to foundation", card, source)
            self._notify(EventType.MOVED_TO_FOUNDATION, card=str(card), source=str(source))

    def drop_to_stack(self, cards: Sequence[Card], index: StackIndex) -> None:
        """
        Move one card, or a tableau sequence, onto tableau pile ``index``.

        A single card may come from the top of the discard pile, the top of
        a foundation or the top of a tableau pile. Several cards must be the
        sequence returned by get_sequence() for their pile. Destination
        legality is checked by the caller with can_drop_on_stack().
        """
        cards = list(cards)
        with self._lock:
            if not cards:
                raise PreconditionError("No cards to move")
            if len(cards) == 1:
                source = self.locate(cards[0])
                self._detach(cards[0], source)
                self._tableau.push(cards[0], index)
            else:
                source = self._locate_sequence(cards)
                # Pop from the top down so each card is a pile top when removed
                buffer = []
                for card in reversed(cards):
                    self._tableau.pop_top_card(card)
                    buffer.append(card)
                while buffer:
                    self._tableau.push(buffer.pop(), index)
            logger.debug("Dropped %d card(s) from %s onto %s", len(cards), source, index)
            self._notify(
                EventType.DROPPED_TO_STACK,
                cards=[str(c) for c in cards],
                source=str(source),
                index=index.value,
            )

    def _locate_sequence(self, cards: list[Card]) -> InTableau:
        source = self.locate(cards[0])
        if not isinstance(source, InTableau):
            raise PreconditionError(f"A sequence can only be moved from the tableau, not the {source}")
        if self._tableau.get_sequence(cards[0], source.index) != cards:
            raise PreconditionError(f"Cards are not the sequence starting at {cards[0]}")
        return source

    def _detach(self, card: Card, source: Zone) -> None:
        """Remove ``card`` from ``source``; it must be on top there."""
        if isinstance(source, InDiscard):
            if self._discard[-1] != card:
                raise PreconditionError(f"{card} is not on top of the discard pile")
            self._discard.pop()
        elif isinstance(source, InFoundation):
            if self._foundations.peek(source.suit) != card:
                raise PreconditionError(f"{card} is not on top of its foundation")
            self._foundations.pop(source.suit)
        elif isinstance(source, InTableau):
            self._tableau.pop_top_card(card)
        else:
            raise PreconditionError(f"{card} is still in the deck")

    def check_invariants(self) -> None:
        """
        Verify that the 52 cards partition exactly across all zones and
        that every foundation runs Ace upward in a single suit.

        Raises:
            InvariantError: On any inconsistency
        """
        placed = list(self._deck) + self._discard
        for suit in Suit:
            pile = self._foundations.cards(suit)
            for position, card in enumerate(pile):
                if card.suit != suit or card.rank.value != position + 1:
                    logger.error("Foundation for %s is out of order: %s", suit.name, pile)
                    raise InvariantError(f"Foundation for {suit.name} is out of order")
            placed.extend(pile)
        for index in StackIndex:
            placed.extend(self._tableau.cards(index))

        if len(placed) != len(set(placed)) or set(placed) != set(full_deck()):
            logger.error("Card partition broken: %d cards placed", len(placed))
            raise InvariantError("Cards do not partition across the zones")

    @property
    def history(self) -> list[GameEvent]:
        """Return the event history."""
        return self.events.history


# Global engine instance
_engine: GameEngine | None = None
_engine_lock = threading.Lock()


def get_engine(
    deck: Deck | None = None,
    check_invariants: bool = False,
) -> GameEngine:
    """
    Get or create the process-wide engine, dealt on first access.

    The arguments are only used when the engine is created; later calls
    return the existing engine unchanged.
    """
    global _engine
    with _engine_lock:
        if _engine is None:
            _engine = GameEngine(deck=deck, check_invariants=check_invariants)
        return _engine


def reset_engine() -> None:
    """Forget the process-wide engine so the next access deals a new one."""
    global _engine
    with _engine_lock:
        _engine = None
