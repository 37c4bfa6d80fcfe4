"""Tests for the tableau piles."""

import pytest

from solitaire.cards import Card, Deck, Rank, Suit
from solitaire.errors import PreconditionError
from solitaire.tableau import CardView, StackIndex, TableauManager


@pytest.fixture
def tableau(ordered_deck):
    """A tableau dealt from an unshuffled deck."""
    t = TableauManager()
    ordered_deck.shuffle()
    t.initialize(ordered_deck)
    return t


class TestDeal:
    """Tests for the initial layout."""

    def test_deals_28_cards(self, ordered_deck):
        """Test that the deal takes 1+2+...+7 cards from the deck."""
        tableau = TableauManager()
        tableau.initialize(ordered_deck)

        assert tableau.total_cards() == 28
        assert ordered_deck.size() == 24

    def test_pile_sizes(self, tableau):
        """Test that pile N holds N cards."""
        for index in StackIndex:
            assert len(tableau.get_stack(index)) == index.value + 1

    def test_only_top_card_face_up(self, tableau):
        """Test that only the last card of each pile is face up."""
        for index in StackIndex:
            views = tableau.get_stack(index)
            assert views[-1].face_up
            assert not any(v.face_up for v in views[:-1])

    def test_deal_in_rounds(self, tableau):
        """Test the deal goes round by round, left to right."""
        assert tableau.get_stack(StackIndex.FIRST) == (
            CardView(Card(Rank.KING, Suit.SPADES), True),
        )
        assert tableau.cards(StackIndex.SECOND) == (
            Card(Rank.QUEEN, Suit.SPADES),
            Card(Rank.SIX, Suit.SPADES),
        )
        assert tableau.cards(StackIndex.SEVENTH)[-1] == Card(Rank.QUEEN, Suit.DIAMONDS)

    def test_initialize_replaces_layout(self, tableau):
        """Test dealing again starts from empty piles."""
        deck = Deck(shuffled=False)
        tableau.initialize(deck)
        assert tableau.total_cards() == 28


class TestDropRules:
    """Tests for can_drop_on_stack."""

    def test_alternating_color_descending(self, tableau):
        """Test a red Queen goes on a black King."""
        assert tableau.can_drop_on_stack(Card(Rank.QUEEN, Suit.DIAMONDS), StackIndex.FIRST)
        assert tableau.can_drop_on_stack(Card(Rank.QUEEN, Suit.HEARTS), StackIndex.FIRST)

    def test_same_color_rejected(self, tableau):
        """Test a black Queen does not go on a black King."""
        assert not tableau.can_drop_on_stack(Card(Rank.QUEEN, Suit.CLUBS), StackIndex.FIRST)

    def test_wrong_rank_rejected(self, tableau):
        """Test that the rank must be exactly one lower."""
        assert not tableau.can_drop_on_stack(Card(Rank.JACK, Suit.DIAMONDS), StackIndex.FIRST)
        assert not tableau.can_drop_on_stack(Card(Rank.KING, Suit.DIAMONDS), StackIndex.FIRST)

    def test_empty_pile_takes_only_king(self):
        """Test the empty pile rule."""
        tableau = TableauManager()
        assert tableau.can_drop_on_stack(Card(Rank.KING, Suit.HEARTS), StackIndex.THIRD)
        assert not tableau.can_drop_on_stack(Card(Rank.QUEEN, Suit.HEARTS), StackIndex.THIRD)


class TestSequences:
    """Tests for get_sequence, push and pop_top_card."""

    def test_sequence_of_top_card(self, tableau):
        """Test the sequence of a top card is the card alone."""
        king = Card(Rank.KING, Suit.SPADES)
        assert tableau.get_sequence(king, StackIndex.FIRST) == [king]

    def test_sequence_includes_cards_above(self, tableau):
        """Test a sequence runs from the card to the top of the pile."""
        king = Card(Rank.KING, Suit.SPADES)
        queen = Card(Rank.QUEEN, Suit.DIAMONDS)
        tableau.pop_top_card(queen)
        tableau.push(queen, StackIndex.FIRST)

        assert tableau.get_sequence(king, StackIndex.FIRST) == [king, queen]
        assert tableau.get_sequence(queen, StackIndex.FIRST) == [queen]

    def test_sequence_of_face_down_card_rejected(self, tableau):
        """Test face-down cards cannot start a sequence."""
        with pytest.raises(PreconditionError):
            tableau.get_sequence(Card(Rank.QUEEN, Suit.SPADES), StackIndex.SECOND)

    def test_sequence_of_absent_card_rejected(self, tableau):
        """Test a card that is not in the pile has no sequence."""
        with pytest.raises(PreconditionError):
            tableau.get_sequence(Card(Rank.ACE, Suit.CLUBS), StackIndex.SECOND)

    def test_pop_reveals_next_card(self, tableau):
        """Test popping the top exposes the card below face up."""
        tableau.pop_top_card(Card(Rank.SIX, Suit.SPADES))

        assert tableau.get_stack(StackIndex.SECOND) == (
            CardView(Card(Rank.QUEEN, Suit.SPADES), True),
        )
        assert tableau.is_visible(Card(Rank.QUEEN, Suit.SPADES))

    def test_pop_non_top_rejected(self, tableau):
        """Test that only a pile's top card may be popped."""
        with pytest.raises(PreconditionError):
            tableau.pop_top_card(Card(Rank.QUEEN, Suit.SPADES))
        assert tableau.total_cards() == 28

    def test_pop_last_card_empties_pile(self, tableau):
        """Test popping a single-card pile leaves it empty."""
        tableau.pop_top_card(Card(Rank.KING, Suit.SPADES))
        assert tableau.get_stack(StackIndex.FIRST) == ()

    def test_membership(self, tableau):
        """Test find and is_in_stacks."""
        assert tableau.find(Card(Rank.SIX, Suit.SPADES)) == StackIndex.SECOND
        assert tableau.is_in_stacks(Card(Rank.QUEEN, Suit.SPADES))
        assert not tableau.is_in_stacks(Card(Rank.ACE, Suit.CLUBS))
        assert not tableau.is_visible(Card(Rank.QUEEN, Suit.SPADES))
