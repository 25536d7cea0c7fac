"""Pytest fixtures for Twenty-One tests."""

import pytest
from random import Random

from core.cards import Card, Deck, Rank, Suit
from core.hand import Hand
from core.game import TwentyOneGame

# One rank per canonical value, for building hands and decks by points
RANK_FOR_VALUE = {
    2: Rank.TWO,
    3: Rank.THREE,
    4: Rank.FOUR,
    5: Rank.FIVE,
    6: Rank.SIX,
    7: Rank.SEVEN,
    8: Rank.EIGHT,
    9: Rank.NINE,
    10: Rank.TEN,
    11: Rank.ACE,
}


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def deck(rng):
    """A shuffled deck."""
    return Deck.fresh(rng)


@pytest.fixture
def make_cards():
    """Build fresh cards from canonical values (11 is an Ace)."""

    def _make(*values: int) -> list[Card]:
        suits = list(Suit)
        return [
            Card(RANK_FOR_VALUE[value], suits[i % len(suits)])
            for i, value in enumerate(values)
        ]

    return _make


@pytest.fixture
def make_hand(make_cards):
    """Build a hand by hitting cards of the given values."""

    def _make(*values: int) -> Hand:
        hand = Hand()
        for card in make_cards(*values):
            hand.hit(card)
        return hand

    return _make


@pytest.fixture
def stacked_game(make_cards):
    """
    Build a game whose every round deals the given values in order.

    The first two values go to the player, the next two to the dealer,
    the rest are drawn by whoever hits.
    """

    def _make(*values: int, player_name: str = "Player 1") -> TwentyOneGame:
        return TwentyOneGame(
            player_name=player_name,
            deck_factory=lambda: Deck.stacked(make_cards(*values)),
        )

    return _make


@pytest.fixture
def empty_hand():
    """An empty hand."""
    return Hand()


@pytest.fixture
def soft_17_hand(make_hand):
    """A-6, Ace still worth 11."""
    return make_hand(11, 6)


@pytest.fixture
def hard_16_hand(make_hand):
    """10-6."""
    return make_hand(10, 6)


@pytest.fixture
def bust_hand(make_hand):
    """10-6-10."""
    return make_hand(10, 6, 10)
