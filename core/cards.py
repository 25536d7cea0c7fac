"""Card and Deck classes for Twenty-One."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from random import Random
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

from core.exceptions import EmptyDeckError

logger = logging.getLogger(__name__)


class Suit(Enum):
    """Card suits."""

    HEARTS = "Hearts"
    SPADES = "Spades"
    CLUBS = "Clubs"
    DIAMONDS = "Diamonds"

    def __str__(self) -> str:
        return self.value


class Rank(Enum):
    """Card ranks, valued by their display label."""

    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "Jack"
    QUEEN = "Queen"
    KING = "King"
    ACE = "Ace"

    def __str__(self) -> str:
        return self.value

    @property
    def canonical_value(self) -> int:
        """Return the starting point value (Ace = 11, face cards = 10)."""
        return RANK_VALUES[self]

    @property
    def is_ace(self) -> bool:
        """Check if this rank is an Ace."""
        return self is Rank.ACE


RANK_VALUES: Mapping[Rank, int] = MappingProxyType(
    {
        Rank.TWO: 2,
        Rank.THREE: 3,
        Rank.FOUR: 4,
        Rank.FIVE: 5,
        Rank.SIX: 6,
        Rank.SEVEN: 7,
        Rank.EIGHT: 8,
        Rank.NINE: 9,
        Rank.TEN: 10,
        Rank.JACK: 10,
        Rank.QUEEN: 10,
        Rank.KING: 10,
        Rank.ACE: 11,
    }
)

ACE_HIGH = 11
ACE_LOW = 1


@dataclass(slots=True)
class Card:
    """
    Playing card with a fixed identity and a point value.

    Rank and suit are set once. Only an Ace's value ever changes, and only
    downwards from 11 to 1 (see ``demote``).
    """

    rank: Rank
    suit: Suit
    value: int = field(init=False, compare=False)

    def __post_init__(self) -> None:
        self.value = self.rank.canonical_value

    def __setattr__(self, name: str, value: object) -> None:
        if name in ("rank", "suit") and hasattr(self, name):
            raise AttributeError(f"Card {name} cannot be reassigned")
        object.__setattr__(self, name, value)

    def __hash__(self) -> int:
        return hash((self.rank, self.suit))

    def __str__(self) -> str:
        return f"{self.rank} of {self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name}, value={self.value})"

    @property
    def is_ace(self) -> bool:
        """Check if this card is an Ace."""
        return self.rank.is_ace

    @property
    def is_high_ace(self) -> bool:
        """Check if this card is an Ace still counted as 11."""
        return self.is_ace and self.value == ACE_HIGH

    def demote(self) -> None:
        """Count this Ace as 1 instead of 11."""
        if not self.is_high_ace:
            raise ValueError(f"Only an Ace worth {ACE_HIGH} can be demoted, got {self!r}")
        self.value = ACE_LOW


class Deck:
    """A standard 52-card deck, dealt from the end of its card list."""

    def __init__(self, rng: Random | None = None) -> None:
        """Initialize a new, unshuffled deck."""
        self._rng = rng or Random()
        self._cards: list[Card] = []
        self.build()

    @classmethod
    def fresh(cls, rng: Random | None = None) -> "Deck":
        """Return a built and shuffled deck, ready for a round."""
        deck = cls(rng=rng)
        deck.shuffle()
        return deck

    @classmethod
    def stacked(cls, cards: Iterable[Card]) -> "Deck":
        """
        Return a deck that deals exactly ``cards``, first card first.

        Used to replay a known sequence of cards.
        """
        deck = cls()
        deck._cards = list(reversed(list(cards)))
        return deck

    def build(self) -> None:
        """Reset the deck to one card of every (suit, rank) pair."""
        self._cards = [Card(rank, suit) for suit in Suit for rank in Rank]

    def shuffle(self) -> None:
        """Shuffle the remaining cards."""
        self._rng.shuffle(self._cards)
        logger.debug("Shuffled deck of %d cards", len(self._cards))

    def deal(self) -> Card:
        """Remove and return the top card."""
        if not self._cards:
            logger.error("Attempted to deal from an empty deck")
            raise EmptyDeckError()
        return self._cards.pop()

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards remaining."""
        return len(self._cards)
