"""Hand valuation and round outcome for Twenty-One."""

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterator, Sequence

from core.cards import Card

logger = logging.getLogger(__name__)

BUST_LIMIT = 21


def demote_aces(cards: Sequence[Card]) -> Sequence[Card]:
    """
    Demote Aces from 11 to 1, one at a time, while the cards total over 21.

    Stops as soon as the total is back to 21 or less, or when no Ace worth 11
    is left. Applying it twice changes nothing the second time.

    Returns:
        The same cards, with their values normalised in place
    """
    total = sum(card.value for card in cards)
    for card in cards:
        if total <= BUST_LIMIT:
            break
        if card.is_high_ace:
            card.demote()
            total = sum(c.value for c in cards)
    return cards


@dataclass
class Hand:
    """The ordered cards held by one participant."""

    cards: list[Card] = field(default_factory=list)

    def hit(self, card: Card) -> None:
        """Take a card and re-value Aces."""
        self.cards.append(card)
        self.reevaluate_aces()

    def reevaluate_aces(self) -> None:
        """Demote just enough Aces to keep the hand from busting, if possible."""
        before = self.total
        demote_aces(self.cards)
        if self.total != before:
            logger.debug("Demoted aces: total %d -> %d", before, self.total)

    def reset(self) -> None:
        """Remove all cards from the hand."""
        self.cards.clear()

    @property
    def total(self) -> int:
        """Return the sum of the current card values."""
        return sum(card.value for card in self.cards)

    @property
    def busted(self) -> bool:
        """Check if the hand total is over 21."""
        return self.total > BUST_LIMIT

    def display_cards(self) -> str:
        """Return the cards as a comma-separated string."""
        return ", ".join(str(card) for card in self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        return f"{self.display_cards()} ({self.total})"


class Outcome(Enum):
    """Result of a finished round."""

    PLAYER_WINS = auto()
    DEALER_WINS = auto()
    TIE = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


def evaluate_hands(player_hand: Hand, dealer_hand: Hand) -> Outcome:
    """
    Compare the player's and the dealer's final hands.

    Bust status is checked before totals: two busted hands tie whatever
    their totals, and a single bust always loses.
    """
    if player_hand.busted and dealer_hand.busted:
        return Outcome.TIE
    if dealer_hand.busted:
        return Outcome.PLAYER_WINS
    if player_hand.busted:
        return Outcome.DEALER_WINS

    if player_hand.total == dealer_hand.total:
        return Outcome.TIE
    if player_hand.total > dealer_hand.total:
        return Outcome.PLAYER_WINS
    return Outcome.DEALER_WINS
