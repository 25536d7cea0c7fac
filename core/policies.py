"""Turn policies: how each participant decides to hit or stay."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable

from core.cards import Card
from core.exceptions import InvalidChoiceError
from core.hand import Hand

logger = logging.getLogger(__name__)

DEALER_THRESHOLD = 17

# Callable that deals the next card from the current deck
Draw = Callable[[], Card]
CardHandler = Callable[[Card, Hand], None]


class Choice(Enum):
    """Decisions available to the human participant."""

    HIT = "hit"
    STAY = "stay"

    def __str__(self) -> str:
        return self.value


REPLAY_ANSWERS = {"y": True, "n": False}


def parse_choice(raw: str) -> Choice:
    """
    Parse a hit/stay answer.

    Args:
        raw: Raw input line. Surrounding whitespace (not just the trailing
            newline) and case are ignored; inner text must be exactly
            "hit" or "stay".

    Returns:
        The matching Choice

    Raises:
        InvalidChoiceError: If the answer is neither "hit" nor "stay"
    """
    try:
        return Choice(raw.strip().lower())
    except ValueError:
        raise InvalidChoiceError(raw, [c.value for c in Choice]) from None


def parse_replay(raw: str) -> bool:
    """
    Parse a play-again answer; "y" is True, "n" is False.

    Like ``parse_choice``, surrounding whitespace and case are ignored;
    anything else around the letter makes the answer invalid.
    """
    answer = raw.strip().lower()
    if answer not in REPLAY_ANSWERS:
        raise InvalidChoiceError(raw, list(REPLAY_ANSWERS))
    return REPLAY_ANSWERS[answer]


class TurnState(Enum):
    """
    States of a participant's turn.

    Flow: AWAITING_INPUT → (HIT | INVALID_INPUT)* → STAY | BUSTED
    """

    AWAITING_INPUT = auto()
    HIT = auto()
    STAY = auto()
    BUSTED = auto()
    INVALID_INPUT = auto()

    @property
    def is_terminal(self) -> bool:
        """Check if the turn is over."""
        return self in (TurnState.STAY, TurnState.BUSTED)

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


class TurnPolicy(ABC):
    """Abstract base class for hit/stay decision policies."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of the policy."""
        ...

    @property
    @abstractmethod
    def is_interactive(self) -> bool:
        """Return whether the policy waits for outside input."""
        ...


class InteractivePolicy(TurnPolicy):
    """
    Policy for the human side.

    Each call to ``step`` is one await-input → validate → act-or-reprompt
    cycle. Where the answer comes from (console, test, network) is up to the
    caller.
    """

    @property
    def name(self) -> str:
        return "Interactive"

    @property
    def is_interactive(self) -> bool:
        return True

    def step(
        self,
        hand: Hand,
        raw: str,
        draw: Draw,
        on_hit: CardHandler | None = None,
    ) -> TurnState:
        """
        Apply one raw answer to the hand.

        Args:
            hand: The human participant's hand
            raw: Raw answer line
            draw: Deals the next card
            on_hit: Called with each drawn card and the hand

        Returns:
            HIT if a card was taken and the hand is still live, BUSTED if the
            card busted it, STAY on "stay", INVALID_INPUT otherwise. Nothing is
            drawn for an invalid answer.
        """
        try:
            choice = parse_choice(raw)
        except InvalidChoiceError as exc:
            logger.debug("Rejected answer: %s", exc)
            return TurnState.INVALID_INPUT

        if choice is Choice.STAY:
            return TurnState.STAY

        card = draw()
        hand.hit(card)
        if on_hit is not None:
            on_hit(card, hand)
        return TurnState.BUSTED if hand.busted else TurnState.HIT


class FixedThresholdPolicy(TurnPolicy):
    """Policy for the automated side: hit while the total is below a threshold."""

    def __init__(self, threshold: int = DEALER_THRESHOLD) -> None:
        self._threshold = threshold

    @property
    def name(self) -> str:
        return f"Hit below {self._threshold}"

    @property
    def is_interactive(self) -> bool:
        return False

    @property
    def threshold(self) -> int:
        """Return the total at which the policy stops hitting."""
        return self._threshold

    def should_hit(self, hand: Hand) -> bool:
        """Check if the policy takes another card."""
        return not hand.busted and hand.total < self._threshold

    def play(
        self,
        hand: Hand,
        draw: Draw,
        on_hit: CardHandler | None = None,
    ) -> TurnState:
        """
        Hit until the fixed point is reached.

        Returns:
            BUSTED if the hand went over 21, STAY otherwise
        """
        while self.should_hit(hand):
            card = draw()
            hand.hit(card)
            logger.debug("%s drew %s, total %d", self.name, card, hand.total)
            if on_hit is not None:
                on_hit(card, hand)
        return TurnState.BUSTED if hand.busted else TurnState.STAY


@dataclass
class Participant:
    """One side of the table: a hand played by a policy."""

    name: str
    policy: TurnPolicy
    hand: Hand = field(default_factory=Hand)

    @property
    def total(self) -> int:
        """Return the hand total."""
        return self.hand.total

    @property
    def busted(self) -> bool:
        """Check if the hand is busted."""
        return self.hand.busted
