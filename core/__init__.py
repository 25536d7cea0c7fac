"""Core Twenty-One engine - 100% UI-agnostic."""

from core.cards import Card, Deck, Rank, Suit
from core.exceptions import EmptyDeckError, InvalidChoiceError, TwentyOneError
from core.hand import Hand, Outcome, demote_aces, evaluate_hands
from core.policies import (
    Choice,
    FixedThresholdPolicy,
    InteractivePolicy,
    Participant,
    TurnPolicy,
    TurnState,
    parse_choice,
    parse_replay,
)

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "EmptyDeckError",
    "InvalidChoiceError",
    "TwentyOneError",
    "Hand",
    "Outcome",
    "demote_aces",
    "evaluate_hands",
    "Choice",
    "FixedThresholdPolicy",
    "InteractivePolicy",
    "Participant",
    "TurnPolicy",
    "TurnState",
    "parse_choice",
    "parse_replay",
]
