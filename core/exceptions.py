"""Exceptions raised by the Twenty-One engine."""

from typing import Sequence


class TwentyOneError(Exception):
    """Base class for all engine errors."""


class EmptyDeckError(TwentyOneError, IndexError):
    """Raised when a card is dealt from an exhausted deck."""

    def __init__(self, message: str = "Cannot deal from an empty deck") -> None:
        super().__init__(message)


class InvalidChoiceError(TwentyOneError, ValueError):
    """Raised when a raw answer matches none of the accepted literals."""

    def __init__(self, raw: str, accepted: Sequence[str]) -> None:
        self.raw = raw
        self.accepted = tuple(accepted)
        options = " or ".join(repr(option) for option in self.accepted)
        super().__init__(f"Invalid choice {raw!r}, expected {options}")
