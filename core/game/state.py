"""Round state enumeration."""

from enum import Enum, auto


class RoundState(Enum):
    """
    Round state machine states.

    Flow: WAITING_FOR_DEAL → PLAYER_TURN → DEALER_TURN → RESOLVING → ROUND_COMPLETE
    """

    # Idle, no cards on the table
    WAITING_FOR_DEAL = auto()

    # Human decides hit or stay
    PLAYER_TURN = auto()

    # Automated side plays to its threshold
    DEALER_TURN = auto()

    # Comparing hands
    RESOLVING = auto()

    # Round finished, ready for the next
    ROUND_COMPLETE = auto()

    # Player declined to play again
    GAME_OVER = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


# Valid state transitions
VALID_TRANSITIONS: dict[RoundState, list[RoundState]] = {
    RoundState.WAITING_FOR_DEAL: [RoundState.PLAYER_TURN, RoundState.GAME_OVER],
    RoundState.PLAYER_TURN: [RoundState.PLAYER_TURN, RoundState.DEALER_TURN, RoundState.GAME_OVER],
    RoundState.DEALER_TURN: [RoundState.RESOLVING, RoundState.GAME_OVER],
    RoundState.RESOLVING: [RoundState.ROUND_COMPLETE, RoundState.GAME_OVER],
    RoundState.ROUND_COMPLETE: [RoundState.PLAYER_TURN, RoundState.GAME_OVER],
    RoundState.GAME_OVER: [],  # Terminal state
}


def is_valid_transition(from_state: RoundState, to_state: RoundState) -> bool:
    """
    Check if a state transition is valid.

    Args:
        from_state: Current state
        to_state: Desired state

    Returns:
        True if the transition is allowed
    """
    return to_state in VALID_TRANSITIONS.get(from_state, [])
