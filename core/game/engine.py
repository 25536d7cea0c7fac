"""Twenty-One round engine with state machine."""

import logging
from dataclasses import dataclass
from random import Random
from typing import Callable

from transitions import Machine

from core.cards import Card, Deck
from core.exceptions import EmptyDeckError
from core.hand import Hand, Outcome, evaluate_hands
from core.policies import (
    DEALER_THRESHOLD,
    Choice,
    FixedThresholdPolicy,
    InteractivePolicy,
    Participant,
    TurnState,
    parse_replay,
)
from core.game.events import EventEmitter, EventType, GameEvent
from core.game.state import RoundState

logger = logging.getLogger(__name__)

INITIAL_CARDS = 2

OUTCOME_EVENTS = {
    Outcome.PLAYER_WINS: EventType.PLAYER_WINS,
    Outcome.DEALER_WINS: EventType.DEALER_WINS,
    Outcome.TIE: EventType.TIE,
}


@dataclass(frozen=True)
class RoundResult:
    """Final, read-only snapshot of a resolved round."""

    outcome: Outcome
    player_total: int
    dealer_total: int
    player_busted: bool
    dealer_busted: bool
    player_cards: tuple[str, ...]
    dealer_cards: tuple[str, ...]

    @classmethod
    def from_hands(cls, player_hand: Hand, dealer_hand: Hand) -> "RoundResult":
        """Evaluate two final hands into a result."""
        return cls(
            outcome=evaluate_hands(player_hand, dealer_hand),
            player_total=player_hand.total,
            dealer_total=dealer_hand.total,
            player_busted=player_hand.busted,
            dealer_busted=dealer_hand.busted,
            player_cards=tuple(str(card) for card in player_hand),
            dealer_cards=tuple(str(card) for card in dealer_hand),
        )


class TwentyOneGame:
    """
    Twenty-One game engine using a state machine.

    One human participant plays against a fixed-threshold dealer. The engine
    never reads input or prints: answers come in through ``respond`` and
    everything that happens goes out as events.
    """

    # State machine states
    STATES = [s.name.lower() for s in RoundState]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "deal", "source": ["waiting_for_deal", "round_complete"], "dest": "player_turn"},
        {"trigger": "player_action", "source": "player_turn", "dest": "player_turn"},
        {"trigger": "player_done", "source": "player_turn", "dest": "dealer_turn"},
        {"trigger": "dealer_done", "source": "dealer_turn", "dest": "resolving"},
        {"trigger": "resolve", "source": "resolving", "dest": "round_complete"},
        {"trigger": "end_game", "source": "*", "dest": "game_over", "after": "_on_game_over"},
    ]

    def __init__(
        self,
        player_name: str = "Player 1",
        rng: Random | None = None,
        deck_factory: Callable[[], Deck] | None = None,
        dealer_threshold: int = DEALER_THRESHOLD,
    ) -> None:
        """
        Initialize a new game.

        Args:
            player_name: Display name of the human participant
            rng: Random number generator for reproducible shuffles
            deck_factory: Builds the deck for each round (defaults to a
                freshly shuffled 52-card deck)
            dealer_threshold: Total at which the dealer stops hitting
        """
        self._rng = rng or Random()
        self._deck_factory = deck_factory or (lambda: Deck.fresh(self._rng))
        self.deck: Deck | None = None

        self._player_policy = InteractivePolicy()
        self._dealer_policy = FixedThresholdPolicy(dealer_threshold)
        self.player = Participant(player_name, self._player_policy)
        self.dealer = Participant("Dealer", self._dealer_policy)

        self.events = EventEmitter()
        self.result: RoundResult | None = None
        self.rounds_played = 0

        # Initialize state machine
        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="waiting_for_deal",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @property
    def state(self) -> RoundState:
        """Get current round state as enum."""
        return RoundState[self._machine_state.upper()]  # type: ignore

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to game events."""
        self.events.subscribe(handler, event_type)

    def start_round(self) -> bool:
        """
        Take a new deck, clear both hands and deal the opening cards.

        The player gets two cards, then the dealer gets two.

        Returns:
            True if the round started
        """
        if self.state not in (RoundState.WAITING_FOR_DEAL, RoundState.ROUND_COMPLETE):
            self.events.emit_new(
                EventType.INVALID_ACTION,
                message="Cannot deal in current state",
                state=self.state.name,
            )
            return False

        self.deck = self._deck_factory()
        self.events.emit_new(EventType.DECK_SHUFFLED, cards_remaining=len(self.deck))
        self.player.hand.reset()
        self.dealer.hand.reset()
        self.result = None

        for _ in range(INITIAL_CARDS):
            self._deal_card_to(self.player)
        for _ in range(INITIAL_CARDS):
            self._deal_card_to(self.dealer)

        self.deal()
        logger.info(
            "Round %d started: %s has %d, dealer has %d",
            self.rounds_played + 1,
            self.player.name,
            self.player.total,
            self.dealer.total,
        )
        self.events.emit_new(
            EventType.ROUND_STARTED,
            round=self.rounds_played + 1,
            player_total=self.player.total,
            dealer_total=self.dealer.total,
        )
        return True

    def _draw(self) -> Card:
        """Deal the next card from the current deck."""
        if self.deck is None:
            raise EmptyDeckError("No deck in play")
        return self.deck.deal()

    def _deal_card_to(self, participant: Participant) -> Card:
        """Deal one card into a participant's hand."""
        card = self._draw()
        participant.hand.hit(card)
        self.events.emit_new(
            EventType.CARD_DEALT,
            card=str(card),
            hand="dealer" if participant is self.dealer else "player",
            hand_value=participant.total,
        )
        return card

    def respond(self, raw: str) -> TurnState:
        """
        Feed one raw hit/stay answer to the player's turn.

        An unrecognised answer changes nothing and returns INVALID_INPUT so
        the caller can ask again. Once the answer ends the player's turn
        (stay or bust) the dealer plays and the round is resolved before
        this returns.

        Args:
            raw: Raw answer line

        Returns:
            The player's turn state after the answer
        """
        if self.state != RoundState.PLAYER_TURN:
            self.events.emit_new(
                EventType.INVALID_ACTION,
                message="Not the player's turn",
                state=self.state.name,
            )
            return TurnState.INVALID_INPUT

        turn = self._player_policy.step(
            self.player.hand,
            raw,
            self._draw,
            on_hit=self._on_player_hit,
        )

        if turn is TurnState.INVALID_INPUT:
            self.events.emit_new(
                EventType.INVALID_CHOICE,
                raw=raw,
                accepted=[c.value for c in Choice],
            )
        elif turn is TurnState.HIT:
            self.player_action()  # Stay in player turn
        elif turn is TurnState.BUSTED:
            self.events.emit_new(EventType.PLAYER_BUSTS, hand_value=self.player.total)
            self._end_player_turn()
        else:
            self.events.emit_new(EventType.PLAYER_STAY, hand_value=self.player.total)
            self._end_player_turn()

        return turn

    def hit(self) -> bool:
        """Player hits (takes another card)."""
        return self.respond(Choice.HIT.value) is not TurnState.INVALID_INPUT

    def stay(self) -> bool:
        """Player stays (keeps current hand)."""
        return self.respond(Choice.STAY.value) is not TurnState.INVALID_INPUT

    def _on_player_hit(self, card: Card, hand: Hand) -> None:
        logger.debug("%s hit: %s, total %d", self.player.name, card, hand.total)
        self.events.emit_new(EventType.PLAYER_HIT, card=str(card), hand_value=hand.total)

    def _on_dealer_hit(self, card: Card, hand: Hand) -> None:
        self.events.emit_new(EventType.DEALER_HITS, card=str(card), hand_value=hand.total)

    def _end_player_turn(self) -> None:
        """Hand over to the dealer, then resolve."""
        self.player_done()
        self._play_dealer()

    def _play_dealer(self) -> None:
        """
        Dealer plays to its fixed point.

        This runs even when the player has busted, so both hands show their
        final state and a double bust resolves as a tie.
        """
        turn = self._dealer_policy.play(
            self.dealer.hand,
            self._draw,
            on_hit=self._on_dealer_hit,
        )

        if turn is TurnState.BUSTED:
            self.events.emit_new(EventType.DEALER_BUSTS, hand_value=self.dealer.total)
        else:
            self.events.emit_new(EventType.DEALER_STANDS, hand_value=self.dealer.total)

        self.dealer_done()
        self._resolve_round()

    def _resolve_round(self) -> None:
        """Compare the hands and finish the round."""
        self.result = RoundResult.from_hands(self.player.hand, self.dealer.hand)
        self.rounds_played += 1

        logger.info(
            "Round %d: %s (%s %d%s, dealer %d%s)",
            self.rounds_played,
            self.result.outcome,
            self.player.name,
            self.result.player_total,
            " bust" if self.result.player_busted else "",
            self.result.dealer_total,
            " bust" if self.result.dealer_busted else "",
        )
        self.events.emit_new(
            OUTCOME_EVENTS[self.result.outcome],
            player_total=self.result.player_total,
            dealer_total=self.result.dealer_total,
        )
        self.events.emit_new(
            EventType.ROUND_ENDED,
            outcome=self.result.outcome.name,
            round=self.rounds_played,
        )

        self.resolve()

    def play_round(self, read_choice: Callable[[], str]) -> RoundResult | None:
        """
        Play one complete round, blocking on ``read_choice`` for each answer.

        Args:
            read_choice: Returns the next raw hit/stay answer

        Returns:
            The round result, or None if the round could not start
        """
        if not self.start_round():
            return None

        turn = TurnState.AWAITING_INPUT
        while not turn.is_terminal:
            turn = self.respond(read_choice())
        return self.result

    def play_again(self, raw: str) -> bool:
        """
        Apply the answer to "play again?".

        A "n" ends the game. Raises InvalidChoiceError for anything other
        than "y" or "n", leaving the state unchanged.
        """
        if parse_replay(raw):
            return True
        self.end_game()
        return False

    def _on_game_over(self) -> None:
        logger.info("Game over after %d round(s)", self.rounds_played)
        self.events.emit_new(EventType.GAME_ENDED, rounds_played=self.rounds_played)

    @property
    def can_hit(self) -> bool:
        """Check if hitting is allowed."""
        return self.state == RoundState.PLAYER_TURN and not self.player.busted

    @property
    def can_stay(self) -> bool:
        """Check if staying is allowed."""
        return self.state == RoundState.PLAYER_TURN
