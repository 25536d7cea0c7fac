"""Text rendering and prompting for a console session."""

import logging
import os
from typing import Callable

from core.exceptions import InvalidChoiceError
from core.game import RoundResult, TwentyOneGame
from core.hand import Outcome
from core.policies import TurnState

logger = logging.getLogger(__name__)

OUTCOME_MESSAGES = {
    Outcome.TIE: "It's a tie!",
    Outcome.PLAYER_WINS: "You win!",
    Outcome.DEALER_WINS: "Dealer wins!",
}


def hands_lines(player_cards: str, player_total: int, dealer_cards: str, dealer_total: int) -> list[str]:
    """Render both hands with their totals."""
    return [
        f"Your cards: {player_cards} | Your score: {player_total}",
        f"Dealer's cards: {dealer_cards} | Dealer's score: {dealer_total}",
    ]


def result_lines(result: RoundResult) -> list[str]:
    """Render the end-of-round screen: busts, verdict, then both hands."""
    lines = []
    if result.dealer_busted:
        lines.append(f"The dealer has busted with a total of {result.dealer_total}!")
    if result.player_busted:
        lines.append(f"Oops! Looks like you've busted with a total of {result.player_total}.")
    lines.append(OUTCOME_MESSAGES[result.outcome])
    lines.extend(
        hands_lines(
            ", ".join(result.player_cards),
            result.player_total,
            ", ".join(result.dealer_cards),
            result.dealer_total,
        )
    )
    return lines


class Console:
    """
    Drives a TwentyOneGame from line-based input.

    Reading and writing go through the ``read`` and ``write`` callables so a
    session can run against a terminal or a scripted list of answers.
    """

    def __init__(
        self,
        game: TwentyOneGame,
        read: Callable[[], str] | None = None,
        write: Callable[[str], None] | None = None,
        clear_screen: bool = True,
    ) -> None:
        self.game = game
        self._read = read or input
        self._write = write or print
        self._clear_screen = clear_screen

    def clear(self) -> None:
        if self._clear_screen:
            os.system("cls" if os.name == "nt" else "clear")

    def say(self, *lines: str) -> None:
        for line in lines:
            self._write(line)

    def show_hands(self) -> None:
        player, dealer = self.game.player, self.game.dealer
        self.say(
            *hands_lines(
                player.hand.display_cards(),
                player.total,
                dealer.hand.display_cards(),
                dealer.total,
            )
        )

    def ask_name(self, default: str) -> str:
        """Ask for the player's name, falling back to ``default`` when blank."""
        self.clear()
        self.say("What's your name?")
        name = self._read().strip()
        return name or default

    def player_turn(self) -> TurnState:
        """Prompt until the player stays or busts."""
        turn = TurnState.AWAITING_INPUT
        invalid = False
        while not turn.is_terminal:
            self.clear()
            if invalid:
                self.say("Oops! Invalid response. Type 'hit' or 'stay'!")
            self.say(f"Your move, {self.game.player.name}. Hit or stay?")
            self.show_hands()
            turn = self.game.respond(self._read())
            invalid = turn is TurnState.INVALID_INPUT
        return turn

    def show_result(self) -> None:
        self.clear()
        if self.game.result is not None:
            self.say(*result_lines(self.game.result))

    def ask_play_again(self) -> bool:
        """Ask until the answer is "y" or "n"."""
        self.say("Would you like to play again? (y/n)")
        while True:
            try:
                return self.game.play_again(self._read())
            except InvalidChoiceError as exc:
                logger.debug("Replay prompt: %s", exc)
                self.clear()
                self.say("Sorry, must be y or n:")

    def goodbye(self) -> None:
        self.clear()
        self.say(f"Thank you for playing Twenty One {self.game.player.name}!")

    def run(self, default_name: str) -> int:
        """
        Run a full session: name prompt, rounds until the player quits, farewell.

        Returns:
            Number of rounds played
        """
        self.game.player.name = self.ask_name(default_name)
        while True:
            if not self.game.start_round():
                logger.warning("Could not start a round in state %s", self.game.state)
                break
            self.player_turn()
            self.show_result()
            if not self.ask_play_again():
                break
        self.goodbye()
        return self.game.rounds_played
