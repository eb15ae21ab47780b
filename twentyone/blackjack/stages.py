"""
Game stages and the actions they allow.

A board is always in exactly one `Stage`. The stage decides two things:

- which actions the player may take (`Stage.actions`), each a zero-argument
  callable returning whether it was performed, paired with a description;
- what happens when the board enters it (`Stage.on_enter`).

The progression of a round is:

    BETTING -> OBSERVING -> PLAYER -> OBSERVING -> DEALER -> ASSESSMENT -> CONCLUSION

with PLAYER skipped when the first two cards are a blackjack. OBSERVING
offers no actions; the board sits in it while queued work for a transition
is still running, so the player cannot act on a hand that is about to change.

Entry effects run on the board's action queue worker, like every other
mutation of the board.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict

if TYPE_CHECKING:
    from twentyone.blackjack.board import Board


@dataclass(frozen=True)
class PlayerAction:
    """An action the player can take, with the text shown for it."""

    execute: Callable[[], bool]
    description: str


ActionSet = Dict[str, PlayerAction]


class Stage(Enum):
    BETTING = "Betting"
    PLAYER = "Player"
    DEALER = "Dealer"
    ASSESSMENT = "Assessment"
    CONCLUSION = "Conclusion"
    OBSERVING = "Observing"

    def actions(self, board: "Board") -> ActionSet:
        """The actions open to the player in this stage, keyed by their shortcut."""
        match self:
            case Stage.BETTING:
                return {
                    "d": PlayerAction(board.deal, "Deal"),
                    "r": PlayerAction(board.raise_bet, "Raise"),
                    "l": PlayerAction(board.lower_bet, "Lower"),
                }
            case Stage.PLAYER:
                actions = {
                    "h": PlayerAction(board.hit, "Hit"),
                    "s": PlayerAction(board.stand, "Stand"),
                }
                index = board.player.focused_index()
                if index is not None:
                    bet = board.player.bets[index]
                    if bet.can_double and board.player.can_afford(bet.amount):
                        actions["d"] = PlayerAction(board.double_down, "Double down")
                    if board.player.can_split(index):
                        actions["p"] = PlayerAction(board.split, "Split")
                return actions
            case Stage.CONCLUSION:
                return {"n": PlayerAction(board.new_round, "New round")}
            case _:
                # The dealer's turn and assessment are watched, not played
                return {}

    def on_enter(self, board: "Board") -> None:
        match self:
            case Stage.BETTING:
                board.start_betting()
            case Stage.PLAYER:
                if board.player.focused_index() is None:
                    board.finish_player_turn()
            case Stage.DEALER:
                board.start_dealer_turn()
            case Stage.ASSESSMENT:
                board.start_assessment()
            case Stage.CONCLUSION:
                board.conclude_round()
            case Stage.OBSERVING:
                pass

    def __str__(self) -> str:
        return self.value
