"""
twentyone: rules engine and turn sequencer for single-player blackjack.

The `Board` is the entry point; everything a user interface needs is reached
through it.
"""

from twentyone.blackjack.board import Board
from twentyone.blackjack.rules import MoneyFormat, TableConfig
from twentyone.blackjack.stages import PlayerAction, Stage

__all__ = ["Board", "MoneyFormat", "PlayerAction", "Stage", "TableConfig"]
