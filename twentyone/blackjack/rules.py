"""
Table configuration for a blackjack board.

`TableConfig` gathers every tunable the board accepts: the pacing delay of
the action queue, the shuffle seed, the opening bet and balance, the bet
increment used by raise/lower, the event log capacity and the money format
used when rendering amounts.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Union

from twentyone.common.deck import UNIQUE_SHUFFLE

Amount = Union[Decimal, int, float, str]


def to_amount(value: Amount) -> Decimal:
    """Convert a configured amount to Decimal, going through str for floats."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


@dataclass(frozen=True)
class MoneyFormat:
    """How amounts are shown to the player, e.g. "£1,234.50"."""

    symbol: str = "£"
    precision: int = 2

    def format(self, amount: Amount) -> str:
        amount = to_amount(amount)
        sign = "-" if amount < 0 else ""
        return f"{sign}{self.symbol}{abs(amount):,.{self.precision}f}"


class TableConfig:
    def __init__(
        self,
        action_delay_ms: int = 0,
        seed: int = UNIQUE_SHUFFLE,
        opening_bet: Amount = 5,
        opening_balance: Amount = 95,
        bet_increment: Amount = 5,
        log_limit: int = 20,
        money_format: MoneyFormat = MoneyFormat(),
    ):
        if action_delay_ms < 0:
            raise ValueError("Action delay must be non-negative")
        if log_limit < 1:
            raise ValueError("Log limit must be at least 1")
        self.action_delay_ms = action_delay_ms
        self.seed = seed
        self.opening_bet = to_amount(opening_bet)
        self.opening_balance = to_amount(opening_balance)
        self.bet_increment = to_amount(bet_increment)
        self.log_limit = log_limit
        self.money_format = money_format
        if self.opening_bet < 0 or self.opening_balance < 0:
            raise ValueError("Opening bet and balance must be non-negative")
        if self.bet_increment <= 0:
            raise ValueError("Bet increment must be positive")

    def to_dict(self) -> dict:
        """Convert the configuration to a dictionary for serialization."""
        return {
            "action_delay_ms": self.action_delay_ms,
            "seed": self.seed,
            "opening_bet": str(self.opening_bet),
            "opening_balance": str(self.opening_balance),
            "bet_increment": str(self.bet_increment),
            "log_limit": self.log_limit,
            "money_symbol": self.money_format.symbol,
            "money_precision": self.money_format.precision,
        }

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "TableConfig":
        """Build a configuration from a dict, ignoring unknown keys."""
        config = dict(config)
        money_format = MoneyFormat(
            symbol=config.pop("money_symbol", MoneyFormat.symbol),
            precision=int(config.pop("money_precision", MoneyFormat.precision)),
        )
        known = {
            "action_delay_ms",
            "seed",
            "opening_bet",
            "opening_balance",
            "bet_increment",
            "log_limit",
        }
        kwargs = {key: value for key, value in config.items() if key in known}
        return cls(money_format=money_format, **kwargs)

    def __repr__(self) -> str:
        return f"TableConfig({self.to_dict()!r})"
