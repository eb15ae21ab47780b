"""
This module contains the RoundStats class which is responsible for tracking
the results of the rounds played on a board.
"""

from decimal import Decimal
from typing import List

import numpy as np

from twentyone.blackjack.bet import FACTOR_BLACKJACK, FACTOR_LOSE, FACTOR_PUSH, Bet


class RoundStats:
    """
    Results across rounds: one entry per settled bet, one net figure per round.
    """

    def __init__(self):
        """
        Initializes the RoundStats with default values.
        """
        self.rounds_played = 0
        self.player_wins = 0
        self.dealer_wins = 0
        self.draws = 0
        self.blackjacks = 0
        self.net_results: List[Decimal] = []

    def update(self, bets: List[Bet], staked: Decimal, paid: Decimal) -> None:
        """
        Record a finished round.

        :param bets: The round's bets, already settled
        :param staked: Total wagered over the round, splits and doubles included
        :param paid: Total credited back by settlement
        """
        self.rounds_played += 1
        for bet in bets:
            if bet.factor is None:
                continue
            if bet.factor == FACTOR_LOSE:
                self.dealer_wins += 1
            elif bet.factor == FACTOR_PUSH:
                self.draws += 1
            else:
                self.player_wins += 1
                if bet.factor == FACTOR_BLACKJACK:
                    self.blackjacks += 1
        self.net_results.append(paid - staked)

    def report(self) -> dict:
        """
        Returns a dictionary containing the current statistics.
        """
        net = np.array([float(result) for result in self.net_results], dtype=float)
        return {
            "rounds_played": self.rounds_played,
            "player_wins": self.player_wins,
            "dealer_wins": self.dealer_wins,
            "draws": self.draws,
            "blackjacks": self.blackjacks,
            "net_total": float(net.sum()) if net.size else 0.0,
            "net_mean": float(np.mean(net)) if net.size else 0.0,
            "net_std_dev": float(np.std(net)) if net.size else 0.0,
        }
