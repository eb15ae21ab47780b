"""
This module provides the `Bet` and `Player` classes, the player's side of the
ledger in a game of Blackjack.

A `Bet` pairs a wager with the hand it rides on. The `Player` owns an ordered
list of bets (index 0 is the opening bet, splits are appended after it) and
one balance shared by all of them. Bets are addressed by their index in that
list; the bet play currently applies to is the *focused* bet, the first one
that is not finished yet.

Money moves at these points only:

- raising, doubling and splitting debit the balance;
- lowering credits it;
- settling credits `amount × win factor` and clears the wager.

Requests the rules do not allow (raising beyond the balance, splitting an
unsplittable hand...) are refused by returning False or None, leaving all
state untouched.
"""

import logging
from decimal import Decimal
from typing import List, Optional, Tuple

from twentyone.blackjack.hand import BlackjackHand
from twentyone.blackjack.rules import Amount, MoneyFormat, to_amount
from twentyone.common.card import Card
from twentyone.common.exceptions import SettlementError

logger = logging.getLogger(__name__)

FACTOR_BLACKJACK = Decimal("2.5")
FACTOR_WIN = Decimal(2)
FACTOR_PUSH = Decimal(1)
FACTOR_LOSE = Decimal(0)

RESULT_PHRASES = {
    FACTOR_BLACKJACK: "wins with blackjack",
    FACTOR_WIN: "wins",
    FACTOR_PUSH: "gets back",
    FACTOR_LOSE: "loses",
}


def win_factor(hand: BlackjackHand, dealer_hand: BlackjackHand) -> Decimal:
    """
    Payout multiplier for a hand against the dealer's final hand.

    Checked in order: equal best totals push, a bust hand loses, a two-card
    blackjack pays 2.5, a bust dealer pays 2, a higher total pays 2, and
    anything else loses.
    """
    best = hand.best_score()
    dealer_best = dealer_hand.best_score()
    if best == dealer_best:
        return FACTOR_PUSH
    if hand.is_bust:
        return FACTOR_LOSE
    if hand.has_blackjack:
        return FACTOR_BLACKJACK
    if dealer_hand.is_bust:
        return FACTOR_WIN
    if best > dealer_best:
        return FACTOR_WIN
    return FACTOR_LOSE


class Bet:
    """A wager riding on one hand."""

    __slots__ = ("amount", "hand", "stand", "decisions", "factor")

    def __init__(self, amount: Amount = 0, hand: Optional[BlackjackHand] = None):
        self.amount = to_amount(amount)
        self.hand = hand if hand is not None else BlackjackHand()
        self.stand = False
        # Hits and doubles taken on this bet; doubling is only a first decision
        self.decisions = 0
        # Set once the bet is settled
        self.factor: Optional[Decimal] = None

    @property
    def is_finished(self) -> bool:
        return self.stand or self.hand.has_blackjack or self.hand.is_bust

    @property
    def can_double(self) -> bool:
        return (
            not self.is_finished and self.decisions == 0 and len(self.hand.cards) == 2
        )

    @property
    def is_settled(self) -> bool:
        return self.factor is not None

    def __repr__(self) -> str:
        return (
            f"Bet(amount={self.amount}, hand={self.hand!r}, stand={self.stand}, "
            f"factor={self.factor})"
        )


class Player:
    """The player's bets and balance."""

    def __init__(self, opening_bet: Amount = 5, balance: Amount = 95):
        """
        Creates a player whose opening bet is already taken out of the balance.

        :param opening_bet: Wager on the first hand
        :param balance: Money left after the opening bet
        """
        self.balance = to_amount(balance)
        self.bets: List[Bet] = [Bet(opening_bet)]
        # The wager placed again at the start of each round
        self.opening_wager = self.bets[0].amount

    @property
    def hands(self) -> List[BlackjackHand]:
        return [bet.hand for bet in self.bets]

    @property
    def total_wagered(self) -> Decimal:
        return sum((bet.amount for bet in self.bets), Decimal(0))

    def reset(self) -> Decimal:
        """
        Start a new round with one fresh hand.

        Any wager still on the table goes back to the balance, then the
        opening wager is placed again, clamped to what the balance allows.

        :return: The wager placed, zero when the balance is empty.
        """
        self.balance += self.total_wagered
        wager = min(self.opening_wager, self.balance)
        if wager < 0:
            wager = Decimal(0)
        self.balance -= wager
        self.bets = [Bet(wager)]
        return wager

    def focused_index(self) -> Optional[int]:
        """Index of the first unfinished bet, or None when all are finished."""
        for index, bet in enumerate(self.bets):
            if not bet.is_finished:
                return index
        return None

    @property
    def focused_bet(self) -> Optional[Bet]:
        index = self.focused_index()
        return None if index is None else self.bets[index]

    def has_focus(self, index: int) -> bool:
        return self.focused_index() == index

    def can_afford(self, amount: Amount) -> bool:
        """The player always has to keep something back: the balance must exceed the amount."""
        return self.balance > to_amount(amount)

    def raise_bet(self, amount: Amount) -> bool:
        """Move `amount` from the balance onto the opening bet."""
        amount = to_amount(amount)
        if amount <= 0 or not self.can_afford(amount):
            return False
        self.bets[0].amount += amount
        self.balance -= amount
        self.opening_wager = self.bets[0].amount
        return True

    def lower_bet(self, amount: Amount) -> bool:
        """Move `amount` from the opening bet back to the balance, keeping the bet above zero."""
        amount = to_amount(amount)
        if amount <= 0 or self.bets[0].amount <= amount:
            return False
        self.bets[0].amount -= amount
        self.balance += amount
        self.opening_wager = self.bets[0].amount
        return True

    def hit(self, index: int, card: Card) -> Bet:
        """Add a card to the bet at `index` and count it as a decision."""
        bet = self.bets[index]
        bet.hand.add_card(card)
        bet.decisions += 1
        return bet

    def stand(self, index: int) -> Bet:
        bet = self.bets[index]
        bet.stand = True
        return bet

    def double_down(self, index: int) -> bool:
        """
        Double the wager of the bet at `index`.

        The caller deals the single extra card; the bet stands afterwards.
        """
        bet = self.bets[index]
        if not bet.can_double or not self.can_afford(bet.amount):
            return False
        self.balance -= bet.amount
        bet.amount += bet.amount
        bet.decisions += 1
        return True

    def can_split(self, index: int) -> bool:
        bet = self.bets[index]
        return (
            not bet.is_finished
            and bet.hand.can_split
            and self.can_afford(bet.amount)
        )

    def split(self, index: int) -> Optional[int]:
        """
        Split the bet at `index` into two bets with one card each.

        The new bet is appended with a matching wager taken from the balance.

        :return: Index of the new bet, or None if the split is not allowed.
        """
        if not self.can_split(index):
            return None
        bet = self.bets[index]
        first, second = bet.hand.cards
        bet.hand = BlackjackHand([first])
        new_bet = Bet(bet.amount, BlackjackHand([second]))
        self.balance -= bet.amount
        self.bets.append(new_bet)
        return len(self.bets) - 1

    def settle(self, index: int, dealer_hand: BlackjackHand) -> Tuple[Decimal, Decimal]:
        """
        Pay out the bet at `index` against the dealer's hand.

        :return: The win factor and the amount credited to the balance.
        :raises SettlementError: If the dealer has no cards.
        """
        if not dealer_hand.cards:
            raise SettlementError("Cannot settle a bet without a dealer hand")
        bet = self.bets[index]
        factor = win_factor(bet.hand, dealer_hand)
        paid = bet.amount * factor
        self.balance += paid
        logger.info(
            "Settled bet %d: wager %s, factor %s, paid %s", index, bet.amount, factor, paid
        )
        bet.factor = factor
        bet.amount = Decimal(0)
        return factor, paid

    def render(self) -> str:
        return " | ".join(hand.render() for hand in self.hands)

    def render_bets(self, money_format: MoneyFormat) -> str:
        """Bets then balance, e.g. "£5.00 , £5.00 / £85.00"."""
        bets = " , ".join(money_format.format(bet.amount) for bet in self.bets)
        return f"{bets} / {money_format.format(self.balance)}"
