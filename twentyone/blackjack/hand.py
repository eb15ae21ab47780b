"""
BlackjackHand: scoring for a hand of blackjack.

Aces count as either 1 or 11, so a hand does not have one value but a set of
achievable totals. `scores` returns that set, reduced so that players only
see totals that matter:

- if 21 is achievable the result is exactly [21];
- otherwise totals over 21 are dropped, unless every total is over 21, in
  which case only the smallest bust total is kept.

Only face-up cards count, so the dealer's hole card stays hidden from the
score until it is revealed.
"""

from typing import List

from twentyone.common.hand import Hand

BLACKJACK = 21
ACE_BONUS = 10


def sanitise_scores(scores: List[int]) -> List[int]:
    """Drop bust totals unless nothing else is left, then sort."""
    unique = sorted(set(scores))
    if BLACKJACK in unique:
        return [BLACKJACK]
    min_score = unique[0]
    if min_score <= BLACKJACK:
        return [score for score in unique if score <= BLACKJACK]
    # Give the minimum bust score if there are only bust scores
    return [min_score]


class BlackjackHand(Hand):
    """A hand in the game of Blackjack."""

    def scores(self) -> List[int]:
        """
        Achievable totals of the face-up cards, sorted ascending.

        >>> from twentyone.common.card import Card, Rank, Suit
        >>> BlackjackHand([Card(Suit.SPADES, Rank.ACE), Card(Suit.CLUBS, Rank.SIX)]).scores()
        [7, 17]
        """
        scores = [0]
        for card in self.visible_cards:
            # Each extra value of a card branches every running total
            scores = [score + value for score in scores for value in card.values]
        return sanitise_scores(scores)

    def best_score(self) -> int:
        """The highest achievable total, which is what settlement compares."""
        return self.scores()[-1]

    @property
    def hard_total(self) -> int:
        """The total counting every face-up ace as 1."""
        return sum(card.values[0] for card in self.visible_cards)

    @property
    def is_soft(self) -> bool:
        """True when a face-up ace can count as 11 without busting."""
        has_ace = any(len(card.values) > 1 for card in self.visible_cards)
        return has_ace and self.hard_total + ACE_BONUS <= BLACKJACK

    @property
    def is_bust(self) -> bool:
        return self.scores()[0] > BLACKJACK

    @property
    def has_blackjack(self) -> bool:
        """Two cards making 21. Twenty-one from three or more cards is not blackjack."""
        return len(self.cards) == 2 and BLACKJACK in self.scores()

    @property
    def can_split(self) -> bool:
        """Exactly two cards whose possible values overlap (pairs, ten-values, aces)."""
        if len(self.cards) != 2:
            return False
        first, second = self.cards
        return bool(set(first.values) & set(second.values))

    def render_scores(self) -> str:
        return " / ".join(str(score) for score in self.scores())

    def render(self) -> str:
        """Cards and totals, e.g. "A♤, 6♧  (7 / 17)"."""
        return f"{self}  ({self.render_scores()})"
