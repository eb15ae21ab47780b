"""
Fixtures for blackjack tests.
"""

import pytest

from twentyone.blackjack.hand import BlackjackHand
from twentyone.common.card import Card, Rank, Suit

_SUIT_CYCLE = (Suit.SPADES, Suit.HEARTS, Suit.CLUBS, Suit.DIAMONDS)


def make_hand(*ranks: Rank) -> BlackjackHand:
    """A hand of face-up cards, suits cycled so cards stay distinct."""
    return BlackjackHand(
        Card(_SUIT_CYCLE[i % len(_SUIT_CYCLE)], rank) for i, rank in enumerate(ranks)
    )


@pytest.fixture
def hand_of():
    return make_hand
