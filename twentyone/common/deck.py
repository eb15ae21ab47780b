"""
This module contains the Deck class, which represents a deck of cards.

>>> deck = Deck()
>>> deck.size
52
>>> deck.pop()
Card(Suit.SPADES, Rank.KING)
>>> deck.size
51
"""

import copy
import random
import time
from typing import List, Optional

from twentyone.common.card import RANKS, SUITS, Card
from twentyone.common.exceptions import EmptyDeckError

# Seed value asking for a time-derived, non-reproducible shuffle
UNIQUE_SHUFFLE = 0


class Deck:
    """
    A class representing a deck of cards.

    The end of the card list is the top of the deck: `pop` takes from there
    and `force_next` puts cards there.
    """

    # Precompute the canonical deck: suit-major, rank-minor
    _default_deck = [Card(suit, rank) for suit in SUITS for rank in RANKS]

    def __init__(self, cards: Optional[List[Card]] = None):
        """
        Initialize a Deck instance.

        :param cards: A list of Card instances to populate the deck (optional).
                      If not provided, the canonical 52-card deck is used.
        """
        self.cards: List[Card] = []
        if cards is None:
            self.init()
        else:
            self.cards = [copy.copy(card) for card in cards]

    def init(self) -> None:
        """
        Reset the deck to the canonical 52-card order.

        >>> deck = Deck()
        >>> deck.cards[0], deck.cards[13]
        (Card(Suit.CLUBS, Rank.ACE), Card(Suit.DIAMONDS, Rank.ACE))
        """
        self.cards = [copy.copy(card) for card in self._default_deck]

    def shuffle(self, seed: int = UNIQUE_SHUFFLE) -> "Deck":
        """
        Fisher-Yates shuffle of the cards currently in the deck.

        :param seed: Any non-zero seed gives the same order every time for the
                     same starting deck; UNIQUE_SHUFFLE seeds from the clock.
        """
        if seed == UNIQUE_SHUFFLE:
            seed = time.time_ns()
        rng = random.Random(seed)
        count = len(self.cards)
        for i in range(count):
            r = i + rng.randrange(count - i)
            self.cards[r], self.cards[i] = self.cards[i], self.cards[r]
        return self

    def pop(self) -> Card:
        """
        Take the top card off the deck.

        :return: A copy of the top card; the deck shrinks by one.
        :raises EmptyDeckError: If there are no cards left.
        """
        if not self.cards:
            raise EmptyDeckError("Cannot draw from an empty deck")
        return copy.copy(self.cards.pop())

    def force_next(self, card: Card) -> None:
        """
        Make `card` the next one popped.

        An equal card already in the deck is moved to the top, so the deck
        keeps its size; otherwise a copy of `card` is added on top.
        Only meant for setting up known scenarios.
        """
        try:
            index = self.cards.index(card)
        except ValueError:
            self.cards.append(copy.copy(card))
            return
        self.cards.append(self.cards.pop(index))

    @property
    def size(self) -> int:
        """
        Return the number of remaining cards in the deck.

        :return: The size of the deck.
        """
        return len(self.cards)

    def is_empty(self) -> bool:
        """
        Check if the deck is empty.

        :return: True if the deck is empty, False otherwise.
        """
        return len(self.cards) == 0

    def render(self) -> str:
        """Display text for the remaining deck, e.g. "🂠  ×52"."""
        return f"🂠  ×{len(self.cards)}"

    def __len__(self) -> int:
        return len(self.cards)

    def __repr__(self) -> str:
        """
        Provide a machine-readable representation of the deck.

        :return: A string representation of the deck.
        """
        return f"Deck({[repr(card) for card in self.cards]})"

    def __str__(self) -> str:
        """
        Provide a human-readable representation of the deck.

        :return: A string representation of the deck.
        """
        return f"Deck of {len(self.cards)} cards"
