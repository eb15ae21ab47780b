"""
This module defines the `Suit`, `Rank`, and `Card` classes, which are used to represent playing cards.

- `Suit`: An enum representing the four suits of a standard deck of playing
cards: Clubs, Diamonds, Hearts and Spades.

- `Rank`: An enum representing the thirteen ranks of a standard deck of playing
cards, Ace through King. Each rank knows the point values it can score.

- `Card`: A class representing a playing card. A card has a suit, a rank and
a face-up flag. Identity (equality and hashing) only considers suit and rank,
so turning a card over never changes which card it is.

This module is part of the `twentyone` package.
"""

from enum import Enum, unique
from typing import Tuple


@unique
class Suit(Enum):
    """
    Enum for suits in a card deck.
    """

    CLUBS = "♧"
    DIAMONDS = "♦"
    HEARTS = "♥"
    SPADES = "♤"

    def __str__(self) -> str:
        return self.value


@unique
class Rank(Enum):
    """
    Enum for ranks in a card deck.

    The value of each member is its notation character; ten is written "X" so
    that every card renders in two characters.
    """

    ACE = "A"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "X"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"

    @property
    def rank_values(self) -> Tuple[int, ...]:
        """The point values this rank can count for."""
        return _RANK_VALUES[self]

    @property
    def rank_str(self) -> str:
        """A string representation of the rank."""
        return self.value

    def __str__(self) -> str:
        return self.rank_str


_RANK_VALUES = {
    Rank.ACE: (1, 11),
    Rank.TWO: (2,),
    Rank.THREE: (3,),
    Rank.FOUR: (4,),
    Rank.FIVE: (5,),
    Rank.SIX: (6,),
    Rank.SEVEN: (7,),
    Rank.EIGHT: (8,),
    Rank.NINE: (9,),
    Rank.TEN: (10,),
    Rank.JACK: (10,),
    Rank.QUEEN: (10,),
    Rank.KING: (10,),
}

# Canonical orders used to build a fresh deck
SUITS = (Suit.CLUBS, Suit.DIAMONDS, Suit.HEARTS, Suit.SPADES)
RANKS = tuple(Rank)

FACE_DOWN_NOTATION = "🂠 ?"


class Card:
    """
    Class representing a playing card. This class is a member of a card deck.

    >>> card = Card(Suit.HEARTS, Rank.QUEEN)
    >>> print(card)
    Q♥
    >>> print(card.turn_down())
    🂠 ?
    """

    __slots__ = ("suit", "rank", "face_up")

    def __init__(self, suit: Suit, rank: Rank, face_up: bool = True):
        """
        Initialize a Card instance.

        :param suit: Suit of the card (one of the Suit enums)
        :param rank: Rank of the card (one of the Rank enums)
        :param face_up: Whether the card is showing
        """
        if not isinstance(suit, Suit):
            raise TypeError(f"Invalid suit: {suit}")
        if not isinstance(rank, Rank):
            raise TypeError(f"Invalid rank: {rank}")
        self.suit = suit
        self.rank = rank
        self.face_up = face_up

    @property
    def values(self) -> Tuple[int, ...]:
        """The point values this card can count for."""
        return self.rank.rank_values

    def turn_up(self) -> "Card":
        """Show the card and return it, so dealing can chain off a pop."""
        self.face_up = True
        return self

    def turn_down(self) -> "Card":
        """Hide the card and return it."""
        self.face_up = False
        return self

    def notation(self) -> str:
        """
        Short notation for the card, or the card back when face down.

        :return: A string such as "A♤" or "🂠 ?".
        """
        if self.face_up:
            return f"{self.rank.rank_str}{self.suit}"
        return FACE_DOWN_NOTATION

    def __eq__(self, other):
        """
        Checks if this card is equal to another card.

        :param other: The other card to compare to.
        :return: True if the cards have the same rank and suit, False otherwise.
        """
        if isinstance(other, Card):
            return self.rank == other.rank and self.suit == other.suit
        return NotImplemented

    def __hash__(self):
        return hash((self.suit, self.rank))

    def __copy__(self) -> "Card":
        return Card(self.suit, self.rank, self.face_up)

    def __repr__(self) -> str:
        """
        Provide a machine-readable representation of the card.

        :return: A string representation of the card.
        """
        return f"Card(Suit.{self.suit.name}, Rank.{self.rank.name})"

    def __str__(self) -> str:
        """
        Provide a human-readable representation of the card.

        :return: A string representation of the card.
        """
        return self.notation()
