"""
This module contains classes to represent a hand of cards in a card game.

It includes an abstract base class `AbstractHand`, and a concrete implementation `Hand`.
Hands only ever grow: cards are appended in the order they are dealt and are
never reordered or taken back.

Classes:

AbstractHand: An abstract base class for a hand of cards.
Hand: A concrete implementation of a hand of cards.
"""
from abc import ABC
from typing import Iterable, List, Optional

from twentyone.common.card import Card


class AbstractHand(ABC):
    """
    An abstract base class for a hand of cards.

    Subclasses should override the __repr__ and __str__ methods to provide a string representation of the hand.
    """

    def __init__(self, cards: Optional[Iterable[Card]] = None):
        self._cards: List[Card] = list(cards) if cards is not None else []

    @property
    def cards(self) -> List[Card]:
        """Returns the cards in the hand."""
        return self._cards

    @property
    def visible_cards(self) -> List[Card]:
        """Returns the face-up cards in the hand."""
        return [card for card in self._cards if card.face_up]

    def add_card(self, card: Card) -> None:
        """
        Adds a card to the hand.

        Args:
            card: The card to add.
        """
        self._cards.append(card)

    def __len__(self) -> int:
        return len(self._cards)


class Hand(AbstractHand):
    """
    A concrete implementation of a hand of cards.

    This class provides a string representation of a hand of cards for both debugging and display purposes.
    """

    def __repr__(self) -> str:
        """
        Returns a string representation of the hand for debugging.

        Returns:
            A string in the form "Hand([Card(...), ...])".
        """
        return f"{self.__class__.__name__}({self.cards!r})"

    def __str__(self) -> str:
        """
        Returns a string representation of the hand for display.

        Returns:
            A string in the form "A♤, 7♥".
        """
        return ", ".join(card.notation() for card in self.cards)
