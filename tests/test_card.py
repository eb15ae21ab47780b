import copy

import pytest
from twentyone.common.card import Card, Suit, Rank, FACE_DOWN_NOTATION


def test_card_initialization():
    card = Card(Suit.HEARTS, Rank.EIGHT)
    assert card.suit == Suit.HEARTS
    assert card.rank == Rank.EIGHT
    assert card.face_up


def test_card_repr():
    card = Card(Suit.HEARTS, Rank.EIGHT)
    assert repr(card) == "Card(Suit.HEARTS, Rank.EIGHT)"


@pytest.mark.parametrize(
    "card, notation",
    [
        (Card(Suit.SPADES, Rank.ACE), "A♤"),
        (Card(Suit.HEARTS, Rank.QUEEN), "Q♥"),
        (Card(Suit.CLUBS, Rank.TWO), "2♧"),
        (Card(Suit.DIAMONDS, Rank.EIGHT), "8♦"),
        (Card(Suit.CLUBS, Rank.TEN), "X♧"),
    ],
)
def test_card_notation(card, notation):
    assert card.notation() == notation
    assert str(card) == notation


def test_card_values():
    expected = {
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
    for rank, values in expected.items():
        assert Card(Suit.SPADES, rank).values == values


def test_turn_down_and_up():
    card = Card(Suit.SPADES, Rank.ACE)
    assert card.turn_down() is card
    assert card.notation() == FACE_DOWN_NOTATION
    card.turn_up()
    assert card.notation() == "A♤"


def test_invalid_suit():
    with pytest.raises(TypeError):
        Card("Z", Rank.EIGHT)


def test_invalid_rank():
    with pytest.raises(TypeError):
        Card(Suit.HEARTS, 8)


def test_card_equality_ignores_face():
    card1 = Card(Suit.HEARTS, Rank.EIGHT)
    card2 = Card(Suit.HEARTS, Rank.EIGHT, face_up=False)
    card3 = Card(Suit.CLUBS, Rank.EIGHT)
    card4 = Card(Suit.HEARTS, Rank.NINE)

    assert card1 == card2
    assert card1 != card3
    assert card1 != card4


def test_card_hash():
    card_set = {
        Card(Suit.HEARTS, Rank.EIGHT),
        Card(Suit.HEARTS, Rank.EIGHT),
        Card(Suit.CLUBS, Rank.NINE),
    }
    assert len(card_set) == 2


def test_copy_is_independent():
    card = Card(Suit.HEARTS, Rank.KING)
    duplicate = copy.copy(card)
    duplicate.turn_down()
    assert card.face_up
    assert duplicate == card


def test_ranks_are_distinct():
    # Face cards score the same but are different ranks
    assert len(set(Rank)) == 13
    assert Rank.JACK is not Rank.TEN
