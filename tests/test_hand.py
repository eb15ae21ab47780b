from twentyone.common.card import Card, Suit, Rank
from twentyone.common.hand import Hand


def test_add_card():
    hand = Hand()
    assert hand.cards == []
    hand.add_card(Card(Suit.SPADES, Rank.ACE))
    hand.add_card(Card(Suit.DIAMONDS, Rank.JACK))
    assert len(hand) == 2
    assert hand.cards[0] == Card(Suit.SPADES, Rank.ACE)


def test_initial_cards_are_copied_into_a_list():
    cards = (Card(Suit.SPADES, Rank.ACE),)
    hand = Hand(cards)
    hand.add_card(Card(Suit.CLUBS, Rank.TWO))
    assert len(cards) == 1
    assert len(hand) == 2


def test_visible_cards():
    hand = Hand([Card(Suit.SPADES, Rank.ACE), Card(Suit.CLUBS, Rank.TWO, face_up=False)])
    assert hand.visible_cards == [Card(Suit.SPADES, Rank.ACE)]


def test_str_and_repr():
    hand = Hand([Card(Suit.SPADES, Rank.ACE), Card(Suit.CLUBS, Rank.TWO, face_up=False)])
    assert str(hand) == "A♤, 🂠 ?"
    assert repr(hand) == "Hand([Card(Suit.SPADES, Rank.ACE), Card(Suit.CLUBS, Rank.TWO)])"
