"""The dealer: one hand and a fixed hit/stand policy."""

from twentyone.blackjack.hand import BlackjackHand

DEALER_STANDS_ON = 17


def must_hit(hand: BlackjackHand) -> bool:
    """
    The dealer draws below 17 and on a soft 17; stands on hard 17 or better,
    soft 18 or better, and bust.
    """
    if hand.is_bust:
        return False
    best = hand.best_score()
    if best < DEALER_STANDS_ON:
        return True
    return best == DEALER_STANDS_ON and hand.is_soft


class Dealer:
    def __init__(self):
        self.hand = BlackjackHand()

    def reset(self) -> None:
        self.hand = BlackjackHand()

    def must_hit(self) -> bool:
        return must_hit(self.hand)

    def reveal(self) -> list:
        """Turn every hidden card face up and return the cards that were turned."""
        turned = [card for card in self.hand.cards if not card.face_up]
        for card in turned:
            card.turn_up()
        return turned

    def render(self) -> str:
        return self.hand.render()

    def __repr__(self) -> str:
        return f"Dealer({self.hand!r})"
