"""Card, deck and hand primitives shared by the blackjack rules."""
