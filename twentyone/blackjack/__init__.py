"""
Blackjack rules for the twentyone engine.

This package provides the scoring hand, the player's ledger, the dealer, the
stage machine and the board that ties them together.
"""
