"""
End-to-end tests for the Board.

Rounds are set up with `force_next`: the last card forced is the first one
dealt, so scenarios list their cards in reverse dealing order. Dealing goes
dealer (up), player, dealer (down), player, then any hits.
"""

from decimal import Decimal

import pytest

from twentyone.blackjack.board import Board
from twentyone.blackjack.rules import TableConfig
from twentyone.blackjack.stages import Stage
from twentyone.common.card import Card, Rank, Suit
from twentyone.common.exceptions import ActionQueueFault
from twentyone.common.io_interface import TestIOInterface
from twentyone.events import EngineEventType, EventEmitter


@pytest.fixture
def events():
    return EventEmitter()


@pytest.fixture
def board(events):
    board = Board(
        TableConfig(seed=42), io_interface=TestIOInterface(), event_bus=events
    )
    assert board.wait(timeout=5)
    yield board
    board.close(timeout=5)


@pytest.fixture
def stages(events):
    """Stage names in the order the board entered them."""
    entered = []
    events.on(EngineEventType.STAGE_CHANGED, lambda data: entered.append(data["to"]))
    return entered


def stack(board, *cards):
    """Force `cards` so they are dealt in the order given."""
    for card in reversed(cards):
        assert board.force_next(card)


def deal(board, dealer_up, player_first, dealer_down, player_second, *hits):
    stack(board, dealer_up, player_first, dealer_down, player_second, *hits)
    assert board.deal()
    assert board.wait(timeout=5)


def test_new_board_is_betting(board):
    assert board.stage is Stage.BETTING
    assert board.round_number == 1
    assert board.deck.size == 52
    assert board.player.balance == Decimal(95)
    assert board.render_bets() == "£5.00 / £95.00"
    assert board.render_actions() == "d: Deal | l: Lower | r: Raise"
    assert board.log.events == ["Round 1: bet £5.00"]


def test_player_blackjack_skips_player_stage(board, stages):
    deal(
        board,
        Card(Suit.SPADES, Rank.TEN),
        Card(Suit.HEARTS, Rank.ACE),
        Card(Suit.CLUBS, Rank.SEVEN),
        Card(Suit.DIAMONDS, Rank.JACK),
    )

    assert stages == ["OBSERVING", "DEALER", "ASSESSMENT", "CONCLUSION"]
    assert all(card.face_up for card in board.dealer.hand.cards)
    assert board.dealer.hand.scores() == [17]
    assert board.player.balance == Decimal("107.5")
    assert board.log.events[-4:] == [
        "Dealer reveals 7♧",
        "Dealer stands on 17",
        "Player wins with blackjack £12.50",
        "Balance is £107.50",
    ]
    assert "Player has blackjack" in board.log.events
    assert board.render_actions() == "n: New round"


def test_dealer_hole_card_is_hidden_during_player_stage(board):
    deal(
        board,
        Card(Suit.SPADES, Rank.TEN),
        Card(Suit.HEARTS, Rank.NINE),
        Card(Suit.CLUBS, Rank.SEVEN),
        Card(Suit.DIAMONDS, Rank.EIGHT),
    )

    assert board.stage is Stage.PLAYER
    assert board.dealer.render() == "X♤, 🂠 ?  (10)"
    assert board.player.render() == "9♥, 8♦  (17)"
    assert board.log.events[1:] == [
        "Dealer dealt X♤",
        "Player dealt 9♥",
        "Dealer dealt 🂠 ?",
        "Player dealt 8♦",
    ]
    assert board.deck.size == 48


def test_player_bust(board, stages):
    deal(
        board,
        Card(Suit.SPADES, Rank.TEN),
        Card(Suit.DIAMONDS, Rank.QUEEN),
        Card(Suit.HEARTS, Rank.SEVEN),
        Card(Suit.CLUBS, Rank.JACK),
        Card(Suit.SPADES, Rank.THREE),
    )
    assert board.render_actions() == "d: Double down | h: Hit | p: Split | s: Stand"

    assert board.hit()
    assert board.wait(timeout=5)

    assert board.player.hands[0].scores() == [23]
    assert stages == [
        "OBSERVING",
        "PLAYER",
        "OBSERVING",
        "DEALER",
        "ASSESSMENT",
        "CONCLUSION",
    ]
    assert "Player busts with 23" in board.log.events
    assert "Player loses £5.00" in board.log.events
    assert board.player.balance == Decimal(95)
    assert board.stats.report()["dealer_wins"] == 1


def test_stand_then_dealer_hits_soft_seventeen(board):
    deal(
        board,
        Card(Suit.CLUBS, Rank.ACE),
        Card(Suit.SPADES, Rank.TEN),
        Card(Suit.CLUBS, Rank.SIX),
        Card(Suit.HEARTS, Rank.NINE),
        Card(Suit.DIAMONDS, Rank.TWO),
    )

    assert board.stand()
    assert board.wait(timeout=5)

    assert board.dealer.hand.scores() == [9, 19]
    assert board.log.events[-5:] == [
        "Dealer reveals 6♧",
        "Dealer dealt 2♦",
        "Dealer stands on 19",
        "Player gets back £5.00",
        "Balance is £100.00",
    ]
    assert board.stage is Stage.CONCLUSION


def test_double_down(board, events):
    doubled = []
    events.on(EngineEventType.HAND_DOUBLED, doubled.append)
    deal(
        board,
        Card(Suit.CLUBS, Rank.TEN),
        Card(Suit.SPADES, Rank.FIVE),
        Card(Suit.CLUBS, Rank.SEVEN),
        Card(Suit.HEARTS, Rank.SIX),
        Card(Suit.DIAMONDS, Rank.KING),
    )

    assert board.perform("d")
    assert board.wait(timeout=5)

    assert doubled == [{"bet": 0, "amount": "10", "card": "K♦"}]
    assert "Player doubles down to £10.00 and is dealt K♦" in board.log.events
    assert "Player wins £20.00" in board.log.events
    assert board.player.balance == Decimal(110)
    assert board.stats.report()["net_total"] == pytest.approx(10.0)


def test_split(board):
    deal(
        board,
        Card(Suit.CLUBS, Rank.TEN),
        Card(Suit.SPADES, Rank.EIGHT),
        Card(Suit.CLUBS, Rank.SEVEN),
        Card(Suit.HEARTS, Rank.EIGHT),
        Card(Suit.DIAMONDS, Rank.THREE),
        Card(Suit.DIAMONDS, Rank.TWO),
    )
    assert board.render_actions() == "d: Double down | h: Hit | p: Split | s: Stand"

    assert board.split()
    assert board.wait(timeout=5)

    assert board.stage is Stage.PLAYER
    assert [hand.scores() for hand in board.player.hands] == [[11], [10]]
    assert board.render_bets() == "£5.00 , £5.00 / £90.00"
    assert "Player splits for another £5.00" in board.log.events

    # Each hand is played in turn
    assert board.stand()
    assert board.player.focused_index() == 1
    assert board.stage is Stage.PLAYER
    assert board.stand()
    assert board.wait(timeout=5)

    assert board.stage is Stage.CONCLUSION
    assert board.log.events[-3:] == [
        "Player loses £5.00",
        "Player loses £5.00",
        "Balance is £90.00",
    ]
    assert board.stats.report()["net_total"] == pytest.approx(-10.0)


def test_actions_outside_their_stage_are_refused(board):
    assert not board.hit()
    assert not board.stand()
    assert not board.new_round()
    assert not board.perform("h")
    assert not board.perform("?")
    assert board.log.events == ["Round 1: bet £5.00"]


def test_raise_and_lower():
    board = Board(TableConfig(seed=42, opening_bet=5, opening_balance=15))
    board.wait(timeout=5)

    assert board.raise_bet()
    assert board.render_bets() == "£10.00 / £10.00"
    assert board.raise_bet()
    assert not board.raise_bet()
    assert board.render_bets() == "£15.00 / £5.00"
    assert board.lower_bet()
    assert board.lower_bet()
    assert not board.lower_bet()
    assert board.render_bets() == "£5.00 / £15.00"
    board.close(timeout=5)


def test_new_round_keeps_the_last_wager(board, events):
    started = []
    events.on(EngineEventType.ROUND_STARTED, started.append)
    board.raise_bet()
    deal(
        board,
        Card(Suit.SPADES, Rank.TEN),
        Card(Suit.HEARTS, Rank.ACE),
        Card(Suit.CLUBS, Rank.SEVEN),
        Card(Suit.DIAMONDS, Rank.JACK),
    )
    assert board.player.balance == Decimal(110)

    assert board.new_round()
    assert board.wait(timeout=5)

    assert started == [{"round": 2, "wager": "10"}]
    assert board.stage is Stage.BETTING
    assert board.deck.size == 52
    assert board.dealer.hand.cards == []
    assert board.render_bets() == "£10.00 / £100.00"
    assert board.stats.report()["rounds_played"] == 1


def test_same_seed_deals_the_same_cards():
    dealt = []
    for _ in range(2):
        board = Board(TableConfig(seed=7), event_bus=EventEmitter())
        board.wait(timeout=5)
        board.deal()
        board.wait(timeout=5)
        dealt.append(board.log.events)
        board.close(timeout=5)
    assert dealt[0] == dealt[1]


def test_log_lines_reach_the_io_interface(board):
    assert board.io_interface.sent_messages == ["Round 1: bet £5.00"]


def test_snapshot(board):
    snapshot = board.snapshot()
    assert snapshot["stage"] == "Betting"
    assert snapshot["round"] == 1
    assert snapshot["deck"] == "🂠  ×52"
    assert snapshot["bets"] == ["5"]
    assert snapshot["bank"] == "£5.00 / £95.00"


def test_submitting_from_an_action_is_refused(board):
    future = board.enqueue(lambda b: b.deal())
    with pytest.raises(RuntimeError):
        future.result(timeout=5)


def test_empty_deck_faults_the_board(board):
    board.deck.cards.clear()
    assert board.deal()
    with pytest.raises(ActionQueueFault):
        board.wait(timeout=5)
    with pytest.raises(ActionQueueFault):
        board.hit()


@pytest.mark.asyncio
async def test_wait_async(board):
    board.enqueue(lambda b: True)
    assert await board.wait_async(timeout=5)
    assert board.pending_actions == 0


def test_split_aces_dealt_blackjacks_end_the_player_turn(board, stages):
    deal(
        board,
        Card(Suit.CLUBS, Rank.TEN),
        Card(Suit.HEARTS, Rank.ACE),
        Card(Suit.CLUBS, Rank.SEVEN),
        Card(Suit.DIAMONDS, Rank.ACE),
        Card(Suit.DIAMONDS, Rank.KING),
        Card(Suit.CLUBS, Rank.QUEEN),
    )
    assert board.stage is Stage.PLAYER

    assert board.split()
    assert board.wait(timeout=5)

    assert board.player.render() == "A♥, K♦  (21) | A♦, Q♧  (21)"
    assert stages[-4:] == ["OBSERVING", "DEALER", "ASSESSMENT", "CONCLUSION"]
    assert board.log.events.count("Player wins with blackjack £12.50") == 2
    assert board.player.balance == Decimal(115)


@pytest.mark.parametrize("opening_bet", [5, 20])
def test_settlement_factor_does_not_depend_on_the_wager(opening_bet):
    events = EventEmitter()
    results = []
    events.on(EngineEventType.HAND_RESULT, results.append)
    board = Board(
        TableConfig(seed=42, opening_bet=opening_bet, opening_balance=80),
        event_bus=events,
    )
    board.wait(timeout=5)
    deal(
        board,
        Card(Suit.SPADES, Rank.TEN),
        Card(Suit.HEARTS, Rank.KING),
        Card(Suit.CLUBS, Rank.SEVEN),
        Card(Suit.DIAMONDS, Rank.QUEEN),
    )
    board.stand()
    board.wait(timeout=5)
    board.close(timeout=5)

    assert results == [
        {"bet": 0, "factor": "2", "paid": str(Decimal(opening_bet) * 2)}
    ]
    assert board.player.balance == Decimal(80) + Decimal(opening_bet)


def test_close_mid_round_finishes_the_round():
    board = Board(
        TableConfig(seed=42, action_delay_ms=20),
        io_interface=TestIOInterface(),
        event_bus=EventEmitter(),
    )
    board.wait(timeout=5)
    deal(
        board,
        Card(Suit.SPADES, Rank.TEN),
        Card(Suit.HEARTS, Rank.NINE),
        Card(Suit.CLUBS, Rank.SEVEN),
        Card(Suit.DIAMONDS, Rank.TEN),
    )
    assert board.stand()

    # The dealer turn and settlement are still to be queued at this point
    board.close(timeout=5)

    assert board.stage is Stage.CONCLUSION
    assert board.log.events[-2:] == ["Player wins £10.00", "Balance is £105.00"]
    assert board.pending_actions == 0
    with pytest.raises(RuntimeError):
        board.hit()
