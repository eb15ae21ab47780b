"""
The blackjack board: the aggregate root of a game.

A `Board` owns the deck, the dealer, the player's bets and balance, the event
log and the round statistics, and it is the only way to change any of them.

Two kinds of methods live here:

- The action surface (`deal`, `raise_bet`, `lower_bet`, `hit`, `stand`,
  `double_down`, `split`, `new_round`, `force_next`) is called by the outside
  world. Each method puts an action on the board's `ActionQueue` and returns
  the action's result once it has run. None of them changes state directly.
- Everything else that mutates (stage transitions, dealing, the dealer's
  turn, settlement) runs on the queue's worker thread, either inside an
  action or inside a stage's entry effect.

Actions re-check the stage when they run: a key pressed while the board was
still offering it can arrive after the stage moved on, and is then refused.

Renderers read `deck`, `dealer`, `player` and `log` directly, or take a
`snapshot()`. Reads are not synchronized with the worker and may see a hand
halfway through an update.

>>> board = Board(TableConfig(seed=42))
>>> board.wait()
True
>>> board.stage
<Stage.BETTING: 'Betting'>
"""

import logging
from concurrent.futures import Future
from decimal import Decimal
from functools import partial
from typing import Any, Dict, Optional

from twentyone.blackjack.bet import RESULT_PHRASES, FACTOR_LOSE, Player
from twentyone.blackjack.dealer import Dealer
from twentyone.blackjack.log import EventLog
from twentyone.blackjack.rules import TableConfig
from twentyone.blackjack.stages import ActionSet, Stage
from twentyone.blackjack.stats import RoundStats
from twentyone.common.card import Card
from twentyone.common.deck import Deck
from twentyone.common.io_interface import DummyIOInterface, IOInterface
from twentyone.engine.action_queue import Action, ActionQueue
from twentyone.events import EngineEventType, EventBus, EventEmitter

logger = logging.getLogger(__name__)


class Board:
    """
    The main game controller.

    :param config: Table configuration, defaults to `TableConfig()`
    :param io_interface: Receives every event-log line as well
    :param event_bus: Emitter for board events, defaults to the global `EventBus`
    """

    def __init__(
        self,
        config: Optional[TableConfig] = None,
        io_interface: Optional[IOInterface] = None,
        event_bus: Optional[EventEmitter] = None,
    ):
        self.config = config or TableConfig()
        self.io_interface = io_interface or DummyIOInterface()
        self.event_bus = event_bus or EventBus.get_instance()
        self.money_format = self.config.money_format

        self.deck = Deck()
        self.dealer = Dealer()
        self.player = Player(self.config.opening_bet, self.config.opening_balance)
        self.log = EventLog(self.config.log_limit)
        self.stats = RoundStats()
        self.stage = Stage.OBSERVING
        self.round_number = 0
        self._round_staked = Decimal(0)
        self._round_paid = Decimal(0)

        self._queue: ActionQueue["Board"] = ActionQueue(
            self, delay_ms=self.config.action_delay_ms
        )
        self.enqueue(partial(Board.transition, stage=Stage.BETTING))

    #
    # Action surface
    #

    def actions(self) -> ActionSet:
        """Actions the player can take right now."""
        return self.stage.actions(self)

    def render_actions(self) -> str:
        """Current actions sorted by key, e.g. "d: Deal | l: Lower | r: Raise"."""
        actions = self.actions()
        return " | ".join(
            f"{key}: {actions[key].description}" for key in sorted(actions)
        )

    def perform(self, key: str) -> bool:
        """Run the action bound to `key` in the current stage; unknown keys do nothing."""
        action = self.actions().get(key)
        if action is None:
            return False
        return action.execute()

    def deal(self) -> bool:
        return self.submit(Board._deal)

    def raise_bet(self) -> bool:
        return self.submit(Board._raise_bet)

    def lower_bet(self) -> bool:
        return self.submit(Board._lower_bet)

    def hit(self) -> bool:
        return self.submit(Board._hit)

    def stand(self) -> bool:
        return self.submit(Board._stand)

    def double_down(self) -> bool:
        return self.submit(Board._double_down)

    def split(self) -> bool:
        return self.submit(Board._split)

    def new_round(self) -> bool:
        return self.submit(Board._new_round)

    def force_next(self, card: Card) -> bool:
        """Make `card` the next one dealt. For setting up known scenarios only."""
        return self.submit(partial(Board._force_next, card=card))

    def submit(self, action: Action) -> bool:
        """Queue an action and block until it has run, returning its result."""
        if self._queue.in_worker:
            raise RuntimeError("Board actions cannot be submitted from the action queue")
        return self._queue.put(action).result()

    def enqueue(self, action: Action) -> "Future[bool]":
        """Queue an action without waiting for it."""
        return self._queue.put(action)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until all queued work, including follow-up work, has run."""
        return self._queue.wait(timeout)

    async def wait_async(self, timeout: Optional[float] = None) -> bool:
        return await self._queue.wait_async(timeout)

    def close(self, timeout: Optional[float] = None) -> None:
        """Finish queued work and stop the action queue."""
        self._queue.stop(timeout)

    @property
    def pending_actions(self) -> int:
        return self._queue.pending

    #
    # Observation surface
    #

    def render_bets(self) -> str:
        return self.player.render_bets(self.money_format)

    def snapshot(self) -> Dict[str, Any]:
        """Everything a renderer shows, as plain values."""
        return {
            "stage": self.stage.value,
            "round": self.round_number,
            "deck": self.deck.render(),
            "deck_size": self.deck.size,
            "dealer": self.dealer.render(),
            "player": self.player.render(),
            "bets": [str(bet.amount) for bet in self.player.bets],
            "balance": str(self.player.balance),
            "bank": self.render_bets(),
            "log": self.log.events,
            "actions": self.render_actions(),
        }

    #
    # Worker side: everything below runs on the action queue
    #

    def transition(self, stage: Stage) -> bool:
        previous = self.stage
        self.stage = stage
        logger.info("Stage %s -> %s", previous.name, stage.name)
        self.event_bus.emit(
            EngineEventType.STAGE_CHANGED, {"from": previous.name, "to": stage.name}
        )
        stage.on_enter(self)
        return True

    def record(self, message: str) -> None:
        """Add a line to the event log and pass it on to the IO interface."""
        self.log.push(message)
        self.io_interface.output(message)
        self.event_bus.emit(EngineEventType.LOG_UPDATED, {"event": message})

    def draw(self, face_up: bool = True) -> Card:
        card = self.deck.pop()
        return card.turn_up() if face_up else card.turn_down()

    def start_betting(self) -> None:
        """Entry of BETTING: fresh hands, a reshuffled deck and the opening wager."""
        self.round_number += 1
        self.dealer.reset()
        wager = self.player.reset()
        self.deck.init()
        self.deck.shuffle(self.config.seed)
        self._round_staked = Decimal(0)
        self._round_paid = Decimal(0)
        if wager > 0:
            self.record(f"Round {self.round_number}: bet {self.money_format.format(wager)}")
        else:
            self.record(f"Round {self.round_number}: no money left to bet")
        self.event_bus.emit(
            EngineEventType.ROUND_STARTED,
            {"round": self.round_number, "wager": str(wager)},
        )

    def finish_player_turn(self) -> None:
        """Block the player and hand over to the dealer once queued work has run."""
        self.transition(Stage.OBSERVING)
        self.enqueue(partial(Board.transition, stage=Stage.DEALER))

    def start_dealer_turn(self) -> None:
        self.enqueue(Board._reveal_dealer)
        self.enqueue(Board._play_dealer)

    def start_assessment(self) -> None:
        for index in range(len(self.player.bets)):
            self.enqueue(partial(Board._settle, index=index))
        self.enqueue(partial(Board.transition, stage=Stage.CONCLUSION))

    def conclude_round(self) -> None:
        self.stats.update(self.player.bets, self._round_staked, self._round_paid)
        self.record(f"Balance is {self.money_format.format(self.player.balance)}")
        self.event_bus.emit(
            EngineEventType.ROUND_ENDED,
            {"round": self.round_number, "stats": self.stats.report()},
        )

    def _deal(self) -> bool:
        if self.stage is not Stage.BETTING or self.player.bets[0].amount <= 0:
            return False
        self.transition(Stage.OBSERVING)
        self._round_staked = self.player.total_wagered

        self.enqueue(partial(Board._deal_dealer, face_up=True))
        for index in range(len(self.player.bets)):
            self.enqueue(partial(Board._deal_player, index=index))
        self.enqueue(partial(Board._deal_dealer, face_up=False))
        for index in range(len(self.player.bets)):
            self.enqueue(partial(Board._deal_player, index=index))
        self.enqueue(Board._after_deal)
        return True

    def _deal_dealer(self, face_up: bool) -> bool:
        card = self.draw(face_up)
        self.dealer.hand.add_card(card)
        self.record(f"Dealer dealt {card.notation()}")
        self.event_bus.emit(
            EngineEventType.CARD_DEALT, {"to": "dealer", "card": card.notation()}
        )
        return True

    def _deal_player(self, index: int) -> bool:
        card = self.draw()
        self.player.bets[index].hand.add_card(card)
        self.record(f"Player dealt {card.notation()}")
        self.event_bus.emit(
            EngineEventType.CARD_DEALT,
            {"to": "player", "bet": index, "card": card.notation()},
        )
        return True

    def _after_deal(self) -> bool:
        if self.player.bets[0].hand.has_blackjack:
            self.record("Player has blackjack")
            self.transition(Stage.DEALER)
        else:
            self.transition(Stage.PLAYER)
        return True

    def _raise_bet(self) -> bool:
        if self.stage is not Stage.BETTING:
            return False
        if not self.player.raise_bet(self.config.bet_increment):
            return False
        self._emit_bet_changed()
        return True

    def _lower_bet(self) -> bool:
        if self.stage is not Stage.BETTING:
            return False
        if not self.player.lower_bet(self.config.bet_increment):
            return False
        self._emit_bet_changed()
        return True

    def _emit_bet_changed(self) -> None:
        self.event_bus.emit(
            EngineEventType.BET_CHANGED,
            {
                "bets": [str(bet.amount) for bet in self.player.bets],
                "balance": str(self.player.balance),
            },
        )

    def _hit(self) -> bool:
        index = self._focused_index()
        if index is None:
            return False
        card = self.draw()
        bet = self.player.hit(index, card)
        self.record(f"Player dealt {card.notation()}")
        self.event_bus.emit(
            EngineEventType.CARD_DEALT,
            {"to": "player", "bet": index, "card": card.notation()},
        )
        self._check_bust(index)
        if bet.is_finished:
            self._advance_player()
        return True

    def _stand(self) -> bool:
        index = self._focused_index()
        if index is None:
            return False
        bet = self.player.stand(index)
        self.record(f"Player stands on {bet.hand.best_score()}")
        self._advance_player()
        return True

    def _double_down(self) -> bool:
        index = self._focused_index()
        if index is None:
            return False
        wager = self.player.bets[index].amount
        if not self.player.double_down(index):
            return False
        bet = self.player.bets[index]
        self._round_staked += wager
        card = self.draw()
        self.player.hit(index, card)
        self.player.stand(index)
        self.record(
            f"Player doubles down to {self.money_format.format(bet.amount)}"
            f" and is dealt {card.notation()}"
        )
        self.event_bus.emit(
            EngineEventType.HAND_DOUBLED,
            {"bet": index, "amount": str(bet.amount), "card": card.notation()},
        )
        self._check_bust(index)
        self._advance_player()
        return True

    def _split(self) -> bool:
        index = self._focused_index()
        if index is None:
            return False
        new_index = self.player.split(index)
        if new_index is None:
            return False
        amount = self.player.bets[new_index].amount
        self._round_staked += amount
        self.record(f"Player splits for another {self.money_format.format(amount)}")
        self.event_bus.emit(
            EngineEventType.HAND_SPLIT,
            {"bet": index, "new_bet": new_index, "amount": str(amount)},
        )
        self.enqueue(partial(Board._deal_player, index=index))
        self.enqueue(partial(Board._deal_player, index=new_index))
        self.enqueue(Board._after_split)
        return True

    def _after_split(self) -> bool:
        # Split hands dealt a blackjack are already finished
        if self.stage is Stage.PLAYER and self.player.focused_index() is None:
            self.finish_player_turn()
        return True

    def _new_round(self) -> bool:
        if self.stage is not Stage.CONCLUSION:
            return False
        self.transition(Stage.BETTING)
        return True

    def _force_next(self, card: Card) -> bool:
        self.deck.force_next(card)
        return True

    def _focused_index(self) -> Optional[int]:
        if self.stage is not Stage.PLAYER:
            return None
        return self.player.focused_index()

    def _check_bust(self, index: int) -> None:
        hand = self.player.bets[index].hand
        if hand.is_bust:
            self.record(f"Player busts with {hand.best_score()}")
            self.event_bus.emit(
                EngineEventType.HAND_BUSTED, {"bet": index, "score": hand.best_score()}
            )

    def _advance_player(self) -> None:
        if self.player.focused_index() is None:
            self.finish_player_turn()

    def _reveal_dealer(self) -> bool:
        for card in self.dealer.reveal():
            self.record(f"Dealer reveals {card.notation()}")
            self.event_bus.emit(
                EngineEventType.CARD_REVEALED, {"to": "dealer", "card": card.notation()}
            )
        return True

    def _play_dealer(self) -> bool:
        """One step of the dealer's turn: draw and come back, or stop and assess."""
        if self.dealer.must_hit():
            self._deal_dealer(face_up=True)
            self.enqueue(Board._play_dealer)
            return True
        hand = self.dealer.hand
        if hand.is_bust:
            self.record(f"Dealer busts with {hand.best_score()}")
        else:
            self.record(f"Dealer stands on {hand.best_score()}")
        self.transition(Stage.ASSESSMENT)
        return True

    def _settle(self, index: int) -> bool:
        wager = self.player.bets[index].amount
        factor, paid = self.player.settle(index, self.dealer.hand)
        self._round_paid += paid
        shown = wager if factor == FACTOR_LOSE else paid
        self.record(f"Player {RESULT_PHRASES[factor]} {self.money_format.format(shown)}")
        self.event_bus.emit(
            EngineEventType.HAND_RESULT,
            {"bet": index, "factor": str(factor), "paid": str(paid)},
        )
        return True

    def __repr__(self) -> str:
        return f"Board(stage={self.stage.name}, round={self.round_number})"
