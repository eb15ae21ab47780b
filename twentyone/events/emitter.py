"""
Board events.

A board announces what happens at the table (stage changes, dealt cards,
settlements, log lines) on an `EventEmitter`, so a renderer can redraw when
something changed instead of polling. Events are emitted from the action
queue's worker thread; subscribing usually happens on another thread, so the
listener table is guarded by a lock and handlers are called outside it.

>>> emitter = EventEmitter()
>>> seen = []
>>> unsubscribe = emitter.on(EngineEventType.LOG_UPDATED, seen.append)
>>> emitter.emit(EngineEventType.LOG_UPDATED, {"event": "Dealer stands on 17"})
>>> seen
[{'event': 'Dealer stands on 17'}]
"""

import logging
import threading
from collections import defaultdict
from enum import Enum
from typing import Any, Callable, Dict, List, Union

logger = logging.getLogger(__name__)

EventType = Union[str, Enum]
Handler = Callable[[Dict[str, Any]], None]


def _event_name(event_type: EventType) -> str:
    # Enum members and their names subscribe to the same event
    return event_type.name if isinstance(event_type, Enum) else event_type


class EventEmitter:
    """Calls the handlers subscribed to an event, in subscription order."""

    def __init__(self):
        self._handlers: Dict[str, List[Handler]] = defaultdict(list)
        self._lock = threading.Lock()

    def on(self, event_type: EventType, handler: Handler) -> Callable[[], None]:
        """
        Subscribe `handler` to an event.

        :param event_type: An `EngineEventType` or its name
        :param handler: Called with the event's data dict
        :return: A function that removes the subscription again
        """
        name = _event_name(event_type)
        with self._lock:
            self._handlers[name].append(handler)

        def unsubscribe() -> None:
            with self._lock:
                if handler in self._handlers[name]:
                    self._handlers[name].remove(handler)

        return unsubscribe

    def emit(self, event_type: EventType, data: Dict[str, Any]) -> None:
        """
        Pass `data` to every handler of the event.

        A handler that raises is logged and skipped; the board carries on.
        """
        name = _event_name(event_type)
        with self._lock:
            handlers = list(self._handlers.get(name, ()))
        for handler in handlers:
            try:
                handler(data)
            except Exception:
                logger.error("Error in %s handler %r", name, handler, exc_info=True)

    def listener_count(self, event_type: EventType) -> int:
        with self._lock:
            return len(self._handlers.get(_event_name(event_type), ()))


class EventBus:
    """
    The process-wide emitter boards use when they are not given their own.
    """

    _instance = None
    _lock = threading.Lock()

    @classmethod
    def get_instance(cls) -> EventEmitter:
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = EventEmitter()
        return cls._instance


class EngineEventType(Enum):
    """Event types emitted by a blackjack board."""

    # Round lifecycle
    ROUND_STARTED = "round_started"
    STAGE_CHANGED = "stage_changed"
    ROUND_ENDED = "round_ended"

    # Cards
    CARD_DEALT = "card_dealt"
    CARD_REVEALED = "card_revealed"

    # Bets and hands
    BET_CHANGED = "bet_changed"
    HAND_SPLIT = "hand_split"
    HAND_DOUBLED = "hand_doubled"
    HAND_BUSTED = "hand_busted"
    HAND_RESULT = "hand_result"

    LOG_UPDATED = "log_updated"
