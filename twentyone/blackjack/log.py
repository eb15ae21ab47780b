"""Bounded log of human-readable game events."""

from typing import List

DEFAULT_LOG_LIMIT = 20


class EventLog:
    """
    Keeps the most recent `limit` events in the order they happened.

    >>> log = EventLog(limit=2)
    >>> for event in ("one", "two", "three"):
    ...     log.push(event)
    >>> log.events
    ['two', 'three']
    """

    def __init__(self, limit: int = DEFAULT_LOG_LIMIT):
        if limit < 1:
            raise ValueError("Log limit must be at least 1")
        self.limit = limit
        self._events: List[str] = []

    @property
    def events(self) -> List[str]:
        return list(self._events)

    def push(self, event: str) -> None:
        self._events.append(event)
        if len(self._events) > self.limit:
            del self._events[: len(self._events) - self.limit]

    def render(self) -> str:
        """One event per line, every line after the first indented by a space."""
        if not self._events:
            return ""
        first, *rest = self._events
        return "".join([f"{first}\n"] + [f" {event}\n" for event in rest])

    def __len__(self) -> int:
        return len(self._events)
