"""
Serialized execution of game actions.

Every change to a board goes through an `ActionQueue`: callers put actions
(callables taking the board and returning a success flag) and a single worker
thread runs them one at a time, in the order they were put, pausing
`delay_ms` after each one so a human can follow the game.

Callers get a `concurrent.futures.Future` for each action they put. They can
also wait for the whole queue to drain: every put raises a pending count,
every finished action lowers it, and `wait` blocks until it is back to zero.
Actions may put further actions; those run after everything already queued,
and keep the pending count above zero until they have run too.

Stopping the queue lets everything already put run first, including the
follow-up actions those put while they run; only then does the worker end.

An action that raises is a broken invariant. The queue logs it, stops its
worker, and from then on `put` and `wait` raise `ActionQueueFault`.
"""

import asyncio
import logging
import queue
import threading
import time
from concurrent.futures import Future
from typing import Any, Callable, Generic, Optional, TypeVar

from twentyone.common.exceptions import ActionQueueFault

logger = logging.getLogger(__name__)

T = TypeVar("T")
Action = Callable[[T], bool]

_STOP = object()


class ActionQueue(Generic[T]):
    """
    A FIFO of actions drained by one worker thread.

    :param target: Passed to every action when it runs
    :param delay_ms: Pause after each action, zero for tests
    """

    def __init__(self, target: T, delay_ms: int = 0, name: str = "twentyone-actions"):
        if delay_ms < 0:
            raise ValueError("Delay must be non-negative")
        self.target = target
        self.delay_ms = delay_ms
        self._queue: "queue.Queue[Any]" = queue.Queue()
        self._condition = threading.Condition()
        self._pending = 0
        self._fault: Optional[BaseException] = None
        self._stopped = False
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)
        self._thread.start()

    @property
    def pending(self) -> int:
        """Actions put but not yet finished."""
        with self._condition:
            return self._pending

    @property
    def fault(self) -> Optional[BaseException]:
        return self._fault

    @property
    def in_worker(self) -> bool:
        """True when called from the worker thread, i.e. from inside an action."""
        return threading.current_thread() is self._thread

    def put(self, action: Action) -> "Future[bool]":
        """
        Queue an action.

        :return: A future resolved with the action's result once it has run.
        :raises ActionQueueFault: If an earlier action failed.
        :raises RuntimeError: If the queue was stopped and the caller is not an action.
        """
        future: "Future[bool]" = Future()
        # Running futures cannot be cancelled; queued actions always run
        future.set_running_or_notify_cancel()
        with self._condition:
            self._raise_if_faulted()
            if self._stopped and not self.in_worker:
                raise RuntimeError("Action queue has been stopped")
            self._pending += 1
            self._queue.put((action, future))
        return future

    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        Block until every queued action has run.

        :param timeout: Seconds to wait at most, None to wait as long as it takes
        :return: False if the timeout expired first
        :raises ActionQueueFault: If an action failed
        """
        if self.in_worker:
            raise RuntimeError("Waiting on the action queue from one of its actions")
        with self._condition:
            drained = self._condition.wait_for(
                lambda: self._pending == 0 or self._fault is not None, timeout
            )
            self._raise_if_faulted()
            return drained

    async def wait_async(self, timeout: Optional[float] = None) -> bool:
        """Await `wait` from an asyncio event loop without blocking it."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.wait, timeout)

    def stop(self, timeout: Optional[float] = None) -> None:
        """Let queued actions and their follow-ups finish, then end the worker thread."""
        with self._condition:
            if self._stopped:
                return
            self._stopped = True
            self._queue.put(_STOP)
        if not self.in_worker:
            self._thread.join(timeout)

    def _raise_if_faulted(self) -> None:
        if self._fault is not None:
            raise ActionQueueFault(
                f"Action queue stopped after a failed action: {self._fault!r}"
            ) from self._fault

    def _run(self) -> None:
        while True:
            item = self._queue.get()
            if item is _STOP:
                with self._condition:
                    if self._pending == 0:
                        break
                    # Follow-up actions were put behind the stop marker
                    self._queue.put(_STOP)
                continue
            action, future = item
            name = getattr(action, "__qualname__", repr(action))
            logger.debug("Running action %s", name)
            try:
                result = action(self.target)
            except Exception as exc:
                logger.critical("Action %s failed, stopping the queue", name, exc_info=True)
                future.set_exception(exc)
                self._fail_remaining(exc)
                return
            future.set_result(result)
            with self._condition:
                self._pending -= 1
                if self._pending == 0:
                    self._condition.notify_all()
            if self.delay_ms:
                time.sleep(self.delay_ms / 1000)

    def _fail_remaining(self, exc: BaseException) -> None:
        with self._condition:
            self._fault = exc
            while True:
                try:
                    item = self._queue.get_nowait()
                except queue.Empty:
                    break
                if item is _STOP:
                    continue
                _, future = item
                try:
                    self._raise_if_faulted()
                except ActionQueueFault as fault:
                    future.set_exception(fault)
            self._pending = 0
            self._condition.notify_all()
