"""
This module contains the IOInterface abstract base class and its implementations.

A board writes every event-log line to its IO interface as well, so a game
can be followed on the console, captured in tests, or recorded to a file.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import List

import aiofiles


class IOInterface(ABC):
    """
    Abstract base class for an IO interface.

    Subclasses implement the synchronous `output`; `output_async` defaults to
    running it without blocking the event loop.
    """

    @abstractmethod
    def output(self, message: str) -> None:
        """Output a message to the interface."""
        pass

    async def output_async(self, message: str) -> None:
        """Async version of output."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self.output, message)


class DummyIOInterface(IOInterface):
    """An IO interface that discards everything. The board's default."""

    def output(self, message: str) -> None:
        """Simulates output operation."""
        pass

    async def output_async(self, message: str) -> None:
        pass


class TestIOInterface(IOInterface):
    """
    A test IO interface for testing purposes. Collects output messages.
    """

    __test__ = False

    def __init__(self):
        self.sent_messages: List[str] = []

    def output(self, message: str) -> None:
        self.sent_messages.append(message)


class ConsoleIOInterface(IOInterface):
    """An IO interface printing every message on its own line."""

    def output(self, message: str) -> None:
        print(message)


class LoggingIOInterface(IOInterface):
    """
    A logging IO interface for recording purposes. Writes output messages to a log file.
    """

    def __init__(self, log_file_path: str):
        self.log_file_path = log_file_path

    def output(self, message: str) -> None:
        """Write an output message to the log file."""
        with open(self.log_file_path, "a", encoding="utf-8") as log_file:
            log_file.write(message + "\n")

    async def output_async(self, message: str) -> None:
        """Append the message to the log file without blocking the event loop."""
        async with aiofiles.open(
            self.log_file_path, mode="a", encoding="utf-8"
        ) as log_file:
            await log_file.write(message + "\n")
