#!/usr/bin/env python3
"""
Console Blackjack

Plays single-player blackjack on a twentyone Board in the terminal. The board
is redrawn after every action; type the key shown next to an action and
press enter, or "q" to quit.
"""

import argparse
import asyncio
import logging
import os
import sys
from collections import deque

try:
    from twentyone import Board, TableConfig
    from twentyone.common.io_interface import LoggingIOInterface
    from twentyone.events import EngineEventType, EventBus
except ImportError:
    print("ERROR: twentyone package not found or incompletely installed.")
    print("Please install it with: pip install -e .")
    sys.exit(1)


class BlackjackCLI:
    """Terminal front end for a Board."""

    def __init__(self, config: TableConfig, log_path=None):
        self.event_bus = EventBus.get_instance()
        self.event_bus.on(EngineEventType.ROUND_ENDED, self._on_round_ended)
        # Log lines arrive on the board's worker thread and are written from the loop
        self.log_file = LoggingIOInterface(log_path) if log_path else None
        self.unwritten = deque()
        if self.log_file:
            self.event_bus.on(EngineEventType.LOG_UPDATED, self._on_log_updated)
        self.last_report = None
        self.board = Board(config)

    def _on_round_ended(self, data):
        self.last_report = data["stats"]

    def _on_log_updated(self, data):
        self.unwritten.append(data["event"])

    async def write_log(self):
        while self.unwritten:
            await self.log_file.output_async(self.unwritten.popleft())

    def draw(self):
        os.system("cls" if os.name == "nt" else "clear")
        snapshot = self.board.snapshot()
        print(f"{'=' * 20} ROUND {snapshot['round']} {'=' * 20}")
        print(f"Deck:   {snapshot['deck']}")
        print(f"Dealer: {snapshot['dealer']}")
        print(f"Player: {snapshot['player']}")
        print(f"Bank:   {snapshot['bank']}")
        print()
        print(self.board.log.render())
        print(f"[{snapshot['stage']}] {snapshot['actions']} | q: Quit")

    async def run(self):
        await self.board.wait_async()
        while True:
            if self.log_file:
                await self.write_log()
            self.draw()
            key = await asyncio.to_thread(input, "> ")
            key = key.strip().lower()
            if key == "q":
                break
            await asyncio.to_thread(self.board.perform, key)
            await self.board.wait_async()

    def shutdown(self):
        self.board.close()
        if self.last_report:
            print("\n" + "=" * 40)
            print("FINAL RESULTS")
            print("=" * 40)
            for name, value in self.last_report.items():
                print(f"{name}: {value}")
        print("\nThank you for playing!")


async def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Play blackjack in the terminal")
    parser.add_argument(
        "-s", "--seed", type=int, default=0, help="Shuffle seed (0: random)"
    )
    parser.add_argument(
        "-d", "--delay", type=int, default=700, help="Pause after each action in ms"
    )
    parser.add_argument("-l", "--log", help="Append the event log to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    cli = BlackjackCLI(TableConfig(action_delay_ms=args.delay, seed=args.seed), args.log)
    try:
        await cli.run()
    except (KeyboardInterrupt, EOFError):
        pass
    finally:
        cli.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
