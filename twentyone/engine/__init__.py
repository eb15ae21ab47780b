"""
Execution engine for the twentyone package.

This package holds the action queue that serializes every board mutation.
"""

from twentyone.engine.action_queue import ActionQueue

__all__ = ["ActionQueue"]
