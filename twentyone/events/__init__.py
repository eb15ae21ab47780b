"""
Event system for the twentyone engine.

This package provides the publish/subscribe layer renderers use to follow a
board without polling it.
"""

from twentyone.events.emitter import EngineEventType, EventBus, EventEmitter

__all__ = ["EventEmitter", "EventBus", "EngineEventType"]
