"""wayfinder.behavior — In-memory store of learned usage."""

from wayfinder.behavior.store import BehaviorStore

__all__ = ["BehaviorStore"]
