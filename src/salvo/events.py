"""Lightweight event model used by the turn engine to stay decoupled from renderers.

Subscribers (text front end, logging, tests) receive typed events instead of
parsing free-text status lines.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)


class Category(Enum):
    """High-level event categories."""

    TURN = auto()  # shot, salvo, game over
    SYSTEM = auto()  # connection lost, quit


@dataclass(slots=True)
class Event:
    """Event emitted by the TurnEngine."""

    category: Category
    type: str  # finer-grained identifier, e.g. "shot", "salvo", "game_over"
    payload: Dict[str, Any] = field(default_factory=dict)


Subscriber = Callable[[Event], None]


class EventBus:
    def __init__(self) -> None:
        self.subscribers: List[Subscriber] = []

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register *callback*; the returned function removes it again."""
        self.subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self.subscribers:
                self.subscribers.remove(callback)

        return _unsubscribe

    def emit(self, event: Event) -> None:
        for callback in list(self.subscribers):
            try:
                callback(event)
            except Exception:
                logger.exception("subscriber failed on %s event", event.type)
