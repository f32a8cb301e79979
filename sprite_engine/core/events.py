"""
Publish/subscribe messaging keyed by Enum members.

Engine and game code talk through an EventBus instead of holding
references to each other: the loop announces start/stop, the input
handler announces key presses, a game session announces pickups and
round endings.

Usage:
    class GameEvent(Enum):
        COIN_COLLECTED = auto()

    bus = EventBus()
    bus.subscribe(GameEvent.COIN_COLLECTED, on_coin)
    bus.publish(GameEvent.COIN_COLLECTED, score=3, coin=coin)
"""

from __future__ import annotations

import itertools
import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable
from weakref import WeakMethod, ref

logger = logging.getLogger(__name__)


class EngineEvent(Enum):
    """Built-in engine events."""
    LOOP_STARTED = auto()
    LOOP_STOPPED = auto()
    GAME_QUIT = auto()


@dataclass
class Event:
    """
    A published message.

    Attributes:
        type: Enum member the event was published under
        data: Keyword payload given to publish()
        consumed: Set by a handler to stop lower-priority handlers
    """
    type: Enum
    data: dict[str, Any] = field(default_factory=dict)
    consumed: bool = False

    def consume(self) -> None:
        self.consumed = True

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.data[key]


EventHandler = Callable[[Event], None]


@dataclass
class _Subscription:
    priority: int
    order: int
    target: Any
    one_shot: bool
    weak: bool

    def resolve(self) -> EventHandler | None:
        """The live handler, or None once a weak target was collected."""
        return self.target() if self.weak else self.target

    @property
    def sort_key(self) -> tuple[int, int]:
        return (-self.priority, self.order)


class EventBus:
    """
    Dispatches events to handlers in priority order.

    Handlers with higher priority run first; equal priorities run in
    subscription order. Handlers are held weakly by default, so a dead
    listener drops out on its own. A handler that raises is logged and
    the remaining handlers still run. Publishing from inside a handler
    defers the new event until the current one is done.
    """

    def __init__(self):
        self._subscriptions: dict[Enum, list[_Subscription]] = {}
        self._pending: deque[Event] = deque()
        self._dispatching = False
        self._counter = itertools.count()

    def subscribe(
        self,
        event_type: Enum,
        handler: EventHandler,
        priority: int = 0,
        one_shot: bool = False,
        weak: bool = True,
    ) -> None:
        """
        Register handler for event_type.

        Args:
            event_type: Enum member to listen for
            handler: Callable taking the Event
            priority: Higher runs earlier (default 0)
            one_shot: Drop the handler after its first call
            weak: Hold the handler by weak reference
        """
        if weak:
            target = WeakMethod(handler) if hasattr(handler, '__self__') else ref(handler)
        else:
            target = handler

        subscription = _Subscription(priority, next(self._counter), target, one_shot, weak)
        subscriptions = self._subscriptions.setdefault(event_type, [])
        subscriptions.append(subscription)
        subscriptions.sort(key=lambda s: s.sort_key)

    def unsubscribe(self, event_type: Enum, handler: EventHandler) -> None:
        subscriptions = self._subscriptions.get(event_type)
        if subscriptions is None:
            return
        self._subscriptions[event_type] = [s for s in subscriptions if s.resolve() != handler]

    def publish(self, event_type: Enum, **data: Any) -> Event:
        """
        Publish an event and return it.

        Check the returned Event's `consumed` flag to see whether a
        handler claimed it. Events published during dispatch are
        delivered after the current one.
        """
        event = Event(type=event_type, data=data)
        self._pending.append(event)
        if not self._dispatching:
            self._drain()
        return event

    def clear(self, event_type: Enum | None = None) -> None:
        """Drop the handlers of one event type, or of all types."""
        if event_type is None:
            self._subscriptions.clear()
        else:
            self._subscriptions.pop(event_type, None)

    def _drain(self) -> None:
        self._dispatching = True
        try:
            while self._pending:
                self._deliver(self._pending.popleft())
        finally:
            self._dispatching = False

    def _deliver(self, event: Event) -> None:
        subscriptions = self._subscriptions.get(event.type)
        if not subscriptions:
            return

        finished: list[_Subscription] = []
        for subscription in list(subscriptions):
            handler = subscription.resolve()
            if handler is None:
                finished.append(subscription)
                continue

            try:
                handler(event)
            except Exception:
                logger.exception(f"Error in event handler for {event.type}")

            if subscription.one_shot:
                finished.append(subscription)
            if event.consumed:
                break

        if finished:
            self._subscriptions[event.type] = [s for s in subscriptions if s not in finished]
