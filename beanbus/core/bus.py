"""Simple synchronous in-process event bus."""

from __future__ import annotations

import itertools
import logging
from collections import deque
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger(__name__)


@dataclass
class Subscription:
    """One listener on a channel.

    ``handler`` is None for name-based subscriptions; those are looked up on
    ``target`` when the event is published.
    """

    target: Any
    handler_key: str
    handler: Callable[[Any], Any] | None = None

    def matches(self, target: Any, handler_key: str) -> bool:
        return self.target is target and self.handler_key == handler_key

    def __call__(self, payload: Any) -> None:
        if self.handler is None:
            getattr(self.target, self.handler_key)(payload)
        else:
            self.handler(payload)


class EventBus:
    """Publish/subscribe bus keyed by event name.

    Handlers are called synchronously in subscription order. Each publish
    iterates a snapshot of the channel taken when the call starts, so
    listeners added during a pass wait for the next publish and listeners
    removed during a pass still receive it.

    By default a failing handler aborts the pass and the exception leaves
    ``publish``. With ``isolate_errors`` the failure is logged, kept in
    ``errors`` (the most recent ``max_errors`` only) and delivery continues.
    """

    DEFAULT_MAX_ERRORS = 100

    def __init__(
        self, isolate_errors: bool = False, max_errors: int = DEFAULT_MAX_ERRORS
    ) -> None:
        if max_errors < 1:
            raise ValueError("max_errors must be at least 1")
        self.isolate_errors = isolate_errors
        self._channels: dict[str, list[Subscription]] = {}
        self._errors: deque[tuple[str, BaseException]] = deque(maxlen=max_errors)
        self._key_counter = itertools.count(1)

    def listeners_for(self, event_name: str) -> list[Subscription]:
        return self._channels.setdefault(event_name, [])

    def subscribe(
        self, event_name: str, target: Any, handler: str | Callable[[Any], Any]
    ) -> str:
        """Add a listener and return the key that identifies it on ``target``.

        ``handler`` is either the name of a method on ``target`` or any
        callable taking the payload.
        """
        if not event_name:
            raise ValueError("event_name must be a non-empty string")
        if target is None:
            raise ValueError("target must not be None")

        if isinstance(handler, str):
            sub = Subscription(target=target, handler_key=handler)
        elif callable(handler):
            key = f"listener_{next(self._key_counter)}"
            sub = Subscription(target=target, handler_key=key, handler=handler)
        else:
            raise TypeError(f"handler must be a method name or callable, got {handler!r}")

        self.listeners_for(event_name).append(sub)
        logger.debug("subscribed %s on %r to %s", sub.handler_key, target, event_name)
        return sub.handler_key

    def unsubscribe(self, event_name: str, target: Any, handler_key: str) -> int:
        """Remove every subscription matching ``target`` and ``handler_key``."""
        listeners = self._channels.get(event_name)
        if not listeners:
            return 0
        removed = 0
        for i in range(len(listeners) - 1, -1, -1):
            if listeners[i].matches(target, handler_key):
                del listeners[i]
                removed += 1
        return removed

    def publish(self, event_name: str, payload: Any = None) -> None:
        if payload is None:
            payload = {}
        for sub in list(self.listeners_for(event_name)):
            if not self.isolate_errors:
                sub(payload)
                continue
            try:
                sub(payload)
            except Exception as exc:
                logger.exception(
                    "handler %s failed for event %s", sub.handler_key, event_name
                )
                self._errors.append((event_name, exc))

    def subscriber_count(self, event_name: str) -> int:
        return len(self._channels.get(event_name, ()))

    @property
    def errors(self) -> list[tuple[str, BaseException]]:
        return list(self._errors)

    def clear_errors(self) -> None:
        self._errors.clear()
