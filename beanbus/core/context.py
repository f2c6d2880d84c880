"""Bus + registry pair and application start-up."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from threading import RLock
from typing import Any, Callable

from beanbus.config import Settings
from beanbus.core.bus import EventBus
from beanbus.core.registry import ReadyCallback, Registry

logger = logging.getLogger(__name__)

APPLICATION_START = "application.start"


@dataclass
class Context:
    """One isolated event bus and bean registry.

    Components receive the context (or its parts) explicitly; there is no
    process-wide instance.

    Thread-safety: ``lock`` is a single re-entrant lock guarding both the
    channel table and the bean table. The shortcut methods hold it, and
    threaded hosts hold it around any check-then-publish sequence. It is
    re-entrant because handlers and ready callbacks publish and inject again.
    """

    bus: EventBus = field(default_factory=EventBus)
    registry: Registry = field(default_factory=Registry)
    lock: RLock = field(default_factory=RLock, repr=False, compare=False)

    @classmethod
    def create(cls, settings: Settings | None = None) -> Context:
        settings = settings or Settings()
        return cls(
            bus=EventBus(
                isolate_errors=settings.isolate_errors,
                max_errors=settings.max_errors,
            ),
            registry=Registry(renotify=settings.renotify),
        )

    # Shortcuts so collaborators can depend on the context alone.

    def publish(self, event_name: str, payload: Any = None) -> None:
        with self.lock:
            self.bus.publish(event_name, payload)

    def subscribe(
        self, event_name: str, target: Any, handler: str | Callable[[Any], Any]
    ) -> str:
        with self.lock:
            return self.bus.subscribe(event_name, target, handler)

    def unsubscribe(self, event_name: str, target: Any, handler_key: str) -> int:
        with self.lock:
            return self.bus.unsubscribe(event_name, target, handler_key)

    def register(self, bean_id: str | Mapping[str, Any], value: Any = None) -> None:
        with self.lock:
            self.registry.register(bean_id, value)

    def inject(
        self,
        requester: Any,
        bean_id: str,
        property_name: str,
        on_ready: ReadyCallback | None = None,
    ) -> None:
        with self.lock:
            self.registry.inject(requester, bean_id, property_name, on_ready)

    def bean(self, bean_id: str, default: Any = None) -> Any:
        with self.lock:
            return self.registry.bean(bean_id, default)


def start(
    context: Context,
    beans: Mapping[str, Any],
    start_event: str = APPLICATION_START,
    payload: Any = None,
) -> Context:
    """Register ``beans`` then publish ``start_event``.

    Registration resolves any injections the beans declared on construction,
    so by the time the start event fires their callbacks have wired up
    subscriptions.
    """
    with context.lock:
        context.register(beans)
        unresolved = context.registry.pending()
        if unresolved:
            logger.warning(
                "starting with unresolved beans: %s", ", ".join(sorted(unresolved))
            )
        context.publish(start_event, payload)
    return context
