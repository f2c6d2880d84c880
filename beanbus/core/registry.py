"""Bean registry with deferred property injection."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger(__name__)

ReadyCallback = Callable[[Any], Any]


@dataclass
class PendingInjection:
    requester: Any
    on_ready: ReadyCallback | None = None

    def satisfy(self, prop: str, value: Any) -> None:
        setattr(self.requester, prop, value)
        if self.on_ready is not None:
            self.on_ready(self.requester)


class Registry:
    """Named components ("beans") and the consumers waiting on them.

    Consumers call :meth:`inject` whether or not the bean exists yet. Every
    request is remembered under ``(bean_id, property_name)``; registering the
    bean assigns it to each recorded requester and runs its ``on_ready``
    callback with the requester as the only argument.

    ``renotify`` controls what happens when an id is registered again. When
    true, every recorded requester receives the new value and its callback
    runs again. When false, only the stored value changes.
    """

    def __init__(self, renotify: bool = True) -> None:
        self.renotify = renotify
        self._beans: dict[str, Any] = {}
        self._dependencies: dict[str, dict[str, list[PendingInjection]]] = {}

    def dependencies_for(self, bean_id: str) -> dict[str, list[PendingInjection]]:
        return self._dependencies.setdefault(bean_id, {})

    def register(self, bean_id: str | Mapping[str, Any], value: Any = None) -> None:
        """Register one bean, or each ``{id: value}`` pair of a mapping in order."""
        if isinstance(bean_id, Mapping):
            if value is not None:
                raise TypeError("value must be omitted when registering a mapping")
            for key, bean in bean_id.items():
                self.register(key, bean)
            return
        if not isinstance(bean_id, str) or not bean_id:
            raise TypeError(f"bean id must be a non-empty string, got {bean_id!r}")

        seen = bean_id in self._beans
        self._beans[bean_id] = value
        logger.debug("registered bean %s%s", bean_id, " (replaced)" if seen else "")
        if seen and not self.renotify:
            return

        # callbacks may inject further requesters under this id
        for prop, records in list(self.dependencies_for(bean_id).items()):
            for record in list(records):
                logger.debug("resolving %s.%s from bean %s", record.requester, prop, bean_id)
                record.satisfy(prop, value)

    def inject(
        self,
        requester: Any,
        bean_id: str,
        property_name: str,
        on_ready: ReadyCallback | None = None,
    ) -> None:
        """Assign bean ``bean_id`` to ``requester.property_name`` now or once registered.

        A repeated call for the same requester and key is not recorded twice,
        but when the bean exists the assignment and callback run on every call.
        """
        if requester is None:
            raise ValueError("requester must not be None")

        records = self.dependencies_for(bean_id).setdefault(property_name, [])
        if not any(r.requester is requester for r in records):
            records.append(PendingInjection(requester=requester, on_ready=on_ready))

        if bean_id in self._beans:
            PendingInjection(requester, on_ready).satisfy(
                property_name, self._beans[bean_id]
            )
        else:
            logger.debug("%r waiting on bean %s", requester, bean_id)

    def bean(self, bean_id: str, default: Any = None) -> Any:
        return self._beans.get(bean_id, default)

    def is_registered(self, bean_id: str) -> bool:
        return bean_id in self._beans

    def pending(self) -> dict[str, list[str]]:
        """Bean ids that have requesters but no registration yet."""
        return {
            bean_id: sorted(props)
            for bean_id, props in self._dependencies.items()
            if props and bean_id not in self._beans
        }
