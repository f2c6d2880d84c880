"""In-memory store standing in for browser-local storage."""

from __future__ import annotations

import copy
import logging

logger = logging.getLogger(__name__)

STORE_KEY = "todos"


class TodoStore:
    """Dict-backed store for raw todo dicts, keyed by list name."""

    def __init__(self, initial: list[dict] | None = None, key: str = STORE_KEY) -> None:
        self.key = key
        self._store: dict[str, list[dict]] = {}
        if initial is not None:
            self.save(initial)

    def load(self) -> list[dict]:
        return copy.deepcopy(self._store.get(self.key, []))

    def save(self, data: list[dict]) -> None:
        self._store[self.key] = copy.deepcopy(list(data))
        logger.debug("saved %d todos under %s", len(data), self.key)
