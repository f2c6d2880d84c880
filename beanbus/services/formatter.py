"""Label helpers injected into the presentation model."""

from __future__ import annotations


class TodoFormatter:
    def pluralize_remaining_items(self, count: int) -> str:
        return f"{count} item" if count == 1 else f"{count} items"

    def pluralize_completed_items(self, count: int) -> str:
        return f"{count} completed item" if count == 1 else f"{count} completed items"
