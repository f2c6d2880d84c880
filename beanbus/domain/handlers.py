"""Todo controller: the single place where event subscriptions are declared."""

from __future__ import annotations

import logging
from typing import Any

from beanbus.core.context import APPLICATION_START, Context
from beanbus.domain.events import BeanId, TodoEvent
from beanbus.repos.memory import TodoStore
from beanbus.services.presentation import TodoPresentationModel

logger = logging.getLogger(__name__)


class TodoController:
    """Responds to UI events and coordinates the store and presentation model.

    Subscriptions that need a collaborator are wired from the injection
    callback, so they exist only once that collaborator has been registered.
    """

    def __init__(self, context: Context, start_event: str = APPLICATION_START) -> None:
        self.context = context
        self.pm: TodoPresentationModel | None = None
        self.store: TodoStore | None = None

        context.inject(self, BeanId.PRESENTATION_MODEL, "pm", self._on_presentation_model)
        context.inject(self, BeanId.STORE, "store", self._on_store)

        context.subscribe(start_event, self, self.on_application_start)
        context.subscribe(TodoEvent.SUBMITTED, self, self.on_todo_submitted)
        context.subscribe(TodoEvent.UPDATE, self, self.on_todo_update)

    # ------------------------------------------------------------------
    # Injection callbacks
    # ------------------------------------------------------------------

    def _on_presentation_model(self, _requester: Any) -> None:
        self.context.subscribe(TodoEvent.DELETE, self.pm, "remove")
        self.context.subscribe(TodoEvent.EDIT, self.pm, "edit")
        self.context.subscribe(TodoEvent.TOGGLE, self.pm, "toggle")
        self.context.subscribe(TodoEvent.CLEAR_COMPLETED, self.pm, "clear_completed")
        self.context.subscribe(TodoEvent.COMPLETE_ALL, self.pm, "complete_all")

    def _on_store(self, _requester: Any) -> None:
        # Persist every change of the model.
        self.context.subscribe(TodoEvent.CHANGED, self.store, "save")

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def on_application_start(self, payload: Any) -> None:
        self.pm.initialize(self.store.load())
        logger.info("todo list started with %d items", len(self.pm.todos))

    def on_todo_submitted(self, content: Any) -> None:
        if not isinstance(content, str):
            logger.debug("ignoring non-text todo submission: %r", content)
            return
        content = content.strip()
        if content:
            self.pm.add(content)

    def on_todo_update(self, payload: dict[str, Any]) -> None:
        content = payload.get("content", "").strip()
        if content:
            self.pm.rename(payload["index"], content)
        self.pm.edited_index = None
