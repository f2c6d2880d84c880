"""Presentation model: view state for the todo list.

Handler methods take the raw event payload so they can be subscribed by
name. Every mutation ends in :meth:`TodoPresentationModel.update`, which
recomputes the derived labels and publishes ``todos.changed``.
"""

from __future__ import annotations

from typing import Any

from beanbus.core.context import Context
from beanbus.domain.events import BeanId, TodoEvent
from beanbus.domain.models import Todo, TodoState
from beanbus.services.formatter import TodoFormatter


class TodoPresentationModel:
    def __init__(self, context: Context) -> None:
        self.context = context
        self.formatter: TodoFormatter | None = None
        context.inject(self, BeanId.FORMATTER, "formatter")

        self.todos: list[Todo] = []
        self.edited_index: int | None = None
        self.completed_label = ""
        self.remaining_label = ""
        self.remaining_todos_exist = False
        self.completed_todos_exist = False
        self.all_todos_are_complete = False

    def initialize(self, raw_todos: list[dict]) -> None:
        self.todos = [Todo(**raw) for raw in raw_todos]
        self.edited_index = None
        self.update()

    def update(self) -> None:
        completed = sum(1 for todo in self.todos if todo.done)
        remaining = len(self.todos) - completed

        self.completed_todos_exist = completed > 0
        self.remaining_todos_exist = remaining > 0
        self.all_todos_are_complete = completed == len(self.todos)
        if self.formatter is not None:
            self.completed_label = self.formatter.pluralize_completed_items(completed)
            self.remaining_label = self.formatter.pluralize_remaining_items(remaining)

        self.context.publish(TodoEvent.CHANGED, [todo.model_dump() for todo in self.todos])

    def has_index(self, index: int) -> bool:
        return 0 <= index < len(self.todos)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def add(self, content: str) -> None:
        self.todos.append(Todo(content=content))
        self.update()

    def remove(self, payload: dict[str, Any]) -> None:
        del self.todos[payload["index"]]
        self.edited_index = None
        self.update()

    def edit(self, payload: dict[str, Any]) -> None:
        self.edited_index = payload.get("index")

    def rename(self, index: int, content: str) -> None:
        self.todos[index].content = content
        self.update()

    def toggle(self, payload: dict[str, Any]) -> None:
        todo = self.todos[payload["index"]]
        todo.done = not todo.done
        self.update()

    def clear_completed(self, payload: Any = None) -> None:
        self.todos = [todo for todo in self.todos if not todo.done]
        self.edited_index = None
        self.update()

    def complete_all(self, payload: dict[str, Any]) -> None:
        complete = payload.get("complete", True)
        for todo in self.todos:
            todo.done = complete
        self.update()

    def snapshot(self) -> TodoState:
        return TodoState(
            todos=[todo.model_copy() for todo in self.todos],
            edited_index=self.edited_index,
            completed_label=self.completed_label,
            remaining_label=self.remaining_label,
            remaining_todos_exist=self.remaining_todos_exist,
            completed_todos_exist=self.completed_todos_exist,
            all_todos_are_complete=self.all_todos_are_complete,
        )
