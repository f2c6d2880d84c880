"""Event and bean names shared by the todo components."""

from __future__ import annotations

from enum import StrEnum


class TodoEvent(StrEnum):
    SUBMITTED = "todo.submitted"
    DELETE = "todo.delete"
    EDIT = "todo.edit"
    UPDATE = "todo.update"
    TOGGLE = "todo.toggle"
    CHANGED = "todos.changed"
    CLEAR_COMPLETED = "todos.clear_completed"
    COMPLETE_ALL = "todos.complete_all"


class BeanId(StrEnum):
    FORMATTER = "todo_formatter"
    PRESENTATION_MODEL = "todo_presentation_model"
    CONTROLLER = "todo_controller"
    STORE = "todo_store"
