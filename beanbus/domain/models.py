"""Domain models for the todo demo."""

from __future__ import annotations

from pydantic import BaseModel, Field


class Todo(BaseModel):
    content: str
    done: bool = False


# ---------------------------------------------------------------------------
# Request / Response DTOs
# ---------------------------------------------------------------------------


class NewTodoRequest(BaseModel):
    content: str = ""


class UpdateTodoRequest(BaseModel):
    content: str


class CompleteAllRequest(BaseModel):
    complete: bool = True


class TodoState(BaseModel):
    """Everything a view needs to render the list."""

    todos: list[Todo] = Field(default_factory=list)
    edited_index: int | None = None
    completed_label: str = ""
    remaining_label: str = ""
    remaining_todos_exist: bool = False
    completed_todos_exist: bool = False
    all_todos_are_complete: bool = False
