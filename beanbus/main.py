"""FastAPI application — entry point for the todo demo."""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, HTTPException

from beanbus.config import Settings, configure_logging
from beanbus.core.context import APPLICATION_START, Context, start
from beanbus.domain.events import BeanId, TodoEvent
from beanbus.domain.handlers import TodoController
from beanbus.domain.models import (
    CompleteAllRequest,
    NewTodoRequest,
    TodoState,
    UpdateTodoRequest,
)
from beanbus.repos.memory import TodoStore
from beanbus.services.formatter import TodoFormatter
from beanbus.services.presentation import TodoPresentationModel


def wire_todos(
    context: Context,
    store: TodoStore | None = None,
    start_event: str = APPLICATION_START,
) -> Context:
    """Register the todo beans on ``context`` and start the application.

    The controller is registered before the store it depends on; its
    injection stays pending until the store arrives.
    """
    start(
        context,
        {
            BeanId.FORMATTER: TodoFormatter(),
            BeanId.PRESENTATION_MODEL: TodoPresentationModel(context),
            BeanId.CONTROLLER: TodoController(context, start_event=start_event),
            BeanId.STORE: store if store is not None else TodoStore(),
        },
        start_event=start_event,
    )
    return context


settings = Settings.from_env()
configure_logging(settings)

app = FastAPI(title="Todo Demo")

# ── Singletons (created at import time for simplicity) ────────────────
context = wire_todos(Context.create(settings), start_event=settings.start_event)
presentation_model: TodoPresentationModel = context.bean(BeanId.PRESENTATION_MODEL)
todo_store: TodoStore = context.bean(BeanId.STORE)


def _require_index(index: int) -> None:
    if not presentation_model.has_index(index):
        raise HTTPException(status_code=404, detail="Todo not found")


def _publish(
    event: TodoEvent, payload: Any = None, index: int | None = None
) -> TodoState:
    """Check, publish and read back under the context lock.

    Sync routes run on a threadpool; holding the lock across the whole
    sequence keeps the index check valid until the handlers have run.
    """
    with context.lock:
        if index is not None:
            _require_index(index)
        context.publish(event, payload)
        return presentation_model.snapshot()


# ── Routes ────────────────────────────────────────────────────────────


@app.get("/todos", response_model=TodoState)
def get_todos() -> TodoState:
    """Return the current presentation state."""
    with context.lock:
        return presentation_model.snapshot()


@app.get("/todos/saved", response_model=list[dict])
def get_saved_todos() -> list[dict]:
    """Return what the store last received via ``todos.changed``."""
    with context.lock:
        return todo_store.load()


@app.post("/todos", response_model=TodoState)
def submit_todo(body: NewTodoRequest) -> TodoState:
    """Submit a new todo; blank content is ignored."""
    return _publish(TodoEvent.SUBMITTED, body.content)


@app.post("/todos/clear-completed", response_model=TodoState)
def clear_completed() -> TodoState:
    return _publish(TodoEvent.CLEAR_COMPLETED)


@app.post("/todos/complete-all", response_model=TodoState)
def complete_all(body: CompleteAllRequest) -> TodoState:
    return _publish(TodoEvent.COMPLETE_ALL, {"complete": body.complete})


@app.post("/todos/{index}/toggle", response_model=TodoState)
def toggle_todo(index: int) -> TodoState:
    return _publish(TodoEvent.TOGGLE, {"index": index}, index=index)


@app.post("/todos/{index}/edit", response_model=TodoState)
def edit_todo(index: int) -> TodoState:
    """Mark a todo as the one being edited."""
    return _publish(TodoEvent.EDIT, {"index": index}, index=index)


@app.post("/todos/{index}/update", response_model=TodoState)
def update_todo(index: int, body: UpdateTodoRequest) -> TodoState:
    """Finish editing; blank content leaves the todo unchanged."""
    return _publish(
        TodoEvent.UPDATE, {"index": index, "content": body.content}, index=index
    )


@app.delete("/todos/{index}", response_model=TodoState)
def delete_todo(index: int) -> TodoState:
    return _publish(TodoEvent.DELETE, {"index": index}, index=index)
