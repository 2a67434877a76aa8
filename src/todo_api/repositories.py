from __future__ import annotations

from abc import ABC
from dataclasses import replace
from threading import RLock
from typing import Dict, List, Optional
from uuid import UUID

from .models import Todo
from .settings import Settings
from .use_cases import create, delete, retrieve, update


# PUBLIC_INTERFACE
class TodoStore(
    create.Repository,
    retrieve.Repository,
    update.Repository,
    delete.Repository,
    ABC,
):
    """A storage backend implementing every use case's repository contract."""


class InMemoryTodoStore(TodoStore):
    """
    Thread-safe in-memory store suitable for testing and default runtime.
    Entities handed out are copies so callers never alias stored state.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._items: Dict[UUID, Todo] = {}

    def insert(self, todo: Todo) -> Todo:
        with self._lock:
            if todo.id in self._items:
                raise ValueError(f"A todo with id {todo.id} already exists")
            self._items[todo.id] = replace(todo)
        return todo

    def get_by_id(self, todo_id: UUID) -> Optional[Todo]:
        with self._lock:
            item = self._items.get(todo_id)
            return None if item is None else replace(item)

    def get_all(self, todo_id: Optional[UUID] = None) -> List[Todo]:
        with self._lock:
            if todo_id is not None:
                item = self._items.get(todo_id)
                return [] if item is None else [replace(item)]
            return [replace(t) for t in self._items.values()]

    def update(self, todo: Todo) -> None:
        with self._lock:
            if todo.id in self._items:
                self._items[todo.id] = replace(todo)

    def delete(self, todo_id: UUID) -> None:
        with self._lock:
            self._items.pop(todo_id, None)


# PUBLIC_INTERFACE
def build_store(settings: Settings) -> TodoStore:
    """
    Return the storage backend selected by settings.
    - memory: InMemoryTodoStore
    - sqlite: SQLiteTodoStore at settings.sqlite_db_path
    """
    if settings.persistence_backend == "sqlite":
        from .db import SQLiteTodoStore

        return SQLiteTodoStore(settings.sqlite_db_path)
    return InMemoryTodoStore()
