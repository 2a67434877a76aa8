"""Shared fixtures: a fresh application, store and client per test."""

import pytest
from fastapi.testclient import TestClient

from todo_api.main import create_app
from todo_api.repositories import InMemoryTodoStore
from todo_api.settings import Settings


@pytest.fixture
def app():
    return create_app(Settings(persistence_backend="memory"))


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def store() -> InMemoryTodoStore:
    return InMemoryTodoStore()


class FailingStore(InMemoryTodoStore):
    """In-memory store whose selected operations raise, to exercise failure paths."""

    def __init__(self, *failing: str, message: str = "storage unavailable") -> None:
        super().__init__()
        self._failing = set(failing)
        self._message = message

    def _maybe_fail(self, operation: str) -> None:
        if operation in self._failing:
            raise RuntimeError(self._message)

    def insert(self, todo):
        self._maybe_fail("insert")
        return super().insert(todo)

    def get_by_id(self, todo_id):
        self._maybe_fail("get_by_id")
        return super().get_by_id(todo_id)

    def get_all(self, todo_id=None):
        self._maybe_fail("get_all")
        return super().get_all(todo_id)

    def update(self, todo):
        self._maybe_fail("update")
        return super().update(todo)

    def delete(self, todo_id):
        self._maybe_fail("delete")
        return super().delete(todo_id)


@pytest.fixture
def failing_store():
    return FailingStore
