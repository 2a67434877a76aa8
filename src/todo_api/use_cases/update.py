"""Update use case: validate, fetch, apply the new fields and persist."""
from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from fastapi import status
from fastapi.concurrency import run_in_threadpool
from pydantic import ConfigDict, Field

from ..models import EMPTY_ID, Todo
from .common import CamelModel, Envelope, Handler, Notification, UseCaseRequest

logger = logging.getLogger(__name__)

TITLE_MAX_EXCLUSIVE = 160
TITLE_MIN_EXCLUSIVE = 3


# PUBLIC_INTERFACE
class Repository(ABC):
    """Mutation-oriented data access, distinct from the read-only Retrieve contract."""

    @abstractmethod
    def get_by_id(self, todo_id: UUID) -> Optional[Todo]:
        """Return the Todo to mutate, or None if absent."""

    @abstractmethod
    def update(self, todo: Todo) -> None:
        """Persist todo if a row with its id exists; silently do nothing otherwise."""


# PUBLIC_INTERFACE
class Request(UseCaseRequest):
    """Full replacement of a Todo's mutable fields."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "3fa85f64-5717-4562-b3fc-2c963f66afa6",
                "title": "Buy groceries and supplies",
                "isComplete": True,
            }
        }
    )

    id: UUID = Field(default=EMPTY_ID, description="Id of the todo to update; omitted means the empty id")
    title: str = Field(..., description="New title, 4..159 characters")
    is_complete: bool = Field(default=False, description="New completion status")


# PUBLIC_INTERFACE
def ensure(request: Request) -> List[Notification]:
    """
    Evaluate every Update rule against request and collect the violations,
    in rule order. The request is valid iff the returned list is empty.

    Identity is not a rule here: an omitted or empty id is answered with 404
    by the handler.
    """
    notifications: List[Notification] = []
    if not len(request.title) < TITLE_MAX_EXCLUSIVE:
        notifications.append(
            Notification(field="Title", message=f"Title must have fewer than {TITLE_MAX_EXCLUSIVE} characters")
        )
    if not len(request.title) > TITLE_MIN_EXCLUSIVE:
        notifications.append(
            Notification(field="Title", message=f"Title must have more than {TITLE_MIN_EXCLUSIVE} characters")
        )
    return notifications


class ResponseData(CamelModel):
    id: UUID
    title: str
    is_complete: bool

    @classmethod
    def from_entity(cls, todo: Todo) -> "ResponseData":
        return cls(id=todo.id, title=todo.title, is_complete=todo.is_complete)


class Response(Envelope[ResponseData]):
    """Envelope returned by the Update handler."""


class UpdateHandler(Handler[Request, Response]):
    def __init__(self, repository: Repository) -> None:
        self._repository = repository

    async def handle(self, request: Request, cancellation: Optional[asyncio.Event] = None) -> Response:
        notifications = ensure(request)
        if notifications:
            return Response.failure("Invalid request", status.HTTP_400_BAD_REQUEST, notifications)

        if request.id == EMPTY_ID:
            return Response.failure("Todo not found", status.HTTP_404_NOT_FOUND)

        try:
            todo = await run_in_threadpool(self._repository.get_by_id, request.id)
            if todo is None:
                return Response.failure("Todo not found", status.HTTP_404_NOT_FOUND)
            todo.title = request.title
            todo.is_complete = request.is_complete
        except Exception as exc:
            logger.warning("Failed to prepare update of todo %s: %s", request.id, exc)
            return Response.failure(str(exc), status.HTTP_400_BAD_REQUEST)

        try:
            await run_in_threadpool(self._repository.update, todo)
        except Exception:
            logger.exception("Failed to persist update of todo %s", todo.id)
            return Response.failure("Could not update the todo", status.HTTP_500_INTERNAL_SERVER_ERROR)

        logger.info("Updated todo %s", todo.id)
        return Response.single(ResponseData.from_entity(todo), "Todo updated successfully")
