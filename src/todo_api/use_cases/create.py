"""Create use case: insert a new Todo and return its projection."""
from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from fastapi import status
from fastapi.concurrency import run_in_threadpool
from pydantic import ConfigDict, Field

from ..models import Todo
from .common import CamelModel, Envelope, Handler, UseCaseRequest

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
class Repository(ABC):
    """Data access needed to create todos."""

    @abstractmethod
    def insert(self, todo: Todo) -> Todo:
        """Persist a new Todo and return it with its durable identity."""


# PUBLIC_INTERFACE
class Request(UseCaseRequest):
    """Input for creating a Todo. Accepted as-is, no specification applies."""

    model_config = ConfigDict(
        json_schema_extra={"example": {"title": "Buy groceries", "isComplete": False}}
    )

    title: str = Field(..., description="Short title for the todo item")
    is_complete: bool = Field(default=False, description="Completion status flag")


class ResponseData(CamelModel):
    id: UUID
    title: str
    is_complete: bool

    @classmethod
    def from_entity(cls, todo: Todo) -> "ResponseData":
        return cls(id=todo.id, title=todo.title, is_complete=todo.is_complete)


class Response(Envelope[ResponseData]):
    """Envelope returned by the Create handler."""


class CreateHandler(Handler[Request, Response]):
    def __init__(self, repository: Repository) -> None:
        self._repository = repository

    async def handle(self, request: Request, cancellation: Optional[asyncio.Event] = None) -> Response:
        todo = Todo(title=request.title, is_complete=request.is_complete)
        try:
            created = await run_in_threadpool(self._repository.insert, todo)
        except Exception:
            logger.exception("Failed to persist todo %s", todo.id)
            return Response.failure("Could not create the todo", status.HTTP_500_INTERNAL_SERVER_ERROR)

        logger.info("Created todo %s", created.id)
        return Response.single(
            ResponseData.from_entity(created),
            "Todo created successfully",
            status.HTTP_201_CREATED,
        )
