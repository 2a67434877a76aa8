"""Retrieve use case: fetch one Todo by id, or every Todo when no id is given."""
from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from fastapi import status
from fastapi.concurrency import run_in_threadpool
from pydantic import Field

from ..models import EMPTY_ID, Todo
from .common import CamelModel, Envelope, Handler, UseCaseRequest

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
class Repository(ABC):
    """
    Read-only data access. Returned entities are detached copies; mutating
    them never affects stored state.
    """

    @abstractmethod
    def get_by_id(self, todo_id: UUID) -> Optional[Todo]:
        """Return the Todo with todo_id, or None if absent."""

    @abstractmethod
    def get_all(self, todo_id: Optional[UUID] = None) -> List[Todo]:
        """
        Return every Todo. When todo_id is given, return only the matching
        Todo as a singleton list, or an empty list if absent.
        """


# PUBLIC_INTERFACE
class Request(UseCaseRequest):
    """Input for retrieving todos. EMPTY_ID selects list-all mode."""

    id: UUID = Field(default=EMPTY_ID, description="Todo id, or the empty id to list all")


class ResponseData(CamelModel):
    id: UUID
    title: str
    is_complete: bool

    @classmethod
    def from_entity(cls, todo: Todo) -> "ResponseData":
        return cls(id=todo.id, title=todo.title, is_complete=todo.is_complete)


class Response(Envelope[ResponseData]):
    """Envelope returned by the Retrieve handler."""


class RetrieveHandler(Handler[Request, Response]):
    def __init__(self, repository: Repository) -> None:
        self._repository = repository

    async def handle(self, request: Request, cancellation: Optional[asyncio.Event] = None) -> Response:
        if request.id == EMPTY_ID:
            return await self._list_all()

        try:
            todo = await run_in_threadpool(self._repository.get_by_id, request.id)
        except Exception:
            logger.exception("Failed to fetch todo %s", request.id)
            return Response.failure("Could not retrieve the todo", status.HTTP_500_INTERNAL_SERVER_ERROR)

        if todo is None:
            return Response.failure("Todo not found", status.HTTP_404_NOT_FOUND)
        return Response.single(ResponseData.from_entity(todo), "Todo retrieved successfully")

    async def _list_all(self) -> Response:
        try:
            todos = await run_in_threadpool(self._repository.get_all)
        except Exception:
            logger.exception("Failed to list todos")
            return Response.failure("Could not retrieve todos", status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response.many([ResponseData.from_entity(t) for t in todos], "Todos retrieved successfully")
