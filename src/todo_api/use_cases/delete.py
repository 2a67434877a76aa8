"""Delete use case: remove a Todo by id; deleting a missing id is not an error."""
from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from fastapi import status
from fastapi.concurrency import run_in_threadpool
from pydantic import Field

from ..models import EMPTY_ID
from .common import CamelModel, Envelope, Handler, UseCaseRequest

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
class Repository(ABC):
    """Data access needed to delete todos."""

    @abstractmethod
    def delete(self, todo_id: UUID) -> None:
        """Remove the Todo with todo_id if present; silently do nothing otherwise."""


# PUBLIC_INTERFACE
class Request(UseCaseRequest):
    id: UUID = Field(..., description="Id of the todo to delete")


class ResponseData(CamelModel):
    id: UUID


class Response(Envelope[ResponseData]):
    """Envelope returned by the Delete handler."""


class DeleteHandler(Handler[Request, Response]):
    def __init__(self, repository: Repository) -> None:
        self._repository = repository

    async def handle(self, request: Request, cancellation: Optional[asyncio.Event] = None) -> Response:
        if request.id == EMPTY_ID:
            return Response.failure("Todo not found", status.HTTP_404_NOT_FOUND)

        try:
            await run_in_threadpool(self._repository.delete, request.id)
        except Exception as exc:
            logger.warning("Failed to delete todo %s: %s", request.id, exc)
            return Response.failure(str(exc), status.HTTP_400_BAD_REQUEST)

        logger.info("Deleted todo %s", request.id)
        return Response.single(
            ResponseData(id=request.id),
            "Todo deleted successfully",
            status.HTTP_204_NO_CONTENT,
        )
