from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Dict, Optional, Type

from .repositories import TodoStore
from .use_cases import create, delete, retrieve, update
from .use_cases.common import Envelope, Handler, UseCaseRequest

logger = logging.getLogger(__name__)

HandlerFactory = Callable[[], Handler[Any, Any]]


class HandlerNotFoundError(LookupError):
    """Raised when no handler is registered for a request type."""


# PUBLIC_INTERFACE
class Mediator:
    """
    Routes a request value to the single handler registered for its type.

    Handlers are registered as factories so each request gets a fresh
    handler instance; the response is returned unchanged.
    """

    def __init__(self) -> None:
        self._factories: Dict[Type[UseCaseRequest], HandlerFactory] = {}

    def register(self, request_type: Type[UseCaseRequest], factory: HandlerFactory) -> None:
        if request_type in self._factories:
            raise ValueError(f"A handler is already registered for {request_type.__qualname__}")
        self._factories[request_type] = factory

    def is_registered(self, request_type: Type[UseCaseRequest]) -> bool:
        return request_type in self._factories

    async def send(self, request: UseCaseRequest, cancellation: Optional[asyncio.Event] = None) -> Envelope:
        """Dispatch request by its exact type and await the handler's envelope."""
        factory = self._factories.get(type(request))
        if factory is None:
            raise HandlerNotFoundError(f"No handler registered for {type(request).__qualname__}")
        handler = factory()
        logger.debug("Dispatching %s to %s", type(request).__module__, type(handler).__name__)
        return await handler.handle(request, cancellation)


# PUBLIC_INTERFACE
def build_mediator(store: TodoStore) -> Mediator:
    """
    Register the four todo use cases against store, which must implement
    the Create, Retrieve, Update and Delete repository contracts.
    """
    mediator = Mediator()
    mediator.register(create.Request, lambda: create.CreateHandler(store))
    mediator.register(retrieve.Request, lambda: retrieve.RetrieveHandler(store))
    mediator.register(update.Request, lambda: update.UpdateHandler(store))
    mediator.register(delete.Request, lambda: delete.DeleteHandler(store))
    return mediator
