"""
Building blocks shared by every use case: the request base class, the
validation notification, the response envelope and the handler contract.
"""
from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import Generic, List, Optional, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator
from pydantic.alias_generators import to_camel

TData = TypeVar("TData")
TRequest = TypeVar("TRequest", bound="UseCaseRequest")
TResponse = TypeVar("TResponse", bound="Envelope")


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys (isComplete, dataList, ...)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# PUBLIC_INTERFACE
class UseCaseRequest(CamelModel):
    """
    Immutable input of a use case. The mediator routes a request to its
    handler by the request's concrete type.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# PUBLIC_INTERFACE
class Notification(BaseModel):
    """A single validation violation: the offending field and a readable message."""

    model_config = ConfigDict(frozen=True)

    field: str = Field(..., description="Name of the field that failed validation")
    message: str = Field(..., description="Human readable description of the violation")


# PUBLIC_INTERFACE
class Envelope(CamelModel, Generic[TData]):
    """
    Uniform result of every handler.

    Exactly one of data/data_list is populated on success, neither on failure.
    is_success is derived from status and is never stored.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    message: str = Field(..., description="Human readable outcome summary")
    status: int = Field(..., description="Result code mirrored as the HTTP status")
    notifications: List[Notification] = Field(default_factory=list, description="Validation violations")
    data: Optional[TData] = Field(default=None, description="Single payload")
    data_list: Optional[List[TData]] = Field(default=None, description="Payload collection")

    @computed_field(alias="isSuccess")  # type: ignore[prop-decorator]
    @property
    def is_success(self) -> bool:
        return 200 <= self.status < 300

    @model_validator(mode="after")
    def _one_payload_only(self) -> "Envelope":
        if self.data is not None and self.data_list is not None:
            raise ValueError("data and data_list cannot both be populated")
        return self

    @classmethod
    def failure(cls, message: str, status: int, notifications: Optional[Sequence[Notification]] = None):
        """Build a failure envelope without any payload."""
        return cls(message=message, status=status, notifications=list(notifications or []))

    @classmethod
    def single(cls, data: TData, message: str, status: int = 200):
        """Build a success envelope carrying one payload."""
        return cls(message=message, status=status, data=data)

    @classmethod
    def many(cls, items: Sequence[TData], message: str, status: int = 200):
        """Build a success envelope carrying a payload collection (possibly empty)."""
        return cls(message=message, status=status, data_list=list(items))


# PUBLIC_INTERFACE
class Handler(ABC, Generic[TRequest, TResponse]):
    """
    Contract of a use-case handler: validate, fetch/mutate, persist, respond.

    Implementations must translate every repository failure into an envelope;
    no exception is allowed to escape handle().
    """

    @abstractmethod
    async def handle(self, request: TRequest, cancellation: Optional[asyncio.Event] = None) -> TResponse:
        """Run the use case for request and return its envelope."""
        raise NotImplementedError
