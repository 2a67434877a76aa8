from __future__ import annotations

from typing import Dict, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, Response

from ..mediator import Mediator
from ..use_cases import create, delete, retrieve, update
from ..use_cases.common import Envelope

TODOS_PREFIX = "/api/v1/todos"

router = APIRouter(
    prefix=TODOS_PREFIX,
    tags=["todos"],
)


def get_mediator(request: Request) -> Mediator:
    """
    Dependency returning the mediator wired at application startup.
    """
    return request.app.state.mediator


def envelope_response(result: Envelope, headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    """
    Serialize an envelope as JSON, using its own status as the HTTP status code.
    """
    return JSONResponse(
        status_code=result.status,
        content=result.model_dump(mode="json", by_alias=True, exclude_none=True),
        headers=headers,
    )


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=create.Response,
    status_code=status.HTTP_201_CREATED,
    summary="Create Todo",
    description="Create a new Todo item and return the created resource.",
    responses={
        201: {"description": "Todo created successfully"},
        500: {"description": "Storage failure", "model": create.Response},
    },
)
async def create_todo(payload: create.Request, mediator: Mediator = Depends(get_mediator)) -> Response:
    """
    Create a new Todo. The Location header points at the created resource.
    """
    result = await mediator.send(payload)
    if not result.is_success:
        return envelope_response(result)
    return envelope_response(result, headers={"Location": f"{TODOS_PREFIX}/{result.data.id}"})


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=retrieve.Response,
    summary="List Todos",
    description="List every Todo item.",
    responses={
        200: {"description": "List retrieved successfully"},
        500: {"description": "Storage failure", "model": retrieve.Response},
    },
)
async def list_todos(mediator: Mediator = Depends(get_mediator)) -> Response:
    """
    List all todos (the retrieve use case in list mode).
    """
    return envelope_response(await mediator.send(retrieve.Request()))


# PUBLIC_INTERFACE
@router.get(
    "/{todo_id}",
    response_model=retrieve.Response,
    summary="Get Todo",
    description="Get a single Todo item by ID.",
    responses={
        200: {"description": "Todo found"},
        404: {"description": "Todo not found", "model": retrieve.Response},
    },
)
async def get_todo(todo_id: UUID, mediator: Mediator = Depends(get_mediator)) -> Response:
    """
    Retrieve a single Todo item by its ID. The empty id lists all todos.
    """
    return envelope_response(await mediator.send(retrieve.Request(id=todo_id)))


# PUBLIC_INTERFACE
@router.put(
    "",
    response_model=update.Response,
    summary="Update Todo",
    description="Replace the title and completion flag of an existing Todo item.",
    responses={
        200: {"description": "Todo updated"},
        400: {"description": "Validation error", "model": update.Response},
        404: {"description": "Todo not found", "model": update.Response},
    },
)
async def update_todo(payload: update.Request, mediator: Mediator = Depends(get_mediator)) -> Response:
    """
    Full update of a Todo item identified by the id in the body.
    """
    return envelope_response(await mediator.send(payload))


# PUBLIC_INTERFACE
@router.delete(
    "/{todo_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Todo",
    description="Delete a Todo item by ID. Deleting an unknown ID is not an error.",
    responses={
        204: {"description": "Todo deleted"},
        404: {"description": "Empty id supplied", "model": delete.Response},
    },
)
async def delete_todo(todo_id: UUID, mediator: Mediator = Depends(get_mediator)) -> Response:
    """
    Delete a Todo. Returns 204 with no body on success, the envelope otherwise.
    """
    result = await mediator.send(delete.Request(id=todo_id))
    if result.is_success:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return envelope_response(result)
