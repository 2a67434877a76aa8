from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .logging_utils import configure_logging, get_request_id, request_context
from .mediator import build_mediator
from .repositories import build_store
from .routers import todos as todos_router
from .settings import Settings, get_settings
from .use_cases.common import Envelope, Notification

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {
        "name": "todos",
        "description": "Create, retrieve, update and delete Todo items through use-case handlers.",
    },
]

_BINDING_LOCATIONS = {"body", "path", "query"}


def _binding_notifications(errors: Any) -> list:
    notifications = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in _BINDING_LOCATIONS]
        notifications.append(Notification(field=".".join(loc) or "request", message=err.get("msg", "")))
    return notifications


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application: storage backend, mediator with the four
    use cases, CORS, request correlation and the todo routes.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Todo Backend",
        description="Backend API service for managing todos through request/handler use cases.",
        version="0.1.0",
        openapi_tags=openapi_tags,
    )
    app.state.settings = settings
    app.state.store = build_store(settings)
    app.state.mediator = build_mediator(app.state.store)
    logger.info("Todo backend configured with %s persistence", settings.persistence_backend)

    # Configure CORS based on settings (.env -> CORS_ALLOW_ORIGINS), with '*' fallback
    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def correlate_request(request: Request, call_next):
        with request_context(request.headers.get(REQUEST_ID_HEADER)):
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = get_request_id()
        return response

    # Binding errors are reported in the same envelope shape as handler failures
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """
        Return request validation errors as an envelope:

            {
                "message": "Request validation failed",
                "status": 422,
                "notifications": [{"field": "...", "message": "..."}],
                "isSuccess": false
            }
        """
        result = Envelope.failure(
            "Request validation failed",
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            _binding_notifications(exc.errors()),
        )
        return JSONResponse(
            status_code=result.status,
            content=result.model_dump(mode="json", by_alias=True, exclude_none=True),
        )

    # PUBLIC_INTERFACE
    @app.get("/", summary="Health Check", tags=["health"])
    def health_check():
        """
        Health check endpoint.

        Returns:
            A JSON object indicating service health.
        """
        return {"message": "Healthy", "backend": settings.persistence_backend}

    app.include_router(todos_router.router)
    return app


app = create_app()
