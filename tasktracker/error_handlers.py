import logging

from fastapi import FastAPI
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from starlette.requests import Request
from starlette.responses import JSONResponse

from tasktracker.errors import AuthError, TaskNotFound, TransientStoreError
from tasktracker.utils.auth import extract_bearer

logger = logging.getLogger(__name__)
auth_logger = logging.getLogger("tasktracker.auth")

UNAUTHENTICATED = {"detail": "Not authenticated"}
NOT_FOUND = {"detail": "Task not found"}
UNAVAILABLE = {"detail": "Service temporarily unavailable"}
INTERNAL_ERROR = {"detail": "Internal server error"}


def setup_error_handlers(app: FastAPI) -> None:
    """Translate domain errors to their wire responses."""

    @app.exception_handler(AuthError)
    async def auth_error_handler(request: Request, exc: AuthError):
        auth_logger.info(
            "rejected bearer credential on %s %s: %s",
            request.method,
            request.url.path,
            exc.reason.value,
        )
        # same body for every reason
        return JSONResponse(
            status_code=401,
            content=UNAUTHENTICATED,
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        # FastAPI decodes JSON bodies before dependencies run, so an unparseable
        # body lands here without the guard having seen the request.
        verifier = request.app.state.context.verifier
        try:
            verifier.verify(extract_bearer(request.headers.get("authorization")))
        except AuthError as auth_exc:
            return await auth_error_handler(request, auth_exc)
        return await request_validation_exception_handler(request, exc)

    @app.exception_handler(TaskNotFound)
    async def not_found_handler(request: Request, exc: TaskNotFound):
        return JSONResponse(status_code=404, content=NOT_FOUND)

    @app.exception_handler(TransientStoreError)
    async def unavailable_handler(request: Request, exc: TransientStoreError):
        logger.warning("store unavailable for %s %s", request.method, request.url.path)
        return JSONResponse(status_code=503, content=UNAVAILABLE)

    # Generic error handler to return JSON errors for unexpected exceptions
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception("unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(status_code=500, content=INTERNAL_ERROR)
