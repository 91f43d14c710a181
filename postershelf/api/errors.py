"""Map domain errors to HTTP responses.

One policy for the whole API: missing resources are 404, resources owned by
someone else are 403.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from postershelf.errors import AppError, ErrorKind, UnauthorizedError

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.DUPLICATE_KEY: status.HTTP_409_CONFLICT,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.ALREADY_ATTACHED: status.HTTP_409_CONFLICT,
    ErrorKind.NOT_ATTACHED: status.HTTP_409_CONFLICT,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    status_code = STATUS_BY_KIND[exc.kind]
    headers = None
    detail = exc.message

    if isinstance(exc, UnauthorizedError):
        if exc.authenticated:
            status_code = status.HTTP_403_FORBIDDEN
        else:
            headers = {"WWW-Authenticate": "Bearer"}
    elif exc.kind is ErrorKind.INTERNAL:
        logger.error(f"Internal error on {request.method} {request.url.path}")
        detail = "the server encountered a problem and could not process your request"

    return JSONResponse(
        status_code=status_code,
        content={"detail": detail, "kind": exc.kind.value},
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
