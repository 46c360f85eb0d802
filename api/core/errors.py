"""
The one error type services raise.

Missing rows, duplicate emails, bad credentials and ownership failures are
all the same condition: the caller passed something we cannot act on. The
status code only tells the HTTP layer how to render it.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class InvalidArgumentError(ValueError):
    def __init__(self, message: str, *, status_code: int = status.HTTP_400_BAD_REQUEST) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


async def invalid_argument_handler(request: Request, exc: InvalidArgumentError) -> JSONResponse:
    logger.info(
        "request_rejected method=%s path=%s status=%s detail=%s",
        request.method,
        request.url.path,
        exc.status_code,
        exc.message,
    )
    # Same body shape as FastAPI's HTTPException responses.
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def install_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InvalidArgumentError, invalid_argument_handler)
