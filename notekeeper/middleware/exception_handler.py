"""Render NotekeeperException as a JSON error body."""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from ..exceptions import NotekeeperException

logger = logging.getLogger(__name__)


async def notekeeper_exception_handler(request: Request, exc: NotekeeperException) -> JSONResponse:
    """Return ``exc.to_dict()`` with the exception's status code.

    Client errors are logged as warnings, storage and internal errors as errors.
    """
    level = logging.ERROR if exc.status_code >= 500 else logging.WARNING
    logger.log(
        level,
        "%s %s failed: %s",
        request.method,
        request.url.path,
        exc.message,
        extra={
            "error_code": exc.error_code.value,
            "status_code": exc.status_code,
            "details": exc.details,
        },
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())
