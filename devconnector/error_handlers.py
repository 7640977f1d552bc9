"""
Exception handlers mapping application errors onto the API's response shapes.

- Request validation failures answer 400 with ``{"errors": [{"msg", "param"}]}``.
- ``APIError`` subclasses answer with their own status and body.
- Anything else is logged with its traceback and answers a generic 500.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from devconnector.errors import APIError


logger = logging.getLogger(__name__)

SERVER_ERROR_MESSAGE = "Server error"


def _format_validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, Any]]:
    formatted: list[dict[str, Any]] = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path", "header")]
        param = loc[-1] if loc else None
        if error.get("type") == "missing" and param:
            msg = f"{param} is required"
        else:
            msg = error.get("msg", "Invalid value")
        item: dict[str, Any] = {"msg": msg}
        if param:
            item["param"] = param
        formatted.append(item)
    return formatted


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = _format_validation_errors(list(exc.errors()))
        logger.info("validation_error path=%s errors=%s", request.url.path, errors)
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"errors": errors})

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        logger.info("api_error path=%s status=%s msg=%s", request.url.path, exc.status_code, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_content())

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        # Full details stay in the server log; the client gets a generic message.
        logger.exception("unhandled_exception path=%s error_type=%s", request.url.path, type(exc).__name__)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"msg": SERVER_ERROR_MESSAGE},
        )
