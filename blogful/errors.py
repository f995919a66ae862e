"""
Centralised error responders.

Every error leaves the API in the same envelope::

    {"error": {"message": "..."}}

Routers raise ``fastapi.HTTPException`` with the message as ``detail``;
unmatched paths arrive here as Starlette's own 404 and are reported as
``Path Not Found``.  Anything uncaught becomes a 500 whose detail is only
exposed outside production.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from blogful.config import settings

logger = logging.getLogger(__name__)

PATH_NOT_FOUND = "Path Not Found"


def error_body(message: str, **extra) -> dict:
    return {"error": {"message": message, **extra}}


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail
    # Starlette's router raises a bare 404 for paths no route matches.
    if exc.status_code == 404 and message == "Not Found":
        message = PATH_NOT_FOUND
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(message)),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report the first invalid input (bad JSON, non-integer id, wrong type) as a 400."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = [
        part for part in first.get("loc", ())
        if isinstance(part, str) and part not in ("body", "path", "query")
    ]
    field = loc[-1] if loc else "body"
    return JSONResponse(
        status_code=400,
        content=error_body(f"Invalid '{field}': {first.get('msg', 'invalid value')}"),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    if settings.is_production:
        body = error_body("server error")
    else:
        body = error_body(str(exc) or exc.__class__.__name__, type=exc.__class__.__name__)
    return JSONResponse(status_code=500, content=body)


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
