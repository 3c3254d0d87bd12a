"""
Uniform JSON error bodies.

Every failure leaves the API as {"message": <human text>, "error": <cause>}.
"""
from typing import Dict, Mapping, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

DEFAULT_DECODE_MESSAGE = "Unable to decode request."


def api_error(status_code: int, message: str, exc: Exception | str) -> HTTPException:
    """Build the HTTPException a route raises to answer with an error body."""
    return HTTPException(
        status_code=status_code,
        detail={"message": message, "error": str(exc)},
    )


def describe_validation_errors(errors) -> str:
    parts = []
    for err in errors:
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if isinstance(exc.detail, dict):
        body = exc.detail
    else:
        # routing failures (unknown path, wrong method) carry a plain string
        body = {"message": str(exc.detail), "error": str(exc.detail)}
    return JSONResponse(status_code=exc.status_code, content=body, headers=exc.headers)


def make_validation_handler(decode_messages: Mapping[str, str]):
    """Answer undecodable request bodies with 400 and the route's own message."""

    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        route = request.scope.get("route")
        message = decode_messages.get(getattr(route, "name", ""), DEFAULT_DECODE_MESSAGE)
        return JSONResponse(
            status_code=400,
            content={"message": message, "error": describe_validation_errors(exc.errors())},
        )

    return validation_exception_handler


def register_error_handlers(app: FastAPI, decode_messages: Optional[Dict[str, str]] = None) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, make_validation_handler(decode_messages or {}))
