"""
Response middleware for the books API.
"""
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware


class JSONContentTypeMiddleware(BaseHTTPMiddleware):
    """Stamp every response with a JSON content type."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["Content-Type"] = "application/json"
        return response
