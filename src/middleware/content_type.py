"""
Middleware stamping a JSON content type on every response
"""

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

JSON_CONTENT_TYPE = "application/json"


class JSONContentTypeMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["Content-Type"] = JSON_CONTENT_TYPE
        return response
