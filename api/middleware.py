"""Request-id middleware using ContextVar.

Reads the request id from the X-Request-ID header (or generates one). The id
is stored in a ContextVar so that any downstream code, log filters included,
can call get_request_id() without explicit parameter passing. The id is
echoed back on the response.
"""

import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from core.observability.logging_setup import current_request_id

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Bind a request id for the duration of the request.

    Priority:
    1. X-Request-ID header (explicit)
    2. A fresh uuid4 hex
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex

        token = current_request_id.set(request_id)
        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            current_request_id.reset(token)
