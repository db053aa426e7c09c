import logging
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

request_id_context: ContextVar[str] = ContextVar("request_id", default="-")

logger = logging.getLogger("app")


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Store a per-request id in a context variable so log records can carry it,
    and echo it back in the X-Request-ID response header.

    Unhandled errors are logged here, while the id is still set, and turned
    into an opaque 500.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        token = request_id_context.set(request_id)
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            response = JSONResponse(status_code=500, content="Server Error")
        finally:
            request_id_context.reset(token)

        response.headers["X-Request-ID"] = request_id
        return response
