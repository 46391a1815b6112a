"""
Acting-user middleware - exposes the X-User-ID header on request state.
"""
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from typing import Callable

ACTING_USER_HEADER = "x-user-id"


class ActingUserMiddleware(BaseHTTPMiddleware):
    """Copies the caller-supplied user id header into request.state.

    The header is not verified against any session; identity is owned by
    Firebase on the client.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        acting_user_id = (request.headers.get(ACTING_USER_HEADER) or "").strip()
        request.state.acting_user_id = acting_user_id or None

        response = await call_next(request)
        return response
