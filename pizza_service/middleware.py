"""
FastAPI middleware that resolves the caller behind a bearer token.
"""

import logging
from typing import Callable, Optional

from fastapi import Request
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from .auth import extract_bearer_token, resolve_principal
from .authorization import Principal

logger = logging.getLogger(__name__)


class AuthTokenMiddleware(BaseHTTPMiddleware):
    """
    Middleware that attaches the authenticated principal to each request.

    The principal is stored in ``request.state.principal``. Requests without
    a token, or with an invalid or revoked one, get ``None``; it is up to each
    route to decide whether that is acceptable (see auth.require_principal).
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        token = extract_bearer_token(request.headers.get("Authorization"))
        request.state.principal = None

        if token:
            principal = await run_in_threadpool(self._resolve, request, token)
            request.state.principal = principal
            if principal is None:
                logger.debug("Ignoring invalid token on %s %s", request.method, request.url.path)
            else:
                logger.debug("Request principal resolved: user %s", principal.id)

        return await call_next(request)

    @staticmethod
    def _resolve(request: Request, token: str) -> Optional[Principal]:
        db = request.app.state.database.session()
        try:
            return resolve_principal(db, token)
        finally:
            db.close()
