"""
Error Types for Pizza Service
=============================

Services raise these exceptions; the handlers registered by
register_exception_handlers() turn them into JSON responses of the form
``{"message": "..."}`` with the matching status code.

Taxonomy:
---------
- ValidationError (400): a required field is missing or empty
- AuthenticationError (401): missing, invalid or revoked bearer token
- AuthorizationError (403): the principal may not perform the action
- NotFoundError (404): a referenced record does not exist
- ConflictError (409): uniqueness violation (e.g. duplicate email)
- RateLimitExceeded (429): slowapi limit hit on login or registration
- UpstreamError (500): the pizza factory rejected or failed the order

Extra keyword arguments become additional response fields, which is how a
fulfillment failure carries ``followLinkToEndChaos`` back to the client.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class StatusCodeError(Exception):
    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None, **extra: Any):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.extra = {k: v for k, v in extra.items() if v is not None}

    def to_body(self) -> Dict[str, Any]:
        return {"message": self.message, **self.extra}


class ValidationError(StatusCodeError):
    status_code = 400


class AuthenticationError(StatusCodeError):
    status_code = 401

    def __init__(self, message: str = "unauthorized", **extra: Any):
        super().__init__(message, **extra)


class AuthorizationError(StatusCodeError):
    status_code = 403


class NotFoundError(StatusCodeError):
    status_code = 404


class ConflictError(StatusCodeError):
    status_code = 409


class UpstreamError(StatusCodeError):
    status_code = 500


# =============================================================================
# Exception Handlers
# =============================================================================

async def _status_code_error_handler(request: Request, exc: StatusCodeError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail
    if exc.status_code == 404 and message == "Not Found":
        message = "unknown endpoint"
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": message},
        headers=getattr(exc, "headers", None),
    )


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    fields = [".".join(str(p) for p in err.get("loc", ()) if p != "body") for err in errors]
    fields = [f for f in fields if f]
    message = "invalid request"
    if fields:
        message = f"invalid request: {', '.join(fields)}"
    return JSONResponse(status_code=400, content={"message": message})


async def _rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.warning("Rate limit exceeded on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=429, content={"message": f"too many requests: {exc.detail}"})


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "internal server error"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StatusCodeError, _status_code_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
