"""
Service information routes: welcome message, health check and an endpoint
catalogue built from the application's OpenAPI schema.

An operation requires a bearer token when its schema lists a security
requirement, which every route depending on auth.require_principal has.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Request

from .. import config

docs_router = APIRouter(tags=["Service"])

_METHODS = ("get", "post", "put", "patch", "delete")


def _describe(operation: Dict[str, Any]) -> str:
    doc = operation.get("description") or operation.get("summary") or ""
    return doc.strip().splitlines()[0] if doc.strip() else ""


def endpoint_catalogue(schema: Dict[str, Any]) -> List[Dict[str, Any]]:
    endpoints = []
    for path, operations in schema.get("paths", {}).items():
        if not path.startswith("/api/") or path == "/api/docs":
            continue
        for method in _METHODS:
            operation = operations.get(method)
            if operation is None:
                continue
            endpoints.append({
                "method": method.upper(),
                "path": path,
                "requiresAuth": bool(operation.get("security")),
                "description": _describe(operation),
            })
    return endpoints


@docs_router.get("/")
def root() -> Dict[str, str]:
    return {"message": "welcome to JWT Pizza", "version": config.VERSION}


@docs_router.get("/health")
def health_check() -> Dict[str, str]:
    return {"status": "healthy", "version": config.VERSION}


@docs_router.get("/api/docs")
def api_docs(request: Request) -> Dict[str, Any]:
    """List every API endpoint and whether it needs a bearer token."""
    return {
        "version": config.VERSION,
        "endpoints": endpoint_catalogue(request.app.openapi()),
        "config": {"factory": request.app.state.factory.base_url},
    }
