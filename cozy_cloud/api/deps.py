"""
Request-scoped dependencies.
"""
from typing import Optional

from fastapi import Header, Request

from ..services.backend import BackendClient


def get_backend(request: Request, authorization: Optional[str] = Header(None)) -> BackendClient:
    """The application's backend client, acting as the caller's user."""
    backend: BackendClient = request.app.state.backend
    token = None
    if authorization and authorization.lower().startswith("bearer "):
        token = authorization[7:].strip() or None
    return backend.with_token(token)
