"""
FastAPI dependencies for authentication and storage.

Provides ``get_store`` and ``get_current_user`` dependencies that are used
across all routes.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Header, Request

from auth.jwt import verify_token
from database.store import DocumentStore
from utils.errors import AuthError
from utils.schemas import Identity


def get_store(request: Request) -> DocumentStore:
    """The store the app was created with."""
    return request.app.state.store


def get_current_user(
    authorization: Optional[str] = Header(None, alias="Authorization"),
) -> Identity:
    """
    Extract and verify the Bearer token, returning the authenticated
    ``Identity``.  The handler never runs when this raises.

    A missing header is "no token"; a header that is present but not a
    usable ``Bearer <token>`` is an invalid token.
    """
    if not authorization:
        raise AuthError("Access denied. No token provided.")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthError("Invalid token.")
    return verify_token(token.strip())
