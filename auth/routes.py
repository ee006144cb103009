"""
Auth API routes — register, login, current user.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, status

from auth.dependencies import get_current_user, get_store
from auth.jwt import issue_token
from auth.password import hash_password, verify_password
from database.helpers import find_user_by_email, find_user_by_id, new_user_id
from database.store import DocumentStore
from utils.errors import AuthError, NotFoundError, ValidationError
from utils.schemas import (
    Credentials,
    Identity,
    RegisterResponse,
    TokenResponse,
    UserRecord,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
def register(
    req: Credentials,
    store: DocumentStore = Depends(get_store),
) -> Dict[str, Any]:
    """Register a new user and hand back a token for it."""
    document = store.load()

    if find_user_by_email(document, req.email) is not None:
        raise ValidationError("User already exists")

    user = UserRecord(
        id=new_user_id(document),
        email=req.email,
        password_hash=hash_password(req.password),
    )
    document.users.append(user)
    store.save(document)

    logger.info("Registered user %s (%s)", user.email, user.id)
    return {
        "message": "User registered successfully",
        "token": issue_token(Identity(id=user.id, email=user.email)),
    }


@router.post("/login", response_model=TokenResponse)
def login(
    req: Credentials,
    store: DocumentStore = Depends(get_store),
) -> Dict[str, Any]:
    """Login with email + password."""
    user = find_user_by_email(store.load(), req.email)

    if user is None or not verify_password(req.password, user.password_hash):
        logger.info("Rejected login for %s", req.email)
        raise AuthError("Invalid email or password")

    logger.info("Login: %s (%s)", user.email, user.id)
    return {"token": issue_token(Identity(id=user.id, email=user.email))}


@router.get("/user", response_model=Identity)
def current_user(
    identity: Identity = Depends(get_current_user),
    store: DocumentStore = Depends(get_store),
) -> Dict[str, Any]:
    """Return the caller's own record, without the password hash."""
    user = find_user_by_id(store.load(), identity.id)
    if user is None:
        raise NotFoundError("User not found")
    return {"id": user.id, "email": user.email}
