"""
Pydantic schemas for the posts service.

Stored records use the camelCase keys of the on-disk document
(``passwordHash``, ``authorId``) as aliases over snake_case attributes.
"""

from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field


# ═══════════════════════════════════════════════════════════════════════════════
# Persisted document
# ═══════════════════════════════════════════════════════════════════════════════


class UserRecord(BaseModel):
    """A stored account; unknown keys are kept so rewrites never drop them."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: int
    email: str
    password_hash: str = Field(alias="passwordHash")


class PostRecord(BaseModel):
    """A post: ``id`` and ``authorId`` plus whatever fields the author sent."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str
    author_id: int = Field(alias="authorId")

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class Document(BaseModel):
    """Root of the JSON datastore; the sole unit of persistence."""

    users: List[UserRecord] = Field(default_factory=list)
    posts: Dict[str, PostRecord] = Field(default_factory=dict)

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


# ═══════════════════════════════════════════════════════════════════════════════
# Auth
# ═══════════════════════════════════════════════════════════════════════════════


class Identity(BaseModel):
    """Decoded token subject attached to an authenticated request."""

    id: int
    email: str


class Credentials(BaseModel):
    email: str
    password: str


class RegisterResponse(BaseModel):
    message: str
    token: str


class TokenResponse(BaseModel):
    token: str


# ═══════════════════════════════════════════════════════════════════════════════
# Posts
# ═══════════════════════════════════════════════════════════════════════════════


class PostPage(BaseModel):
    page: int
    limit: int
    total: int
    data: List[Dict[str, Any]]


class DeletedPostResponse(BaseModel):
    message: str
    deletedPost: Dict[str, Any]
