"""
Posts API routes — list, create, update, delete.

Every handler loads the document once and saves it at most once.  Ownership
and existence checks run before any mutation, so a rejected request leaves
the stored document untouched.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query, status

from auth.dependencies import get_current_user, get_store
from config.settings import config
from database.helpers import build_post, new_post_id, paginate, strip_reserved
from database.store import DocumentStore
from utils.errors import AuthzError, NotFoundError
from utils.schemas import (
    DeletedPostResponse,
    Document,
    Identity,
    PostPage,
    PostRecord,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["posts"])


def _owned_post(document: Document, post_id: str, identity: Identity) -> PostRecord:
    """Fetch a post the caller may mutate; 404 before 403."""
    post = document.posts.get(post_id)
    if post is None:
        raise NotFoundError("Post not found")
    if post.author_id != identity.id:
        logger.info("User %s denied access to post %s", identity.id, post_id)
        raise AuthzError("Access denied.")
    return post


@router.get("", response_model=PostPage)
def list_posts(
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    store: DocumentStore = Depends(get_store),
) -> Dict[str, Any]:
    """All posts, one page at a time."""
    if limit is None:
        limit = config.default_page_limit
    return paginate(store.load(), page, limit)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_post(
    fields: Dict[str, Any] = Body(default_factory=dict),
    identity: Identity = Depends(get_current_user),
    store: DocumentStore = Depends(get_store),
) -> Dict[str, Any]:
    """Create a post owned by the caller."""
    document = store.load()
    post = build_post(new_post_id(document), identity.id, fields)
    document.posts[post.id] = post
    store.save(document)

    logger.info("User %s created post %s", identity.id, post.id)
    return post.to_json()


@router.patch("/{post_id}")
def update_post(
    post_id: str,
    fields: Dict[str, Any] = Body(default_factory=dict),
    identity: Identity = Depends(get_current_user),
    store: DocumentStore = Depends(get_store),
) -> Dict[str, Any]:
    """Merge the given fields into the post; unmentioned fields are kept."""
    document = store.load()
    post = _owned_post(document, post_id, identity)

    merged = {**post.to_json(), **strip_reserved(fields)}
    updated = build_post(post.id, post.author_id, merged)
    document.posts[post_id] = updated
    store.save(document)

    logger.info("User %s updated post %s", identity.id, post_id)
    return updated.to_json()


@router.put("/{post_id}")
def replace_post(
    post_id: str,
    fields: Dict[str, Any] = Body(default_factory=dict),
    identity: Identity = Depends(get_current_user),
    store: DocumentStore = Depends(get_store),
) -> Dict[str, Any]:
    """Replace every caller-supplied field of the post; ``id`` and ``authorId`` stay."""
    document = store.load()
    post = _owned_post(document, post_id, identity)

    replaced = build_post(post.id, post.author_id, fields)
    document.posts[post_id] = replaced
    store.save(document)

    logger.info("User %s replaced post %s", identity.id, post_id)
    return replaced.to_json()


@router.delete("/{post_id}", response_model=DeletedPostResponse)
def delete_post(
    post_id: str,
    identity: Identity = Depends(get_current_user),
    store: DocumentStore = Depends(get_store),
) -> Dict[str, Any]:
    """Remove the post and return it."""
    document = store.load()
    _owned_post(document, post_id, identity)

    deleted = document.posts.pop(post_id)
    store.save(document)

    logger.info("User %s deleted post %s", identity.id, post_id)
    return {"message": "Post deleted successfully", "deletedPost": deleted.to_json()}
