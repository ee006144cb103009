"""
Document helper functions — lookups, id allocation and pagination over a
loaded ``Document``.

All of these operate on an in-memory document; callers own the
``load`` / ``save`` around them.
"""

from __future__ import annotations

import time
from typing import Any, Dict, Iterable, List, Optional

from utils.schemas import Document, PostRecord, UserRecord

# Keys the service owns on a post; caller-supplied values for them are dropped.
RESERVED_POST_KEYS = frozenset({"id", "authorId", "author_id"})


def _now_ms() -> int:
    return int(time.time() * 1000)


def _allocate(taken: Iterable[int]) -> int:
    """Millisecond timestamp, bumped past any id already in ``taken``."""
    used = set(taken)
    candidate = _now_ms()
    while candidate in used:
        candidate += 1
    return candidate


def new_user_id(document: Document) -> int:
    return _allocate(u.id for u in document.users)


def new_post_id(document: Document) -> str:
    taken = (int(k) for k in document.posts if k.isdecimal())
    return str(_allocate(taken))


def find_user_by_email(document: Document, email: str) -> Optional[UserRecord]:
    """Case-sensitive linear scan, first match wins."""
    for user in document.users:
        if user.email == email:
            return user
    return None


def find_user_by_id(document: Document, user_id: int) -> Optional[UserRecord]:
    for user in document.users:
        if user.id == user_id:
            return user
    return None


def strip_reserved(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in fields.items() if k not in RESERVED_POST_KEYS}


def build_post(post_id: str, author_id: int, fields: Dict[str, Any]) -> PostRecord:
    return PostRecord.model_validate(
        {"id": post_id, "authorId": author_id, **strip_reserved(fields)}
    )


def paginate(document: Document, page: int, limit: int) -> Dict[str, Any]:
    """
    Slice posts in mapping key order.

    Pages are 1-based; a page past the end yields an empty ``data`` list.
    """
    posts: List[Dict[str, Any]] = [p.to_json() for p in document.posts.values()]
    start = (page - 1) * limit
    return {
        "page": page,
        "limit": limit,
        "total": len(posts),
        "data": posts[start:start + limit],
    }
