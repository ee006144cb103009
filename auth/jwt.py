"""
JWT-style token creation and verification.

Tokens are URL-safe base64 JSON payloads signed with HMAC-SHA256::

    urlsafe_b64(payload) + "." + hex(hmac_sha256(secret, payload))

The payload carries the identity (``id``, ``email``) plus ``iat``/``exp``.
Secret and lifetime come from ``config.secret_key`` and
``config.token_ttl_seconds`` (env vars: ``SECRET_KEY``, ``TOKEN_TTL_SECONDS``).
"""

from __future__ import annotations

import binascii
import hashlib
import hmac
import json
import logging
import time
from base64 import urlsafe_b64decode, urlsafe_b64encode
from typing import Optional

from pydantic import ValidationError as SchemaError

from config.settings import config
from utils.errors import AuthError
from utils.schemas import Identity

logger = logging.getLogger(__name__)


def _sign(raw: bytes) -> str:
    return hmac.new(config.secret_key.encode(), raw, hashlib.sha256).hexdigest()


def issue_token(identity: Identity, ttl_seconds: Optional[int] = None) -> str:
    """Create a signed token for ``identity`` valid for ``ttl_seconds``."""
    ttl = config.token_ttl_seconds if ttl_seconds is None else ttl_seconds
    now = int(time.time())
    payload = {
        "id": identity.id,
        "email": identity.email,
        "iat": now,
        "exp": now + ttl,
    }
    raw = json.dumps(payload, separators=(",", ":")).encode()
    return urlsafe_b64encode(raw).decode().rstrip("=") + "." + _sign(raw)


def verify_token(token: str, now: Optional[float] = None) -> Identity:
    """
    Verify token and return the identity it was issued for.

    Raises ``AuthError`` on malformed, forged or expired tokens.
    """
    try:
        encoded, sig = token.split(".", 1)
        raw = urlsafe_b64decode(encoded + "=" * (-len(encoded) % 4))
        if not hmac.compare_digest(sig, _sign(raw)):
            raise ValueError("bad signature")
        payload = json.loads(raw)
        current = time.time() if now is None else now
        if payload.get("exp", 0) <= current:
            raise ValueError("token expired")
        return Identity.model_validate(payload)
    except (ValueError, TypeError, AttributeError, binascii.Error, SchemaError) as exc:
        logger.debug("Token rejected: %s", exc)
        raise AuthError("Invalid token.") from exc
