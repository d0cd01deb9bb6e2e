"""Helpers for the bearer token handed out by the auth endpoints."""

import time
from typing import Any, Dict, Optional

import jwt

from icar.utils.logging_config import get_logger

logger = get_logger(__name__)


def decode_claims(token: str) -> Optional[Dict[str, Any]]:
    """Return the token claims without verifying the signature, or None if it is not a JWT."""
    try:
        return jwt.decode(token, options={"verify_signature": False, "verify_exp": False})
    except jwt.PyJWTError as e:
        logger.debug(f"Token is not a decodable JWT: {e}")
        return None


def is_token_expired(token: str, leeway: int = 0, now: Optional[float] = None) -> bool:
    """
    True when the token carries an ``exp`` claim in the past.

    Opaque tokens and JWTs without ``exp`` are treated as valid; the backend
    has the final word.
    """
    claims = decode_claims(token)
    if not claims or "exp" not in claims:
        return False
    try:
        exp = float(claims["exp"])
    except (TypeError, ValueError):
        return False
    current = time.time() if now is None else now
    return exp + leeway < current


def token_subject(token: str) -> Optional[str]:
    claims = decode_claims(token) or {}
    for key in ("id", "_id", "userId", "sub"):
        if claims.get(key):
            return str(claims[key])
    return None
