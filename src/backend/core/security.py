"""Security utilities for authentication and vote deduplication.

StudySync does not issue tokens itself: the external identity provider signs
bearer JWTs with a shared secret and we only verify them here.
"""

import hashlib
from typing import Any

from jose import JWTError, jwt

from core.config import settings


def decode_token(token: str) -> dict[str, Any] | None:
    """
    Decode and validate an identity-provider JWT.

    Args:
        token: The bearer token from the Authorization header

    Returns:
        The decoded payload or None if the signature, audience or expiry is invalid
    """
    try:
        return jwt.decode(
            token,
            settings.AUTH_JWT_SECRET,
            algorithms=[settings.AUTH_JWT_ALGORITHM],
            audience=settings.AUTH_JWT_AUDIENCE,
        )
    except JWTError:
        return None


def generate_vote_key(user_id: str, poll_id: str) -> str:
    """
    Generate the deterministic document id for a user's vote on a poll.

    The votes container is partitioned by poll_id, and ids are unique within
    a partition, so a second insert for the same (poll, user) pair conflicts
    in the store no matter how close together the two requests arrive.

    Args:
        user_id: The voter's identifier
        poll_id: The poll's identifier

    Returns:
        A SHA-256 hex digest unique to this user+poll combination
    """
    data = f"{user_id}:{poll_id}:{settings.SECRET_KEY}"
    return hashlib.sha256(data.encode()).hexdigest()
