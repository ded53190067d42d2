"""JWT token utilities."""

from datetime import datetime
from typing import Any

import jwt

from enroll.config import EmailConfirmationSettings
from enroll.util.error import UtilError


class JWTError(UtilError):
    """JWT-related error."""

    pass


def create_token(
    claims: dict[str, Any],
    expires_at: datetime,
    token_type: str,
    settings: EmailConfirmationSettings,
) -> str:
    """Sign a claim set.

    Args:
        claims: Token claims; ``exp`` and ``type`` are added here
        expires_at: Expiry timestamp
        token_type: Value of the ``type`` claim
        settings: Signing settings

    Returns:
        Encoded JWT token
    """
    payload = {**claims, "exp": expires_at, "type": token_type}

    token = jwt.encode(payload, settings.secret, algorithm=settings.algorithm)

    return token


def verify_token(
    token: str, token_type: str, settings: EmailConfirmationSettings
) -> dict[str, Any]:
    """Verify and decode a JWT token.

    Args:
        token: JWT token to verify
        token_type: Expected ``type`` claim
        settings: Signing settings

    Returns:
        Decoded claims

    Raises:
        JWTError: If token is invalid, expired or of the wrong type
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret,
            algorithms=[settings.algorithm],
            options={"require": ["exp", "type"]},
        )
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")

    if payload.get("type") != token_type:
        raise JWTError("Wrong token type")

    return payload
