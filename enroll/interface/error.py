"""Interface layer errors."""

import secrets

from fastapi import HTTPException, status

from enroll.config import Settings


class InterfaceError(Exception):
    """Base interface error."""

    pass


class AdminAuthError(InterfaceError):
    """Missing or wrong admin key."""

    pass


def check_admin_key(settings: Settings, admin_key: str | None) -> None:
    """Compare a presented admin key with the configured one.

    Raises:
        AdminAuthError: If the key is missing or does not match
    """
    if not admin_key:
        raise AdminAuthError("Missing admin key")
    if not secrets.compare_digest(admin_key.encode(), settings.admin.api_key.encode()):
        raise AdminAuthError("Invalid admin key")


def require_admin(settings: Settings, admin_key: str | None) -> None:
    """Route-level admin check.

    Raises:
        HTTPException: 401 if the key is missing or wrong
    """
    try:
        check_admin_key(settings, admin_key)
    except AdminAuthError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
