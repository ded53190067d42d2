"""Email confirmation token domain service."""

from datetime import datetime, timedelta, timezone

import logfire
from pydantic import ValidationError

from enroll.config import EmailConfirmationSettings
from enroll.domain.error import InvalidConfirmationTokenError
from enroll.domain.value import Registration
from enroll.util.jwt import JWTError, create_token, verify_token

from .base import Service

TOKEN_TYPE = "confirmation"


class ConfirmationService(Service):
    """Issues and verifies signed, time-boxed confirmation tokens.

    A token carries the whole registration (password included) so that
    account creation can resume once the mailed link is followed. Nothing
    is stored server-side apart from the token string on the invite.
    """

    def __init__(self, settings: EmailConfirmationSettings) -> None:
        """Initialize confirmation service.

        Args:
            settings: Signing secret, algorithm and default lifetime
        """
        self.settings = settings

    def issue(self, registration: Registration, ttl: timedelta | None = None) -> str:
        """Sign a registration into a confirmation token.

        Args:
            registration: Request payload to carry
            ttl: Token lifetime; defaults to the configured expiry

        Returns:
            Encoded token
        """
        if ttl is None:
            ttl = timedelta(hours=self.settings.expiry_hours)
        expires_at = datetime.now(timezone.utc) + ttl

        claims = {
            "valid": True,
            "invite": registration.code,
            "email": registration.email,
            "username": registration.username,
            "password": registration.password,
            "pins": {p.value: pin for p, pin in registration.pins.items()},
            "contact": {p.value: flag for p, flag in registration.contact.items()},
        }
        token = create_token(claims, expires_at, TOKEN_TYPE, self.settings)
        logfire.info(
            "Confirmation token issued",
            code=registration.code,
            username=registration.username,
            expires_at=expires_at.isoformat(),
        )
        return token

    def verify(self, token: str) -> Registration:
        """Check a confirmation token and recover its registration.

        Raises:
            InvalidConfirmationTokenError: On bad signature, wrong type,
                expiry, or a malformed claim set
        """
        with logfire.span("confirmation_service.verify"):
            try:
                claims = verify_token(token, TOKEN_TYPE, self.settings)
            except JWTError as e:
                logfire.warn("Confirmation token rejected", error=str(e))
                raise InvalidConfirmationTokenError(str(e)) from e

            if not claims.get("valid"):
                raise InvalidConfirmationTokenError("Token is not valid")

            try:
                return Registration(
                    code=claims["invite"],
                    username=claims["username"],
                    password=claims["password"],
                    email=claims.get("email", ""),
                    pins=claims.get("pins", {}),
                    contact=claims.get("contact", {}),
                )
            except (KeyError, ValidationError) as e:
                logfire.warn("Confirmation token malformed", error=str(e))
                raise InvalidConfirmationTokenError("Malformed token") from e
