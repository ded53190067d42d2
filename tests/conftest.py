"""Shared test helpers."""

from datetime import datetime, timezone

from enroll.domain.service import InviteService, Verifier
from enroll.domain.value import (
    DurationOffset,
    InviteCode,
    Platform,
    VerificationPIN,
    VerifiedIdentity,
)


def utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


async def make_invite(
    invite_service: InviteService,
    uses: int | None = 1,
    valid_for: DurationOffset | None = None,
    now: datetime | None = None,
    **kwargs,
):
    """Create an invite valid for a day (by default) from ``now``."""
    return await invite_service.create_invite(
        now=now or datetime.now(timezone.utc),
        valid_for=valid_for or DurationOffset(days=1),
        uses=uses,
        **kwargs,
    )


async def verified_pin(
    verifier: Verifier,
    user_id: str = "1234",
    display_name: str = "alice",
    channel_id: str = "",
    code: InviteCode | str = "",
) -> VerificationPIN:
    """Issue a PIN and mark it verified as the platform bot would."""
    pin = await verifier.issue_token(code)
    await verifier.mark_verified(
        pin,
        VerifiedIdentity(
            platform=verifier.platform,
            user_id=user_id,
            display_name=display_name,
            channel_id=channel_id,
        ),
    )
    return pin


def identity(platform: Platform, user_id: str = "1234", **kwargs) -> VerifiedIdentity:
    return VerifiedIdentity(platform=platform, user_id=user_id, **kwargs)
