"""Pending verification entity.

Short-lived mapping from a PIN to an identity being proven on a chat
platform. Lives only in memory and is removed when consumed.
"""

from datetime import datetime, timezone

from pydantic import Field

from enroll.domain.model.common import DomainModel
from enroll.domain.value import Platform, VerificationPIN, VerifiedIdentity


class PendingVerification(DomainModel):
    """PIN issued for one platform, optionally proven."""

    pin: VerificationPIN
    platform: Platform
    context: str = ""  # Platform session context, e.g. the Matrix user id the PIN was sent to
    identity: VerifiedIdentity | None = None
    verified: bool = False
    issued_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
