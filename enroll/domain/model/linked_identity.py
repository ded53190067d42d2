"""Linked identity entity.

Records that an account owns an identity on a chat platform, and whether
that identity should be used as a contact channel.
"""

from datetime import datetime, timezone

from pydantic import Field

from enroll.domain.model.common import DomainModel
from enroll.domain.value import AccountId, Platform


class LinkedIdentity(DomainModel):
    """Account to chat identity link."""

    account_id: AccountId
    platform: Platform
    user_id: str
    display_name: str = ""
    channel_id: str = ""
    contact: bool = True
    lang: str | None = None
    linked_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def destination(self) -> str:
        """Where chat messages for this identity are sent."""
        return self.channel_id or self.user_id
