"""Invite entity.

An invite grants permission to self-provision one account, a fixed number of
accounts, or an unlimited number until it expires. The invite's own expiry is
independent of the account expiry it may assign.
"""

from datetime import datetime, timezone

from pydantic import Field

from enroll.domain.model.common import DomainModel
from enroll.domain.value import DurationOffset, InviteCode, NotifyPreference, UsageRecord


class Invite(DomainModel):
    """Invite entity.

    Business rules:
    - Codes are unique
    - remaining_uses is a positive counter, or 0 together with no_limit
    - A reserved use is already subtracted from remaining_uses; the invite
      is deleted once no uses remain and no reservation is outstanding
    - Consuming an invite with exactly one use left deletes it
    - used_by grows only when an account was actually created
    """

    code: InviteCode
    label: str = ""
    created: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    valid_till: datetime
    remaining_uses: int = Field(default=1, ge=0)
    no_limit: bool = False
    profile: str = ""  # Empty means "apply nothing"
    user_expiry: DurationOffset | None = None  # Offset applied to the created account
    used_by: tuple[UsageRecord, ...] = ()
    notify: dict[str, NotifyPreference] = Field(default_factory=dict)
    send_to: str = ""  # Diagnostic: where the invite was sent at creation
    keys: tuple[str, ...] = ()  # Issued confirmation tokens
    reserved: int = Field(default=0, ge=0)  # Uses held by runs still creating accounts

    def is_expired(self, now: datetime) -> bool:
        """Whether the invite's validity has ended at ``now``."""
        return self.valid_till <= now

    @property
    def is_exhausted(self) -> bool:
        """A limited invite with no uses left can never be redeemed."""
        return not self.no_limit and self.remaining_uses == 0

    @property
    def is_last_use(self) -> bool:
        return not self.no_limit and self.remaining_uses == 1 and self.reserved == 0

    @property
    def is_spent(self) -> bool:
        """No uses left and nothing in flight: the invite can be deleted."""
        return self.is_exhausted and self.reserved == 0

    def after_use(self, identity: str, now: datetime, key: str | None = None) -> "Invite":
        """Return the invite as it stands after one successful use.

        The caller deletes the invite instead when ``is_last_use`` is set.
        """
        remaining = self.remaining_uses if self.no_limit else self.remaining_uses - 1
        keys = tuple(k for k in self.keys if k != key) if key else self.keys
        return self.model_copy(
            update={
                "remaining_uses": max(remaining, 0),
                "used_by": self.used_by + (UsageRecord(identity=identity, used_at=now),),
                "keys": keys,
            }
        )

    def with_key(self, key: str) -> "Invite":
        """Return a copy carrying one more confirmation token."""
        return self.model_copy(update={"keys": self.keys + (key,)})

    def subscribers(self, *, expiry: bool = False, creation: bool = False) -> list[str]:
        """Admin addresses subscribed to the requested notification kind."""
        matches = []
        for address, preference in self.notify.items():
            if expiry and preference.notify_expiry:
                matches.append(address)
            elif creation and preference.notify_creation:
                matches.append(address)
        return matches

    def can_reserve(self, now: datetime, key: str | None = None) -> bool:
        if self.is_expired(now) or self.is_exhausted:
            return False
        return key is None or key in self.keys

    def reserve(self, key: str | None = None) -> "Invite":
        """Return the invite with one use held back and ``key`` spent."""
        return self.model_copy(
            update={
                "remaining_uses": self.remaining_uses
                if self.no_limit
                else self.remaining_uses - 1,
                "reserved": self.reserved + 1,
                "keys": tuple(k for k in self.keys if k != key) if key else self.keys,
            }
        )

    def release(self, key: str | None = None) -> "Invite":
        """Undo ``reserve``."""
        return self.model_copy(
            update={
                "remaining_uses": self.remaining_uses
                if self.no_limit
                else self.remaining_uses + 1,
                "reserved": max(self.reserved - 1, 0),
                "keys": self.keys + (key,) if key and key not in self.keys else self.keys,
            }
        )

    def settle(self, identity: str, now: datetime) -> "Invite":
        """Turn a reservation into a recorded use."""
        return self.model_copy(
            update={
                "reserved": max(self.reserved - 1, 0),
                "used_by": self.used_by + (UsageRecord(identity=identity, used_at=now),),
            }
        )
