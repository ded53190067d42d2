"""Domain value objects.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and small pieces of domain arithmetic.
"""

from datetime import datetime, timedelta
from enum import Enum

from pydantic import Field, field_validator

from enroll.domain.value.common import ValueObject


class Platform(str, Enum):
    """Chat platforms that can verify an identity.

    Member order is the order verification is checked in.
    """

    DISCORD = "discord"
    MATRIX = "matrix"
    TELEGRAM = "telegram"


VERIFICATION_ORDER: tuple[Platform, ...] = (
    Platform.DISCORD,
    Platform.MATRIX,
    Platform.TELEGRAM,
)


class ProfileAspect(str, Enum):
    """Independently applied parts of a profile."""

    POLICY = "policy"
    HOMESCREEN = "homescreen"
    COMPANION = "companion"


class ProvisioningStatus(str, Enum):
    """Outcome of a provisioning attempt."""

    CREATED = "created"
    CONFIRMATION_PENDING = "confirmation_pending"
    REJECTED = "rejected"


class RejectionReason(str, Enum):
    """Why a provisioning attempt was rejected before an account existed."""

    INVALID_CODE = "invalid_code"
    USER_EXISTS = "user_exists"
    EMAIL_REQUIRED = "email_required"
    VERIFICATION_REQUIRED = "verification_required"
    INVALID_PIN = "invalid_pin"
    INVALID_CONFIRMATION = "invalid_confirmation"
    CONFIRMATION_FAILED = "confirmation_failed"
    ACCOUNT_CREATION_FAILED = "account_creation_failed"


def add_months(start: datetime, months: int) -> datetime:
    """Add calendar months, rolling overflowing days into the next month.

    Jan 31 + 1 month is Mar 3 (or Mar 2 in a leap year), not Feb 28.
    """
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    first = start.replace(year=year, month=month, day=1)
    return first + timedelta(days=start.day - 1)


class DurationOffset(ValueObject):
    """Calendar offset of months, days, hours and minutes."""

    months: int = Field(default=0, ge=0)
    days: int = Field(default=0, ge=0)
    hours: int = Field(default=0, ge=0)
    minutes: int = Field(default=0, ge=0)

    def apply(self, start: datetime) -> datetime:
        """Return ``start`` moved forward by this offset."""
        moved = add_months(start, self.months) + timedelta(days=self.days)
        return moved + timedelta(hours=self.hours, minutes=self.minutes)

    @property
    def is_zero(self) -> bool:
        return not (self.months or self.days or self.hours or self.minutes)


class NotifyPreference(ValueObject):
    """Per-admin notification switches on an invite."""

    notify_expiry: bool = False
    notify_creation: bool = False


class UsageRecord(ValueObject):
    """One successful use of an invite."""

    identity: str
    used_at: datetime


class VerifiedIdentity(ValueObject):
    """An identity proven out-of-band on a chat platform."""

    platform: Platform
    user_id: str  # Platform user id (Discord snowflake, Matrix MXID, Telegram chat id)
    display_name: str = ""
    channel_id: str = ""  # Where to reach the user (DM channel, room, chat)
    lang: str | None = None


class Message(ValueObject):
    """A rendered message, deliverable over mail or chat."""

    subject: str
    text: str
    markdown: str = ""

    @field_validator("subject")
    @classmethod
    def validate_subject(cls, v: str) -> str:
        """Subjects are single-line."""
        return " ".join(v.splitlines()).strip()


class DeliveryReport(ValueObject):
    """Per-recipient delivery outcome of one dispatch."""

    delivered: tuple[str, ...] = ()
    failures: dict[str, str] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failures

    def merge(self, other: "DeliveryReport") -> "DeliveryReport":
        """Combine two reports."""
        return DeliveryReport(
            delivered=self.delivered + other.delivered,
            failures={**self.failures, **other.failures},
        )


class Registration(ValueObject):
    """What a prospective user submits to redeem an invite.

    Carried verbatim inside a confirmation token while the email gate is
    pending, so it must stay serializable.
    """

    code: str
    username: str
    password: str
    email: str = ""
    pins: dict[Platform, str] = Field(default_factory=dict)
    contact: dict[Platform, bool] = Field(default_factory=dict)

    def pin_for(self, platform: Platform) -> str:
        return self.pins.get(platform, "")

    def wants_contact(self, platform: Platform) -> bool:
        """Whether the linked identity should be used to reach the user."""
        return self.contact.get(platform, True)
