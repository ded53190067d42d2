"""Domain value objects."""

from enroll.domain.value.identifiers import AccountId, InviteCode, VerificationPIN
from enroll.domain.value.types import (
    VERIFICATION_ORDER,
    DeliveryReport,
    DurationOffset,
    Message,
    NotifyPreference,
    Platform,
    ProfileAspect,
    ProvisioningStatus,
    Registration,
    RejectionReason,
    UsageRecord,
    VerifiedIdentity,
    add_months,
)

__all__ = [
    # Identifiers
    "AccountId",
    "InviteCode",
    "VerificationPIN",
    # Types
    "VERIFICATION_ORDER",
    "DeliveryReport",
    "DurationOffset",
    "Message",
    "NotifyPreference",
    "Platform",
    "ProfileAspect",
    "ProvisioningStatus",
    "Registration",
    "RejectionReason",
    "UsageRecord",
    "VerifiedIdentity",
    "add_months",
]
