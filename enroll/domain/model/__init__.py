"""Domain model entities."""

from enroll.domain.model.account import Account
from enroll.domain.model.announcement_template import AnnouncementTemplate
from enroll.domain.model.email_address import EmailAddress
from enroll.domain.model.invite import Invite
from enroll.domain.model.linked_identity import LinkedIdentity
from enroll.domain.model.pending_verification import PendingVerification
from enroll.domain.model.profile import Profile

__all__ = [
    "Account",
    "AnnouncementTemplate",
    "EmailAddress",
    "Invite",
    "LinkedIdentity",
    "PendingVerification",
    "Profile",
]
