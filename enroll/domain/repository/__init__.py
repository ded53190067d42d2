"""Repository interfaces.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from enroll.domain.repository.account_expiry import AccountExpiryRepository
from enroll.domain.repository.announcement_template import AnnouncementTemplateRepository
from enroll.domain.repository.email_address import EmailAddressRepository
from enroll.domain.repository.invite import InviteRepository
from enroll.domain.repository.linked_identity import LinkedIdentityRepository
from enroll.domain.repository.profile import ProfileRepository
from enroll.domain.repository.verification import VerificationRegistry

__all__ = [
    "AccountExpiryRepository",
    "AnnouncementTemplateRepository",
    "EmailAddressRepository",
    "InviteRepository",
    "LinkedIdentityRepository",
    "ProfileRepository",
    "VerificationRegistry",
]
