"""PostgreSQL repository implementations."""

from enroll.persistence.repository.account_expiry import PostgresAccountExpiryRepository
from enroll.persistence.repository.announcement_template import (
    PostgresAnnouncementTemplateRepository,
)
from enroll.persistence.repository.email_address import PostgresEmailAddressRepository
from enroll.persistence.repository.invite import PostgresInviteRepository
from enroll.persistence.repository.linked_identity import PostgresLinkedIdentityRepository
from enroll.persistence.repository.profile import PostgresProfileRepository

__all__ = [
    "PostgresAccountExpiryRepository",
    "PostgresAnnouncementTemplateRepository",
    "PostgresEmailAddressRepository",
    "PostgresInviteRepository",
    "PostgresLinkedIdentityRepository",
    "PostgresProfileRepository",
]
