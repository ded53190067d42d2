"""In-memory repository implementations for testing."""

from .account_expiry import InMemoryAccountExpiryRepository
from .announcement_template import InMemoryAnnouncementTemplateRepository
from .email_address import InMemoryEmailAddressRepository
from .invite import InMemoryInviteRepository
from .linked_identity import InMemoryLinkedIdentityRepository
from .profile import InMemoryProfileRepository

__all__ = [
    "InMemoryAccountExpiryRepository",
    "InMemoryAnnouncementTemplateRepository",
    "InMemoryEmailAddressRepository",
    "InMemoryInviteRepository",
    "InMemoryLinkedIdentityRepository",
    "InMemoryProfileRepository",
]
