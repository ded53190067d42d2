"""Verification registry interface."""

from abc import ABC, abstractmethod

from enroll.domain.model.pending_verification import PendingVerification
from enroll.domain.value import VerificationPIN, VerifiedIdentity


class VerificationRegistry(ABC):
    """Guarded PIN map for one chat platform.

    Shared between the platform's inbound callback (which marks PINs
    verified) and provisioning (which reads and consumes them).
    """

    @abstractmethod
    async def add(self, entry: PendingVerification) -> bool:
        """Register a freshly issued PIN.

        Returns:
            False if the PIN is already registered
        """
        pass

    @abstractmethod
    async def get(self, pin: VerificationPIN) -> PendingVerification | None:
        pass

    @abstractmethod
    async def mark_verified(self, pin: VerificationPIN, identity: VerifiedIdentity) -> bool:
        """Attach a proven identity to a PIN.

        Returns:
            False if the PIN is unknown
        """
        pass

    @abstractmethod
    async def pop_verified(self, pin: VerificationPIN) -> PendingVerification | None:
        """Remove and return a verified entry.

        Unverified entries are left in place. When several callers race for
        the same PIN, exactly one of them receives it.
        """
        pass

    @abstractmethod
    async def set_language(self, chat_id: str, lang: str) -> None:
        """Remember a per-chat language, independent of any PIN."""
        pass

    @abstractmethod
    async def get_language(self, chat_id: str) -> str | None:
        pass
