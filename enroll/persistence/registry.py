"""In-memory verification registry.

PINs are short-lived and only meaningful while the issuing process runs, so
registries are never written to the database.
"""

import asyncio
from typing import Optional

from enroll.domain.model.pending_verification import PendingVerification
from enroll.domain.repository.verification import VerificationRegistry
from enroll.domain.value import Platform, VerificationPIN, VerifiedIdentity


class InMemoryVerificationRegistry(VerificationRegistry):
    """Guarded PIN map for one platform.

    Reads go straight to the map; every mutation takes the lock, which is
    never held across an await on anything but the map itself.
    """

    def __init__(self, platform: Platform) -> None:
        self.platform = platform
        self._entries: dict[VerificationPIN, PendingVerification] = {}
        self._languages: dict[str, str] = {}
        self._lock = asyncio.Lock()

    async def add(self, entry: PendingVerification) -> bool:
        async with self._lock:
            if entry.pin in self._entries:
                return False
            self._entries[entry.pin] = entry
            return True

    async def get(self, pin: VerificationPIN) -> Optional[PendingVerification]:
        return self._entries.get(pin)

    async def mark_verified(self, pin: VerificationPIN, identity: VerifiedIdentity) -> bool:
        async with self._lock:
            entry = self._entries.get(pin)
            if entry is None:
                return False
            self._entries[pin] = entry.model_copy(
                update={"identity": identity, "verified": True}
            )
            return True

    async def pop_verified(self, pin: VerificationPIN) -> Optional[PendingVerification]:
        async with self._lock:
            entry = self._entries.get(pin)
            if entry is None or not entry.verified:
                return None
            return self._entries.pop(pin)

    async def set_language(self, chat_id: str, lang: str) -> None:
        async with self._lock:
            self._languages[chat_id] = lang

    async def get_language(self, chat_id: str) -> Optional[str]:
        return self._languages.get(chat_id)
