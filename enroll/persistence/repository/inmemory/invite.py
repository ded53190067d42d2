"""In-memory invite repository for testing."""

import asyncio
from collections.abc import Callable
from datetime import datetime
from typing import Optional

from enroll.domain.error import DuplicateCodeError
from enroll.domain.model.invite import Invite
from enroll.domain.repository.invite import InviteRepository
from enroll.domain.value import InviteCode


class InMemoryInviteRepository(InviteRepository):
    """In-memory implementation of InviteRepository for testing.

    One lock guards every mutation. Invite volume is low, so a global lock
    is enough to serialize consumers of the same code.
    """

    def __init__(self) -> None:
        self._invites: dict[InviteCode, Invite] = {}
        self._lock = asyncio.Lock()

    async def create(self, invite: Invite) -> Invite:
        async with self._lock:
            if invite.code in self._invites:
                raise DuplicateCodeError(invite.code)
            self._invites[invite.code] = invite
            return invite

    async def find_by_code(self, code: InviteCode) -> Optional[Invite]:
        return self._invites.get(code)

    async def find_all(self) -> list[Invite]:
        return sorted(self._invites.values(), key=lambda inv: inv.created)

    async def find_expired(self, now: datetime) -> list[Invite]:
        return [inv for inv in await self.find_all() if inv.is_expired(now)]

    async def update(
        self, code: InviteCode, change: Callable[[Invite], Invite]
    ) -> Optional[Invite]:
        async with self._lock:
            invite = self._invites.get(code)
            if invite is None:
                return None
            updated = change(invite)
            self._invites[code] = updated
            return updated

    async def add_key(self, code: InviteCode, key: str) -> bool:
        return await self.update(code, lambda invite: invite.with_key(key)) is not None

    async def consume(
        self,
        code: InviteCode,
        identity: str,
        now: datetime,
        key: str | None = None,
    ) -> bool:
        async with self._lock:
            invite = self._invites.get(code)
            if invite is None:
                return False
            if invite.is_expired(now):
                del self._invites[code]
                return False
            if invite.is_exhausted:
                return False
            if invite.is_last_use:
                del self._invites[code]
                return True
            self._invites[code] = invite.after_use(identity, now, key)
            return True

    async def reserve(
        self, code: InviteCode, now: datetime, key: str | None = None
    ) -> bool:
        async with self._lock:
            invite = self._invites.get(code)
            if invite is None or not invite.can_reserve(now, key):
                return False
            self._invites[code] = invite.reserve(key)
            return True

    async def release(self, code: InviteCode, key: str | None = None) -> None:
        async with self._lock:
            invite = self._invites.get(code)
            if invite is not None:
                self._invites[code] = invite.release(key)

    async def record_use(self, code: InviteCode, identity: str, now: datetime) -> bool:
        async with self._lock:
            invite = self._invites.get(code)
            if invite is None:
                return False
            settled = invite.settle(identity, now)
            if settled.is_spent:
                del self._invites[code]
            else:
                self._invites[code] = settled
            return True

    async def delete(self, code: InviteCode) -> bool:
        async with self._lock:
            return self._invites.pop(code, None) is not None
