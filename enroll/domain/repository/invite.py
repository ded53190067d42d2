"""Invite repository interface."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime

from enroll.domain.model.invite import Invite
from enroll.domain.value import InviteCode


class InviteRepository(ABC):
    """Repository for Invite entity.

    The single writer of record for invites. Every mutation of one code is
    serialized so that concurrent consumers of a multi-use invite observe a
    strictly decreasing use count.
    """

    @abstractmethod
    async def create(self, invite: Invite) -> Invite:
        """Store a new invite.

        Raises:
            DuplicateCodeError: If the code is already in use
        """
        pass

    @abstractmethod
    async def find_by_code(self, code: InviteCode) -> Invite | None:
        """Find an invite by code.

        Returns:
            The invite if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(self) -> list[Invite]:
        """Return every stored invite, oldest first."""
        pass

    @abstractmethod
    async def find_expired(self, now: datetime) -> list[Invite]:
        """Return invites whose validity ended at or before ``now``.

        Does not mutate anything; the caller decides what to do with them.
        """
        pass

    @abstractmethod
    async def update(
        self, code: InviteCode, change: Callable[[Invite], Invite]
    ) -> Invite | None:
        """Apply ``change`` to the stored invite while holding its lock.

        ``change`` receives the current invite and returns the edited copy.
        A missing code is never re-created.

        Returns:
            The stored result, or None if the invite does not exist
        """
        pass

    @abstractmethod
    async def add_key(self, code: InviteCode, key: str) -> bool:
        """Append a confirmation token to the invite's key list.

        Returns:
            False if the invite no longer exists
        """
        pass

    @abstractmethod
    async def consume(
        self,
        code: InviteCode,
        identity: str,
        now: datetime,
        key: str | None = None,
    ) -> bool:
        """Record one use of an invite atomically.

        Expired invites are deleted and reported invalid. An invite with one
        use left is deleted; otherwise a limited invite is decremented. The
        usage is appended to ``used_by`` and ``key`` (if given) is dropped
        from the key list.

        Returns:
            Whether the invite was valid and a use was recorded
        """
        pass

    @abstractmethod
    async def reserve(
        self, code: InviteCode, now: datetime, key: str | None = None
    ) -> bool:
        """Hold one use of an invite before the account is created.

        A limited invite is decremented straight away, so its last use
        cannot be reserved twice; the invite stays in place, counting the
        reservation in ``reserved``, until ``record_use`` or ``release``. When
        ``key`` is given it must still be on the key list and is removed.

        Returns:
            False if the invite is missing, expired, exhausted, or ``key``
            was already spent
        """
        pass

    @abstractmethod
    async def release(self, code: InviteCode, key: str | None = None) -> None:
        """Give back a reservation whose account was never created.

        Restores the use and ``key``. Does nothing if the invite is gone.
        """
        pass

    @abstractmethod
    async def record_use(self, code: InviteCode, identity: str, now: datetime) -> bool:
        """Settle a reservation once the account exists.

        Appends the usage to ``used_by``. A limited invite with no uses left
        and no other reservation outstanding is deleted.

        Returns:
            False if the invite was removed in the meantime
        """
        pass

    @abstractmethod
    async def delete(self, code: InviteCode) -> bool:
        """Delete an invite.

        Returns:
            True if an invite was deleted
        """
        pass
