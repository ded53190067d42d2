"""Housekeeping domain service.

Removes expired invites and tells the admins who asked to hear about it.
"""

import asyncio
from datetime import datetime

import logfire

from enroll.config import MessagesSettings
from enroll.domain.model.invite import Invite
from enroll.domain.value import InviteCode

from .base import Service
from .invite_service import InviteService
from .message_service import MessageService
from .notification_service import NotificationService


class HousekeepingService(Service):
    """Expired-invite sweeper and expiry-aware invite lookup."""

    def __init__(
        self,
        invite_service: InviteService,
        notification_service: NotificationService,
        message_service: MessageService,
        messages_settings: MessagesSettings,
    ) -> None:
        """Initialize housekeeping service.

        Args:
            invite_service: Invite domain service
            notification_service: Dispatcher for expiry notifications
            message_service: Message renderer
            messages_settings: Whether admin notifications are enabled
        """
        self.invite_service = invite_service
        self.notification_service = notification_service
        self.message_service = message_service
        self.messages_settings = messages_settings

    async def check_invite(self, code: InviteCode, now: datetime) -> Invite | None:
        """Return the invite if it can still be redeemed.

        An expired invite is retired (deleted and notified) as a side effect.
        """
        invite = await self.invite_service.get_invite(code)
        if invite is None:
            return None
        if invite.is_expired(now):
            await self.expire(invite)
            return None
        if invite.is_exhausted:
            return None
        return invite

    async def sweep(self, now: datetime) -> list[InviteCode]:
        """Delete every invite whose validity has ended.
        Args:
            now: Snapshot of the current time, used for every invite

        Returns:
            Codes of the deleted invites, in iteration order
        """
        with logfire.span("housekeeping_service.sweep", now=now.isoformat()):
            expired = await self.invite_service.find_expired(now)
            deleted: list[InviteCode] = []
            for invite in expired:
                if await self.expire(invite):
                    deleted.append(invite.code)
            if deleted:
                logfire.info("Expired invites removed", count=len(deleted), codes=deleted)
            return deleted

    async def expire(self, invite: Invite) -> bool:
        """Delete an expired invite and tell its subscribed admins.

        Only the call that actually deletes the invite sends notifications.

        Returns:
            True if the invite was deleted by this call
        """
        logfire.debug("Housekeeping: deleting old invite", code=invite.code)
        if not await self.invite_service.remove(invite.code):
            return False
        await self._notify_expiry(invite)
        return True

    async def _notify_expiry(self, invite: Invite) -> None:
        if not self.messages_settings.notifications:
            return
        addresses = invite.subscribers(expiry=True)
        if not addresses:
            return

        message = self.message_service.invite_expired(invite)
        reports = await asyncio.gather(
            *(
                self.notification_service.send_to_address(message, address)
                for address in addresses
            )
        )
        for address, report in zip(addresses, reports):
            if report.ok:
                logfire.info("Sent expiry notification", code=invite.code, address=address)
            else:
                logfire.error(
                    "Failed to send expiry notification",
                    code=invite.code,
                    address=address,
                    failures=report.failures,
                )
