"""Announce use case."""

import asyncio

import logfire
from pydantic import BaseModel, Field

from enroll.application.usecase.base import BaseUseCase
from enroll.domain.error import ExternalServiceError
from enroll.domain.service import AccountService, MessageService, NotificationService
from enroll.domain.value import AccountId, Message


class AnnounceRequest(BaseModel):
    """Send an admin-written message to a set of accounts.

    ``body`` is a template; ``{{ username }}`` is replaced per recipient.
    """

    account_ids: list[str] = Field(min_length=1)
    subject: str = Field(min_length=1)
    body: str = Field(min_length=1)


class AnnounceResponse(BaseModel):
    delivered: list[str]
    failures: dict[str, str]


class AnnounceUseCase(BaseUseCase):
    """Use case for messaging existing users over their contact channels."""

    def __init__(
        self,
        account_service: AccountService,
        message_service: MessageService,
        notification_service: NotificationService,
    ) -> None:
        self.account_service = account_service
        self.message_service = message_service
        self.notification_service = notification_service

    async def _username(self, account_id: AccountId) -> str:
        try:
            account = await self.account_service.get(account_id)
        except ExternalServiceError as e:
            logfire.warn("Could not look up account name", account_id=account_id, error=str(e))
            return ""
        return account.name

    async def execute(self, request: AnnounceRequest) -> AnnounceResponse:
        """Render and send the announcement.

        Raises:
            ValueError: If the body is not a valid template
        """
        account_ids = [AccountId(account_id) for account_id in dict.fromkeys(request.account_ids)]
        with logfire.span("announce.execute", recipients=len(account_ids)):
            names = await asyncio.gather(*(self._username(a) for a in account_ids))

            messages: dict[AccountId, Message] = {}
            for account_id, name in zip(account_ids, names):
                messages[account_id] = self.message_service.announcement(
                    request.subject, request.body, name
                )

            report = await self.notification_service.send_to_accounts(messages)
            logfire.info(
                "Announcement sent",
                delivered=len(report.delivered),
                failed=len(report.failures),
            )
            return AnnounceResponse(
                delivered=list(report.delivered), failures=dict(report.failures)
            )
