"""Verification callback use case."""

import logfire
from pydantic import BaseModel

from enroll.application.usecase.base import BaseUseCase
from enroll.domain.error import NotFoundError
from enroll.domain.service import TelegramVerifier, Verifier
from enroll.domain.value import Platform, VerificationPIN, VerifiedIdentity


class MarkVerifiedRequest(BaseModel):
    """Report from a platform bot.

    Either a PIN the bot saw from ``user_id``, a chat language change, or
    both.
    """

    platform: Platform
    pin: str = ""
    user_id: str = ""
    display_name: str = ""
    channel_id: str = ""
    lang: str | None = None


class MarkVerifiedResponse(BaseModel):
    verified: bool


class MarkVerifiedUseCase(BaseUseCase):
    """Use case for the bots' inbound verification callback."""

    def __init__(self, verifiers: dict[Platform, Verifier]) -> None:
        self.verifiers = verifiers

    async def execute(self, request: MarkVerifiedRequest) -> MarkVerifiedResponse:
        verifier = self.verifiers.get(request.platform)
        if verifier is None or not verifier.enabled:
            raise NotFoundError("Platform", request.platform.value)

        chat_id = request.channel_id or request.user_id
        if request.lang and isinstance(verifier, TelegramVerifier) and chat_id:
            await verifier.set_language(chat_id, request.lang)
            logfire.debug("Chat language set", chat_id=chat_id, lang=request.lang)

        if not request.pin:
            return MarkVerifiedResponse(verified=False)

        identity = VerifiedIdentity(
            platform=request.platform,
            user_id=request.user_id,
            display_name=request.display_name or request.user_id,
            channel_id=request.channel_id,
            lang=request.lang,
        )
        verified = await verifier.mark_verified(VerificationPIN(request.pin), identity)
        return MarkVerifiedResponse(verified=verified)
