"""Set invite profile use case."""

from pydantic import BaseModel

from enroll.application.usecase.base import BaseUseCase
from enroll.domain.service import InviteService
from enroll.domain.value import InviteCode


class SetInviteProfileRequest(BaseModel):
    """Change the profile an invite applies. Empty means none."""

    code: str
    profile: str = ""


class SetInviteProfileUseCase(BaseUseCase):
    def __init__(self, invite_service: InviteService) -> None:
        self.invite_service = invite_service

    async def execute(self, request: SetInviteProfileRequest) -> None:
        """Raises NotFoundError for an unknown invite or profile."""
        await self.invite_service.set_profile(InviteCode(request.code), request.profile)
