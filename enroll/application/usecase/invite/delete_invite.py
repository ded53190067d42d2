"""Delete invite use case."""

from pydantic import BaseModel

from enroll.application.usecase.base import BaseUseCase
from enroll.domain.service import InviteService
from enroll.domain.value import InviteCode


class DeleteInviteRequest(BaseModel):
    code: str


class DeleteInviteUseCase(BaseUseCase):
    """Use case for deleting an invite."""

    def __init__(self, invite_service: InviteService) -> None:
        self.invite_service = invite_service

    async def execute(self, request: DeleteInviteRequest) -> None:
        """Raises NotFoundError if the invite does not exist."""
        await self.invite_service.delete_invite(InviteCode(request.code))
