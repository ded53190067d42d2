"""Set default profile use case."""

from pydantic import BaseModel

from enroll.application.usecase.base import BaseUseCase
from enroll.domain.service import ProfileService


class SetDefaultProfileRequest(BaseModel):
    name: str


class SetDefaultProfileUseCase(BaseUseCase):
    """Use case for choosing the profile new invites get by default."""

    def __init__(self, profile_service: ProfileService) -> None:
        self.profile_service = profile_service

    async def execute(self, request: SetDefaultProfileRequest) -> None:
        """Raises NotFoundError if the profile does not exist."""
        await self.profile_service.set_default(request.name)
