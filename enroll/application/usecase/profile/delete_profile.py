"""Delete profile use case."""

from pydantic import BaseModel

from enroll.application.usecase.base import BaseUseCase
from enroll.domain.service import ProfileService


class DeleteProfileRequest(BaseModel):
    name: str


class DeleteProfileUseCase(BaseUseCase):
    """Use case for deleting a profile.

    Invites that still name the profile keep the name; provisioning falls
    back to the default profile for them.
    """

    def __init__(self, profile_service: ProfileService) -> None:
        self.profile_service = profile_service

    async def execute(self, request: DeleteProfileRequest) -> None:
        await self.profile_service.delete(request.name)
