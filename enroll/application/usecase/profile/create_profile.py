"""Create profile use case."""

import logfire
from pydantic import BaseModel, Field, field_validator

from enroll.application.usecase.base import BaseUseCase
from enroll.application.usecase.profile.list_profiles import ProfileItem
from enroll.domain.error import NotFoundError
from enroll.domain.service import CompanionService, ProfileService
from enroll.domain.value import AccountId


class CreateProfileRequest(BaseModel):
    """Capture an existing account as a profile.

    ``companion_user`` names a companion service user whose settings become
    the profile's companion template.
    """

    name: str = Field(min_length=1)
    account_id: str
    homescreen: bool = False
    companion_user: str = ""

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Profile name cannot be blank")
        return v


class CreateProfileUseCase(BaseUseCase):
    """Use case for creating (or replacing) a profile from an account."""

    def __init__(
        self,
        profile_service: ProfileService,
        companion_service: CompanionService,
    ) -> None:
        self.profile_service = profile_service
        self.companion_service = companion_service

    async def execute(self, request: CreateProfileRequest) -> ProfileItem:
        """Create the profile.

        Raises:
            ExternalServiceError: If the account or companion user cannot be read
            NotFoundError: If ``companion_user`` does not exist
        """
        companion_user_id = ""
        if request.companion_user and self.companion_service.enabled:
            user = await self.companion_service.find_user(request.companion_user)
            if user is None:
                raise NotFoundError("Companion user", request.companion_user)
            companion_user_id = str(user["id"])
            logfire.debug(
                "Companion template source resolved",
                companion_user=request.companion_user,
                companion_user_id=companion_user_id,
            )

        profile = await self.profile_service.create_from_account(
            request.name,
            AccountId(request.account_id),
            homescreen=request.homescreen,
            companion_user_id=companion_user_id,
        )
        return ProfileItem.from_profile(profile)
