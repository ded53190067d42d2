"""List profiles use case."""

from pydantic import BaseModel

from enroll.application.usecase.base import BaseUseCase
from enroll.domain.model import Profile
from enroll.domain.service import ProfileService


class ProfileItem(BaseModel):
    """Profile summary for the admin view."""

    name: str
    default: bool
    from_account: str
    policy: bool
    homescreen: bool
    companion: bool

    @classmethod
    def from_profile(cls, profile: Profile) -> "ProfileItem":
        return cls(
            name=profile.name,
            default=profile.default,
            from_account=profile.from_account,
            policy=profile.has_policy,
            homescreen=profile.has_homescreen,
            companion=profile.has_companion_template,
        )


class ListProfilesResponse(BaseModel):
    profiles: list[ProfileItem]


class ListProfilesUseCase(BaseUseCase):
    """Use case for listing profiles, default first."""

    def __init__(self, profile_service: ProfileService) -> None:
        self.profile_service = profile_service

    async def execute(self, request: None = None) -> ListProfilesResponse:
        profiles = await self.profile_service.list_profiles()
        return ListProfilesResponse(
            profiles=[ProfileItem.from_profile(profile) for profile in profiles]
        )
