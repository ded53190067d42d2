"""Profile use cases."""

from enroll.application.usecase.profile.create_profile import (
    CreateProfileRequest,
    CreateProfileUseCase,
)
from enroll.application.usecase.profile.delete_profile import (
    DeleteProfileRequest,
    DeleteProfileUseCase,
)
from enroll.application.usecase.profile.list_profiles import (
    ListProfilesResponse,
    ListProfilesUseCase,
    ProfileItem,
)
from enroll.application.usecase.profile.set_default_profile import (
    SetDefaultProfileRequest,
    SetDefaultProfileUseCase,
)

__all__ = [
    "CreateProfileRequest",
    "CreateProfileUseCase",
    "DeleteProfileRequest",
    "DeleteProfileUseCase",
    "ListProfilesResponse",
    "ListProfilesUseCase",
    "ProfileItem",
    "SetDefaultProfileRequest",
    "SetDefaultProfileUseCase",
]
