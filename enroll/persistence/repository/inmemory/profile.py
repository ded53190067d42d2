"""In-memory profile repository for testing."""

from typing import Optional

from enroll.domain.model.profile import Profile
from enroll.domain.repository.profile import ProfileRepository


class InMemoryProfileRepository(ProfileRepository):
    """In-memory implementation of ProfileRepository for testing."""

    def __init__(self) -> None:
        self._profiles: dict[str, Profile] = {}

    async def find_by_name(self, name: str) -> Optional[Profile]:
        return self._profiles.get(name)

    async def find_default(self) -> Optional[Profile]:
        for profile in self._profiles.values():
            if profile.default:
                return profile
        return None

    async def find_all(self) -> list[Profile]:
        return sorted(self._profiles.values(), key=lambda p: p.name)

    async def save(self, profile: Profile) -> Profile:
        self._profiles[profile.name] = profile
        return profile

    async def set_default(self, name: str) -> bool:
        if name not in self._profiles:
            return False
        for key, profile in self._profiles.items():
            self._profiles[key] = profile.model_copy(update={"default": key == name})
        return True

    async def delete(self, name: str) -> bool:
        return self._profiles.pop(name, None) is not None
