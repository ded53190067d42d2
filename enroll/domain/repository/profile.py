"""Profile repository interface."""

from abc import ABC, abstractmethod

from enroll.domain.model.profile import Profile


class ProfileRepository(ABC):
    """Repository for Profile entity."""

    @abstractmethod
    async def find_by_name(self, name: str) -> Profile | None:
        pass

    @abstractmethod
    async def find_default(self) -> Profile | None:
        """Return the profile marked as default, if any."""
        pass

    @abstractmethod
    async def find_all(self) -> list[Profile]:
        pass

    @abstractmethod
    async def save(self, profile: Profile) -> Profile:
        pass

    @abstractmethod
    async def set_default(self, name: str) -> bool:
        """Mark one profile as default and clear the flag on all others.

        Returns:
            False if no profile has that name
        """
        pass

    @abstractmethod
    async def delete(self, name: str) -> bool:
        pass
