"""Profile domain service."""

import logfire
from pydantic import Field

from enroll.config import CompanionSettings
from enroll.domain.error import ExternalServiceError, NotFoundError
from enroll.domain.model.profile import Profile
from enroll.domain.repository import ProfileRepository
from enroll.domain.service.clients import AccountClient, CompanionClient
from enroll.domain.value import AccountId, ProfileAspect
from enroll.domain.value.common import ValueObject

from .base import Service


class ProfileApplication(ValueObject):
    """Per-aspect outcome of applying a profile to one account.

    Aspects the profile does not define are absent from ``applied``.
    """

    applied: dict[ProfileAspect, bool] = Field(default_factory=dict)
    errors: dict[ProfileAspect, str] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors


class ProfileService(Service):
    """Profile lookup, administration and application."""

    def __init__(
        self,
        profile_repository: ProfileRepository,
        account_client: AccountClient,
        companion_client: CompanionClient,
        companion_settings: CompanionSettings,
    ) -> None:
        """Initialize profile service.

        Args:
            profile_repository: Profile repository
            account_client: Media server account service
            companion_client: Companion request service
            companion_settings: Whether the companion service is in use
        """
        self.profile_repository = profile_repository
        self.account_client = account_client
        self.companion_client = companion_client
        self.companion_settings = companion_settings

    async def resolve(self, name: str) -> Profile | None:
        """Look up the profile an invite names; empty means none.

        A name that no longer exists falls back to the default profile.
        """
        if not name:
            return None
        profile = await self.profile_repository.find_by_name(name)
        if profile is not None:
            return profile
        default = await self.profile_repository.find_default()
        logfire.warn(
            "Invite profile no longer exists, using default",
            profile=name,
            default=default.name if default else None,
        )
        return default

    async def apply(
        self,
        account_id: AccountId,
        profile: Profile,
        username: str = "",
        password: str = "",
        email: str = "",
    ) -> ProfileApplication:
        """Apply a profile to an existing account.

        Policy, then homescreen (configuration followed by display
        preferences), then companion template. A failing aspect is recorded
        and the next one is still attempted.

        Args:
            account_id: Target account
            profile: Profile to apply
            username: Account name, used for the companion user
            password: Account password, used for the companion user
            email: Contact address, used for the companion user

        Returns:
            Per-aspect outcome
        """
        applied: dict[ProfileAspect, bool] = {}
        errors: dict[ProfileAspect, str] = {}

        with logfire.span(
            "profile_service.apply", account_id=account_id, profile=profile.name
        ):
            if profile.has_policy:
                try:
                    await self.account_client.set_policy(account_id, profile.policy)
                    applied[ProfileAspect.POLICY] = True
                except ExternalServiceError as e:
                    applied[ProfileAspect.POLICY] = False
                    errors[ProfileAspect.POLICY] = str(e)

            if profile.has_homescreen:
                try:
                    await self.account_client.set_configuration(
                        account_id, profile.configuration
                    )
                    await self.account_client.set_display_preferences(
                        account_id, profile.display_preferences
                    )
                    applied[ProfileAspect.HOMESCREEN] = True
                except ExternalServiceError as e:
                    applied[ProfileAspect.HOMESCREEN] = False
                    errors[ProfileAspect.HOMESCREEN] = str(e)

            if profile.has_companion_template and self.companion_settings.enabled:
                try:
                    await self.companion_client.create_user(
                        username, password, email, profile.companion_template
                    )
                    applied[ProfileAspect.COMPANION] = True
                except ExternalServiceError as e:
                    applied[ProfileAspect.COMPANION] = False
                    errors[ProfileAspect.COMPANION] = str(e)

            for aspect, error in errors.items():
                logfire.error(
                    "Failed to apply profile aspect",
                    account_id=account_id,
                    profile=profile.name,
                    aspect=aspect.value,
                    error=error,
                )
            return ProfileApplication(applied=applied, errors=errors)

    async def list_profiles(self) -> list[Profile]:
        """All profiles, the default one first."""
        profiles = await self.profile_repository.find_all()
        return sorted(profiles, key=lambda p: (not p.default, p.name))

    async def set_default(self, name: str) -> None:
        """Raises NotFoundError if no profile has that name."""
        if not await self.profile_repository.set_default(name):
            raise NotFoundError("Profile", name)
        logfire.info("Default profile set", profile=name)

    async def delete(self, name: str) -> None:
        """Raises NotFoundError if no profile has that name."""
        if not await self.profile_repository.delete(name):
            raise NotFoundError("Profile", name)
        logfire.info("Profile deleted", profile=name)

    async def create_from_account(
        self,
        name: str,
        account_id: AccountId,
        homescreen: bool = False,
        companion_user_id: str = "",
    ) -> Profile:
        """Capture an existing account's settings as a new profile.

        Raises:
            ExternalServiceError: If the account service cannot be read
        """
        with logfire.span("profile_service.create_from_account", profile=name):
            account = await self.account_client.get_account(account_id)
            configuration = {}
            display_preferences = {}
            if homescreen:
                configuration = account.configuration
                display_preferences = await self.account_client.get_display_preferences(
                    account_id
                )
            companion_template = {}
            if companion_user_id and self.companion_settings.enabled:
                companion_template = await self.companion_client.template_by_id(
                    companion_user_id
                )

            existing = await self.profile_repository.find_by_name(name)
            profile = Profile(
                name=name,
                default=existing.default if existing else False,
                from_account=account.name,
                policy=account.policy,
                configuration=configuration,
                display_preferences=display_preferences,
                companion_template=companion_template,
            )
            saved = await self.profile_repository.save(profile)
            logfire.info(
                "Profile created",
                profile=name,
                from_account=account.name,
                homescreen=saved.has_homescreen,
            )
            return saved
