"""Invite domain service."""

import secrets
import string
from datetime import datetime

import logfire

from enroll.domain.error import DuplicateCodeError, NotFoundError
from enroll.domain.model.invite import Invite
from enroll.domain.repository import InviteRepository, ProfileRepository
from enroll.domain.value import DurationOffset, InviteCode, NotifyPreference

from .base import Service

CODE_ALPHABET = string.ascii_letters + string.digits
CODE_LENGTH = 22


def generate_code() -> InviteCode:
    """Generate an unguessable invite code that does not start with a digit."""
    first = secrets.choice(string.ascii_letters)
    rest = "".join(secrets.choice(CODE_ALPHABET) for _ in range(CODE_LENGTH - 1))
    return InviteCode(first + rest)


class InviteService(Service):
    """Domain service for invite lifecycle operations."""

    def __init__(
        self,
        invite_repository: InviteRepository,
        profile_repository: ProfileRepository,
    ) -> None:
        """Initialize invite service.

        Args:
            invite_repository: Invite repository
            profile_repository: Profile repository, used to validate profile names
        """
        self.invite_repository = invite_repository
        self.profile_repository = profile_repository

    async def create_invite(
        self,
        now: datetime,
        valid_for: DurationOffset,
        uses: int | None = 1,
        label: str = "",
        profile: str = "",
        user_expiry: DurationOffset | None = None,
        code: InviteCode | None = None,
    ) -> Invite:
        """Create a new invite.

        Args:
            now: Creation time
            valid_for: How long the invite stays redeemable
            uses: Number of accounts it may create, or None for unlimited
            label: Free-form admin label
            profile: Profile name; unknown names fall back to the default profile
            user_expiry: Expiry offset for accounts created through the invite
            code: Explicit code; generated when omitted

        Returns:
            Created invite

        Raises:
            DuplicateCodeError: If an explicit code is already taken
            ValueError: If ``uses`` is not positive
        """
        if uses is not None and uses < 1:
            raise ValueError("An invite needs at least one use")

        with logfire.span("invite_service.create_invite", uses=uses, label=label):
            profile_name = await self.resolve_profile_name(profile)
            invite = Invite(
                code=code or generate_code(),
                label=label,
                created=now,
                valid_till=valid_for.apply(now),
                remaining_uses=0 if uses is None else uses,
                no_limit=uses is None,
                profile=profile_name,
                user_expiry=user_expiry if user_expiry and not user_expiry.is_zero else None,
            )

            while True:
                try:
                    saved = await self.invite_repository.create(invite)
                    break
                except DuplicateCodeError:
                    if code is not None:
                        raise
                    # Generated collision: draw again
                    invite = invite.model_copy(update={"code": generate_code()})

            logfire.info(
                "Invite created",
                code=saved.code,
                valid_till=saved.valid_till.isoformat(),
                remaining_uses=saved.remaining_uses,
                no_limit=saved.no_limit,
                profile=saved.profile,
            )
            return saved

    async def resolve_profile_name(self, name: str) -> str:
        """Map a requested profile name to one that exists.

        Empty stays empty ("apply nothing"); an unknown name becomes the
        default profile's name, or empty if there is no default.
        """
        if not name:
            return ""
        if await self.profile_repository.find_by_name(name):
            return name
        default = await self.profile_repository.find_default()
        logfire.warn(
            "Unknown profile requested for invite, using default",
            requested=name,
            default=default.name if default else None,
        )
        return default.name if default else ""

    async def get_invite(self, code: InviteCode) -> Invite | None:
        """Get invite by code without any expiry handling."""
        return await self.invite_repository.find_by_code(code)

    async def list_invites(self) -> list[Invite]:
        """Return every stored invite."""
        return await self.invite_repository.find_all()

    async def find_expired(self, now: datetime) -> list[Invite]:
        return await self.invite_repository.find_expired(now)

    async def delete_invite(self, code: InviteCode) -> None:
        """Delete an invite.

        Raises:
            NotFoundError: If the code does not exist
        """
        deleted = await self.invite_repository.delete(code)
        if not deleted:
            logfire.warn("Invite deletion failed: invalid code", code=code)
            raise NotFoundError("Invite", code)
        logfire.info("Invite deleted", code=code)

    async def remove(self, code: InviteCode) -> bool:
        """Delete an invite if it still exists."""
        return await self.invite_repository.delete(code)

    async def set_profile(self, code: InviteCode, profile: str) -> Invite:
        """Change the profile applied by an invite.

        Raises:
            NotFoundError: If the invite or a non-empty profile name is unknown
        """
        if profile and not await self.profile_repository.find_by_name(profile):
            logfire.error("Profile not found", code=code, profile=profile)
            raise NotFoundError("Profile", profile)

        saved = await self.invite_repository.update(
            code, lambda invite: invite.model_copy(update={"profile": profile})
        )
        if saved is None:
            raise NotFoundError("Invite", code)
        logfire.info("Invite profile set", code=code, profile=profile)
        return saved

    async def set_notify(
        self,
        code: InviteCode,
        address: str,
        notify_expiry: bool | None = None,
        notify_creation: bool | None = None,
    ) -> Invite:
        """Update one admin's notification preferences on an invite.

        ``None`` leaves a switch unchanged.

        Raises:
            NotFoundError: If the invite does not exist
        """

        def change(invite: Invite) -> Invite:
            current = invite.notify.get(address, NotifyPreference())
            updated = NotifyPreference(
                notify_expiry=current.notify_expiry if notify_expiry is None else notify_expiry,
                notify_creation=current.notify_creation
                if notify_creation is None
                else notify_creation,
            )
            return invite.model_copy(update={"notify": {**invite.notify, address: updated}})

        saved = await self.invite_repository.update(code, change)
        if saved is None:
            raise NotFoundError("Invite", code)
        preference = saved.notify[address]
        logfire.debug(
            "Invite notify preferences changed",
            code=code,
            address=address,
            notify_expiry=preference.notify_expiry,
            notify_creation=preference.notify_creation,
        )
        return saved

    async def set_send_to(self, code: InviteCode, send_to: str) -> Invite | None:
        return await self.invite_repository.update(
            code, lambda invite: invite.model_copy(update={"send_to": send_to})
        )

    async def record_key(self, code: InviteCode, key: str) -> bool:
        """Remember a confirmation token issued against an invite."""
        added = await self.invite_repository.add_key(code, key)
        if not added:
            logfire.warn("Confirmation key not recorded: invite gone", code=code)
        return added

    async def consume(
        self,
        code: InviteCode,
        identity: str,
        now: datetime,
        key: str | None = None,
    ) -> bool:
        """Record one use of an invite in a single step."""
        with logfire.span("invite_service.consume", code=code, identity=identity):
            consumed = await self.invite_repository.consume(code, identity, now, key)
            if consumed:
                logfire.info("Invite used", code=code, identity=identity)
            else:
                logfire.warn(
                    "Invite could not be consumed", code=code, identity=identity
                )
            return consumed

    async def reserve(
        self, code: InviteCode, now: datetime, key: str | None = None
    ) -> bool:
        """Hold one use of an invite for an account about to be created."""
        reserved = await self.invite_repository.reserve(code, now, key)
        if not reserved:
            logfire.info("Invite use could not be reserved", code=code)
        return reserved

    async def release(self, code: InviteCode, key: str | None = None) -> None:
        await self.invite_repository.release(code, key)
        logfire.info("Invite reservation released", code=code)

    async def record_use(self, code: InviteCode, identity: str, now: datetime) -> bool:
        """Settle a reservation after the account was created."""
        recorded = await self.invite_repository.record_use(code, identity, now)
        if recorded:
            logfire.info("Invite used", code=code, identity=identity)
        else:
            logfire.warn("Invite removed before its use was recorded", code=code)
        return recorded
