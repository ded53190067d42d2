"""Invite use cases."""

from enroll.application.usecase.invite.create_invite import (
    CreateInviteRequest,
    CreateInviteUseCase,
    InviteItem,
)
from enroll.application.usecase.invite.delete_invite import (
    DeleteInviteRequest,
    DeleteInviteUseCase,
)
from enroll.application.usecase.invite.list_invites import (
    ListInvitesRequest,
    ListInvitesResponse,
    ListInvitesUseCase,
)
from enroll.application.usecase.invite.set_invite_notify import (
    InviteNotifyChange,
    SetInviteNotifyRequest,
    SetInviteNotifyUseCase,
)
from enroll.application.usecase.invite.set_invite_profile import (
    SetInviteProfileRequest,
    SetInviteProfileUseCase,
)
from enroll.application.usecase.invite.sweep_expired_invites import (
    SweepExpiredInvitesRequest,
    SweepExpiredInvitesResponse,
    SweepExpiredInvitesUseCase,
)
from enroll.application.usecase.invite.validate_invite import (
    ValidateInviteRequest,
    ValidateInviteResponse,
    ValidateInviteUseCase,
)

__all__ = [
    "CreateInviteRequest",
    "CreateInviteUseCase",
    "DeleteInviteRequest",
    "DeleteInviteUseCase",
    "InviteItem",
    "InviteNotifyChange",
    "ListInvitesRequest",
    "ListInvitesResponse",
    "ListInvitesUseCase",
    "SetInviteNotifyRequest",
    "SetInviteNotifyUseCase",
    "SetInviteProfileRequest",
    "SetInviteProfileUseCase",
    "SweepExpiredInvitesRequest",
    "SweepExpiredInvitesResponse",
    "SweepExpiredInvitesUseCase",
    "ValidateInviteRequest",
    "ValidateInviteResponse",
    "ValidateInviteUseCase",
]
