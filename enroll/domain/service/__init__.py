"""Domain services."""

from .account_service import AccountService
from .announcement_service import AnnouncementService
from .base import Service
from .clients import (
    AccountClient,
    ChatClient,
    CompanionClient,
    DiscordClient,
    EmailSender,
    MatrixClient,
    TelegramClient,
)
from .companion_service import CompanionService
from .confirmation_service import ConfirmationService
from .housekeeping_service import HousekeepingService
from .invite_service import InviteService, generate_code
from .message_service import MessageService
from .notification_service import NotificationService
from .profile_service import ProfileApplication, ProfileService
from .verification_service import (
    DiscordVerifier,
    MatrixVerifier,
    TelegramVerifier,
    Verifier,
    generate_pin,
)

__all__ = [
    "AccountClient",
    "AccountService",
    "AnnouncementService",
    "ChatClient",
    "CompanionClient",
    "CompanionService",
    "ConfirmationService",
    "DiscordClient",
    "DiscordVerifier",
    "EmailSender",
    "HousekeepingService",
    "InviteService",
    "MatrixClient",
    "MatrixVerifier",
    "MessageService",
    "NotificationService",
    "ProfileApplication",
    "ProfileService",
    "Service",
    "TelegramClient",
    "TelegramVerifier",
    "Verifier",
    "generate_code",
    "generate_pin",
]
