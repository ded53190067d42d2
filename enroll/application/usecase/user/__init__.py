"""User use cases."""

from enroll.application.usecase.user.announce import (
    AnnounceRequest,
    AnnounceResponse,
    AnnounceUseCase,
)
from enroll.application.usecase.user.announcement_templates import (
    AnnouncementTemplateRequest,
    DeleteAnnouncementTemplateUseCase,
    GetAnnouncementTemplateUseCase,
    ListAnnouncementTemplatesResponse,
    ListAnnouncementTemplatesUseCase,
    SaveAnnouncementTemplateUseCase,
)

__all__ = [
    "AnnounceRequest",
    "AnnounceResponse",
    "AnnounceUseCase",
    "AnnouncementTemplateRequest",
    "DeleteAnnouncementTemplateUseCase",
    "GetAnnouncementTemplateUseCase",
    "ListAnnouncementTemplatesResponse",
    "ListAnnouncementTemplatesUseCase",
    "SaveAnnouncementTemplateUseCase",
]
