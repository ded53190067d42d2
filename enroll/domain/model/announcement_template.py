"""Announcement template entity."""

from pydantic import Field

from enroll.domain.model.common import DomainModel


class AnnouncementTemplate(DomainModel):
    """Saved announcement an admin can reload, edit and send again.

    ``body`` may use ``{{ username }}``, filled per recipient at send time.
    """

    name: str = Field(min_length=1)
    subject: str = Field(min_length=1)
    body: str = Field(min_length=1)
