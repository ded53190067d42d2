"""Profile entity.

A profile is a reusable bundle of settings applied to new accounts: the
account policy, optionally a homescreen (configuration plus display
preferences), and optionally a companion service user template.
"""

from typing import Any

from pydantic import Field

from enroll.domain.model.common import DomainModel


class Profile(DomainModel):
    """Named settings template."""

    name: str
    default: bool = False
    from_account: str = ""  # Name of the account the profile was captured from
    library_access: str = ""
    policy: dict[str, Any] = Field(default_factory=dict)
    configuration: dict[str, Any] = Field(default_factory=dict)
    display_preferences: dict[str, Any] = Field(default_factory=dict)
    companion_template: dict[str, Any] = Field(default_factory=dict)

    @property
    def has_policy(self) -> bool:
        return bool(self.policy)

    @property
    def has_homescreen(self) -> bool:
        return bool(self.configuration) and bool(self.display_preferences)

    @property
    def has_companion_template(self) -> bool:
        return bool(self.companion_template)
