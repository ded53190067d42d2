"""Account snapshot from the media server."""

from typing import Any

from pydantic import Field

from enroll.domain.model.common import DomainModel
from enroll.domain.value import AccountId


class Account(DomainModel):
    """Media server account as reported by the account service."""

    id: AccountId
    name: str
    policy: dict[str, Any] = Field(default_factory=dict)
    configuration: dict[str, Any] = Field(default_factory=dict)
