"""Email address entity."""

from enroll.domain.model.common import DomainModel
from enroll.domain.value import AccountId


class EmailAddress(DomainModel):
    """Contact email address on file for an account."""

    account_id: AccountId
    address: str
    contact: bool = True
