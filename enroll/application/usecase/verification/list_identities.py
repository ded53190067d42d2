"""List linked identities use case."""

from pydantic import BaseModel

from enroll.application.usecase.base import BaseUseCase
from enroll.domain.model import LinkedIdentity
from enroll.domain.service import AccountService
from enroll.domain.value import AccountId


class ListIdentitiesRequest(BaseModel):
    account_id: str


class ListIdentitiesResponse(BaseModel):
    identities: list[LinkedIdentity]
    email: str | None = None
    expiry: str | None = None


class ListIdentitiesUseCase(BaseUseCase):
    """Use case for showing how an account can be reached."""

    def __init__(self, account_service: AccountService) -> None:
        self.account_service = account_service

    async def execute(self, request: ListIdentitiesRequest) -> ListIdentitiesResponse:
        account_id = AccountId(request.account_id)
        identities = await self.account_service.identities(account_id)
        email = await self.account_service.email_repository.find_by_account(account_id)
        expiry = await self.account_service.get_expiry(account_id)
        return ListIdentitiesResponse(
            identities=identities,
            email=email.address if email else None,
            expiry=expiry.isoformat() if expiry else None,
        )
