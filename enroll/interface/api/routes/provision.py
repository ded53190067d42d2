"""Provisioning routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Response, status

from enroll.application.usecase.provisioning import (
    BeginProvisioningRequest,
    BeginProvisioningUseCase,
    ProvisioningResponse,
    ResumeProvisioningRequest,
    ResumeProvisioningUseCase,
)
from enroll.domain.value import ProvisioningStatus, RejectionReason

router = APIRouter(prefix="/provision", tags=["provision"], route_class=DishkaRoute)

REJECTION_STATUS = {
    RejectionReason.USER_EXISTS: status.HTTP_409_CONFLICT,
    RejectionReason.CONFIRMATION_FAILED: status.HTTP_502_BAD_GATEWAY,
    RejectionReason.ACCOUNT_CREATION_FAILED: status.HTTP_502_BAD_GATEWAY,
}


def status_code_for(result: ProvisioningResponse) -> int:
    """HTTP status for a provisioning outcome."""
    if result.status == ProvisioningStatus.CREATED:
        return status.HTTP_201_CREATED
    if result.status == ProvisioningStatus.CONFIRMATION_PENDING:
        return status.HTTP_202_ACCEPTED
    return REJECTION_STATUS.get(result.reason, status.HTTP_400_BAD_REQUEST)


@router.post("", response_model=ProvisioningResponse)
async def submit_provisioning(
    request: BeginProvisioningRequest,
    response: Response,
    use_case: FromDishka[BeginProvisioningUseCase],
) -> ProvisioningResponse:
    """Redeem an invite.

    Returns 201 when the account was created, 202 when a confirmation email
    was sent, and a 4xx/5xx carrying the rejection reason otherwise.
    """
    result = await use_case.execute(request)
    response.status_code = status_code_for(result)
    return result


@router.get("/confirm/{token}", response_model=ProvisioningResponse)
async def confirm_provisioning(
    token: str,
    response: Response,
    use_case: FromDishka[ResumeProvisioningUseCase],
) -> ProvisioningResponse:
    """Finish provisioning from a mailed confirmation link."""
    result = await use_case.execute(ResumeProvisioningRequest(token=token))
    response.status_code = status_code_for(result)
    return result
