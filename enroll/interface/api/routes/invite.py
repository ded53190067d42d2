"""Public invite routes used by the signup form."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from enroll.application.usecase.invite import (
    ValidateInviteRequest,
    ValidateInviteResponse,
    ValidateInviteUseCase,
)
from enroll.application.usecase.verification import (
    CheckVerificationRequest,
    CheckVerificationResponse,
    CheckVerificationUseCase,
    IssuePINRequest,
    IssuePINResponse,
    IssuePINUseCase,
)
from enroll.domain.error import ExternalServiceError, InvalidCodeError, NotFoundError
from enroll.domain.value import Platform

router = APIRouter(prefix="/invite", tags=["invite"], route_class=DishkaRoute)


class MatrixUserAPIRequest(BaseModel):
    user_id: str


@router.get("/{code}", response_model=ValidateInviteResponse)
async def validate_invite(
    code: str,
    use_case: FromDishka[ValidateInviteUseCase],
) -> ValidateInviteResponse:
    """Check an invite code and report what the signup form must collect."""
    result = await use_case.execute(ValidateInviteRequest(code=code))
    if not result.valid:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Invalid invite code")
    return result


async def _issue_pin(use_case: IssuePINUseCase, request: IssuePINRequest) -> IssuePINResponse:
    try:
        return await use_case.execute(request)
    except InvalidCodeError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ExternalServiceError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))


@router.get("/{code}/{platform}/pin", response_model=IssuePINResponse)
async def issue_pin(
    code: str,
    platform: Platform,
    use_case: FromDishka[IssuePINUseCase],
) -> IssuePINResponse:
    """Issue a PIN for the user to send to the platform bot."""
    if platform == Platform.MATRIX:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Matrix PINs are sent to the user; POST the user id instead",
        )
    return await _issue_pin(use_case, IssuePINRequest(code=code, platform=platform))


@router.post("/{code}/matrix/user", response_model=IssuePINResponse)
async def send_matrix_pin(
    code: str,
    request: MatrixUserAPIRequest,
    use_case: FromDishka[IssuePINUseCase],
) -> IssuePINResponse:
    """Open a DM with a Matrix user and send them a PIN."""
    return await _issue_pin(
        use_case,
        IssuePINRequest(code=code, platform=Platform.MATRIX, user_id=request.user_id),
    )


@router.get("/{code}/{platform}/verified/{pin}", response_model=CheckVerificationResponse)
async def check_verified(
    code: str,
    platform: Platform,
    pin: str,
    use_case: FromDishka[CheckVerificationUseCase],
    user_id: str = "",
) -> CheckVerificationResponse:
    """Poll a PIN. For Matrix, ``user_id`` confirms the PIN the user typed."""
    try:
        return await use_case.execute(
            CheckVerificationRequest(code=code, platform=platform, pin=pin, user_id=user_id)
        )
    except InvalidCodeError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
