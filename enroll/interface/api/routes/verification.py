"""Bot callback routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, HTTPException, status
from pydantic import BaseModel

from enroll.application.usecase.verification import (
    MarkVerifiedRequest,
    MarkVerifiedResponse,
    MarkVerifiedUseCase,
)
from enroll.config import Settings
from enroll.domain.error import NotFoundError
from enroll.domain.value import Platform
from enroll.interface.error import require_admin

router = APIRouter(prefix="/verification", tags=["verification"], route_class=DishkaRoute)


class CallbackAPIRequest(BaseModel):
    """What a platform bot reports."""

    pin: str = ""
    user_id: str = ""
    display_name: str = ""
    channel_id: str = ""
    lang: str | None = None


@router.post("/{platform}/callback", response_model=MarkVerifiedResponse)
async def verification_callback(
    platform: Platform,
    request: CallbackAPIRequest,
    use_case: FromDishka[MarkVerifiedUseCase],
    settings: FromDishka[Settings],
    x_admin_key: str | None = Header(default=None),
) -> MarkVerifiedResponse:
    """Record a PIN the bot received, or a chat's language change.

    Bots authenticate with the admin key.
    """
    require_admin(settings, x_admin_key)
    try:
        return await use_case.execute(
            MarkVerifiedRequest(platform=platform, **request.model_dump())
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
