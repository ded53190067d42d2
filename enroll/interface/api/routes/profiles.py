"""Admin profile routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, HTTPException, status

from enroll.application.usecase.profile import (
    CreateProfileRequest,
    CreateProfileUseCase,
    DeleteProfileRequest,
    DeleteProfileUseCase,
    ListProfilesResponse,
    ListProfilesUseCase,
    ProfileItem,
    SetDefaultProfileRequest,
    SetDefaultProfileUseCase,
)
from enroll.config import Settings
from enroll.domain.error import ExternalServiceError, NotFoundError
from enroll.interface.error import require_admin

router = APIRouter(prefix="/profiles", tags=["profiles"], route_class=DishkaRoute)


@router.get("", response_model=ListProfilesResponse)
async def list_profiles(
    use_case: FromDishka[ListProfilesUseCase],
    settings: FromDishka[Settings],
    x_admin_key: str | None = Header(default=None),
) -> ListProfilesResponse:
    require_admin(settings, x_admin_key)
    return await use_case.execute()


@router.post("", response_model=ProfileItem, status_code=status.HTTP_201_CREATED)
async def create_profile(
    request: CreateProfileRequest,
    use_case: FromDishka[CreateProfileUseCase],
    settings: FromDishka[Settings],
    x_admin_key: str | None = Header(default=None),
) -> ProfileItem:
    """Capture an existing account's settings as a profile."""
    require_admin(settings, x_admin_key)
    try:
        return await use_case.execute(request)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ExternalServiceError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))


@router.post("/default", status_code=status.HTTP_204_NO_CONTENT)
async def set_default_profile(
    request: SetDefaultProfileRequest,
    use_case: FromDishka[SetDefaultProfileUseCase],
    settings: FromDishka[Settings],
    x_admin_key: str | None = Header(default=None),
) -> None:
    require_admin(settings, x_admin_key)
    try:
        await use_case.execute(request)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/{name}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_profile(
    name: str,
    use_case: FromDishka[DeleteProfileUseCase],
    settings: FromDishka[Settings],
    x_admin_key: str | None = Header(default=None),
) -> None:
    require_admin(settings, x_admin_key)
    try:
        await use_case.execute(DeleteProfileRequest(name=name))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
