"""Admin invite routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, HTTPException, status

from enroll.application.usecase.invite import (
    CreateInviteRequest,
    CreateInviteUseCase,
    DeleteInviteRequest,
    DeleteInviteUseCase,
    InviteItem,
    ListInvitesRequest,
    ListInvitesResponse,
    ListInvitesUseCase,
    SetInviteNotifyRequest,
    SetInviteNotifyUseCase,
    SetInviteProfileRequest,
    SetInviteProfileUseCase,
    SweepExpiredInvitesRequest,
    SweepExpiredInvitesResponse,
    SweepExpiredInvitesUseCase,
)
from enroll.config import Settings
from enroll.domain.error import DuplicateCodeError, NotFoundError
from enroll.interface.error import require_admin

router = APIRouter(prefix="/invites", tags=["invites"], route_class=DishkaRoute)


@router.post("", response_model=InviteItem, status_code=status.HTTP_201_CREATED)
async def create_invite(
    request: CreateInviteRequest,
    use_case: FromDishka[CreateInviteUseCase],
    settings: FromDishka[Settings],
    x_admin_key: str | None = Header(default=None),
) -> InviteItem:
    """Generate an invite, optionally sending it by email or Discord DM."""
    require_admin(settings, x_admin_key)
    try:
        return await use_case.execute(request)
    except DuplicateCodeError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("", response_model=ListInvitesResponse)
async def list_invites(
    use_case: FromDishka[ListInvitesUseCase],
    settings: FromDishka[Settings],
    admin: str | None = None,
    x_admin_key: str | None = Header(default=None),
) -> ListInvitesResponse:
    require_admin(settings, x_admin_key)
    return await use_case.execute(ListInvitesRequest(admin=admin))


@router.delete("/{code}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_invite(
    code: str,
    use_case: FromDishka[DeleteInviteUseCase],
    settings: FromDishka[Settings],
    x_admin_key: str | None = Header(default=None),
) -> None:
    require_admin(settings, x_admin_key)
    try:
        await use_case.execute(DeleteInviteRequest(code=code))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("/profile", status_code=status.HTTP_204_NO_CONTENT)
async def set_invite_profile(
    request: SetInviteProfileRequest,
    use_case: FromDishka[SetInviteProfileUseCase],
    settings: FromDishka[Settings],
    x_admin_key: str | None = Header(default=None),
) -> None:
    require_admin(settings, x_admin_key)
    try:
        await use_case.execute(request)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("/notify", status_code=status.HTTP_204_NO_CONTENT)
async def set_invite_notify(
    request: SetInviteNotifyRequest,
    use_case: FromDishka[SetInviteNotifyUseCase],
    settings: FromDishka[Settings],
    x_admin_key: str | None = Header(default=None),
) -> None:
    require_admin(settings, x_admin_key)
    try:
        await use_case.execute(request)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("/sweep", response_model=SweepExpiredInvitesResponse)
async def sweep_expired_invites(
    use_case: FromDishka[SweepExpiredInvitesUseCase],
    settings: FromDishka[Settings],
    x_admin_key: str | None = Header(default=None),
) -> SweepExpiredInvitesResponse:
    """Run the housekeeping sweep now."""
    require_admin(settings, x_admin_key)
    return await use_case.execute(SweepExpiredInvitesRequest())
