"""Admin user routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, HTTPException, status
from pydantic import BaseModel

from enroll.application.usecase.user import (
    AnnounceRequest,
    AnnounceResponse,
    AnnounceUseCase,
    AnnouncementTemplateRequest,
    DeleteAnnouncementTemplateUseCase,
    GetAnnouncementTemplateUseCase,
    ListAnnouncementTemplatesResponse,
    ListAnnouncementTemplatesUseCase,
    SaveAnnouncementTemplateUseCase,
)
from enroll.application.usecase.verification import (
    LinkIdentityRequest,
    LinkIdentityUseCase,
    ListIdentitiesRequest,
    ListIdentitiesResponse,
    ListIdentitiesUseCase,
)
from enroll.config import Settings
from enroll.domain.error import NotFoundError
from enroll.domain.model import AnnouncementTemplate, LinkedIdentity
from enroll.domain.value import Platform
from enroll.interface.error import require_admin

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


class LinkIdentityAPIRequest(BaseModel):
    platform: Platform
    pin: str
    contact: bool = True


@router.post("/announce", response_model=AnnounceResponse)
async def announce(
    request: AnnounceRequest,
    use_case: FromDishka[AnnounceUseCase],
    settings: FromDishka[Settings],
    x_admin_key: str | None = Header(default=None),
) -> AnnounceResponse:
    """Message a set of users over their contact channels.

    Partial delivery is reported in ``failures``, not as an error.
    """
    require_admin(settings, x_admin_key)
    try:
        return await use_case.execute(request)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/announce/templates", response_model=ListAnnouncementTemplatesResponse)
async def list_announcement_templates(
    use_case: FromDishka[ListAnnouncementTemplatesUseCase],
    settings: FromDishka[Settings],
    x_admin_key: str | None = Header(default=None),
) -> ListAnnouncementTemplatesResponse:
    require_admin(settings, x_admin_key)
    return await use_case.execute()


@router.post("/announce/templates", response_model=AnnouncementTemplate)
async def save_announcement_template(
    request: AnnouncementTemplate,
    use_case: FromDishka[SaveAnnouncementTemplateUseCase],
    settings: FromDishka[Settings],
    x_admin_key: str | None = Header(default=None),
) -> AnnouncementTemplate:
    """Save an announcement for later; an existing name is overwritten."""
    require_admin(settings, x_admin_key)
    try:
        return await use_case.execute(request)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/announce/templates/{name}", response_model=AnnouncementTemplate)
async def get_announcement_template(
    name: str,
    use_case: FromDishka[GetAnnouncementTemplateUseCase],
    settings: FromDishka[Settings],
    x_admin_key: str | None = Header(default=None),
) -> AnnouncementTemplate:
    require_admin(settings, x_admin_key)
    try:
        return await use_case.execute(AnnouncementTemplateRequest(name=name))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/announce/templates/{name}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_announcement_template(
    name: str,
    use_case: FromDishka[DeleteAnnouncementTemplateUseCase],
    settings: FromDishka[Settings],
    x_admin_key: str | None = Header(default=None),
) -> None:
    require_admin(settings, x_admin_key)
    try:
        await use_case.execute(AnnouncementTemplateRequest(name=name))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/{account_id}/identities", response_model=ListIdentitiesResponse)
async def list_identities(
    account_id: str,
    use_case: FromDishka[ListIdentitiesUseCase],
    settings: FromDishka[Settings],
    x_admin_key: str | None = Header(default=None),
) -> ListIdentitiesResponse:
    require_admin(settings, x_admin_key)
    return await use_case.execute(ListIdentitiesRequest(account_id=account_id))


@router.post(
    "/{account_id}/identities",
    response_model=LinkedIdentity,
    status_code=status.HTTP_201_CREATED,
)
async def link_identity(
    account_id: str,
    request: LinkIdentityAPIRequest,
    use_case: FromDishka[LinkIdentityUseCase],
    settings: FromDishka[Settings],
    x_admin_key: str | None = Header(default=None),
) -> LinkedIdentity:
    """Link a verified PIN's identity to an existing account."""
    require_admin(settings, x_admin_key)
    try:
        return await use_case.execute(
            LinkIdentityRequest(account_id=account_id, **request.model_dump())
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
