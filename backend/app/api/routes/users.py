from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from app import models
from app.api.crud import service_dependency
from app.api.deps import get_current_user, page_request, require_roles, require_self_or_admin
from app.schemas.common import Page, PageRequest
from app.schemas.security import UserCreate, UserProfileRead, UserRead
from app.services.security import ADMIN_ROLE, UserService, is_admin

router = APIRouter(prefix="/users", tags=["users"])

_service = service_dependency(UserService)
_ADMIN = Depends(require_roles(ADMIN_ROLE))
_SELF_OR_ADMIN = Depends(require_self_or_admin)

_PRIVILEGED_FIELDS = ("role_ids", "group_ids", "enabled")


def _guard_privileged_fields(current_user: models.User, payload: UserCreate) -> None:
    if is_admin(current_user):
        return
    if any(getattr(payload, f) is not None for f in _PRIVILEGED_FIELDS):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only administrators can change roles, groups or account status",
        )


@router.get("/me", response_model=UserProfileRead, response_model_exclude_none=True)
def read_me(
    current_user: models.User = Depends(get_current_user),
    service: UserService = Depends(_service),
):
    return service.profile(current_user)


@router.get(
    "", response_model=Page[UserRead], response_model_exclude_none=True, dependencies=[_ADMIN]
)
def list_users(
    page: PageRequest = Depends(page_request), service: UserService = Depends(_service)
):
    return service.find_all(page)


@router.get(
    "/search",
    response_model=Page[UserRead],
    response_model_exclude_none=True,
    dependencies=[_ADMIN],
)
def search_users(
    query: Optional[str] = Query(None),
    page: PageRequest = Depends(page_request),
    service: UserService = Depends(_service),
):
    return service.search(query, page)


@router.post(
    "",
    response_model=UserRead,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    dependencies=[_ADMIN],
)
def create_user(payload: UserCreate, service: UserService = Depends(_service)):
    return service.create(payload)


@router.get(
    "/{user_id}",
    response_model=UserRead,
    response_model_exclude_none=True,
    dependencies=[_SELF_OR_ADMIN],
)
def get_user(user_id: int, service: UserService = Depends(_service)):
    return service.get(user_id)


@router.put("/{user_id}", response_model=UserRead, response_model_exclude_none=True)
def update_user(
    user_id: int,
    payload: UserCreate,
    current_user: models.User = _SELF_OR_ADMIN,
    service: UserService = Depends(_service),
):
    _guard_privileged_fields(current_user, payload)
    return service.update(user_id, payload)


@router.patch("/{user_id}", response_model=UserRead, response_model_exclude_none=True)
def patch_user(
    user_id: int,
    payload: UserCreate,
    current_user: models.User = _SELF_OR_ADMIN,
    service: UserService = Depends(_service),
):
    _guard_privileged_fields(current_user, payload)
    return service.patch(user_id, payload)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[_ADMIN])
def delete_user(user_id: int, service: UserService = Depends(_service)):
    service.delete(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{user_id}/permissions", response_model=List[str], dependencies=[_SELF_OR_ADMIN])
def user_permissions(user_id: int, service: UserService = Depends(_service)):
    return service.permissions_of(user_id)


@router.post(
    "/{user_id}/roles/{role_id}",
    response_model=UserRead,
    response_model_exclude_none=True,
    dependencies=[_ADMIN],
)
def assign_role(user_id: int, role_id: int, service: UserService = Depends(_service)):
    return service.assign_role(user_id, role_id)


@router.delete(
    "/{user_id}/roles/{role_id}",
    response_model=UserRead,
    response_model_exclude_none=True,
    dependencies=[_ADMIN],
)
def unassign_role(user_id: int, role_id: int, service: UserService = Depends(_service)):
    return service.unassign_role(user_id, role_id)


@router.post(
    "/{user_id}/groups/{group_id}",
    response_model=UserRead,
    response_model_exclude_none=True,
    dependencies=[_ADMIN],
)
def assign_group(user_id: int, group_id: int, service: UserService = Depends(_service)):
    return service.assign_group(user_id, group_id)


@router.delete(
    "/{user_id}/groups/{group_id}",
    response_model=UserRead,
    response_model_exclude_none=True,
    dependencies=[_ADMIN],
)
def unassign_group(user_id: int, group_id: int, service: UserService = Depends(_service)):
    return service.unassign_group(user_id, group_id)
