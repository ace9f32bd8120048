from app.api.crud import build_crud_router
from app.schemas.security import (
    AuthorityCreate,
    AuthorityRead,
    GroupCreate,
    GroupRead,
    PermissionCreate,
    PermissionRead,
    RoleCreate,
    RoleRead,
)
from app.services.security import (
    ADMIN_ROLE,
    AuthorityService,
    GroupService,
    PermissionService,
    RoleService,
)

_ADMIN_ONLY = {"read_roles": (ADMIN_ROLE,), "write_roles": (ADMIN_ROLE,)}

routers = [
    build_crud_router(
        prefix="/authorities",
        tag="authorities",
        service_class=AuthorityService,
        create_schema=AuthorityCreate,
        read_schema=AuthorityRead,
        **_ADMIN_ONLY,
    ),
    build_crud_router(
        prefix="/permissions",
        tag="permissions",
        service_class=PermissionService,
        create_schema=PermissionCreate,
        read_schema=PermissionRead,
        parents={"authority": "authority_id"},
        parent_counts=True,
        **_ADMIN_ONLY,
    ),
    build_crud_router(
        prefix="/roles",
        tag="roles",
        service_class=RoleService,
        create_schema=RoleCreate,
        read_schema=RoleRead,
        **_ADMIN_ONLY,
    ),
    build_crud_router(
        prefix="/groups",
        tag="groups",
        service_class=GroupService,
        create_schema=GroupCreate,
        read_schema=GroupRead,
        **_ADMIN_ONLY,
    ),
]
