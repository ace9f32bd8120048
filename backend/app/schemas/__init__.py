from app.schemas.audit import AuditLogRead
from app.schemas.auth import LoginRequest, RefreshRequest, RegisterRequest, Token, TokenPayload
from app.schemas.common import (
    CountRead,
    DesignationFields,
    DesignationRead,
    ErrorResponse,
    Page,
    PageRequest,
    ReadModel,
)
from app.schemas.files import FileRead
from app.schemas.security import (
    AuthorityCreate,
    AuthorityRead,
    GroupCreate,
    GroupRead,
    PermissionCreate,
    PermissionRead,
    RoleCreate,
    RoleRead,
    UserCreate,
    UserProfileRead,
    UserRead,
)

__all__ = [
    "AuditLogRead",
    "AuthorityCreate",
    "AuthorityRead",
    "CountRead",
    "DesignationFields",
    "DesignationRead",
    "ErrorResponse",
    "FileRead",
    "GroupCreate",
    "GroupRead",
    "LoginRequest",
    "Page",
    "PageRequest",
    "PermissionCreate",
    "PermissionRead",
    "ReadModel",
    "RefreshRequest",
    "RegisterRequest",
    "RoleCreate",
    "RoleRead",
    "Token",
    "TokenPayload",
    "UserCreate",
    "UserProfileRead",
    "UserRead",
]
