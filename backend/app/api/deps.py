from typing import Callable, Optional

from fastapi import Depends, HTTPException, Query, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from app.config import settings
from app.core.observability import request_id_for
from app.core.security import decode_access_token_subject
from app.database import get_db
from app.models import User
from app.schemas.common import PageRequest
from app.services.audit import AuditActor
from app.services.security import has_any_role, has_permission, is_admin


def _token_url() -> str:
    if settings.api_prefix:
        prefix = settings.api_prefix.rstrip("/")
        return f"{prefix}/auth/token"
    return "/auth/token"


oauth2_scheme = OAuth2PasswordBearer(tokenUrl=_token_url())
oauth2_optional = OAuth2PasswordBearer(tokenUrl=_token_url(), auto_error=False)

_DB_DEP = Depends(get_db)
_TOKEN_OPT_DEP = Depends(oauth2_optional)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    db: Session = _DB_DEP,
    token: Optional[str] = _TOKEN_OPT_DEP,
) -> User:
    if not token:
        raise _unauthorized("Not authenticated")

    subject = decode_access_token_subject(token)
    if not subject:
        raise _unauthorized("Invalid credentials")

    user = db.query(User).filter(User.username == subject).first()
    if not user or not user.enabled:
        raise _unauthorized("User not found or disabled")
    return user


def get_current_user_optional(
    db: Session = _DB_DEP,
    token: Optional[str] = _TOKEN_OPT_DEP,
) -> Optional[User]:
    if not token:
        return None
    try:
        return get_current_user(db=db, token=token)
    except HTTPException:
        return None


_CURRENT_USER_DEP = Depends(get_current_user)
_CURRENT_USER_OPT_DEP = Depends(get_current_user_optional)


def require_roles(*roles: str) -> Callable:
    """Gate on role names; ADMIN has access to everything. No roles means any authenticated user."""

    def dependency(user: User = _CURRENT_USER_DEP) -> User:
        if roles and not has_any_role(user, roles):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient role")
        return user

    return dependency


def require_self_or_admin(user_id: int, user: User = _CURRENT_USER_DEP) -> User:
    if user.id != user_id and not is_admin(user):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")
    return user


def require_permissions(*names: str) -> Callable:
    def dependency(user: User = _CURRENT_USER_DEP) -> User:
        if is_admin(user):
            return user
        missing = [n for n in names if not has_permission(user, n)]
        if missing:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Missing permission: {', '.join(missing)}",
            )
        return user

    return dependency


def get_actor(request: Request, user: Optional[User] = _CURRENT_USER_OPT_DEP) -> AuditActor:
    return AuditActor(
        username=user.username if user else None,
        ip=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
        request_id=request_id_for(request),
    )


def page_request(
    page: int = Query(0, ge=0, description="Zero-based page index."),
    size: Optional[int] = Query(None, ge=1, description="Page size."),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_dir: str = Query("asc", alias="sortDir", pattern="^(asc|desc|ASC|DESC)$"),
) -> PageRequest:
    size = min(size or settings.default_page_size, settings.max_page_size)
    return PageRequest(page=page, size=size, sort_by=sort_by, sort_dir=sort_dir)
