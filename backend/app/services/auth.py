"""Login, registration, token refresh and logout flows."""

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from app import models
from app.config import settings
from app.core.errors import AuthenticationError, ConflictError
from app.core.security import (
    access_token_ttl_seconds,
    create_access_token,
    hash_password,
    new_refresh_token_value,
    refresh_token_expiry,
    verify_password,
)
from app.schemas.auth import RegisterRequest, Token
from app.services.audit import AuditActor, SYSTEM_ACTOR, audit_event
from app.services.security import ADMIN_ROLE, USER_ROLE

logger = logging.getLogger("raas")

DEFAULT_AUTHORITY = "USER_MGMT"
DEFAULT_PERMISSIONS = {
    "user:read": "Read users",
    "user:write": "Create and update users",
    "user:delete": "Delete users",
}


def _aware(value: datetime) -> datetime:
    # sqlite hands back naive datetimes
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class AuthService:
    def __init__(self, db: Session, actor: Optional[AuditActor] = None):
        self.db = db
        self.actor = actor or SYSTEM_ACTOR

    def _audit(self, action, user=None, username=None, **kwargs):
        actor = AuditActor(
            username=username or (user.username if user else self.actor.username),
            ip=self.actor.ip,
            user_agent=self.actor.user_agent,
            request_id=self.actor.request_id,
        )
        audit_event(
            action,
            actor,
            bind=self.db.get_bind(),
            entity_name="User",
            entity_id=user.id if user else None,
            module="auth",
            **kwargs,
        )

    def issue_tokens(self, user: models.User) -> Token:
        self.db.query(models.RefreshToken).filter(models.RefreshToken.user_id == user.id).delete(
            synchronize_session=False
        )
        refresh = models.RefreshToken(
            token=new_refresh_token_value(),
            expiry_date=refresh_token_expiry(),
            user_id=user.id,
        )
        self.db.add(refresh)
        self.db.commit()
        return Token(
            access_token=create_access_token(subject=user.username),
            refresh_token=refresh.token,
            token_type="Bearer",
            expires_in=access_token_ttl_seconds(),
        )

    def authenticate(self, username: str, password: str) -> models.User:
        user = self.db.query(models.User).filter(models.User.username == username).first()
        if not user or not verify_password(password, user.hashed_password):
            self._audit(
                models.AuditAction.LOGIN,
                user=user,
                username=username,
                method_name="login",
                status=models.AuditStatus.FAILED,
                error_message="Invalid username or password",
            )
            raise AuthenticationError("Invalid username or password")
        if not user.enabled:
            self._audit(
                models.AuditAction.LOGIN,
                user=user,
                method_name="login",
                status=models.AuditStatus.FAILED,
                error_message="User account is disabled",
            )
            raise AuthenticationError("User account is disabled")
        return user

    def login(self, username: str, password: str) -> Token:
        user = self.authenticate(username, password)
        token = self.issue_tokens(user)
        self._audit(models.AuditAction.LOGIN, user=user, method_name="login")
        logger.info("login_succeeded", extra={"username": user.username})
        return token

    def register(self, payload: RegisterRequest) -> Token:
        email = str(payload.email).strip().lower()
        if self.db.query(models.User).filter(models.User.username == payload.username).first():
            raise ConflictError("Username already exists")
        if self.db.query(models.User).filter(models.User.email == email).first():
            raise ConflictError("Email already exists")

        user = models.User(
            username=payload.username,
            email=email,
            hashed_password=hash_password(payload.password),
            enabled=True,
        )
        role = self.db.query(models.Role).filter(models.Role.name == USER_ROLE).first()
        if role is not None:
            user.roles.append(role)
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)

        self._audit(
            models.AuditAction.CREATE,
            user=user,
            method_name="register",
            new_values={"username": user.username, "email": user.email},
        )
        logger.info("user_registered", extra={"username": user.username})
        return self.issue_tokens(user)

    def refresh(self, token_value: str) -> Token:
        stored = (
            self.db.query(models.RefreshToken)
            .filter(models.RefreshToken.token == token_value)
            .first()
        )
        if stored is None:
            raise AuthenticationError("Refresh token not found")
        if _aware(stored.expiry_date) < datetime.now(timezone.utc):
            self.db.delete(stored)
            self.db.commit()
            raise AuthenticationError("Refresh token expired. Please login again.")
        user = stored.user
        if not user.enabled:
            raise AuthenticationError("User account is disabled")
        return self.issue_tokens(user)

    def logout(self, user: models.User) -> None:
        self.db.query(models.RefreshToken).filter(models.RefreshToken.user_id == user.id).delete(
            synchronize_session=False
        )
        self.db.commit()
        self._audit(models.AuditAction.LOGOUT, user=user, method_name="logout")
        logger.info("logout", extra={"username": user.username})


def seed_defaults(db: Session) -> None:
    """Create the default authority, permissions, roles and admin account if missing."""

    authority = db.query(models.Authority).filter(models.Authority.name == DEFAULT_AUTHORITY).first()
    if authority is None:
        authority = models.Authority(name=DEFAULT_AUTHORITY, description="User management")
        db.add(authority)
        db.flush()

    permissions = {}
    for name, description in DEFAULT_PERMISSIONS.items():
        perm = db.query(models.Permission).filter(models.Permission.name == name).first()
        if perm is None:
            perm = models.Permission(name=name, description=description, authority_id=authority.id)
            db.add(perm)
            db.flush()
        permissions[name] = perm

    roles = {}
    for name, granted in (
        (ADMIN_ROLE, list(DEFAULT_PERMISSIONS)),
        (USER_ROLE, ["user:read"]),
    ):
        role = db.query(models.Role).filter(models.Role.name == name).first()
        if role is None:
            role = models.Role(name=name, description=f"{name.title()} role")
            role.permissions = [permissions[p] for p in granted]
            db.add(role)
            db.flush()
        roles[name] = role

    if db.query(models.User).filter(models.User.username == "admin").first() is None:
        admin = models.User(
            username="admin",
            email="admin@example.com",
            hashed_password=hash_password(settings.default_admin_password),
            enabled=True,
        )
        admin.roles.append(roles[ADMIN_ROLE])
        db.add(admin)
        logger.info("default_admin_created", extra={"username": "admin"})

    db.commit()
