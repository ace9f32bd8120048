from fastapi import APIRouter, Depends, Response, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from app import models
from app.api.deps import get_actor, get_current_user
from app.database import get_db
from app.schemas.auth import LoginRequest, RefreshRequest, RegisterRequest, Token
from app.schemas.security import UserProfileRead
from app.services.audit import AuditActor
from app.services.auth import AuthService
from app.services.security import UserService

router = APIRouter(prefix="/auth", tags=["auth"])


def _auth_service(
    db: Session = Depends(get_db), actor: AuditActor = Depends(get_actor)
) -> AuthService:
    return AuthService(db, actor)


@router.post("/login", response_model=Token)
def login(payload: LoginRequest, service: AuthService = Depends(_auth_service)):
    return service.login(payload.username, payload.password)


@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    service: AuthService = Depends(_auth_service),
):
    return service.login(form_data.username, form_data.password)


@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, service: AuthService = Depends(_auth_service)):
    return service.register(payload)


@router.post("/refresh", response_model=Token)
def refresh(payload: RefreshRequest, service: AuthService = Depends(_auth_service)):
    return service.refresh(payload.refresh_token)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    current_user: models.User = Depends(get_current_user),
    service: AuthService = Depends(_auth_service),
):
    service.logout(current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/me", response_model=UserProfileRead, response_model_exclude_none=True)
def read_current_user(
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return UserService(db).profile(current_user)
