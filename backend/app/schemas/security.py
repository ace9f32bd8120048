from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field

from app.schemas.common import ReadModel


class AuthorityCreate(BaseModel):
    name: Optional[str] = Field(None, max_length=50)
    description: Optional[str] = Field(None, max_length=255)


class AuthorityRead(ReadModel):
    id: int
    name: str
    description: Optional[str] = None


class PermissionCreate(BaseModel):
    name: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = Field(None, max_length=255)
    authority_id: Optional[int] = None


class PermissionRead(ReadModel):
    id: int
    name: str
    description: Optional[str] = None
    authority_id: Optional[int] = None

    authority: Optional[AuthorityRead] = None


class RoleCreate(BaseModel):
    name: Optional[str] = Field(None, max_length=50)
    description: Optional[str] = Field(None, max_length=255)
    permission_ids: Optional[List[int]] = None


class RoleRead(ReadModel):
    id: int
    name: str
    description: Optional[str] = None
    permission_ids: List[int] = []


class GroupCreate(BaseModel):
    name: Optional[str] = Field(None, max_length=50)
    description: Optional[str] = Field(None, max_length=255)
    role_ids: Optional[List[int]] = None


class GroupRead(ReadModel):
    id: int
    name: str
    description: Optional[str] = None
    role_ids: List[int] = []


class UserCreate(BaseModel):
    username: Optional[str] = Field(None, min_length=3, max_length=20)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=6, max_length=128)
    enabled: Optional[bool] = None
    role_ids: Optional[List[int]] = None
    group_ids: Optional[List[int]] = None


class UserRead(ReadModel):
    id: int
    username: str
    email: str
    enabled: bool
    created_at: Optional[datetime] = None
    role_ids: List[int] = []
    group_ids: List[int] = []


class UserProfileRead(UserRead):
    roles: List[str] = []
    groups: List[str] = []
    permissions: List[str] = []
