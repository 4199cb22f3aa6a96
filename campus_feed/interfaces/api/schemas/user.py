"""User schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr


class UserCreate(UserBase):
    branch_id: UUID | None = None
    year: int | None = Field(default=None, ge=1, le=4)
    semester: int | None = Field(default=None, ge=1, le=8)
    is_admin: bool = False


class UserUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    email: EmailStr | None = None
    branch_id: UUID | None = None
    year: int | None = Field(default=None, ge=1, le=4)
    semester: int | None = Field(default=None, ge=1, le=8)
    is_admin: bool | None = None

    model_config = ConfigDict(extra="forbid")


class UserRead(BaseModel):
    id: UUID
    name: str
    email: EmailStr
    branch_id: UUID | None
    year: int | None
    semester: int | None
    is_admin: bool
    created_at: datetime | None

    model_config = ConfigDict(from_attributes=True)
