"""Schemas for the registration hierarchy."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict


class BranchRead(BaseModel):
    id: UUID
    code: str
    name: str
    is_active: bool
    display_order: int

    model_config = ConfigDict(from_attributes=True)


class BranchYearRead(BaseModel):
    id: UUID
    branch_id: UUID
    year_number: int
    is_active: bool
    display_order: int

    model_config = ConfigDict(from_attributes=True)


class BranchSemesterRead(BaseModel):
    id: UUID
    branch_id: UUID
    year_number: int
    semester_number: int
    label: str
    is_active: bool
    display_order: int

    model_config = ConfigDict(from_attributes=True)


class ActivationUpdate(BaseModel):
    is_active: bool


class CombinationStatusRead(BaseModel):
    can_select: bool
    branch_active: bool
    year_active: bool
    semester_active: bool
    message: str

    model_config = ConfigDict(from_attributes=True)
