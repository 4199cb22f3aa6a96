"""Schemas for events, opportunities and the unified feed."""

from datetime import date, datetime, time
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class EventBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    event_date: date
    description: str | None = None
    start_time: time | None = None
    end_time: time | None = None
    location: str | None = Field(default=None, max_length=255)
    organizer: str | None = Field(default=None, max_length=255)
    target_branch_id: UUID | None = None
    registration_deadline: datetime | None = None
    max_participants: int | None = Field(default=None, ge=1)
    is_published: bool = True
    expires_at: datetime | None = None


class EventCreate(EventBase):
    announce: bool = True


class EventUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    event_date: date | None = None
    description: str | None = None
    start_time: time | None = None
    end_time: time | None = None
    location: str | None = Field(default=None, max_length=255)
    organizer: str | None = Field(default=None, max_length=255)
    target_branch_id: UUID | None = None
    registration_deadline: datetime | None = None
    max_participants: int | None = Field(default=None, ge=1)
    is_published: bool | None = None
    expires_at: datetime | None = None

    model_config = ConfigDict(extra="forbid")


class EventRead(EventBase):
    id: UUID
    created_by: UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class OpportunityBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    opportunity_type: str = Field(..., max_length=50)
    description: str = Field(..., min_length=1)
    company_name: str | None = Field(default=None, max_length=255)
    eligibility: str | None = None
    location: str | None = Field(default=None, max_length=255)
    is_remote: bool = False
    application_link: str | None = None
    stipend: str | None = Field(default=None, max_length=100)
    target_branch_id: UUID | None = None
    target_year: int | None = Field(default=None, ge=1, le=4)
    deadline: datetime | None = None
    is_published: bool = True


class OpportunityCreate(OpportunityBase):
    announce: bool = True


class OpportunityUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    opportunity_type: str | None = Field(default=None, max_length=50)
    description: str | None = Field(default=None, min_length=1)
    company_name: str | None = Field(default=None, max_length=255)
    eligibility: str | None = None
    location: str | None = Field(default=None, max_length=255)
    is_remote: bool | None = None
    application_link: str | None = None
    stipend: str | None = Field(default=None, max_length=100)
    target_branch_id: UUID | None = None
    target_year: int | None = Field(default=None, ge=1, le=4)
    deadline: datetime | None = None
    is_published: bool | None = None

    model_config = ConfigDict(extra="forbid")


class OpportunityRead(OpportunityBase):
    id: UUID
    created_by: UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class ActiveContentRead(BaseModel):
    id: UUID
    kind: str
    title: str
    description: str | None
    effective_date: date | None
    location: str | None
    host: str | None
    deadline: datetime | None
    expires_at: datetime | None
    created_at: datetime | None
    start_time: time | None = None
    end_time: time | None = None
    opportunity_type: str | None = None
    application_link: str | None = None

    model_config = ConfigDict(from_attributes=True)


class MembershipStatusRead(BaseModel):
    """Outcome of an idempotent RSVP or bookmark toggle."""

    changed: bool


__all__ = [
    "ActiveContentRead",
    "EventCreate",
    "EventRead",
    "EventUpdate",
    "MembershipStatusRead",
    "OpportunityCreate",
    "OpportunityRead",
    "OpportunityUpdate",
]
