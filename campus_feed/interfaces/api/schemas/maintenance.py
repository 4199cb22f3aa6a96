"""Schemas for maintenance endpoints."""

from pydantic import BaseModel, Field


class SweepResultRead(BaseModel):
    deleted: dict[str, int] = Field(default_factory=dict)
    failed: list[str] = Field(default_factory=list)
