"""SQLAlchemy models for events, opportunities and their weak references."""

from uuid import uuid4

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    Time,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import expression

from campus_feed.infrastructure.database import Base
from campus_feed.utils import now_in_app_naive_datetime


class EventModel(Base):
    """Database representation of a campus event."""

    __tablename__ = "events"

    id = Column(Uuid, primary_key=True, default=uuid4)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    event_date = Column(Date, nullable=False, index=True)
    start_time = Column(Time, nullable=True)
    end_time = Column(Time, nullable=True)
    location = Column(String(255), nullable=True)
    organizer = Column(String(255), nullable=True)
    target_branch_id = Column(
        Uuid, ForeignKey("branches.id", ondelete="SET NULL"), nullable=True
    )
    registration_deadline = Column(DateTime(), nullable=True)
    max_participants = Column(Integer, nullable=True)
    is_published = Column(
        Boolean, nullable=False, default=True, server_default=expression.true(), index=True
    )
    expires_at = Column(DateTime(), nullable=True, index=True)
    created_by = Column(Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime(), nullable=True, onupdate=now_in_app_naive_datetime)

    rsvps = relationship(
        "EventRsvpModel",
        back_populates="event",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class EventRsvpModel(Base):
    """A user's registration for an event."""

    __tablename__ = "event_rsvps"
    __table_args__ = (UniqueConstraint("event_id", "user_id", name="uq_event_rsvp"),)

    id = Column(Uuid, primary_key=True, default=uuid4)
    event_id = Column(
        Uuid, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)

    event = relationship("EventModel", back_populates="rsvps")


class OpportunityModel(Base):
    """Database representation of a career or academic opportunity."""

    __tablename__ = "opportunities"

    id = Column(Uuid, primary_key=True, default=uuid4)
    title = Column(String(255), nullable=False)
    opportunity_type = Column(String(50), nullable=False, index=True)
    company_name = Column(String(255), nullable=True)
    description = Column(Text, nullable=False)
    eligibility = Column(Text, nullable=True)
    location = Column(String(255), nullable=True)
    is_remote = Column(Boolean, nullable=False, default=False, server_default=expression.false())
    application_link = Column(Text, nullable=True)
    stipend = Column(String(100), nullable=True)
    target_branch_id = Column(
        Uuid, ForeignKey("branches.id", ondelete="SET NULL"), nullable=True
    )
    target_year = Column(Integer, nullable=True)
    deadline = Column(DateTime(), nullable=True, index=True)
    is_published = Column(
        Boolean, nullable=False, default=True, server_default=expression.true(), index=True
    )
    created_by = Column(Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime(), nullable=True, onupdate=now_in_app_naive_datetime)

    bookmarks = relationship(
        "BookmarkModel",
        back_populates="opportunity",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class BookmarkModel(Base):
    """An opportunity saved for later by a user."""

    __tablename__ = "opportunity_bookmarks"
    __table_args__ = (
        UniqueConstraint("opportunity_id", "user_id", name="uq_opportunity_bookmark"),
    )

    id = Column(Uuid, primary_key=True, default=uuid4)
    opportunity_id = Column(
        Uuid, ForeignKey("opportunities.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)

    opportunity = relationship("OpportunityModel", back_populates="bookmarks")


__all__ = ["BookmarkModel", "EventModel", "EventRsvpModel", "OpportunityModel"]
