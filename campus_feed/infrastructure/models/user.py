"""SQLAlchemy model for the users table."""

from uuid import uuid4

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Uuid
from sqlalchemy.sql import expression

from campus_feed.infrastructure.database import Base
from campus_feed.utils import now_in_app_naive_datetime


class UserModel(Base):
    """Database representation of a recipient account."""

    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid4)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    branch_id = Column(
        Uuid, ForeignKey("branches.id", ondelete="SET NULL"), nullable=True, index=True
    )
    year = Column(Integer, nullable=True, index=True)
    semester = Column(Integer, nullable=True, index=True)
    is_admin = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["UserModel"]
