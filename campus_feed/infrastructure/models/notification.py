"""SQLAlchemy models for notifications and their delivery records."""

from uuid import uuid4

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import expression

from campus_feed.infrastructure.database import Base
from campus_feed.utils import now_in_app_naive_datetime


class NotificationModel(Base):
    """Database representation of an authored notification."""

    __tablename__ = "notifications"

    id = Column(Uuid, primary_key=True, default=uuid4)
    title = Column(String(255), nullable=False)
    body = Column(Text, nullable=False)
    category = Column(String(50), nullable=False, index=True)
    priority = Column(String(20), nullable=False, default="normal")
    payload = Column(JSON, nullable=False, default=dict)
    targeting = Column(JSON, nullable=False, default=dict)
    related_resource_type = Column(String(50), nullable=True)
    related_resource_id = Column(Uuid, nullable=True)
    is_published = Column(
        Boolean, nullable=False, default=True, server_default=expression.true(), index=True
    )
    expires_at = Column(DateTime(), nullable=True, index=True)
    send_count = Column(Integer, nullable=False, default=0, server_default="0")
    created_by = Column(Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(
        DateTime(), nullable=False, default=now_in_app_naive_datetime, index=True
    )
    updated_at = Column(DateTime(), nullable=True, onupdate=now_in_app_naive_datetime)

    deliveries = relationship(
        "DeliveryRecordModel",
        back_populates="notification",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class DeliveryRecordModel(Base):
    """Join between one notification and one recipient carrying read state."""

    __tablename__ = "delivery_records"
    __table_args__ = (
        UniqueConstraint(
            "notification_id", "recipient_id", name="uq_delivery_notification_recipient"
        ),
    )

    id = Column(Uuid, primary_key=True, default=uuid4)
    notification_id = Column(
        Uuid, ForeignKey("notifications.id", ondelete="CASCADE"), nullable=False, index=True
    )
    recipient_id = Column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    is_read = Column(
        Boolean, nullable=False, default=False, server_default=expression.false(), index=True
    )
    read_at = Column(DateTime(), nullable=True)
    is_dismissed = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    dismissed_at = Column(DateTime(), nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)

    notification = relationship("NotificationModel", back_populates="deliveries")


__all__ = ["DeliveryRecordModel", "NotificationModel"]
