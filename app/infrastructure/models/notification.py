"""SQLAlchemy model for per-user complaint notifications."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    UniqueConstraint,
)
from sqlalchemy.sql import expression
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class NotificationModel(Base):
    """Database representation of a user notification about a complaint."""

    __tablename__ = "user_notification"
    __table_args__ = (
        UniqueConstraint("user_id", "complaint_id", name="uq_user_notification_user_complaint"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    complaint_id = Column(
        Integer,
        ForeignKey("complaint.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    is_read = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    is_deleted = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(
        DateTime(),
        nullable=False,
        default=now_in_app_naive_datetime,
        onupdate=now_in_app_naive_datetime,
    )

    user = relationship("UserModel", back_populates="notifications")
    complaint = relationship("ComplaintModel", back_populates="notifications")


__all__ = ["NotificationModel"]
