"""SQLAlchemy model for submitted complaints."""

from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship

from app.domain.entities import COMPLAINT_STATUS_NEW
from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class ComplaintModel(Base):
    """Database representation of a complaint."""

    __tablename__ = "complaint"

    id = Column(Integer, primary_key=True, index=True)
    tracking_number = Column(String(32), nullable=False, unique=True, index=True)
    category = Column(String(30), nullable=False)
    priority = Column(String(20), nullable=False)
    subject = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    status = Column(
        String(20), nullable=False, default=COMPLAINT_STATUS_NEW, index=True
    )
    created_at = Column(
        DateTime, nullable=False, default=now_in_app_naive_datetime, index=True
    )
    updated_at = Column(DateTime, nullable=True, onupdate=now_in_app_naive_datetime)

    notifications = relationship(
        "NotificationModel",
        back_populates="complaint",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


__all__ = ["ComplaintModel"]
