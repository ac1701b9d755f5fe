"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.domain.entities import (
    COMPLAINT_STATUS_NEW,
    Notification,
    NotificationSummary,
)
from app.infrastructure.models import ComplaintModel, NotificationModel
from app.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_naive_datetime,
)


class NotificationRepository:
    """Provide storage operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_unnotified_new_complaint_ids(self, user_id: int) -> list[int]:
        """Return ids of ``new`` complaints that have no row for ``user_id``.

        Oldest complaints come first so that newer complaints receive the
        newer notification rows.
        """

        notified = select(NotificationModel.complaint_id).where(
            NotificationModel.user_id == user_id
        )
        query = (
            self.session.query(ComplaintModel.id)
            .filter(ComplaintModel.status == COMPLAINT_STATUS_NEW)
            .filter(ComplaintModel.id.not_in(notified))
            .order_by(ComplaintModel.created_at.asc(), ComplaintModel.id.asc())
        )
        return [complaint_id for (complaint_id,) in query.all()]

    def exists_for(self, *, user_id: int, complaint_id: int) -> bool:
        query = self.session.query(NotificationModel.id).filter(
            NotificationModel.user_id == user_id,
            NotificationModel.complaint_id == complaint_id,
        )
        return self.session.query(query.exists()).scalar()

    def get(self, notification_id: int) -> Notification | None:
        model = self.session.get(NotificationModel, notification_id)
        return self._to_entity(model) if model else None

    def create(self, notification: Notification) -> Notification | None:
        """Persist ``notification``.

        Returns ``None`` when a row for the same user and complaint was
        inserted concurrently and the unique constraint rejected this one.
        """

        now = now_in_app_naive_datetime()
        model = NotificationModel(
            user_id=notification.user_id,
            complaint_id=notification.complaint_id,
            is_read=notification.is_read,
            is_deleted=notification.is_deleted,
            created_at=ensure_app_naive_datetime(notification.created_at) or now,
            updated_at=ensure_app_naive_datetime(notification.updated_at) or now,
        )
        self.session.add(model)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            return None
        self.session.refresh(model)
        return self._to_entity(model)

    def list_feed(self, user_id: int, *, limit: int) -> Sequence[NotificationSummary]:
        query = (
            self.session.query(NotificationModel, ComplaintModel)
            .join(ComplaintModel, NotificationModel.complaint_id == ComplaintModel.id)
            .filter(NotificationModel.user_id == user_id)
            .filter(NotificationModel.is_deleted.is_(False))
            .order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
            .limit(limit)
        )
        return [
            self._to_summary(notification, complaint)
            for notification, complaint in query.all()
        ]

    def count_unread(self, user_id: int) -> int:
        query = self.session.query(func.count(NotificationModel.id)).filter(
            NotificationModel.user_id == user_id,
            NotificationModel.is_read.is_(False),
            NotificationModel.is_deleted.is_(False),
        )
        return int(query.scalar() or 0)

    def mark_as_read(self, *, user_id: int, notification_id: int | None = None) -> int:
        """Mark one or every unread notification of ``user_id`` as read.

        Returns the number of affected rows.
        """

        query = self.session.query(NotificationModel).filter(
            NotificationModel.user_id == user_id,
            NotificationModel.is_read.is_(False),
        )
        if notification_id is not None:
            query = query.filter(NotificationModel.id == notification_id)
        else:
            query = query.filter(NotificationModel.is_deleted.is_(False))
        affected = query.update(
            {
                NotificationModel.is_read: True,
                NotificationModel.updated_at: now_in_app_naive_datetime(),
            },
            synchronize_session=False,
        )
        self.session.commit()
        return affected

    def soft_delete(self, *, user_id: int, notification_id: int) -> int:
        affected = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.id == notification_id,
                NotificationModel.user_id == user_id,
            )
            .update(
                {
                    NotificationModel.is_deleted: True,
                    NotificationModel.updated_at: now_in_app_naive_datetime(),
                },
                synchronize_session=False,
            )
        )
        self.session.commit()
        return affected

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            complaint_id=model.complaint_id,
            is_read=bool(model.is_read),
            is_deleted=bool(model.is_deleted),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )

    @staticmethod
    def _to_summary(
        notification: NotificationModel, complaint: ComplaintModel
    ) -> NotificationSummary:
        return NotificationSummary(
            id=notification.id,
            complaint_id=complaint.id,
            subject=complaint.subject,
            tracking_number=complaint.tracking_number,
            priority=complaint.priority,
            status=complaint.status,
            created_at=ensure_app_timezone(complaint.created_at),
            is_read=bool(notification.is_read),
        )


__all__ = ["NotificationRepository"]
