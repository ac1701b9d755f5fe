"""Persistence layer for complaints."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.domain.entities import Complaint
from app.infrastructure.models import ComplaintModel
from app.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_naive_datetime,
)


class ComplaintRepository:
    """Provide read and write access to stored complaints."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, complaint_id: int) -> Complaint | None:
        model = self.session.get(ComplaintModel, complaint_id)
        return self._to_entity(model) if model else None

    def get_by_tracking_number(self, tracking_number: str) -> Complaint | None:
        model = (
            self.session.query(ComplaintModel)
            .filter(ComplaintModel.tracking_number == tracking_number)
            .first()
        )
        return self._to_entity(model) if model else None

    def tracking_number_exists(self, tracking_number: str) -> bool:
        query = self.session.query(ComplaintModel.id).filter(
            ComplaintModel.tracking_number == tracking_number
        )
        return self.session.query(query.exists()).scalar()

    def create(self, complaint: Complaint) -> Complaint:
        model = ComplaintModel(
            tracking_number=complaint.tracking_number,
            category=complaint.category,
            priority=complaint.priority,
            subject=complaint.subject,
            description=complaint.description,
            status=complaint.status,
            created_at=ensure_app_naive_datetime(complaint.created_at)
            or now_in_app_naive_datetime(),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update_status(self, complaint_id: int, status: str) -> Complaint:
        model = self.session.get(ComplaintModel, complaint_id)
        if model is None:
            msg = f"Complaint with id {complaint_id} not found"
            raise ValueError(msg)
        model.status = status
        model.updated_at = now_in_app_naive_datetime()
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: ComplaintModel) -> Complaint:
        return Complaint(
            id=model.id,
            tracking_number=model.tracking_number,
            category=model.category,
            priority=model.priority,
            subject=model.subject,
            description=model.description,
            status=model.status,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["ComplaintRepository"]
