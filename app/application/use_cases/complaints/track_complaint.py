"""Use case for the public tracking lookup."""

from sqlalchemy.orm import Session

from app.domain.entities import Complaint
from app.domain.errors import NotFoundError, ValidationError
from app.infrastructure.repositories import ComplaintRepository


def track_complaint(session: Session, tracking_number: str | None) -> Complaint:
    """Return the complaint identified by ``tracking_number``."""

    normalized = (tracking_number or "").strip().upper()
    if not normalized:
        raise ValidationError("Se requiere el número de seguimiento")
    complaint = ComplaintRepository(session).get_by_tracking_number(normalized)
    if complaint is None:
        raise NotFoundError("Queja no encontrada")
    return complaint
