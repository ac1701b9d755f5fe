"""Use case for moving a complaint along the status pipeline."""

import logging

from sqlalchemy.orm import Session

from app.domain.entities import Complaint
from app.domain.errors import InvalidStatusTransitionError, NotFoundError
from app.infrastructure.repositories import ComplaintRepository

logger = logging.getLogger(__name__)


def update_complaint_status(session: Session, complaint_id: int, status: str) -> Complaint:
    """Apply ``status`` to the complaint when the transition is allowed.

    Once a complaint leaves ``new`` it is no longer reconciled into fresh
    notifications; rows already created are kept.
    """

    repository = ComplaintRepository(session)
    complaint = repository.get(complaint_id)
    if complaint is None:
        raise NotFoundError("Queja no encontrada")
    if not complaint.can_transition_to(status):
        raise InvalidStatusTransitionError(
            f"No se puede cambiar el estado de '{complaint.status}' a '{status}'"
        )
    updated = repository.update_status(complaint_id, status)
    logger.info(
        "Complaint %s moved from %s to %s",
        updated.tracking_number,
        complaint.status,
        updated.status,
    )
    return updated
