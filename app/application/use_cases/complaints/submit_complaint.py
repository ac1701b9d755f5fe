"""Use case for registering an anonymous complaint."""

import logging
import secrets

from sqlalchemy.orm import Session

from app.domain.entities import (
    COMPLAINT_CATEGORIES,
    COMPLAINT_PRIORITIES,
    COMPLAINT_STATUS_NEW,
    Complaint,
)
from app.domain.errors import ValidationError
from app.infrastructure.repositories import ComplaintRepository
from app.utils import now_in_app_timezone

from .validators import normalize_description, normalize_subject

logger = logging.getLogger(__name__)

TRACKING_PREFIX = "CMP"
_MAX_TRACKING_ATTEMPTS = 10


def generate_tracking_number() -> str:
    """Return a tracking number such as ``CMP-20240131-4821``."""

    date_part = now_in_app_timezone().strftime("%Y%m%d")
    return f"{TRACKING_PREFIX}-{date_part}-{1000 + secrets.randbelow(9000)}"


def submit_complaint(
    session: Session,
    *,
    category: str,
    priority: str,
    subject: str,
    description: str,
) -> Complaint:
    """Validate and store a complaint in the ``new`` status."""

    if category not in COMPLAINT_CATEGORIES:
        raise ValidationError("Categoría no válida")
    if priority not in COMPLAINT_PRIORITIES:
        raise ValidationError("Prioridad no válida")

    repository = ComplaintRepository(session)
    for _ in range(_MAX_TRACKING_ATTEMPTS):
        tracking_number = generate_tracking_number()
        if not repository.tracking_number_exists(tracking_number):
            break
    else:
        raise RuntimeError("No se pudo generar un número de seguimiento único")

    complaint = repository.create(
        Complaint(
            id=None,
            tracking_number=tracking_number,
            category=category,
            priority=priority,
            subject=normalize_subject(subject),
            description=normalize_description(description),
            status=COMPLAINT_STATUS_NEW,
            created_at=now_in_app_timezone(),
        )
    )
    logger.info("Complaint %s registered (%s)", complaint.tracking_number, priority)
    return complaint
