"""Rutas para registrar, rastrear y clasificar quejas."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.application.use_cases.complaints import (
    submit_complaint,
    track_complaint,
    update_complaint_status,
)
from app.domain.entities import Complaint, User
from app.domain.errors import NotFoundError
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import require_admin
from app.interfaces.api.schemas import (
    ComplaintCreate,
    ComplaintRead,
    ComplaintStatusUpdate,
    ComplaintSubmitted,
    ComplaintTrackingRead,
)

router = APIRouter(tags=["complaints"])
logger = logging.getLogger(__name__)


def _to_read_model(complaint: Complaint) -> ComplaintRead:
    return ComplaintRead(
        id=complaint.id,
        tracking_number=complaint.tracking_number,
        category=complaint.category,
        priority=complaint.priority,
        status=complaint.status,
        subject=complaint.subject,
        description=complaint.description,
        created_at=complaint.created_at,
        updated_at=complaint.updated_at,
    )


@router.post(
    "/complaint",
    response_model=ComplaintSubmitted,
    status_code=status.HTTP_201_CREATED,
)
def create_complaint(payload: ComplaintCreate, db: Session = Depends(get_db)):
    """Registra una queja anónima y devuelve su número de seguimiento."""

    try:
        complaint = submit_complaint(
            db,
            category=payload.category,
            priority=payload.priority,
            subject=payload.subject,
            description=payload.description,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return ComplaintSubmitted(tracking_number=complaint.tracking_number, id=complaint.id)


@router.get("/tracking", response_model=ComplaintTrackingRead)
def read_tracking(
    tracking_number: str | None = Query(default=None, alias="trackingNumber"),
    db: Session = Depends(get_db),
):
    """Consulta pública del estado de una queja."""

    try:
        complaint = track_complaint(db, tracking_number)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return ComplaintTrackingRead(
        tracking_number=complaint.tracking_number,
        category=complaint.category,
        priority=complaint.priority,
        status=complaint.status,
        subject=complaint.subject,
        created_at=complaint.created_at,
    )


@router.patch("/complaints/{complaint_id}/status", response_model=ComplaintRead)
def change_complaint_status(
    complaint_id: int,
    payload: ComplaintStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """Avanza la queja al siguiente estado del flujo o la archiva."""

    try:
        complaint = update_complaint_status(db, complaint_id, payload.status)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    logger.info(
        "Usuario %s cambió el estado de la queja %s a %s",
        current_user.username,
        complaint.tracking_number,
        complaint.status,
    )
    return _to_read_model(complaint)
