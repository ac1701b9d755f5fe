"""Endpoints and push stream for complaint notifications."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    delete_notification,
    get_notification_feed,
    mark_notifications_read,
)
from app.config import Settings
from app.domain.entities import NotificationFeed, User
from app.domain.errors import NotFoundError, ValidationError
from app.infrastructure import database
from app.infrastructure.database import get_db
from app.infrastructure.notifications import (
    ConnectionRegistry,
    FeedLoader,
    PushChannel,
    PushSession,
    serialize_feed,
)
from app.interfaces.api.dependencies import (
    get_app_settings,
    get_connection_registry,
    get_current_active_user,
    get_stream_user,
    require_admin,
)
from app.interfaces.api.schemas import (
    AcknowledgementResponse,
    ConnectionStatsRead,
    NotificationDeleteRequest,
    NotificationFeedRead,
    NotificationMarkReadRequest,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])

STREAM_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


def build_feed_loader(limit: int) -> FeedLoader:
    """Return a blocking loader that computes a feed with its own session."""

    def load(user_id: int) -> NotificationFeed:
        session = database.SessionLocal()
        try:
            return get_notification_feed(session, user_id, limit=limit)
        finally:
            session.close()

    return load


def _feed_to_schema(feed: NotificationFeed) -> NotificationFeedRead:
    return NotificationFeedRead.model_validate(serialize_feed(feed))


def _raise_for_domain_error(exc: ValueError) -> None:
    if isinstance(exc, NotFoundError):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    if isinstance(exc, ValidationError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    raise exc


@router.get("/sse")
async def notifications_stream(
    request: Request,
    current_user: User = Depends(get_stream_user),
    registry: ConnectionRegistry = Depends(get_connection_registry),
    settings: Settings = Depends(get_app_settings),
) -> StreamingResponse:
    """Abre el flujo de eventos del servidor con las notificaciones del usuario."""

    session = PushSession(
        current_user.id,
        registry,
        build_feed_loader(settings.notification_feed_limit),
        poll_interval=settings.notification_poll_interval_seconds,
        channel=PushChannel(max_pending=settings.notification_channel_max_pending),
    )
    return StreamingResponse(
        session.stream(is_disconnected=request.is_disconnected),
        media_type="text/event-stream",
        headers=STREAM_HEADERS,
    )


@router.get("/", response_model=NotificationFeedRead)
def read_notifications(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    settings: Settings = Depends(get_app_settings),
) -> NotificationFeedRead:
    """Devuelve las notificaciones más recientes del usuario autenticado."""

    feed = get_notification_feed(db, current_user.id, limit=settings.notification_feed_limit)
    return _feed_to_schema(feed)


@router.post("/read", response_model=AcknowledgementResponse)
def mark_read(
    payload: NotificationMarkReadRequest | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> AcknowledgementResponse:
    """Marca como leída una notificación o, si no se indica, todas."""

    try:
        mark_notifications_read(db, current_user.id, payload.id if payload else None)
    except ValueError as exc:
        _raise_for_domain_error(exc)
    return AcknowledgementResponse()


@router.post("/{notification_id}/read", response_model=AcknowledgementResponse)
def mark_one_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> AcknowledgementResponse:
    """Marca como leída la notificación indicada."""

    try:
        mark_notifications_read(db, current_user.id, notification_id)
    except ValueError as exc:
        _raise_for_domain_error(exc)
    return AcknowledgementResponse()


@router.delete("/", response_model=AcknowledgementResponse)
def delete_from_body(
    payload: NotificationDeleteRequest | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> AcknowledgementResponse:
    """Oculta la notificación indicada en el cuerpo de la petición."""

    try:
        delete_notification(db, current_user.id, payload.id if payload else None)
    except ValueError as exc:
        _raise_for_domain_error(exc)
    return AcknowledgementResponse()


@router.delete("/{notification_id}", response_model=AcknowledgementResponse)
def delete_one(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> AcknowledgementResponse:
    """Oculta la notificación indicada sin eliminarla de la base de datos."""

    try:
        delete_notification(db, current_user.id, notification_id)
    except ValueError as exc:
        _raise_for_domain_error(exc)
    return AcknowledgementResponse()


@router.get("/connections", response_model=ConnectionStatsRead)
def read_connection_stats(
    registry: ConnectionRegistry = Depends(get_connection_registry),
    current_user: User = Depends(require_admin),
) -> ConnectionStatsRead:
    """Devuelve el número de flujos abiertos del usuario y del proceso."""

    return ConnectionStatsRead(
        connection_count=registry.connection_count(current_user.id),
        total_connections=registry.total_connections(),
    )
