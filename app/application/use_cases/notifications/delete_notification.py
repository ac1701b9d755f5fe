"""Use case for hiding a notification from the feed."""

from sqlalchemy.orm import Session

from app.domain.errors import NotFoundError, ValidationError
from app.infrastructure.repositories import NotificationRepository


def delete_notification(
    session: Session, user_id: int, notification_id: int | None
) -> int:
    """Soft delete ``notification_id`` when it belongs to ``user_id``.

    The row is only flagged as deleted. Returns the number of affected rows,
    which is ``0`` when the notification belongs to another user.
    """

    if notification_id is None:
        raise ValidationError("Se requiere el identificador de la notificación")

    repository = NotificationRepository(session)
    if repository.get(notification_id) is None:
        raise NotFoundError("Notificación no encontrada")
    return repository.soft_delete(user_id=user_id, notification_id=notification_id)
