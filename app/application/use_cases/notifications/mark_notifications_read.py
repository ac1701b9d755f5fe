"""Use case for marking notifications as read."""

from sqlalchemy.orm import Session

from app.domain.errors import NotFoundError
from app.infrastructure.repositories import NotificationRepository


def mark_notifications_read(
    session: Session, user_id: int, notification_id: int | None = None
) -> int:
    """Mark one notification, or all of them, as read for ``user_id``.

    A notification owned by another user is left untouched and ``0`` is
    returned, exactly as if it were already read; callers cannot learn
    whether someone else's notification exists.
    """

    repository = NotificationRepository(session)
    if notification_id is not None and repository.get(notification_id) is None:
        raise NotFoundError("Notificación no encontrada")
    return repository.mark_as_read(user_id=user_id, notification_id=notification_id)
