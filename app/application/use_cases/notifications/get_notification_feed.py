"""Use case for computing the notification feed of a user."""

from sqlalchemy.orm import Session

from app.domain.entities import NotificationFeed
from app.infrastructure.repositories import NotificationRepository

from .reconcile_notifications import reconcile_notifications

DEFAULT_FEED_LIMIT = 5


def get_notification_feed(
    session: Session, user_id: int, *, limit: int = DEFAULT_FEED_LIMIT
) -> NotificationFeed:
    """Return the latest non-deleted notifications and the unread total.

    Notifications for freshly submitted complaints are reconciled first, so
    the feed always reflects the store at query time.
    """

    if limit < 1:
        raise ValueError("El límite debe ser mayor que cero")

    reconcile_notifications(session, user_id)
    repository = NotificationRepository(session)
    return NotificationFeed(
        notifications=list(repository.list_feed(user_id, limit=limit)),
        total=repository.count_unread(user_id),
    )
