"""Use case that turns new complaints into per-user notifications."""

import logging

from sqlalchemy.orm import Session

from app.domain.entities import Notification
from app.infrastructure.repositories import NotificationRepository

logger = logging.getLogger(__name__)


def reconcile_notifications(session: Session, user_id: int) -> int:
    """Create the missing notifications of ``user_id`` for ``new`` complaints.

    Existence is checked per complaint before inserting and the table carries
    a unique ``(user_id, complaint_id)`` constraint, so concurrent calls for
    the same user never leave duplicate rows behind. Returns the number of
    rows created.
    """

    repository = NotificationRepository(session)
    created = 0
    for complaint_id in repository.list_unnotified_new_complaint_ids(user_id):
        if repository.exists_for(user_id=user_id, complaint_id=complaint_id):
            continue
        saved = repository.create(
            Notification(
                id=None,
                user_id=user_id,
                complaint_id=complaint_id,
                is_read=False,
                is_deleted=False,
            )
        )
        if saved is None:
            logger.debug(
                "Notification for user %s and complaint %s already created concurrently",
                user_id,
                complaint_id,
            )
            continue
        created += 1

    if created:
        logger.info("Created %d notification(s) for user %s", created, user_id)
    return created
