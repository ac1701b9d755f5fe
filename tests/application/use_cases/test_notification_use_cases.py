"""Tests for the notification feed use cases."""

from __future__ import annotations

import pytest

from app.application.use_cases.notifications import (
    delete_notification,
    get_notification_feed,
    mark_notifications_read,
    reconcile_notifications,
)
from app.domain.entities import Notification
from app.domain.errors import NotFoundError, ValidationError
from app.infrastructure.models import NotificationModel
from app.infrastructure.repositories import ComplaintRepository, NotificationRepository


def _rows_for(db_session, user_id: int) -> list[NotificationModel]:
    return (
        db_session.query(NotificationModel)
        .filter(NotificationModel.user_id == user_id)
        .order_by(NotificationModel.id)
        .all()
    )


def test_new_complaint_surfaces_in_feed(db_session, make_user, make_complaint) -> None:
    user = make_user()
    complaint = make_complaint("Leaking roof")

    feed = get_notification_feed(db_session, user.id)

    assert feed.total == 1
    assert len(feed.notifications) == 1
    summary = feed.notifications[0]
    assert summary.complaint_id == complaint.id
    assert summary.subject == "Leaking roof"
    assert summary.tracking_number == complaint.tracking_number
    assert summary.is_read is False


def test_reconcile_is_idempotent(db_session, make_user, make_complaint) -> None:
    user = make_user()
    make_complaint()
    make_complaint()

    assert reconcile_notifications(db_session, user.id) == 2
    assert reconcile_notifications(db_session, user.id) == 0
    assert len(_rows_for(db_session, user.id)) == 2


def test_reconcile_ignores_complaints_outside_new_status(db_session, make_user, make_complaint) -> None:
    user = make_user()
    make_complaint(status="received")
    make_complaint(status="archived")

    assert reconcile_notifications(db_session, user.id) == 0
    assert get_notification_feed(db_session, user.id).total == 0


def test_reconcile_creates_rows_per_user(db_session, make_user, make_complaint) -> None:
    first = make_user("first")
    second = make_user("second")
    make_complaint()

    get_notification_feed(db_session, first.id)
    get_notification_feed(db_session, second.id)

    assert len(_rows_for(db_session, first.id)) == 1
    assert len(_rows_for(db_session, second.id)) == 1


def test_status_change_keeps_existing_notification(db_session, make_user, make_complaint) -> None:
    user = make_user()
    complaint = make_complaint()
    reconcile_notifications(db_session, user.id)

    ComplaintRepository(db_session).update_status(complaint.id, "received")
    feed = get_notification_feed(db_session, user.id)

    assert feed.total == 1
    assert [item.complaint_id for item in feed.notifications] == [complaint.id]
    assert feed.notifications[0].status == "received"


def test_feed_is_limited_and_newest_first(db_session, make_user, make_complaint) -> None:
    user = make_user()
    for index in range(7):
        make_complaint(f"Complaint number {index}")

    feed = get_notification_feed(db_session, user.id)

    assert feed.total == 7
    assert len(feed.notifications) == 5
    ids = [item.id for item in feed.notifications]
    assert ids == sorted(ids, reverse=True)
    # Oldest complaints are reconciled first, so the newest one leads the feed.
    assert feed.notifications[0].subject == "Complaint number 6"


def test_feed_rejects_non_positive_limit(db_session, make_user) -> None:
    user = make_user()

    with pytest.raises(ValueError):
        get_notification_feed(db_session, user.id, limit=0)


def test_mark_all_read_clears_unread_total(db_session, make_user, make_complaint) -> None:
    user = make_user()
    make_complaint()
    make_complaint()
    get_notification_feed(db_session, user.id)

    assert mark_notifications_read(db_session, user.id) == 2

    feed = get_notification_feed(db_session, user.id)
    assert feed.total == 0
    assert all(item.is_read for item in feed.notifications)
    assert len(feed.notifications) == 2


def test_mark_single_notification_read(db_session, make_user, make_complaint) -> None:
    user = make_user()
    make_complaint()
    make_complaint()
    feed = get_notification_feed(db_session, user.id)
    target = feed.notifications[0]

    assert mark_notifications_read(db_session, user.id, target.id) == 1
    # Already read rows are not counted again.
    assert mark_notifications_read(db_session, user.id, target.id) == 0

    feed = get_notification_feed(db_session, user.id)
    assert feed.total == 1
    states = {item.id: item.is_read for item in feed.notifications}
    assert states[target.id] is True


def test_mark_read_of_other_user_is_noop(db_session, make_user, make_complaint) -> None:
    owner = make_user("owner")
    intruder = make_user("intruder")
    make_complaint()
    feed = get_notification_feed(db_session, owner.id)
    target = feed.notifications[0]

    assert mark_notifications_read(db_session, intruder.id, target.id) == 0

    db_session.expire_all()
    assert NotificationRepository(db_session).get(target.id).is_read is False
    assert get_notification_feed(db_session, owner.id).total == 1


def test_mark_read_of_missing_notification_raises(db_session, make_user) -> None:
    user = make_user()

    with pytest.raises(NotFoundError):
        mark_notifications_read(db_session, user.id, 9999)


def test_soft_delete_hides_notification_but_keeps_row(db_session, make_user, make_complaint) -> None:
    user = make_user()
    make_complaint()
    make_complaint()
    feed = get_notification_feed(db_session, user.id)
    target = feed.notifications[0]

    assert delete_notification(db_session, user.id, target.id) == 1

    feed = get_notification_feed(db_session, user.id)
    assert target.id not in [item.id for item in feed.notifications]
    assert feed.total == 1

    db_session.expire_all()
    stored = NotificationRepository(db_session).get(target.id)
    assert stored is not None
    assert stored.is_deleted is True


def test_deleted_notification_is_not_recreated(db_session, make_user, make_complaint) -> None:
    user = make_user()
    make_complaint()
    target = get_notification_feed(db_session, user.id).notifications[0]
    delete_notification(db_session, user.id, target.id)

    assert reconcile_notifications(db_session, user.id) == 0
    assert get_notification_feed(db_session, user.id).notifications == []


def test_delete_of_other_user_is_noop(db_session, make_user, make_complaint) -> None:
    owner = make_user("owner")
    intruder = make_user("intruder")
    make_complaint()
    target = get_notification_feed(db_session, owner.id).notifications[0]

    assert delete_notification(db_session, intruder.id, target.id) == 0
    assert len(get_notification_feed(db_session, owner.id).notifications) == 1


def test_delete_requires_identifier(db_session, make_user) -> None:
    user = make_user()

    with pytest.raises(ValidationError):
        delete_notification(db_session, user.id, None)


def test_delete_of_missing_notification_raises(db_session, make_user) -> None:
    user = make_user()

    with pytest.raises(NotFoundError):
        delete_notification(db_session, user.id, 4242)


def test_duplicate_insert_is_rejected_by_constraint(db_session, make_user, make_complaint) -> None:
    user = make_user()
    complaint = make_complaint()
    repository = NotificationRepository(db_session)

    first = repository.create(Notification(id=None, user_id=user.id, complaint_id=complaint.id))
    second = repository.create(Notification(id=None, user_id=user.id, complaint_id=complaint.id))

    assert first is not None
    assert second is None
    assert len(_rows_for(db_session, user.id)) == 1
    # The session stays usable after the rejected insert.
    assert repository.count_unread(user.id) == 1
