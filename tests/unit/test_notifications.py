import pytest

from core.errors import AuthenticationError
from core.models.enums import NotificationType
from core.services import notifications


def _emit(store, user_id, title="hello", type=NotificationType.NEW_MESSAGE):
    with store.session() as session:
        notification = notifications.emit(session, user_id, type, title, "body", "/messages")
        session.commit()
        return notification.id


def test_feed_is_newest_first_and_scoped_to_caller(store, make_user):
    alice, bob = make_user("Alice"), make_user("Bob")
    first = _emit(store, alice.id, "first")
    _emit(store, bob.id, "for bob")
    second = _emit(store, alice.id, "second")

    feed = notifications.list_notifications(store, alice.id)

    assert [n.id for n in feed] == [second, first]
    assert all(n.user_id == alice.id for n in feed)
    assert feed[0].is_read is False
    assert feed[0].type == NotificationType.NEW_MESSAGE


def test_feed_respects_limit(store, make_user):
    user = make_user()
    for i in range(5):
        _emit(store, user.id, f"n{i}")

    feed = notifications.list_notifications(store, user.id, limit=3)

    assert [n.title for n in feed] == ["n4", "n3", "n2"]


def test_unread_count_and_mark_read(store, make_user):
    user = make_user()
    first = _emit(store, user.id)
    _emit(store, user.id)
    assert notifications.unread_count(store, user.id) == 2

    notifications.mark_read(store, first, user.id)

    assert notifications.unread_count(store, user.id) == 1


def test_mark_read_ignores_other_users_notification(store, make_user):
    alice, bob = make_user("Alice"), make_user("Bob")
    note = _emit(store, alice.id)

    notifications.mark_read(store, note, bob.id)

    assert notifications.unread_count(store, alice.id) == 1


def test_mark_all_read(store, make_user):
    alice, bob = make_user("Alice"), make_user("Bob")
    for _ in range(3):
        _emit(store, alice.id)
    _emit(store, bob.id)

    assert notifications.mark_all_read(store, alice.id) == 3
    assert notifications.unread_count(store, alice.id) == 0
    assert notifications.unread_count(store, bob.id) == 1
    assert notifications.mark_all_read(store, alice.id) == 0


def test_delete_is_scoped_to_owner(store, make_user):
    alice, bob = make_user("Alice"), make_user("Bob")
    note = _emit(store, alice.id)

    notifications.delete_notification(store, note, bob.id)
    assert len(notifications.list_notifications(store, alice.id)) == 1

    notifications.delete_notification(store, note, alice.id)
    assert notifications.list_notifications(store, alice.id) == []


def test_emit_rejects_unknown_type(store, make_user):
    user = make_user()
    with store.session() as session:
        with pytest.raises(ValueError):
            notifications.emit(session, user.id, "birthday", "t", "m")


def test_feed_requires_caller(store):
    with pytest.raises(AuthenticationError):
        notifications.list_notifications(store, None)
