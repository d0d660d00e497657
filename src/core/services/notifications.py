"""Per-user notification feed."""

from sqlalchemy import delete, func, select, update
from sqlalchemy.orm import Session

from core.db.schemas.notification import Notification
from core.db.store import Store
from core.models.enums import NotificationType
from core.models.notification import NotificationRead
from core.services.authz import require_caller

DEFAULT_FEED_LIMIT = 50


def emit(
    session: Session,
    user_id: int,
    type: NotificationType,
    title: str,
    message: str,
    link: str | None = None,
) -> Notification:
    """Stage a notification on ``session``; the caller commits."""
    notification = Notification(
        user_id=user_id,
        type=NotificationType(type).value,
        title=title,
        message=message,
        link=link,
        is_read=False,
    )
    session.add(notification)
    return notification


def list_notifications(store: Store, caller_id: int | None, limit: int = DEFAULT_FEED_LIMIT) -> list[NotificationRead]:
    user_id = require_caller(caller_id)
    with store.session() as session:
        rows = session.scalars(
            select(Notification)
            .where(Notification.user_id == user_id)
            .order_by(Notification.created_at.desc(), Notification.id.desc())
            .limit(limit)
        ).all()
        return [NotificationRead.model_validate(row) for row in rows]


def unread_count(store: Store, caller_id: int | None) -> int:
    user_id = require_caller(caller_id)
    with store.session() as session:
        return session.scalar(
            select(func.count(Notification.id)).where(
                Notification.user_id == user_id,
                Notification.is_read.is_(False),
            )
        ) or 0


def mark_read(store: Store, notification_id: int, caller_id: int | None) -> None:
    """Mark one notification read. Silently does nothing for someone else's notification."""
    user_id = require_caller(caller_id)
    with store.session() as session:
        session.execute(
            update(Notification)
            .where(Notification.id == notification_id, Notification.user_id == user_id)
            .values(is_read=True)
        )
        session.commit()


def mark_all_read(store: Store, caller_id: int | None) -> int:
    user_id = require_caller(caller_id)
    with store.session() as session:
        result = session.execute(
            update(Notification)
            .where(Notification.user_id == user_id, Notification.is_read.is_(False))
            .values(is_read=True)
        )
        session.commit()
        return result.rowcount


def delete_notification(store: Store, notification_id: int, caller_id: int | None) -> None:
    """Delete one notification, scoped to its owner like ``mark_read``."""
    user_id = require_caller(caller_id)
    with store.session() as session:
        session.execute(
            delete(Notification).where(Notification.id == notification_id, Notification.user_id == user_id)
        )
        session.commit()
