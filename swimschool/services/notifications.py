# swimschool/services/notifications.py
"""
Notificações in-app.

Dois regimes diferentes:
- efeitos colaterais (`notify`, `notify_many`): best-effort. A transição
  primária já foi confirmada; falha aqui só gera log.
- operações primárias (`broadcast`, `mark_read`): lotes atômicos, confirmados
  um a um; falha é propagada para quem chamou.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from swimschool.core.config import settings
from swimschool.core.errors import BroadcastIncomplete, StoreUnavailable, ValidationFailed
from swimschool.core.rbac import ROLE_ADMIN, ensure_role
from swimschool.crud.notification import notification_crud
from swimschool.crud.user import user_crud
from swimschool.models.notification import Notification, NotificationType
from swimschool.models.user import UserProfile, UserRole
from swimschool.schemas.notification import NotificationOut
from swimschool.services.realtime import ChangeEvent, ChangeFeed, ChangeKind, change_feed

logger = logging.getLogger(__name__)

COLLECTION = "notifications"

AUDIENCE_ROLES = {
    "ALL": None,
    "STUDENT": (UserRole.STUDENT.value,),
    "INSTRUCTOR": (UserRole.INSTRUCTOR.value,),
}

def _chunks(items: Sequence, size: int):
    for i in range(0, len(items), size):
        yield items[i:i + size]

def _publish(feed: Optional[ChangeFeed], rows: Iterable[Notification], kind: ChangeKind = ChangeKind.ADDED) -> None:
    if feed is None:
        return
    for n in rows:
        data = NotificationOut.from_model(n).model_dump(by_alias=True)
        feed.publish(ChangeEvent(COLLECTION, n.id, kind, data))

def notify(
    db: Session,
    user_id: str,
    title: str,
    message: str,
    type_: NotificationType,
    feed: Optional[ChangeFeed] = change_feed,
) -> Optional[Notification]:
    return (notify_many(db, [user_id], title, message, type_, feed=feed) or [None])[0]

def notify_many(
    db: Session,
    user_ids: Iterable[str],
    title: str,
    message: str,
    type_: NotificationType,
    feed: Optional[ChangeFeed] = change_feed,
) -> List[Notification]:
    """Best-effort: devolve as notificações gravadas ([] se a gravação falhar)."""
    rows = [Notification(user_id=uid, title=title, message=message, type=type_.value, read=False) for uid in user_ids]
    if not rows:
        return []
    try:
        db.add_all(rows)
        db.commit()
    except SQLAlchemyError:
        logger.exception("Failed to deliver %s notification to %d user(s)", type_.value, len(rows))
        db.rollback()
        return []
    _publish(feed, rows)
    return rows

def recipients_for(db: Session, audience: str) -> List[UserProfile]:
    if audience not in AUDIENCE_ROLES:
        raise ValidationFailed("Unknown audience.", {"audience": audience})
    roles = AUDIENCE_ROLES[audience]
    if roles is None:
        return user_crud.list_all(db)
    return user_crud.list_by_roles(db, roles)

def broadcast(
    db: Session,
    actor: UserProfile,
    title: str,
    message: str,
    audience: str = "ALL",
    batch_size: Optional[int] = None,
    feed: Optional[ChangeFeed] = change_feed,
) -> int:
    """
    Uma notificação SYSTEM por destinatário, em lotes confirmados em sequência.

    Se um lote falha ele é desfeito e BroadcastIncomplete informa quantas já
    foram entregues; os lotes anteriores continuam gravados.
    """
    ensure_role(actor, ROLE_ADMIN)
    size = batch_size or settings.BROADCAST_BATCH_SIZE
    targets = [u.uid for u in recipients_for(db, audience)]
    if not targets:
        raise ValidationFailed("No users found in the target audience.", {"audience": audience})

    delivered = 0
    for chunk in _chunks(targets, size):
        rows = [
            Notification(user_id=uid, title=title, message=message, type=NotificationType.SYSTEM.value, read=False)
            for uid in chunk
        ]
        try:
            db.add_all(rows)
            db.commit()
        except SQLAlchemyError:
            logger.exception("Broadcast batch failed after %d of %d notifications", delivered, len(targets))
            db.rollback()
            raise BroadcastIncomplete(delivered, len(targets))
        delivered += len(rows)
        _publish(feed, rows)

    logger.info("Broadcast '%s' by %s delivered to %d user(s) (%s)", title, actor.uid, delivered, audience)
    return delivered

def mark_read(
    db: Session,
    user: UserProfile,
    ids: Iterable[str],
    batch_size: Optional[int] = None,
    feed: Optional[ChangeFeed] = change_feed,
) -> int:
    """Marca como lidas só as notificações do próprio usuário; ids alheios são ignorados."""
    size = batch_size or settings.BROADCAST_BATCH_SIZE
    unique_ids = list(dict.fromkeys(ids))
    updated = 0
    for chunk in _chunks(unique_ids, size):
        stmt = (
            update(Notification)
            .where(Notification.id.in_(chunk), Notification.user_id == user.uid, Notification.read.is_(False))
            .values(read=True)
        )
        try:
            updated += db.execute(stmt).rowcount or 0
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception("Failed to mark notifications read for %s", user.uid)
            raise StoreUnavailable() from e
        if feed is not None:
            rows = db.scalars(select(Notification).where(Notification.id.in_(chunk), Notification.user_id == user.uid)).all()
            _publish(feed, rows, ChangeKind.MODIFIED)
    return updated

def list_for(db: Session, user: UserProfile, unread_only: bool = False) -> List[Notification]:
    return notification_crud.list_for_user(db, user.uid, unread_only)
