# src/kgotla/api/v1/endpoints/notifications.py
"""Notification endpoints for the Kgotla API."""

from fastapi import APIRouter, HTTPException, Query, status
from sqlalchemy import desc, select

from kgotla.models import Notification
from kgotla.schemas.common import StatusMessage
from kgotla.schemas.notification import NotificationResponse

from ..dependencies import CurrentUserDep, PageDep, SessionDep

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=list[NotificationResponse])
async def list_notifications(
    current_user: CurrentUserDep,
    db: SessionDep,
    page: PageDep,
    unread_only: bool = Query(False, alias="unreadOnly"),
) -> list[Notification]:
    """List the caller's notifications, newest first."""
    stmt = select(Notification).where(Notification.user_id == current_user.id)
    if unread_only:
        stmt = stmt.where(Notification.is_read.is_(False))
    stmt = (
        stmt.order_by(desc(Notification.created_at), desc(Notification.id))
        .offset(page.offset)
        .limit(page.limit)
    )
    return list(db.scalars(stmt))


@router.put("/{notification_id}/read", response_model=StatusMessage)
async def mark_notification_read(
    notification_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> StatusMessage:
    """Mark one of the caller's notifications as read."""
    notification = db.scalars(
        select(Notification).where(
            Notification.id == notification_id,
            Notification.user_id == current_user.id,
        )
    ).first()
    if notification is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Notification not found",
        )

    notification.is_read = True
    db.commit()
    return StatusMessage(status="read")
