"""Notification inbox endpoints"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from soshopay_mock.api.dependencies import get_store, require_bearer_token
from soshopay_mock.api.v1.schemas import MessageResponse, NotificationListResponse, UnreadCountResponse
from soshopay_mock.domain.exceptions import NotFoundError
from soshopay_mock.domain.pagination import paginate
from soshopay_mock.domain.ports import NOTIFICATIONS
from soshopay_mock.infrastructure.database.repositories import SqlRecordStore
from soshopay_mock.infrastructure.database.session import get_db
from soshopay_mock.utils.date_utils import to_iso, utc_now

router = APIRouter(prefix="/notifications", dependencies=[Depends(require_bearer_token)])


def _is_unread(notification) -> bool:
    return not notification.get("is_read")


@router.get("", response_model=NotificationListResponse)
def list_notifications(
    filter: str = Query("all", description="all | unread | read"),
    page: int = Query(1),
    limit: int = Query(20),
    store: SqlRecordStore = Depends(get_store),
):
    """
    Paginated notifications, optionally only read or unread ones.

    unread_count counts the filtered set, so it is 0 for filter=read.
    """
    notifications = store.find_all(NOTIFICATIONS)
    if filter == "unread":
        notifications = [n for n in notifications if _is_unread(n)]
    elif filter == "read":
        notifications = [n for n in notifications if not _is_unread(n)]

    result = paginate(notifications, page, limit)
    return NotificationListResponse(
        notifications=result.items,
        current_page=result.current_page,
        total_pages=result.total_pages,
        total_count=result.total_count,
        has_next=result.has_next,
        has_previous=result.has_previous,
        unread_count=sum(1 for n in notifications if _is_unread(n)),
    )


@router.get("/unread/count", response_model=UnreadCountResponse)
def get_unread_count(store: SqlRecordStore = Depends(get_store)):
    return UnreadCountResponse(unread_count=len(store.filter(NOTIFICATIONS, _is_unread)))


@router.put("/mark-all-read", response_model=MessageResponse)
def mark_all_read(db: Session = Depends(get_db), store: SqlRecordStore = Depends(get_store)):
    store.update_all(NOTIFICATIONS, {"is_read": True, "read_at": to_iso(utc_now())})
    db.commit()
    return MessageResponse(message="All notifications marked as read")


@router.put("/{notification_id}/read", response_model=MessageResponse)
def mark_read(
    notification_id: str,
    db: Session = Depends(get_db),
    store: SqlRecordStore = Depends(get_store),
):
    updated = store.update(NOTIFICATIONS, notification_id, {"is_read": True, "read_at": to_iso(utc_now())})
    if updated is None:
        raise NotFoundError("Notification not found")
    db.commit()
    return MessageResponse(message="Notification marked as read")


@router.delete("/{notification_id}", response_model=MessageResponse)
def delete_notification(
    notification_id: str,
    db: Session = Depends(get_db),
    store: SqlRecordStore = Depends(get_store),
):
    store.delete(NOTIFICATIONS, notification_id)
    db.commit()
    return MessageResponse(message="Notification deleted successfully")
