"""
Copyright BOOSTRY Co., Ltd.

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.

You may obtain a copy of the License at
http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing,
software distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.

See the License for the specific language governing permissions and
limitations under the License.

SPDX-License-Identifier: Apache-2.0
"""

from typing import Annotated, Optional, Sequence

from fastapi import APIRouter, Header, HTTPException, Path, Query, Request
from sqlalchemy import delete, desc, func, select, update

from app.database import DBAsyncSession
from app.exceptions import AuthorizationError
from app.model.db import Notification
from app.model.schema import (
    ListAllNotificationsQuery,
    ListAllNotificationsResponse,
    MarkAllNotificationsReadResponse,
    NotificationDetail,
    SuccessResponse,
)
from app.utils.check_utils import check_auth
from app.utils.docs_utils import get_routers_responses
from app.utils.fastapi_utils import json_response, to_local_isoformat

router = APIRouter(tags=["notification"])


# GET: /notifications
@router.get(
    "/notifications",
    operation_id="ListAllNotifications",
    response_model=ListAllNotificationsResponse,
    responses=get_routers_responses(422, AuthorizationError),
)
async def list_all_notifications(
    db: DBAsyncSession,
    request: Request,
    get_query: Annotated[ListAllNotificationsQuery, Query()],
    authorization: Optional[str] = Header(None),
):
    """List the caller's notifications (newest first)"""
    user = await check_auth(request=request, db=db, authorization=authorization)
    user_id = user.id

    stmt = select(Notification).where(Notification.user_id == user_id)
    total = await db.scalar(select(func.count()).select_from(stmt.subquery()))
    unread_count = await db.scalar(
        select(func.count(Notification.id)).where(
            Notification.user_id == user_id, Notification.is_read == False
        )
    )

    # Search Filter
    if get_query.is_read is not None:
        stmt = stmt.where(Notification.is_read == get_query.is_read)
    if get_query.type is not None:
        stmt = stmt.where(Notification.type == get_query.type)

    count = await db.scalar(select(func.count()).select_from(stmt.subquery()))

    # Sort
    stmt = stmt.order_by(desc(Notification.created), desc(Notification.id))

    # Pagination
    if get_query.limit is not None:
        stmt = stmt.limit(get_query.limit)
    if get_query.offset is not None:
        stmt = stmt.offset(get_query.offset)

    _notifications: Sequence[Notification] = (await db.scalars(stmt)).all()

    resp = {
        "result_set": {
            "count": count,
            "offset": get_query.offset,
            "limit": get_query.limit,
            "total": total,
        },
        "unread_count": unread_count,
        "notifications": [__notification_detail(_n) for _n in _notifications],
    }

    return json_response(resp)


# POST: /notifications/read_all
@router.post(
    "/notifications/read_all",
    operation_id="MarkAllNotificationsRead",
    response_model=MarkAllNotificationsReadResponse,
    responses=get_routers_responses(AuthorizationError),
)
async def mark_all_notifications_read(
    db: DBAsyncSession,
    request: Request,
    authorization: Optional[str] = Header(None),
):
    """Mark all of the caller's notifications as read"""
    user = await check_auth(request=request, db=db, authorization=authorization)

    result = await db.execute(
        update(Notification)
        .where(Notification.user_id == user.id, Notification.is_read == False)
        .values(is_read=True)
        .execution_options(synchronize_session=False)
    )
    await db.commit()

    return json_response({"updated_count": result.rowcount})


# POST: /notifications/{notification_id}/read
@router.post(
    "/notifications/{notification_id}/read",
    operation_id="MarkNotificationRead",
    response_model=NotificationDetail,
    responses=get_routers_responses(AuthorizationError, 404),
)
async def mark_notification_read(
    db: DBAsyncSession,
    request: Request,
    notification_id: Annotated[str, Path()],
    authorization: Optional[str] = Header(None),
):
    """Mark a notification as read"""
    user = await check_auth(request=request, db=db, authorization=authorization)

    _notification = await __get_own_notification(
        db=db, notification_id=notification_id, user_id=user.id
    )
    _notification.is_read = True
    resp = __notification_detail(_notification)
    await db.commit()

    return json_response(resp)


# DELETE: /notifications/{notification_id}
@router.delete(
    "/notifications/{notification_id}",
    operation_id="DeleteNotification",
    response_model=SuccessResponse,
    responses=get_routers_responses(AuthorizationError, 404),
)
async def delete_notification(
    db: DBAsyncSession,
    request: Request,
    notification_id: Annotated[str, Path()],
    authorization: Optional[str] = Header(None),
):
    """Delete a notification"""
    user = await check_auth(request=request, db=db, authorization=authorization)

    await __get_own_notification(
        db=db, notification_id=notification_id, user_id=user.id
    )
    await db.execute(
        delete(Notification)
        .where(Notification.id == notification_id)
        .execution_options(synchronize_session=False)
    )
    await db.commit()

    return json_response({"success": True})


async def __get_own_notification(
    db: DBAsyncSession, notification_id: str, user_id: str
) -> Notification:
    # Notifications of other users are treated as missing
    _notification: Notification | None = (
        await db.scalars(
            select(Notification)
            .where(
                Notification.id == notification_id, Notification.user_id == user_id
            )
            .limit(1)
        )
    ).first()
    if _notification is None:
        raise HTTPException(status_code=404, detail="notification does not exist")
    return _notification


def __notification_detail(_notification: Notification):
    return {
        "id": _notification.id,
        "title": _notification.title,
        "message": _notification.message,
        "type": _notification.type,
        "is_read": _notification.is_read,
        "reference_id": _notification.reference_id,
        "created": to_local_isoformat(_notification.created),
    }
