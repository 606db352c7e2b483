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

import uuid
from typing import Annotated, Optional, Sequence

from fastapi import APIRouter, Header, Query, Request
from fastapi.exceptions import HTTPException
from sqlalchemy import desc, func, select

from app.database import DBAsyncSession
from app.exceptions import AuthorizationError
from app.model.db import BotRental, BotRentalRequest, ReviewStatus
from app.model.schema import (
    BasePaginationQuery,
    BotRentalRequestDetail,
    CreateBotRentalRequest,
    ListBotRentalOffersResponse,
    ListBotRentalRequestsResponse,
)
from app.utils.check_utils import check_auth
from app.utils.docs_utils import get_routers_responses
from app.utils.fastapi_utils import json_response, to_local_isoformat
from app.utils.outbound_utils import enqueue_telegram
from app.utils.telegram_utils import TelegramMessageType

router = APIRouter(tags=["bot_rental"])


# GET: /bot_rentals
@router.get(
    "/bot_rentals",
    operation_id="ListBotRentalOffers",
    response_model=ListBotRentalOffersResponse,
)
async def list_bot_rental_offers(db: DBAsyncSession):
    """List active Zalo bot rental offers"""
    _bots: Sequence[BotRental] = (
        await db.scalars(
            select(BotRental)
            .where(BotRental.is_active == True)
            .order_by(BotRental.sort_order, BotRental.created)
        )
    ).all()

    return json_response({"bots": [_bot.json() for _bot in _bots]})


# GET: /bot_rentals/requests
@router.get(
    "/bot_rentals/requests",
    operation_id="ListMyBotRentalRequests",
    response_model=ListBotRentalRequestsResponse,
    responses=get_routers_responses(422, AuthorizationError),
)
async def list_my_bot_rental_requests(
    db: DBAsyncSession,
    request: Request,
    get_query: Annotated[BasePaginationQuery, Query()],
    authorization: Optional[str] = Header(None),
):
    """List the caller's bot rental requests (newest first)"""
    user = await check_auth(request=request, db=db, authorization=authorization)

    stmt = select(BotRentalRequest).where(BotRentalRequest.user_id == user.id)
    total = await db.scalar(select(func.count()).select_from(stmt.subquery()))
    count = total

    # Sort
    stmt = stmt.order_by(desc(BotRentalRequest.created), desc(BotRentalRequest.id))

    # Pagination
    if get_query.limit is not None:
        stmt = stmt.limit(get_query.limit)
    if get_query.offset is not None:
        stmt = stmt.offset(get_query.offset)

    _requests: Sequence[BotRentalRequest] = (await db.scalars(stmt)).all()

    resp = {
        "result_set": {
            "count": count,
            "offset": get_query.offset,
            "limit": get_query.limit,
            "total": total,
        },
        "requests": [__rental_request_detail(_r) for _r in _requests],
    }

    return json_response(resp)


# POST: /bot_rentals/{bot_id}/requests
@router.post(
    "/bot_rentals/{bot_id}/requests",
    operation_id="CreateBotRentalRequest",
    response_model=BotRentalRequestDetail,
    responses=get_routers_responses(422, 404, AuthorizationError),
)
async def create_bot_rental_request(
    db: DBAsyncSession,
    request: Request,
    bot_id: str,
    data: CreateBotRentalRequest,
    authorization: Optional[str] = Header(None),
):
    """Request a bot rental paid by bank transfer"""
    user = await check_auth(request=request, db=db, authorization=authorization)

    _bot: BotRental | None = (
        await db.scalars(
            select(BotRental)
            .where(BotRental.id == bot_id, BotRental.is_active == True)
            .limit(1)
        )
    ).first()
    if _bot is None:
        raise HTTPException(status_code=404, detail="bot does not exist")

    _request = BotRentalRequest()
    _request.id = str(uuid.uuid4())
    _request.bot_id = bot_id
    _request.user_id = user.id
    _request.receipt_url = data.receipt_url
    _request.status = ReviewStatus.PENDING
    db.add(_request)

    enqueue_telegram(
        db=db,
        message_type=TelegramMessageType.BOT_RENTAL,
        payload={
            "user_email": user.email,
            "bot_name": _bot.name,
            "price": _bot.price,
            "receipt_url": data.receipt_url,
        },
    )
    await db.commit()

    return json_response(__rental_request_detail(_request))


def __rental_request_detail(_request: BotRentalRequest):
    return {
        "id": _request.id,
        "bot_id": _request.bot_id,
        "user_id": _request.user_id,
        "receipt_url": _request.receipt_url,
        "status": _request.status,
        "admin_note": _request.admin_note,
        "created": to_local_isoformat(_request.created),
    }
