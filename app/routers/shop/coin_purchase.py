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
from sqlalchemy import desc, func, select

from app.database import DBAsyncSession
from app.exceptions import AuthorizationError, InvalidParameterError
from app.model.db import CoinPurchase, ReviewStatus
from app.model.schema import (
    BasePaginationQuery,
    CoinPurchaseRequestDetail,
    CreateCoinPurchaseRequest,
    ListCoinPurchasesResponse,
)
from app.utils.check_utils import check_auth
from app.utils.docs_utils import get_routers_responses
from app.utils.fastapi_utils import json_response, to_local_isoformat
from app.utils.outbound_utils import enqueue_telegram
from app.utils.telegram_utils import TelegramMessageType
from config import MAX_COIN_PURCHASE_AMOUNT

router = APIRouter(tags=["coin_purchase"])


# POST: /coin_purchases
@router.post(
    "/coin_purchases",
    operation_id="CreateCoinPurchase",
    response_model=CoinPurchaseRequestDetail,
    responses=get_routers_responses(422, AuthorizationError, InvalidParameterError),
)
async def create_coin_purchase(
    db: DBAsyncSession,
    request: Request,
    data: CreateCoinPurchaseRequest,
    authorization: Optional[str] = Header(None),
):
    """Request a coin top-up paid by bank transfer

    Coins are credited when an administrator approves the request.
    """
    user = await check_auth(request=request, db=db, authorization=authorization)

    if data.amount > MAX_COIN_PURCHASE_AMOUNT:
        raise InvalidParameterError(
            f"amount must be less than or equal to {MAX_COIN_PURCHASE_AMOUNT}"
        )

    _purchase = CoinPurchase()
    _purchase.id = str(uuid.uuid4())
    _purchase.user_id = user.id
    _purchase.amount = data.amount
    _purchase.receipt_url = data.receipt_url
    _purchase.status = ReviewStatus.PENDING
    db.add(_purchase)

    enqueue_telegram(
        db=db,
        message_type=TelegramMessageType.COIN_PURCHASE,
        payload={
            "user_email": user.email,
            "amount": data.amount,
            "receipt_url": data.receipt_url,
            "purchase_id": _purchase.id,
        },
    )
    await db.commit()

    return json_response(__coin_purchase_detail(_purchase))


# GET: /coin_purchases
@router.get(
    "/coin_purchases",
    operation_id="ListMyCoinPurchases",
    response_model=ListCoinPurchasesResponse,
    responses=get_routers_responses(422, AuthorizationError),
)
async def list_my_coin_purchases(
    db: DBAsyncSession,
    request: Request,
    get_query: Annotated[BasePaginationQuery, Query()],
    authorization: Optional[str] = Header(None),
):
    """List the caller's coin top-up requests (newest first)"""
    user = await check_auth(request=request, db=db, authorization=authorization)

    stmt = select(CoinPurchase).where(CoinPurchase.user_id == user.id)
    total = await db.scalar(select(func.count()).select_from(stmt.subquery()))
    count = total

    # Sort
    stmt = stmt.order_by(desc(CoinPurchase.created), desc(CoinPurchase.id))

    # Pagination
    if get_query.limit is not None:
        stmt = stmt.limit(get_query.limit)
    if get_query.offset is not None:
        stmt = stmt.offset(get_query.offset)

    _purchases: Sequence[CoinPurchase] = (await db.scalars(stmt)).all()

    resp = {
        "result_set": {
            "count": count,
            "offset": get_query.offset,
            "limit": get_query.limit,
            "total": total,
        },
        "coin_purchases": [__coin_purchase_detail(_p) for _p in _purchases],
    }

    return json_response(resp)


def __coin_purchase_detail(_purchase: CoinPurchase):
    return {
        "id": _purchase.id,
        "user_id": _purchase.user_id,
        "amount": _purchase.amount,
        "receipt_url": _purchase.receipt_url,
        "status": _purchase.status,
        "admin_note": _purchase.admin_note,
        "approved_at": to_local_isoformat(_purchase.approved_at),
        "created": to_local_isoformat(_purchase.created),
    }
