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

from fastapi import APIRouter, Header, Query, Request
from sqlalchemy import desc, func, select

from app.database import DBAsyncSession
from app.exceptions import AuthorizationError
from app.model.db import CoinHistory
from app.model.schema import (
    ListCoinHistoryQuery,
    ListCoinHistoryResponse,
    WalletResponse,
)
from app.utils.check_utils import check_auth
from app.utils.coin_utils import get_user_coin
from app.utils.docs_utils import get_routers_responses
from app.utils.fastapi_utils import json_response, to_local_isoformat

router = APIRouter(tags=["wallet"])


# GET: /wallet
@router.get(
    "/wallet",
    operation_id="RetrieveWallet",
    response_model=WalletResponse,
    responses=get_routers_responses(AuthorizationError),
)
async def retrieve_wallet(
    db: DBAsyncSession,
    request: Request,
    authorization: Optional[str] = Header(None),
):
    """Retrieve the caller's coin balance"""
    user = await check_auth(request=request, db=db, authorization=authorization)

    _coin = await get_user_coin(db, user.id)
    balance = _coin.balance if _coin is not None else 0

    return json_response({"balance": balance})


# GET: /wallet/history
@router.get(
    "/wallet/history",
    operation_id="ListCoinHistory",
    response_model=ListCoinHistoryResponse,
    responses=get_routers_responses(422, AuthorizationError),
)
async def list_coin_history(
    db: DBAsyncSession,
    request: Request,
    get_query: Annotated[ListCoinHistoryQuery, Query()],
    authorization: Optional[str] = Header(None),
):
    """List the caller's coin history (newest first)"""
    user = await check_auth(request=request, db=db, authorization=authorization)

    stmt = select(CoinHistory).where(CoinHistory.user_id == user.id)
    total = await db.scalar(select(func.count()).select_from(stmt.subquery()))

    # Search Filter
    if get_query.type is not None:
        stmt = stmt.where(CoinHistory.type == get_query.type)

    count = await db.scalar(select(func.count()).select_from(stmt.subquery()))

    # Sort
    stmt = stmt.order_by(desc(CoinHistory.created), desc(CoinHistory.id))

    # Pagination
    if get_query.limit is not None:
        stmt = stmt.limit(get_query.limit)
    if get_query.offset is not None:
        stmt = stmt.offset(get_query.offset)

    _history_list: Sequence[CoinHistory] = (await db.scalars(stmt)).all()

    history = [
        {**_history.json(), "created": to_local_isoformat(_history.created)}
        for _history in _history_list
    ]

    resp = {
        "result_set": {
            "count": count,
            "offset": get_query.offset,
            "limit": get_query.limit,
            "total": total,
        },
        "history": history,
    }

    return json_response(resp)
