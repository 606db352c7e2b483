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

from typing import Optional

from fastapi import APIRouter, Header, Request
from sqlalchemy import select

from app.database import DBAsyncSession
from app.exceptions import AuthorizationError, DiscountCodeNotApplicableError
from app.model.db import DiscountCode, DiscountCodeUse, DiscountType
from app.model.db.base import naive_utcnow
from app.model.schema import CheckDiscountCodeRequest, CheckDiscountCodeResponse
from app.utils.check_utils import check_auth
from app.utils.docs_utils import get_routers_responses
from app.utils.fastapi_utils import json_response

router = APIRouter(tags=["discount_code"])


# POST: /discount_codes/check
@router.post(
    "/discount_codes/check",
    operation_id="CheckDiscountCode",
    response_model=CheckDiscountCodeResponse,
    responses=get_routers_responses(
        422, AuthorizationError, DiscountCodeNotApplicableError
    ),
)
async def check_discount_code(
    db: DBAsyncSession,
    request: Request,
    data: CheckDiscountCodeRequest,
    authorization: Optional[str] = Header(None),
):
    """Check a discount code for an order amount

    - percent: floor(order_amount * discount_amount / 100)
    - fixed: min(discount_amount, order_amount)
    """
    user = await check_auth(request=request, db=db, authorization=authorization)

    code = data.code.strip().upper()
    _code: DiscountCode | None = (
        await db.scalars(
            select(DiscountCode)
            .where(DiscountCode.code == code, DiscountCode.is_active == True)
            .limit(1)
        )
    ).first()
    if _code is None:
        raise DiscountCodeNotApplicableError("discount code does not exist")
    if _code.expires_at is not None and _code.expires_at < naive_utcnow():
        raise DiscountCodeNotApplicableError("discount code has expired")
    # NOTE: used_count and discount_code_use rows are maintained outside this
    # service; applying a code only checks them.
    if _code.max_uses is not None and _code.used_count >= _code.max_uses:
        raise DiscountCodeNotApplicableError("discount code has been used up")
    if data.order_amount < (_code.min_order_amount or 0):
        raise DiscountCodeNotApplicableError(
            f"order amount must be at least {_code.min_order_amount}"
        )

    _used = (
        await db.scalars(
            select(DiscountCodeUse.id)
            .where(
                DiscountCodeUse.code_id == _code.id,
                DiscountCodeUse.user_id == user.id,
            )
            .limit(1)
        )
    ).first()
    if _used is not None:
        raise DiscountCodeNotApplicableError("discount code has already been used")

    discount = calc_discount(
        _code.discount_type, _code.discount_amount, data.order_amount
    )

    return json_response(
        {
            "code_id": _code.id,
            "code": _code.code,
            "discount_type": _code.discount_type,
            "discount": discount,
            "final_amount": data.order_amount - discount,
        }
    )


def calc_discount(
    discount_type: DiscountType, discount_amount: int, order_amount: int
) -> int:
    if discount_type == DiscountType.PERCENT:
        return order_amount * discount_amount // 100
    return min(discount_amount, order_amount)
