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
from sqlalchemy import func, select

from app.database import DBAsyncSession
from app.exceptions import AuthorizationError, ReferralNotApplicableError
from app.model.db import Referral
from app.model.schema import (
    RedeemReferralCodeRequest,
    RedeemReferralCodeResponse,
    ReferralInfoResponse,
)
from app.utils.check_utils import check_auth
from app.utils.docs_utils import get_routers_responses
from app.utils.fastapi_utils import json_response
from app.utils.referral_utils import generate_referral_code, redeem_referral_code

router = APIRouter(tags=["referral"])


# GET: /referral
@router.get(
    "/referral",
    operation_id="RetrieveReferralInfo",
    response_model=ReferralInfoResponse,
    responses=get_routers_responses(AuthorizationError),
)
async def retrieve_referral_info(
    db: DBAsyncSession,
    request: Request,
    authorization: Optional[str] = Header(None),
):
    """Retrieve the caller's referral code and the number of referred users"""
    user = await check_auth(request=request, db=db, authorization=authorization)
    user_id = user.id

    referral_code = user.referral_code
    if referral_code is None:
        # Users registered before referral codes were introduced
        referral_code = await generate_referral_code(db)
        user.referral_code = referral_code
        await db.commit()

    referral_count = await db.scalar(
        select(func.count(Referral.id)).where(Referral.referrer_id == user_id)
    )
    _referred = (
        await db.scalars(
            select(Referral.id).where(Referral.referred_id == user_id).limit(1)
        )
    ).first()

    return json_response(
        {
            "referral_code": referral_code,
            "referral_count": referral_count,
            "referred": _referred is not None,
        }
    )


# POST: /referral/redeem
@router.post(
    "/referral/redeem",
    operation_id="RedeemReferralCode",
    response_model=RedeemReferralCodeResponse,
    responses=get_routers_responses(
        422, AuthorizationError, ReferralNotApplicableError
    ),
)
async def redeem_referral(
    db: DBAsyncSession,
    request: Request,
    data: RedeemReferralCodeRequest,
    authorization: Optional[str] = Header(None),
):
    """Redeem a referral code

    The referrer is credited with the referral reward.
    """
    user = await check_auth(request=request, db=db, authorization=authorization)

    _referral = await redeem_referral_code(
        db=db, referred_id=user.id, referral_code=data.referral_code
    )

    return json_response(
        {
            "referrer_id": _referral.referrer_id,
            "coins_rewarded": _referral.coins_rewarded,
        }
    )
