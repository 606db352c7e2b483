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

import secrets
import string
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import ReferralNotApplicableError
from app.model.db import (
    CoinHistoryType,
    NotificationType,
    Referral,
    User,
)
from app.model.db.base import naive_utcnow
from app.utils.coin_utils import add_coin_history, credit_user_coin
from app.utils.notification_utils import add_notification
from config import REFERRAL_CODE_LENGTH, REFERRAL_REWARD_COINS

REFERRAL_CODE_CHARACTERS = string.ascii_uppercase + string.digits


async def generate_referral_code(db: AsyncSession) -> str:
    """Generate a referral code not used by any user"""
    while True:
        code = "".join(
            secrets.choice(REFERRAL_CODE_CHARACTERS)
            for _ in range(REFERRAL_CODE_LENGTH)
        )
        _user = (
            await db.scalars(select(User.id).where(User.referral_code == code).limit(1))
        ).first()
        if _user is None:
            return code


async def redeem_referral_code(
    db: AsyncSession, referred_id: str, referral_code: str
) -> Referral:
    """Redeem a referral code and reward the referrer

    :param db: database session
    :param referred_id: user id of the new user
    :param referral_code: referral code (case insensitive)
    :return: created referral
    :raises ReferralNotApplicableError: the code can not be redeemed by the user
    """
    code = referral_code.strip().upper()

    # Check if already referred
    _referral = (
        await db.scalars(
            select(Referral).where(Referral.referred_id == referred_id).limit(1)
        )
    ).first()
    if _referral is not None:
        raise ReferralNotApplicableError("referral code has already been redeemed")

    # Find referrer
    _referrer: User | None = (
        await db.scalars(
            select(User)
            .where(User.referral_code == code, User.is_deleted == False)
            .limit(1)
        )
    ).first()
    if _referrer is None:
        raise ReferralNotApplicableError("referral code does not exist")
    if _referrer.id == referred_id:
        raise ReferralNotApplicableError("self-referral is not allowed")

    _referral = Referral()
    _referral.id = str(uuid.uuid4())
    _referral.referrer_id = _referrer.id
    _referral.referred_id = referred_id
    _referral.referral_code = code
    _referral.coins_rewarded = REFERRAL_REWARD_COINS
    _referral.rewarded_at = naive_utcnow()
    db.add(_referral)

    # Reward referrer
    await credit_user_coin(db, _referrer.id, REFERRAL_REWARD_COINS)
    add_coin_history(
        db=db,
        user_id=_referrer.id,
        amount=REFERRAL_REWARD_COINS,
        history_type=CoinHistoryType.REFERRAL_REWARD,
        description="Nhận thưởng giới thiệu người dùng mới",
        reference_id=referred_id,
    )
    add_notification(
        db=db,
        user_id=_referrer.id,
        title="🎉 Mời bạn thành công!",
        message=f"Bạn đã nhận được {REFERRAL_REWARD_COINS} xu thưởng vì có người "
        "sử dụng mã giới thiệu của bạn!",
        notice_type=NotificationType.REFERRAL,
        reference_id=referred_id,
    )
    await db.commit()

    return _referral
