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

import pytest
from sqlalchemy import select

from app.exceptions import ReferralNotApplicableError
from app.model.db import CoinHistory, Notification, Referral, UserCoin
from app.utils.referral_utils import generate_referral_code, redeem_referral_code
from tests.user_config import create_user


class TestGenerateReferralCode:
    # Normal_1
    @pytest.mark.asyncio
    async def test_normal_1(self, async_db):
        code = await generate_referral_code(async_db)

        assert len(code) == 8
        assert code.isalnum()
        assert code == code.upper()


class TestRedeemReferralCode:
    ###########################################################################
    # Normal Case
    ###########################################################################

    # Normal_1
    # code is case-insensitive
    @pytest.mark.asyncio
    async def test_normal_1(self, async_db):
        # prepare data
        referrer_id, _ = await create_user(
            async_db, "referrer", balance=3, referral_code="BONZ1234"
        )
        referred_id, _ = await create_user(async_db, "user1")

        # test function
        _referral = await redeem_referral_code(async_db, referred_id, " bonz1234 ")

        assert _referral.referrer_id == referrer_id
        assert _referral.referral_code == "BONZ1234"
        assert _referral.coins_rewarded == 5

        async_db.expire_all()
        _coin = (
            await async_db.scalars(
                select(UserCoin).where(UserCoin.user_id == referrer_id).limit(1)
            )
        ).first()
        assert _coin.balance == 8

        _history = (await async_db.scalars(select(CoinHistory))).all()
        assert len(_history) == 1
        assert _history[0].user_id == referrer_id
        assert _history[0].type == "referral_reward"
        assert _history[0].reference_id == referred_id

        _notification = (await async_db.scalars(select(Notification))).all()
        assert len(_notification) == 1
        assert _notification[0].user_id == referrer_id
        assert _notification[0].type == "referral"

    ###########################################################################
    # Error Case
    ###########################################################################

    # Error_1
    # code does not exist
    @pytest.mark.asyncio
    async def test_error_1(self, async_db):
        # prepare data
        referred_id, _ = await create_user(async_db, "user1")

        # test function
        with pytest.raises(ReferralNotApplicableError) as exc_info:
            await redeem_referral_code(async_db, referred_id, "NOTEXIST")
        assert exc_info.value.args[0] == "referral code does not exist"

    # Error_2
    # self-referral
    @pytest.mark.asyncio
    async def test_error_2(self, async_db):
        # prepare data
        user_id, _ = await create_user(async_db, "user1", referral_code="BONZ1234")

        # test function
        with pytest.raises(ReferralNotApplicableError) as exc_info:
            await redeem_referral_code(async_db, user_id, "BONZ1234")
        assert exc_info.value.args[0] == "self-referral is not allowed"

    # Error_3
    # already redeemed
    @pytest.mark.asyncio
    async def test_error_3(self, async_db):
        # prepare data
        await create_user(async_db, "referrer1", referral_code="BONZ1234")
        await create_user(async_db, "referrer2", referral_code="BONZ5678")
        referred_id, _ = await create_user(async_db, "user1")
        await redeem_referral_code(async_db, referred_id, "BONZ1234")

        # test function
        with pytest.raises(ReferralNotApplicableError) as exc_info:
            await redeem_referral_code(async_db, referred_id, "BONZ5678")
        assert exc_info.value.args[0] == "referral code has already been redeemed"

        _referrals = (await async_db.scalars(select(Referral))).all()
        assert len(_referrals) == 1
