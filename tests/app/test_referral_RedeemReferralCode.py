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

from app.model.db import CoinHistory, Notification, Referral, UserCoin
from tests.user_config import auth_header, create_user


class TestRedeemReferralCode:
    # target API endpoint
    base_url = "/referral/redeem"

    ###########################################################################
    # Normal Case
    ###########################################################################

    # <Normal_1>
    @pytest.mark.asyncio
    async def test_normal_1(self, async_client, async_db):
        # prepare data
        referrer_id, _ = await create_user(
            async_db, "referrer", balance=3, referral_code="REFER001"
        )
        user_id, auth_token = await create_user(async_db, "user1")

        # request target api
        resp = await async_client.post(
            self.base_url,
            json={"referral_code": " refer001 "},
            headers=auth_header(auth_token),
        )

        # assertion
        assert resp.status_code == 200
        assert resp.json() == {"referrer_id": referrer_id, "coins_rewarded": 5}

        async_db.expire_all()
        referral = (await async_db.scalars(select(Referral).limit(1))).first()
        assert referral.referrer_id == referrer_id
        assert referral.referred_id == user_id
        assert referral.referral_code == "REFER001"
        assert referral.rewarded_at is not None

        referrer_coin = (
            await async_db.scalars(
                select(UserCoin).where(UserCoin.user_id == referrer_id).limit(1)
            )
        ).first()
        assert referrer_coin.balance == 8

        history = (await async_db.scalars(select(CoinHistory).limit(1))).first()
        assert history.user_id == referrer_id
        assert history.amount == 5
        assert history.type == "referral_reward"

        notification = (
            await async_db.scalars(select(Notification).limit(1))
        ).first()
        assert notification.user_id == referrer_id
        assert notification.type == "referral"

    # <Normal_2>
    # Referrer wallet is created if it does not exist
    @pytest.mark.asyncio
    async def test_normal_2(self, async_client, async_db):
        # prepare data
        referrer_id, _ = await create_user(
            async_db, "referrer", balance=None, referral_code="REFER001"
        )
        _, auth_token = await create_user(async_db, "user1")

        # request target api
        resp = await async_client.post(
            self.base_url,
            json={"referral_code": "REFER001"},
            headers=auth_header(auth_token),
        )

        # assertion
        assert resp.status_code == 200

        async_db.expire_all()
        referrer_coin = (
            await async_db.scalars(
                select(UserCoin).where(UserCoin.user_id == referrer_id).limit(1)
            )
        ).first()
        assert referrer_coin.balance == 5

    ###########################################################################
    # Error Case
    ###########################################################################

    # <Error_1>
    # ReferralNotApplicableError
    # code does not exist
    @pytest.mark.asyncio
    async def test_error_1(self, async_client, async_db):
        # prepare data
        _, auth_token = await create_user(async_db, "user1")

        # request target api
        resp = await async_client.post(
            self.base_url,
            json={"referral_code": "NOTEXIST"},
            headers=auth_header(auth_token),
        )

        # assertion
        assert resp.status_code == 400
        assert resp.json() == {
            "meta": {"code": 6, "title": "ReferralNotApplicableError"},
            "detail": "referral code does not exist",
        }

    # <Error_2>
    # ReferralNotApplicableError
    # self-referral
    @pytest.mark.asyncio
    async def test_error_2(self, async_client, async_db):
        # prepare data
        _, auth_token = await create_user(async_db, "user1", referral_code="SELF0001")

        # request target api
        resp = await async_client.post(
            self.base_url,
            json={"referral_code": "SELF0001"},
            headers=auth_header(auth_token),
        )

        # assertion
        assert resp.status_code == 400
        assert resp.json() == {
            "meta": {"code": 6, "title": "ReferralNotApplicableError"},
            "detail": "self-referral is not allowed",
        }

    # <Error_3>
    # ReferralNotApplicableError
    # already redeemed
    @pytest.mark.asyncio
    async def test_error_3(self, async_client, async_db):
        # prepare data
        await create_user(async_db, "referrer1", referral_code="REFER001")
        await create_user(async_db, "referrer2", referral_code="REFER002")
        _, auth_token = await create_user(async_db, "user1")

        resp = await async_client.post(
            self.base_url,
            json={"referral_code": "REFER001"},
            headers=auth_header(auth_token),
        )
        assert resp.status_code == 200

        # request target api
        resp = await async_client.post(
            self.base_url,
            json={"referral_code": "REFER002"},
            headers=auth_header(auth_token),
        )

        # assertion
        assert resp.status_code == 400
        assert resp.json() == {
            "meta": {"code": 6, "title": "ReferralNotApplicableError"},
            "detail": "referral code has already been redeemed",
        }
