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

import pytest
from sqlalchemy import select

from app.model.db import (
    CoinPurchase,
    Notification,
    ReviewStatus,
    SellerCoin,
    UserCoin,
    UserRoleType,
    WithdrawalRequest,
)
from tests.user_config import auth_header, create_seller, create_user


class TestRejectReviewItem:
    # target API endpoint
    base_url = "/admin/{}/{}/reject"

    ###########################################################################
    # Normal Case
    ###########################################################################

    # <Normal_1>
    # coin_purchases: coins are not credited
    @pytest.mark.asyncio
    async def test_normal_1(self, async_client, async_db):
        # prepare data
        admin_id, auth_token = await create_user(
            async_db, "admin1", role=UserRoleType.ADMIN
        )
        user_id, _ = await create_user(async_db, "user1", balance=20)

        _purchase = CoinPurchase()
        _purchase.id = str(uuid.uuid4())
        _purchase.user_id = user_id
        _purchase.amount = 100
        _purchase.status = ReviewStatus.PENDING
        purchase_id = _purchase.id
        async_db.add(_purchase)
        await async_db.commit()

        # request target api
        resp = await async_client.post(
            self.base_url.format("coin_purchases", purchase_id),
            json={"admin_note": "Không tìm thấy giao dịch"},
            headers=auth_header(auth_token),
        )

        # assertion
        assert resp.status_code == 200
        assert resp.json() == {"id": purchase_id, "status": "rejected"}

        async_db.expire_all()
        purchase = (
            await async_db.scalars(
                select(CoinPurchase).where(CoinPurchase.id == purchase_id).limit(1)
            )
        ).first()
        assert purchase.status == "rejected"
        assert purchase.admin_note == "Không tìm thấy giao dịch"

        user_coin = (
            await async_db.scalars(
                select(UserCoin).where(UserCoin.user_id == user_id).limit(1)
            )
        ).first()
        assert user_coin.balance == 20

        notification = (
            await async_db.scalars(select(Notification).limit(1))
        ).first()
        assert notification.user_id == user_id
        assert notification.type == "coin_rejected"

    # <Normal_2>
    # withdrawals: seller balance is kept
    @pytest.mark.asyncio
    async def test_normal_2(self, async_client, async_db):
        # prepare data
        _, auth_token = await create_user(async_db, "admin1", role=UserRoleType.ADMIN)
        seller_user_id, _ = await create_user(async_db, "seller1")
        seller_id = await create_seller(async_db, seller_user_id, balance=100)

        _withdrawal = WithdrawalRequest()
        _withdrawal.id = str(uuid.uuid4())
        _withdrawal.seller_id = seller_id
        _withdrawal.amount = 100
        _withdrawal.status = ReviewStatus.PENDING
        withdrawal_id = _withdrawal.id
        async_db.add(_withdrawal)
        await async_db.commit()

        # request target api
        resp = await async_client.post(
            self.base_url.format("withdrawals", withdrawal_id),
            headers=auth_header(auth_token),
        )

        # assertion
        assert resp.status_code == 200

        async_db.expire_all()
        seller_coin = (
            await async_db.scalars(
                select(SellerCoin).where(SellerCoin.seller_id == seller_id).limit(1)
            )
        ).first()
        assert seller_coin.balance == 100

        notification = (
            await async_db.scalars(select(Notification).limit(1))
        ).first()
        assert notification.user_id == seller_user_id
        assert notification.type == "withdrawal_rejected"

    ###########################################################################
    # Error Case
    ###########################################################################

    # <Error_1>
    # ReviewAlreadyProcessedError
    @pytest.mark.asyncio
    async def test_error_1(self, async_client, async_db):
        # prepare data
        _, auth_token = await create_user(async_db, "admin1", role=UserRoleType.ADMIN)
        user_id, _ = await create_user(async_db, "user1")

        _purchase = CoinPurchase()
        _purchase.id = str(uuid.uuid4())
        _purchase.user_id = user_id
        _purchase.amount = 100
        _purchase.status = ReviewStatus.APPROVED
        purchase_id = _purchase.id
        async_db.add(_purchase)
        await async_db.commit()

        # request target api
        resp = await async_client.post(
            self.base_url.format("coin_purchases", purchase_id),
            headers=auth_header(auth_token),
        )

        # assertion
        assert resp.status_code == 409
        assert resp.json()["meta"] == {
            "code": 2,
            "title": "ReviewAlreadyProcessedError",
        }
