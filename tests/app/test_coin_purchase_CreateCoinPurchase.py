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

from datetime import datetime

import pytest
from sqlalchemy import select

from app.model.db import CoinPurchase, OutboundMessage, UserCoin
from tests.user_config import auth_header, create_user


class TestCreateCoinPurchase:
    # target API endpoint
    base_url = "/coin_purchases"

    ###########################################################################
    # Normal Case
    ###########################################################################

    # <Normal_1>
    # Coins are not credited until approved
    @pytest.mark.asyncio
    async def test_normal_1(self, async_client, async_db):
        # prepare data
        user_id, auth_token = await create_user(async_db, "user1", balance=10)

        # request target api
        resp = await async_client.post(
            self.base_url,
            json={"amount": 100, "receipt_url": "https://example.com/receipt.png"},
            headers=auth_header(auth_token),
        )

        # assertion
        assert resp.status_code == 200
        resp_json = resp.json()
        assert resp_json["user_id"] == user_id
        assert resp_json["amount"] == 100
        assert resp_json["receipt_url"] == "https://example.com/receipt.png"
        assert resp_json["status"] == "pending"
        assert resp_json["admin_note"] is None
        assert resp_json["approved_at"] is None

        async_db.expire_all()
        purchase = (await async_db.scalars(select(CoinPurchase).limit(1))).first()
        assert purchase.id == resp_json["id"]
        assert purchase.status == "pending"

        user_coin = (
            await async_db.scalars(
                select(UserCoin).where(UserCoin.user_id == user_id).limit(1)
            )
        ).first()
        assert user_coin.balance == 10

        message = (await async_db.scalars(select(OutboundMessage).limit(1))).first()
        assert message.message_type == "coin_purchase"
        payload = dict(message.payload)
        assert datetime.fromisoformat(payload.pop("occurred_at")).tzinfo is not None
        assert payload == {
            "user_email": "user1@example.com",
            "amount": 100,
            "receipt_url": "https://example.com/receipt.png",
            "purchase_id": resp_json["id"],
        }

    ###########################################################################
    # Error Case
    ###########################################################################

    # <Error_1>
    # RequestValidationError
    # amount is not positive
    @pytest.mark.asyncio
    async def test_error_1(self, async_client, async_db):
        # prepare data
        _, auth_token = await create_user(async_db, "user1")

        # request target api
        resp = await async_client.post(
            self.base_url,
            json={"amount": 0, "receipt_url": "https://example.com/receipt.png"},
            headers=auth_header(auth_token),
        )

        # assertion
        assert resp.status_code == 422
        assert resp.json()["meta"] == {"code": 1, "title": "RequestValidationError"}

    # <Error_2>
    # InvalidParameterError
    # amount exceeds the upper limit
    @pytest.mark.asyncio
    async def test_error_2(self, async_client, async_db):
        # prepare data
        _, auth_token = await create_user(async_db, "user1")

        # request target api
        resp = await async_client.post(
            self.base_url,
            json={"amount": 100001, "receipt_url": "https://example.com/receipt.png"},
            headers=auth_header(auth_token),
        )

        # assertion
        assert resp.status_code == 400
        assert resp.json() == {
            "meta": {"code": 1, "title": "InvalidParameterError"},
            "detail": "amount must be less than or equal to 100000",
        }

    # <Error_3>
    # AuthorizationError
    @pytest.mark.asyncio
    async def test_error_3(self, async_client, async_db):
        # request target api
        resp = await async_client.post(
            self.base_url,
            json={"amount": 100, "receipt_url": "https://example.com/receipt.png"},
        )

        # assertion
        assert resp.status_code == 401
