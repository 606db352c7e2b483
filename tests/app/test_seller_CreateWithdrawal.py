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

from app.model.db import OutboundMessage, SellerCoin, WithdrawalRequest
from tests.user_config import auth_header, create_seller, create_user


class TestCreateWithdrawal:
    # target API endpoint
    base_url = "/sellers/me/withdrawals"

    ###########################################################################
    # Normal Case
    ###########################################################################

    # <Normal_1>
    # Bank details default to the seller profile
    @pytest.mark.asyncio
    async def test_normal_1(self, async_client, async_db):
        # prepare data
        user_id, auth_token = await create_user(async_db, "user1")
        seller_id = await create_seller(async_db, user_id, balance=100)

        # request target api
        resp = await async_client.post(
            self.base_url, json={"amount": 100}, headers=auth_header(auth_token)
        )

        # assertion
        assert resp.status_code == 200
        resp_json = resp.json()
        assert resp_json["seller_id"] == seller_id
        assert resp_json["amount"] == 100
        assert resp_json["bank_name"] == "Vietcombank"
        assert resp_json["bank_account_number"] == "0123456789"
        assert resp_json["bank_account_name"] == "NGUYEN VAN A"
        assert resp_json["bank_qr_url"] == "https://example.com/qr.png"
        assert resp_json["status"] == "pending"
        assert resp_json["processed_at"] is None

        withdrawal = (
            await async_db.scalars(select(WithdrawalRequest).limit(1))
        ).first()
        assert withdrawal.id == resp_json["id"]
        assert withdrawal.status == "pending"

        # balance is not deducted until approved
        async_db.expire_all()
        seller_coin = (
            await async_db.scalars(
                select(SellerCoin).where(SellerCoin.seller_id == seller_id).limit(1)
            )
        ).first()
        assert seller_coin.balance == 100

        message = (await async_db.scalars(select(OutboundMessage).limit(1))).first()
        assert message.message_type == "withdrawal_request"
        assert message.payload["withdrawal_id"] == resp_json["id"]
        assert message.payload["amount"] == 100

    # <Normal_2>
    # Bank details in the request take precedence
    @pytest.mark.asyncio
    async def test_normal_2(self, async_client, async_db):
        # prepare data
        user_id, auth_token = await create_user(async_db, "user1")
        await create_seller(async_db, user_id, balance=100, with_bank=False)

        # request target api
        resp = await async_client.post(
            self.base_url,
            json={
                "amount": 50,
                "bank_name": "MB Bank",
                "bank_account_number": "999999",
                "bank_account_name": "LE VAN C",
                "bank_qr_url": "https://example.com/mb_qr.png",
            },
            headers=auth_header(auth_token),
        )

        # assertion
        assert resp.status_code == 200
        resp_json = resp.json()
        assert resp_json["bank_name"] == "MB Bank"
        assert resp_json["bank_account_number"] == "999999"

    ###########################################################################
    # Error Case
    ###########################################################################

    # <Error_1>
    # InvalidParameterError
    # bank details are missing
    @pytest.mark.asyncio
    async def test_error_1(self, async_client, async_db):
        # prepare data
        user_id, auth_token = await create_user(async_db, "user1")
        await create_seller(async_db, user_id, balance=100, with_bank=False)

        # request target api
        resp = await async_client.post(
            self.base_url,
            json={"amount": 50, "bank_name": "MB Bank"},
            headers=auth_header(auth_token),
        )

        # assertion
        assert resp.status_code == 400
        assert resp.json() == {
            "meta": {"code": 1, "title": "InvalidParameterError"},
            "detail": "bank_account_number, bank_account_name, bank_qr_url is required",
        }

    # <Error_2>
    # InsufficientBalanceError
    @pytest.mark.asyncio
    async def test_error_2(self, async_client, async_db):
        # prepare data
        user_id, auth_token = await create_user(async_db, "user1")
        await create_seller(async_db, user_id, balance=99)

        # request target api
        resp = await async_client.post(
            self.base_url, json={"amount": 100}, headers=auth_header(auth_token)
        )

        # assertion
        assert resp.status_code == 400
        assert resp.json() == {
            "meta": {"code": 2, "title": "InsufficientBalanceError"},
            "detail": "insufficient seller balance",
        }
        assert (await async_db.scalars(select(WithdrawalRequest))).all() == []

    # <Error_3>
    # RequestValidationError
    # amount is not positive
    @pytest.mark.asyncio
    async def test_error_3(self, async_client, async_db):
        # prepare data
        user_id, auth_token = await create_user(async_db, "user1")
        await create_seller(async_db, user_id, balance=100)

        # request target api
        resp = await async_client.post(
            self.base_url, json={"amount": 0}, headers=auth_header(auth_token)
        )

        # assertion
        assert resp.status_code == 422
