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

from app.model.db import Seller, SellerCoin
from tests.user_config import auth_header, create_seller, create_user


class TestRegisterSeller:
    # target API endpoint
    base_url = "/sellers"

    ###########################################################################
    # Normal Case
    ###########################################################################

    # <Normal_1>
    # All bank details are set
    @pytest.mark.asyncio
    async def test_normal_1(self, async_client, async_db):
        # prepare data
        user_id, auth_token = await create_user(async_db, "user1")

        # request target api
        resp = await async_client.post(
            self.base_url,
            json={
                "display_name": "Shop Bonz",
                "phone": "0900000000",
                "bank_name": "Vietcombank",
                "bank_account_number": "0123456789",
                "bank_account_name": "NGUYEN VAN A",
            },
            headers=auth_header(auth_token),
        )

        # assertion
        assert resp.status_code == 200
        resp_json = resp.json()
        assert resp_json["user_id"] == user_id
        assert resp_json["display_name"] == "Shop Bonz"
        assert resp_json["is_verified"] is False
        assert resp_json["is_profile_complete"] is True

        seller = (await async_db.scalars(select(Seller).limit(1))).first()
        assert seller.id == resp_json["id"]

        seller_coin = (await async_db.scalars(select(SellerCoin).limit(1))).first()
        assert seller_coin.seller_id == seller.id
        assert seller_coin.balance == 0
        assert seller_coin.total_earned == 0

    # <Normal_2>
    # Bank details are not set
    @pytest.mark.asyncio
    async def test_normal_2(self, async_client, async_db):
        # prepare data
        _, auth_token = await create_user(async_db, "user1")

        # request target api
        resp = await async_client.post(
            self.base_url,
            json={"display_name": "Shop Bonz"},
            headers=auth_header(auth_token),
        )

        # assertion
        assert resp.status_code == 200
        assert resp.json()["is_profile_complete"] is False

    ###########################################################################
    # Error Case
    ###########################################################################

    # <Error_1>
    # InvalidParameterError
    # already registered
    @pytest.mark.asyncio
    async def test_error_1(self, async_client, async_db):
        # prepare data
        user_id, auth_token = await create_user(async_db, "user1")
        await create_seller(async_db, user_id)

        # request target api
        resp = await async_client.post(
            self.base_url,
            json={"display_name": "Shop Bonz 2"},
            headers=auth_header(auth_token),
        )

        # assertion
        assert resp.status_code == 400
        assert resp.json() == {
            "meta": {"code": 1, "title": "InvalidParameterError"},
            "detail": "seller is already registered",
        }

    # <Error_2>
    # RequestValidationError
    # display_name is required
    @pytest.mark.asyncio
    async def test_error_2(self, async_client, async_db):
        # prepare data
        _, auth_token = await create_user(async_db, "user1")

        # request target api
        resp = await async_client.post(
            self.base_url, json={}, headers=auth_header(auth_token)
        )

        # assertion
        assert resp.status_code == 422
