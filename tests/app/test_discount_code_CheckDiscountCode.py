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
from datetime import datetime, timedelta

import pytest

from app.model.db import DiscountCode, DiscountCodeUse, DiscountType
from app.routers.shop.discount_code import calc_discount
from tests.user_config import auth_header, create_user


def add_discount_code(
    async_db,
    code,
    discount_type=DiscountType.PERCENT,
    discount_amount=10,
    min_order_amount=0,
    max_uses=None,
    used_count=0,
    expires_at=None,
    is_active=True,
):
    _code = DiscountCode()
    _code.id = str(uuid.uuid4())
    _code.code = code
    _code.discount_type = discount_type
    _code.discount_amount = discount_amount
    _code.min_order_amount = min_order_amount
    _code.max_uses = max_uses
    _code.used_count = used_count
    _code.expires_at = expires_at
    _code.is_active = is_active
    async_db.add(_code)
    return _code.id


class TestCheckDiscountCode:
    # target API endpoint
    base_url = "/discount_codes/check"

    ###########################################################################
    # Normal Case
    ###########################################################################

    # <Normal_1>
    # percent
    @pytest.mark.asyncio
    async def test_normal_1(self, async_client, async_db):
        # prepare data
        _, auth_token = await create_user(async_db, "user1")
        code_id = add_discount_code(async_db, "SALE10", discount_amount=10)
        await async_db.commit()

        # request target api
        resp = await async_client.post(
            self.base_url,
            json={"code": " sale10 ", "order_amount": 155},
            headers=auth_header(auth_token),
        )

        # assertion
        assert resp.status_code == 200
        assert resp.json() == {
            "code_id": code_id,
            "code": "SALE10",
            "discount_type": "percent",
            "discount": 15,
            "final_amount": 140,
        }

    # <Normal_2>
    # fixed amount larger than the order amount
    @pytest.mark.asyncio
    async def test_normal_2(self, async_client, async_db):
        # prepare data
        _, auth_token = await create_user(async_db, "user1")
        add_discount_code(
            async_db,
            "FIXED50",
            discount_type=DiscountType.FIXED,
            discount_amount=50,
            max_uses=10,
            used_count=9,
            expires_at=datetime.now() + timedelta(days=365),
        )
        await async_db.commit()

        # request target api
        resp = await async_client.post(
            self.base_url,
            json={"code": "FIXED50", "order_amount": 30},
            headers=auth_header(auth_token),
        )

        # assertion
        assert resp.status_code == 200
        resp_json = resp.json()
        assert resp_json["discount"] == 30
        assert resp_json["final_amount"] == 0

    # <Normal_3>
    # calc_discount
    def test_normal_3(self):
        assert calc_discount(DiscountType.PERCENT, 15, 99) == 14
        assert calc_discount(DiscountType.PERCENT, 100, 99) == 99
        assert calc_discount(DiscountType.FIXED, 20, 99) == 20
        assert calc_discount(DiscountType.FIXED, 20, 0) == 0

    ###########################################################################
    # Error Case
    ###########################################################################

    # <Error_1>
    # DiscountCodeNotApplicableError
    # inactive code
    @pytest.mark.asyncio
    async def test_error_1(self, async_client, async_db):
        # prepare data
        _, auth_token = await create_user(async_db, "user1")
        add_discount_code(async_db, "OLD", is_active=False)
        await async_db.commit()

        # request target api
        resp = await async_client.post(
            self.base_url,
            json={"code": "OLD", "order_amount": 100},
            headers=auth_header(auth_token),
        )

        # assertion
        assert resp.status_code == 400
        assert resp.json() == {
            "meta": {"code": 5, "title": "DiscountCodeNotApplicableError"},
            "detail": "discount code does not exist",
        }

    # <Error_2>
    # DiscountCodeNotApplicableError
    # expired
    @pytest.mark.asyncio
    async def test_error_2(self, async_client, async_db):
        # prepare data
        _, auth_token = await create_user(async_db, "user1")
        add_discount_code(async_db, "EXPIRED", expires_at=datetime(2020, 1, 1))
        await async_db.commit()

        # request target api
        resp = await async_client.post(
            self.base_url,
            json={"code": "EXPIRED", "order_amount": 100},
            headers=auth_header(auth_token),
        )

        # assertion
        assert resp.status_code == 400
        assert resp.json()["detail"] == "discount code has expired"

    # <Error_3>
    # DiscountCodeNotApplicableError
    # used up
    @pytest.mark.asyncio
    async def test_error_3(self, async_client, async_db):
        # prepare data
        _, auth_token = await create_user(async_db, "user1")
        add_discount_code(async_db, "LIMITED", max_uses=5, used_count=5)
        await async_db.commit()

        # request target api
        resp = await async_client.post(
            self.base_url,
            json={"code": "LIMITED", "order_amount": 100},
            headers=auth_header(auth_token),
        )

        # assertion
        assert resp.status_code == 400
        assert resp.json()["detail"] == "discount code has been used up"

    # <Error_4>
    # DiscountCodeNotApplicableError
    # order amount below the minimum
    @pytest.mark.asyncio
    async def test_error_4(self, async_client, async_db):
        # prepare data
        _, auth_token = await create_user(async_db, "user1")
        add_discount_code(async_db, "MIN100", min_order_amount=100)
        await async_db.commit()

        # request target api
        resp = await async_client.post(
            self.base_url,
            json={"code": "MIN100", "order_amount": 99},
            headers=auth_header(auth_token),
        )

        # assertion
        assert resp.status_code == 400
        assert resp.json()["detail"] == "order amount must be at least 100"

    # <Error_5>
    # DiscountCodeNotApplicableError
    # already used by the caller
    @pytest.mark.asyncio
    async def test_error_5(self, async_client, async_db):
        # prepare data
        user_id, auth_token = await create_user(async_db, "user1")
        code_id = add_discount_code(async_db, "ONCE")
        _use = DiscountCodeUse()
        _use.id = str(uuid.uuid4())
        _use.code_id = code_id
        _use.user_id = user_id
        async_db.add(_use)
        await async_db.commit()

        # request target api
        resp = await async_client.post(
            self.base_url,
            json={"code": "ONCE", "order_amount": 100},
            headers=auth_header(auth_token),
        )

        # assertion
        assert resp.status_code == 400
        assert resp.json()["detail"] == "discount code has already been used"
