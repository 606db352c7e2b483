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

from unittest import mock
from unittest.mock import AsyncMock

import pytest
from sqlalchemy import select

from app.model.db import (
    CoinHistory,
    GameAccount,
    Notification,
    Order,
    OutboundMessage,
    Product,
    SellerCoin,
    UserCoin,
)
from tests.user_config import (
    auth_header,
    create_game_account,
    create_product,
    create_seller,
    create_user,
)


class TestPurchaseWithCoins:
    # target API endpoint
    base_url = "/purchases"

    ###########################################################################
    # Normal Case
    ###########################################################################

    # <Normal_1>
    # Purchase a game account listed by a seller
    @pytest.mark.asyncio
    async def test_normal_1(self, async_client, async_db):
        # prepare data
        buyer_id, auth_token = await create_user(async_db, "buyer", balance=100)
        seller_user_id, _ = await create_user(async_db, "seller")
        seller_id = await create_seller(async_db, seller_user_id)
        account_id = await create_game_account(
            async_db, price=50000, seller_id=seller_id
        )

        # request target api
        resp = await async_client.post(
            self.base_url,
            json={"required_coins": 50, "account_id": account_id},
            headers=auth_header(auth_token),
        )

        # assertion
        assert resp.status_code == 200
        resp_json = resp.json()
        assert resp_json["new_balance"] == 50
        assert resp_json["message"] == "Mua hàng thành công!"
        assert resp_json["order"]["buyer_id"] == buyer_id
        assert resp_json["order"]["seller_id"] == seller_id
        assert resp_json["order"]["account_id"] == account_id
        assert resp_json["order"]["product_id"] is None
        assert resp_json["order"]["amount"] == 50
        assert resp_json["order"]["order_type"] == "coin_purchase"
        assert resp_json["order"]["status"] == "approved"

        async_db.expire_all()
        user_coin = (
            await async_db.scalars(
                select(UserCoin).where(UserCoin.user_id == buyer_id).limit(1)
            )
        ).first()
        assert user_coin.balance == 50

        order = (await async_db.scalars(select(Order).limit(1))).first()
        assert order.id == resp_json["order"]["id"]
        assert order.login_credentials == {
            "email": "ff@example.com",
            "username": "ff_user",
            "phone": None,
            "password": "ff_pass",
            "additional_info": "Đổi mật khẩu sau khi nhận",
        }

        account = (
            await async_db.scalars(
                select(GameAccount).where(GameAccount.id == account_id).limit(1)
            )
        ).first()
        assert account.is_sold is True
        assert account.sold_to == buyer_id
        assert account.sold_at is not None

        # 50 coins - 7 coins commission fee
        seller_coin = (
            await async_db.scalars(
                select(SellerCoin).where(SellerCoin.seller_id == seller_id).limit(1)
            )
        ).first()
        assert seller_coin.balance == 43
        assert seller_coin.total_earned == 43

        history = (await async_db.scalars(select(CoinHistory))).all()
        assert len(history) == 1
        assert history[0].user_id == buyer_id
        assert history[0].amount == -50
        assert history[0].type == "account_purchase"
        assert history[0].reference_id == order.id

        notifications = (
            await async_db.scalars(
                select(Notification).order_by(Notification.user_id)
            )
        ).all()
        assert sorted([(n.user_id, n.type) for n in notifications]) == sorted(
            [(buyer_id, "purchase"), (seller_user_id, "seller_sale")]
        )

        messages = (
            await async_db.scalars(select(OutboundMessage).order_by(OutboundMessage.id))
        ).all()
        assert sorted([(m.channel, m.message_type) for m in messages]) == sorted(
            [
                ("email", "purchase"),
                ("telegram", "account_purchase"),
                ("telegram", "seller_sale"),
            ]
        )

    # <Normal_2>
    # Purchase a product without seller
    @pytest.mark.asyncio
    async def test_normal_2(self, async_client, async_db):
        # prepare data
        buyer_id, auth_token = await create_user(async_db, "buyer", balance=200)
        product_id = await create_product(async_db, price=150000)

        # request target api
        resp = await async_client.post(
            self.base_url,
            json={"required_coins": 150, "product_id": product_id},
            headers=auth_header(auth_token),
        )

        # assertion
        assert resp.status_code == 200
        resp_json = resp.json()
        assert resp_json["new_balance"] == 50
        assert resp_json["order"]["seller_id"] is None
        assert resp_json["order"]["product_id"] == product_id

        async_db.expire_all()
        product = (
            await async_db.scalars(
                select(Product).where(Product.id == product_id).limit(1)
            )
        ).first()
        assert product.sales == 1

        history = (await async_db.scalars(select(CoinHistory))).all()
        assert len(history) == 1
        assert history[0].amount == -150
        assert history[0].type == "product_purchase"

        seller_coins = (await async_db.scalars(select(SellerCoin))).all()
        assert len(seller_coins) == 0

        messages = (await async_db.scalars(select(OutboundMessage))).all()
        assert sorted([m.message_type for m in messages]) == [
            "product_purchase",
            "purchase",
        ]

    # <Normal_3>
    # Balance exactly equal to the price
    @pytest.mark.asyncio
    async def test_normal_3(self, async_client, async_db):
        # prepare data
        _, auth_token = await create_user(async_db, "buyer", balance=50)
        account_id = await create_game_account(async_db, price=50000)

        # request target api
        resp = await async_client.post(
            self.base_url,
            json={"required_coins": 50, "account_id": account_id},
            headers=auth_header(auth_token),
        )

        # assertion
        assert resp.status_code == 200
        assert resp.json()["new_balance"] == 0

    # <Normal_4>
    # Failing seller credit and notifications do not abort a committed order
    @pytest.mark.asyncio
    async def test_normal_4(self, async_client, async_db):
        # prepare data
        buyer_id, auth_token = await create_user(async_db, "buyer", balance=100)
        seller_user_id, _ = await create_user(async_db, "seller")
        seller_id = await create_seller(async_db, seller_user_id)
        account_id = await create_game_account(
            async_db, price=50000, seller_id=seller_id
        )

        # request target api
        with (
            mock.patch(
                "app.routers.shop.purchase.credit_seller_coin",
                AsyncMock(side_effect=Exception("credit failed")),
            ),
            mock.patch(
                "app.routers.shop.purchase.add_notification",
                side_effect=Exception("notification failed"),
            ),
        ):
            resp = await async_client.post(
                self.base_url,
                json={"required_coins": 50, "account_id": account_id},
                headers=auth_header(auth_token),
            )

        # assertion
        assert resp.status_code == 200
        resp_json = resp.json()
        assert resp_json["new_balance"] == 50

        async_db.expire_all()
        user_coin = (
            await async_db.scalars(
                select(UserCoin).where(UserCoin.user_id == buyer_id).limit(1)
            )
        ).first()
        assert user_coin.balance == 50

        order = (await async_db.scalars(select(Order).limit(1))).first()
        assert order.id == resp_json["order"]["id"]
        assert order.buyer_id == buyer_id
        assert order.amount == 50

        seller_coin = (
            await async_db.scalars(
                select(SellerCoin).where(SellerCoin.seller_id == seller_id).limit(1)
            )
        ).first()
        assert seller_coin.balance == 0
        assert seller_coin.total_earned == 0

        notifications = (await async_db.scalars(select(Notification))).all()
        assert len(notifications) == 0

    ###########################################################################
    # Error Case
    ###########################################################################

    # <Error_1>
    # AuthorizationError
    # auth token is not set
    @pytest.mark.asyncio
    async def test_error_1(self, async_client, async_db):
        # request target api
        resp = await async_client.post(
            self.base_url, json={"required_coins": 50, "account_id": "x"}
        )

        # assertion
        assert resp.status_code == 401
        assert resp.json() == {
            "meta": {"code": 1, "title": "AuthorizationError"},
            "detail": "auth token is missing or invalid",
        }

    # <Error_2>
    # InvalidParameterError
    # required_coins is not positive
    @pytest.mark.asyncio
    async def test_error_2(self, async_client, async_db):
        # prepare data
        _, auth_token = await create_user(async_db, "buyer", balance=100)

        # request target api
        resp = await async_client.post(
            self.base_url,
            json={"required_coins": 0, "account_id": "x"},
            headers=auth_header(auth_token),
        )

        # assertion
        assert resp.status_code == 400
        assert resp.json() == {
            "meta": {"code": 1, "title": "InvalidParameterError"},
            "detail": "required_coins must be a positive integer",
        }

    # <Error_3>
    # InvalidParameterError
    # neither account_id nor product_id
    @pytest.mark.asyncio
    async def test_error_3(self, async_client, async_db):
        # prepare data
        _, auth_token = await create_user(async_db, "buyer", balance=100)

        # request target api
        resp = await async_client.post(
            self.base_url,
            json={"required_coins": 50},
            headers=auth_header(auth_token),
        )

        # assertion
        assert resp.status_code == 400
        assert resp.json() == {
            "meta": {"code": 1, "title": "InvalidParameterError"},
            "detail": "account_id or product_id is required",
        }

    # <Error_4>
    # InvalidParameterError
    # both account_id and product_id
    @pytest.mark.asyncio
    async def test_error_4(self, async_client, async_db):
        # prepare data
        _, auth_token = await create_user(async_db, "buyer", balance=100)

        # request target api
        resp = await async_client.post(
            self.base_url,
            json={"required_coins": 50, "account_id": "a", "product_id": "p"},
            headers=auth_header(auth_token),
        )

        # assertion
        assert resp.status_code == 400
        assert resp.json() == {
            "meta": {"code": 1, "title": "InvalidParameterError"},
            "detail": "account_id and product_id can not be specified at the same time",
        }

    # <Error_5>
    # InsufficientBalanceError
    @pytest.mark.asyncio
    async def test_error_5(self, async_client, async_db):
        # prepare data
        _, auth_token = await create_user(async_db, "buyer", balance=49)
        account_id = await create_game_account(async_db, price=50000)

        # request target api
        resp = await async_client.post(
            self.base_url,
            json={"required_coins": 50, "account_id": account_id},
            headers=auth_header(auth_token),
        )

        # assertion
        assert resp.status_code == 400
        assert resp.json() == {
            "meta": {"code": 2, "title": "InsufficientBalanceError"},
            "detail": "insufficient coin balance",
        }

    # <Error_6>
    # InsufficientBalanceError
    # wallet does not exist
    @pytest.mark.asyncio
    async def test_error_6(self, async_client, async_db):
        # prepare data
        _, auth_token = await create_user(async_db, "buyer", balance=None)
        account_id = await create_game_account(async_db, price=50000)

        # request target api
        resp = await async_client.post(
            self.base_url,
            json={"required_coins": 50, "account_id": account_id},
            headers=auth_header(auth_token),
        )

        # assertion
        assert resp.status_code == 400
        assert resp.json()["meta"] == {"code": 2, "title": "InsufficientBalanceError"}

    # <Error_7>
    # ItemNotAvailableError
    # account has already been sold
    @pytest.mark.asyncio
    async def test_error_7(self, async_client, async_db):
        # prepare data
        buyer_id, auth_token = await create_user(async_db, "buyer", balance=100)
        account_id = await create_game_account(async_db, price=50000, is_sold=True)

        # request target api
        resp = await async_client.post(
            self.base_url,
            json={"required_coins": 50, "account_id": account_id},
            headers=auth_header(auth_token),
        )

        # assertion
        assert resp.status_code == 400
        assert resp.json() == {
            "meta": {"code": 4, "title": "ItemNotAvailableError"},
            "detail": "this account has already been sold",
        }

        async_db.expire_all()
        user_coin = (
            await async_db.scalars(
                select(UserCoin).where(UserCoin.user_id == buyer_id).limit(1)
            )
        ).first()
        assert user_coin.balance == 100

    # <Error_8>
    # ItemNotAvailableError
    # free product
    @pytest.mark.asyncio
    async def test_error_8(self, async_client, async_db):
        # prepare data
        _, auth_token = await create_user(async_db, "buyer", balance=200)
        product_id = await create_product(async_db, price=150000, is_free=True)

        # request target api
        resp = await async_client.post(
            self.base_url,
            json={"required_coins": 150, "product_id": product_id},
            headers=auth_header(auth_token),
        )

        # assertion
        assert resp.status_code == 400
        assert resp.json() == {
            "meta": {"code": 4, "title": "ItemNotAvailableError"},
            "detail": "free products can not be purchased with coins",
        }

    # <Error_9>
    # ItemNotAvailableError
    # product is not listed
    @pytest.mark.asyncio
    async def test_error_9(self, async_client, async_db):
        # prepare data
        _, auth_token = await create_user(async_db, "buyer", balance=200)
        product_id = await create_product(async_db, price=150000, is_active=False)

        # request target api
        resp = await async_client.post(
            self.base_url,
            json={"required_coins": 150, "product_id": product_id},
            headers=auth_header(auth_token),
        )

        # assertion
        assert resp.status_code == 400
        assert resp.json() == {
            "meta": {"code": 4, "title": "ItemNotAvailableError"},
            "detail": "product does not exist",
        }

    # <Error_10>
    # PriceMismatchError
    @pytest.mark.asyncio
    async def test_error_10(self, async_client, async_db):
        # prepare data
        _, auth_token = await create_user(async_db, "buyer", balance=100)
        account_id = await create_game_account(async_db, price=50000)

        # request target api
        resp = await async_client.post(
            self.base_url,
            json={"required_coins": 1, "account_id": account_id},
            headers=auth_header(auth_token),
        )

        # assertion
        assert resp.status_code == 400
        assert resp.json() == {
            "meta": {"code": 3, "title": "PriceMismatchError"},
            "detail": "required_coins does not match the item price: 50",
        }

    # <Error_11>
    # BalanceUpdateConflictError
    # balance was changed by another request
    @pytest.mark.asyncio
    async def test_error_11(self, async_client, async_db):
        # prepare data
        buyer_id, auth_token = await create_user(async_db, "buyer", balance=100)
        account_id = await create_game_account(async_db, price=50000)

        # request target api
        with mock.patch(
            "app.routers.shop.purchase.debit_user_coin",
            AsyncMock(return_value=False),
        ):
            resp = await async_client.post(
                self.base_url,
                json={"required_coins": 50, "account_id": account_id},
                headers=auth_header(auth_token),
            )

        # assertion
        assert resp.status_code == 409
        assert resp.json() == {
            "meta": {"code": 1, "title": "BalanceUpdateConflictError"},
            "detail": "balance has been changed by another request, please retry",
        }

        async_db.expire_all()
        orders = (await async_db.scalars(select(Order))).all()
        assert len(orders) == 0

        account = (
            await async_db.scalars(
                select(GameAccount).where(GameAccount.id == account_id).limit(1)
            )
        ).first()
        assert account.is_sold is False

    # <Error_12>
    # OrderCreationError
    # coins are written back when the order can not be created
    @pytest.mark.asyncio
    async def test_error_12(self, async_client, async_db):
        # prepare data
        buyer_id, auth_token = await create_user(async_db, "buyer", balance=100)
        account_id = await create_game_account(async_db, price=50000)

        # request target api
        with mock.patch(
            "app.routers.shop.purchase.__insert_order",
            AsyncMock(side_effect=Exception("insert failed")),
        ):
            resp = await async_client.post(
                self.base_url,
                json={"required_coins": 50, "account_id": account_id},
                headers=auth_header(auth_token),
            )

        # assertion
        assert resp.status_code == 500
        assert resp.json() == {
            "meta": {"code": 1, "title": "OrderCreationError"},
            "detail": "failed to create order, coins have been refunded",
        }

        async_db.expire_all()
        user_coin = (
            await async_db.scalars(
                select(UserCoin).where(UserCoin.user_id == buyer_id).limit(1)
            )
        ).first()
        assert user_coin.balance == 100

        account = (
            await async_db.scalars(
                select(GameAccount).where(GameAccount.id == account_id).limit(1)
            )
        ).first()
        assert account.is_sold is False
        assert (await async_db.scalars(select(CoinHistory))).all() == []
