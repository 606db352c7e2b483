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

from app.model.db import NotificationType
from tests.user_config import add_notification, auth_header, create_user


class TestListAllNotifications:
    # target API endpoint
    base_url = "/notifications"

    ###########################################################################
    # Normal Case
    ###########################################################################

    # <Normal_1>
    @pytest.mark.asyncio
    async def test_normal_1(self, async_client, async_db):
        # prepare data
        user_id, auth_token = await create_user(async_db, "user1")
        other_id, _ = await create_user(async_db, "user2")
        id_1 = add_notification(
            async_db, user_id, is_read=True, created=datetime(2024, 1, 1)
        )
        id_2 = add_notification(
            async_db,
            user_id,
            title="💰 Bán hàng thành công!",
            notice_type=NotificationType.SELLER_SALE,
            created=datetime(2024, 1, 2),
        )
        add_notification(async_db, other_id, created=datetime(2024, 1, 3))
        await async_db.commit()

        # request target api
        resp = await async_client.get(self.base_url, headers=auth_header(auth_token))

        # assertion
        assert resp.status_code == 200
        assert resp.json() == {
            "result_set": {"count": 2, "offset": None, "limit": None, "total": 2},
            "unread_count": 1,
            "notifications": [
                {
                    "id": id_2,
                    "title": "💰 Bán hàng thành công!",
                    "message": "💰 Bán hàng thành công! message",
                    "type": "seller_sale",
                    "is_read": False,
                    "reference_id": None,
                    "created": "2024-01-02T07:00:00+07:00",
                },
                {
                    "id": id_1,
                    "title": "🎉 Mua hàng thành công!",
                    "message": "🎉 Mua hàng thành công! message",
                    "type": "purchase",
                    "is_read": True,
                    "reference_id": None,
                    "created": "2024-01-01T07:00:00+07:00",
                },
            ],
        }

    # <Normal_2>
    # Search filter: is_read, type
    @pytest.mark.asyncio
    async def test_normal_2(self, async_client, async_db):
        # prepare data
        user_id, auth_token = await create_user(async_db, "user1")
        add_notification(async_db, user_id, is_read=True)
        id_2 = add_notification(async_db, user_id)
        add_notification(
            async_db, user_id, notice_type=NotificationType.COIN_APPROVED
        )
        await async_db.commit()

        # request target api
        resp = await async_client.get(
            self.base_url,
            params={"is_read": "false", "type": "purchase"},
            headers=auth_header(auth_token),
        )

        # assertion
        assert resp.status_code == 200
        resp_json = resp.json()
        assert resp_json["result_set"] == {
            "count": 1,
            "offset": None,
            "limit": None,
            "total": 3,
        }
        assert resp_json["unread_count"] == 2
        assert [n["id"] for n in resp_json["notifications"]] == [id_2]

    ###########################################################################
    # Error Case
    ###########################################################################

    # <Error_1>
    # AuthorizationError
    @pytest.mark.asyncio
    async def test_error_1(self, async_client, async_db):
        # request target api
        resp = await async_client.get(self.base_url)

        # assertion
        assert resp.status_code == 401
