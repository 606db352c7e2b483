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

from app.model.db import Notification
from tests.user_config import add_notification, auth_header, create_user


class TestDeleteNotification:
    # target API endpoint
    base_url = "/notifications/{}"

    ###########################################################################
    # Normal Case
    ###########################################################################

    # <Normal_1>
    @pytest.mark.asyncio
    async def test_normal_1(self, async_client, async_db):
        # prepare data
        user_id, auth_token = await create_user(async_db, "user1")
        notification_id = add_notification(async_db, user_id)
        remaining_id = add_notification(async_db, user_id)
        await async_db.commit()

        # request target api
        resp = await async_client.delete(
            self.base_url.format(notification_id), headers=auth_header(auth_token)
        )

        # assertion
        assert resp.status_code == 200
        assert resp.json() == {"success": True}

        async_db.expire_all()
        notification_ids = (await async_db.scalars(select(Notification.id))).all()
        assert notification_ids == [remaining_id]

    ###########################################################################
    # Error Case
    ###########################################################################

    # <Error_1>
    # NotFound
    @pytest.mark.asyncio
    async def test_error_1(self, async_client, async_db):
        # prepare data
        _, auth_token = await create_user(async_db, "user1")

        # request target api
        resp = await async_client.delete(
            self.base_url.format("not-exist"), headers=auth_header(auth_token)
        )

        # assertion
        assert resp.status_code == 404
        assert resp.json() == {
            "meta": {"code": 1, "title": "NotFound"},
            "detail": "notification does not exist",
        }
