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

from app.model.db import AuthToken
from tests.user_config import auth_header, create_user


class TestDeleteAuthToken:
    # target API endpoint
    base_url = "/users/auth_token"

    ###########################################################################
    # Normal Case
    ###########################################################################

    # <Normal_1>
    @pytest.mark.asyncio
    async def test_normal_1(self, async_client, async_db):
        # prepare data
        user_id, auth_token = await create_user(async_db, "user1")

        # request target api
        resp = await async_client.delete(
            self.base_url, headers=auth_header(auth_token)
        )

        # assertion
        assert resp.status_code == 200

        async_db.expire_all()
        token = (
            await async_db.scalars(
                select(AuthToken).where(AuthToken.user_id == user_id).limit(1)
            )
        ).first()
        assert token is None

    ###########################################################################
    # Error Case
    ###########################################################################

    # <Error_1>
    # AuthorizationError
    @pytest.mark.asyncio
    async def test_error_1(self, async_client, async_db):
        # request target api
        resp = await async_client.delete(self.base_url)

        # assertion
        assert resp.status_code == 401
        assert resp.json() == {
            "meta": {"code": 1, "title": "AuthorizationError"},
            "detail": "auth token is missing or invalid",
        }
