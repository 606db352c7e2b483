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

from datetime import datetime, timedelta

import pytest
from fastapi import Request

from app.exceptions import AuthorizationError, PermissionDeniedError
from app.model.db import AuthToken, User, UserRoleType
from app.model.db.base import naive_utcnow
from app.utils.check_utils import (
    check_admin,
    check_auth,
    get_roles,
    hash_password,
    verify_password,
)
from tests.user_config import create_user


def dummy_request():
    return Request(scope={"type": "http", "client": ("192.168.1.1", 50000)})


class TestCheckAuth:
    ###########################################################################
    # Normal Case
    ###########################################################################

    # Normal_1
    # valid duration = 0
    @pytest.mark.asyncio
    async def test_normal_1(self, async_db):
        # prepare data
        user_id, auth_token = await create_user(async_db, "user1")

        # test function
        user = await check_auth(
            request=dummy_request(),
            db=async_db,
            authorization=f"Bearer {auth_token}",
        )

        assert user.id == user_id

    # Normal_2
    # valid duration != 0, within the duration
    # scheme is case-insensitive
    @pytest.mark.asyncio
    async def test_normal_2(self, async_db):
        # prepare data
        user_id, auth_token = await create_user(async_db, "user1")
        _auth_token = await async_db.get(AuthToken, user_id)
        _auth_token.usage_start = naive_utcnow() - timedelta(seconds=30)
        _auth_token.valid_duration = 120
        await async_db.commit()

        # test function
        user = await check_auth(
            request=dummy_request(),
            db=async_db,
            authorization=f"bearer {auth_token}",
        )

        assert user.id == user_id

    ###########################################################################
    # Error Case
    ###########################################################################

    # Error_1
    # authorization header is not set
    @pytest.mark.asyncio
    async def test_error_1(self, async_db):
        with pytest.raises(AuthorizationError) as exc_info:
            await check_auth(request=dummy_request(), db=async_db)
        assert exc_info.value.args[0] == "auth token is missing or invalid"

    # Error_2
    # scheme is not bearer
    @pytest.mark.asyncio
    async def test_error_2(self, async_db):
        # prepare data
        _, auth_token = await create_user(async_db, "user1")

        # test function
        with pytest.raises(AuthorizationError):
            await check_auth(
                request=dummy_request(),
                db=async_db,
                authorization=f"Basic {auth_token}",
            )

    # Error_3
    # token has expired
    @pytest.mark.asyncio
    async def test_error_3(self, async_db):
        # prepare data
        user_id, auth_token = await create_user(async_db, "user1")
        _auth_token = await async_db.get(AuthToken, user_id)
        _auth_token.usage_start = datetime(2020, 1, 1, 0, 0, 0)
        _auth_token.valid_duration = 60
        await async_db.commit()

        # test function
        with pytest.raises(AuthorizationError) as exc_info:
            await check_auth(
                request=dummy_request(),
                db=async_db,
                authorization=f"Bearer {auth_token}",
            )
        assert exc_info.value.args[0] == "auth token is missing or invalid"

    # Error_4
    # user is banned
    @pytest.mark.asyncio
    async def test_error_4(self, async_db):
        # prepare data
        user_id, auth_token = await create_user(async_db, "user1")
        user = await async_db.get(User, user_id)
        user.is_banned = True
        await async_db.commit()

        # test function
        with pytest.raises(AuthorizationError) as exc_info:
            await check_auth(
                request=dummy_request(),
                db=async_db,
                authorization=f"Bearer {auth_token}",
            )
        assert exc_info.value.args[0] == "user is banned"


class TestCheckAdmin:
    ###########################################################################
    # Normal Case
    ###########################################################################

    # Normal_1
    @pytest.mark.asyncio
    async def test_normal_1(self, async_db):
        # prepare data
        admin_id, auth_token = await create_user(
            async_db, "admin1", role=UserRoleType.ADMIN
        )

        # test function
        user = await check_admin(
            request=dummy_request(),
            db=async_db,
            authorization=f"Bearer {auth_token}",
        )

        assert user.id == admin_id
        assert UserRoleType.ADMIN in await get_roles(async_db, admin_id)

    ###########################################################################
    # Error Case
    ###########################################################################

    # Error_1
    @pytest.mark.asyncio
    async def test_error_1(self, async_db):
        # prepare data
        _, auth_token = await create_user(async_db, "user1")

        # test function
        with pytest.raises(PermissionDeniedError) as exc_info:
            await check_admin(
                request=dummy_request(),
                db=async_db,
                authorization=f"Bearer {auth_token}",
            )
        assert exc_info.value.args[0] == "admin role is required"


class TestPasswordHash:
    # Normal_1
    def test_normal_1(self):
        password_hash = hash_password("P@ssw0rd1234")

        assert password_hash.startswith("$2b$")
        assert "P@ssw0rd1234" not in password_hash
        assert verify_password("P@ssw0rd1234", password_hash) is True
        assert verify_password("wrong-password", password_hash) is False

    # Normal_2
    # salt differs for each hash
    def test_normal_2(self):
        assert hash_password("P@ssw0rd1234") != hash_password("P@ssw0rd1234")

    # Error_1
    # malformed hash
    def test_error_1(self):
        assert verify_password("P@ssw0rd1234", "plain-text") is False
        assert verify_password("P@ssw0rd1234", "pbkdf2_sha256$1$salt$digest") is False
