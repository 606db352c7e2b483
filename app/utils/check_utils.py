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

import hashlib
from datetime import timedelta
from typing import Optional

import bcrypt
from fastapi import Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import AuthorizationError, PermissionDeniedError
from app.log import auth_error, auth_info
from app.model.db import AuthToken, User, UserRole, UserRoleType
from app.model.db.base import naive_utcnow
from config import PASSWORD_HASH_ROUNDS


async def check_auth(
    request: Request,
    db: AsyncSession,
    authorization: Optional[str] = None,
) -> User:
    """Authenticate the caller with the bearer token

    :param request: request
    :param db: database session
    :param authorization: value of the Authorization header
    :return: authenticated user
    :raises AuthorizationError: token is missing, unknown or expired, or the user can not log in
    """
    auth_token = __extract_bearer_token(authorization)
    if auth_token is None:
        auth_error(request, None, "auth token is not set")
        raise AuthorizationError("auth token is missing or invalid")

    hashed_token = hashlib.sha256(auth_token.encode()).hexdigest()
    _token: AuthToken | None = (
        await db.scalars(
            select(AuthToken).where(AuthToken.auth_token == hashed_token).limit(1)
        )
    ).first()
    if _token is None:
        auth_error(request, None, "auth token does not exist")
        raise AuthorizationError("auth token is missing or invalid")
    if (
        _token.valid_duration != 0
        and _token.usage_start + timedelta(seconds=_token.valid_duration)
        < naive_utcnow()
    ):
        auth_error(request, _token.user_id, "auth token has expired")
        raise AuthorizationError("auth token is missing or invalid")

    user: User | None = (
        await db.scalars(select(User).where(User.id == _token.user_id).limit(1))
    ).first()
    if user is None or user.is_deleted:
        auth_error(request, _token.user_id, "user does not exist")
        raise AuthorizationError("auth token is missing or invalid")
    if user.is_banned:
        auth_error(request, user.id, "user is banned")
        raise AuthorizationError("user is banned")

    request.state.user_id = user.id
    auth_info(request, user.id, "authentication succeed")
    return user


async def check_admin(
    request: Request,
    db: AsyncSession,
    authorization: Optional[str] = None,
) -> User:
    """Authenticate the caller and require the admin role"""
    user = await check_auth(request=request, db=db, authorization=authorization)
    if not await has_role(db, user.id, UserRoleType.ADMIN):
        auth_error(request, user.id, "admin role is required")
        raise PermissionDeniedError("admin role is required")
    return user


async def has_role(db: AsyncSession, user_id: str, role: UserRoleType) -> bool:
    _role = (
        await db.scalars(
            select(UserRole)
            .where(UserRole.user_id == user_id, UserRole.role == role)
            .limit(1)
        )
    ).first()
    return _role is not None


async def get_roles(db: AsyncSession, user_id: str) -> list[UserRoleType]:
    _roles = (
        await db.scalars(select(UserRole.role).where(UserRole.user_id == user_id))
    ).all()
    return [UserRoleType(_role) for _role in _roles]


def hash_password(password: str) -> str:
    return bcrypt.hashpw(
        password.encode("utf-8"), bcrypt.gensalt(rounds=PASSWORD_HASH_ROUNDS)
    ).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # not a bcrypt hash
        return False


def __extract_bearer_token(authorization: Optional[str]) -> str | None:
    if authorization is None:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or token.strip() == "":
        return None
    return token.strip()
