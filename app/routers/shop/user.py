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
import re
import secrets
import uuid
from typing import Optional

from fastapi import APIRouter, Header, Request
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError as SAIntegrityError

from app import log
from app.database import DBAsyncSession
from app.exceptions import (
    AuthorizationError,
    EmailAlreadyRegisteredError,
    InvalidParameterError,
    ReferralNotApplicableError,
)
from app.model.db import AuthToken, User, UserCoin, UserRole, UserRoleType
from app.model.db.base import naive_utcnow
from app.model.schema import (
    RegisterUserRequest,
    UserAuthTokenRequest,
    UserAuthTokenResponse,
    UserResponse,
)
from app.utils.check_utils import (
    check_auth,
    get_roles,
    hash_password,
    verify_password,
)
from app.utils.docs_utils import get_routers_responses
from app.utils.fastapi_utils import json_response, to_local_isoformat
from app.utils.outbound_utils import enqueue_telegram
from app.utils.referral_utils import generate_referral_code, redeem_referral_code
from app.utils.telegram_utils import TelegramMessageType
from config import (
    AUTH_TOKEN_DEFAULT_VALID_DURATION,
    PASSWORD_PATTERN,
    PASSWORD_PATTERN_MSG,
)

LOG = log.get_logger()

router = APIRouter(tags=["user"])


# POST: /users
@router.post(
    "/users",
    operation_id="RegisterUser",
    response_model=UserResponse,
    responses=get_routers_responses(
        422, InvalidParameterError, EmailAlreadyRegisteredError
    ),
)
async def register_user(db: DBAsyncSession, data: RegisterUserRequest):
    """Register a new user

    - A coin wallet with zero balance and a referral code are created.
    - If a referral code is given, it is redeemed for the new user.
      Redemption failures do not fail the registration.
    """
    # Check Password Policy
    if not re.match(PASSWORD_PATTERN, data.password):
        raise InvalidParameterError(PASSWORD_PATTERN_MSG)

    email = data.email.strip().lower()
    _registered = (
        await db.scalars(select(User.id).where(User.email == email).limit(1))
    ).first()
    if _registered is not None:
        raise EmailAlreadyRegisteredError("email has already been registered")

    # Register user
    user_id = str(uuid.uuid4())
    _user = User()
    _user.id = user_id
    _user.email = email
    _user.password_hash = hash_password(data.password)
    _user.display_name = data.display_name
    _user.referral_code = await generate_referral_code(db)
    _user.is_banned = False
    _user.is_deleted = False
    db.add(_user)

    _role = UserRole()
    _role.id = str(uuid.uuid4())
    _role.user_id = user_id
    _role.role = UserRoleType.USER
    _role.protected = False
    db.add(_role)

    _coin = UserCoin()
    _coin.id = str(uuid.uuid4())
    _coin.user_id = user_id
    _coin.balance = 0
    db.add(_coin)

    enqueue_telegram(
        db=db,
        message_type=TelegramMessageType.NEW_REGISTRATION,
        payload={"user_email": email, "user_name": data.display_name},
    )
    try:
        await db.commit()
    except SAIntegrityError:
        # NOTE: Registration can be conflicting.
        raise EmailAlreadyRegisteredError("email has already been registered")

    resp = {
        **_user.json(),
        "roles": [UserRoleType.USER],
        "created": to_local_isoformat(_user.created),
    }

    # Redeem referral code
    if data.referral_code:
        try:
            await redeem_referral_code(
                db=db, referred_id=user_id, referral_code=data.referral_code
            )
        except ReferralNotApplicableError as err:
            LOG.warning(f"Referral code was not applied: user_id={user_id}, {err}")
        except Exception:
            await db.rollback()
            LOG.exception(f"Failed to redeem referral code: user_id={user_id}")

    return json_response(resp)


# POST: /users/auth_token
@router.post(
    "/users/auth_token",
    operation_id="GenerateAuthToken",
    response_model=UserAuthTokenResponse,
    responses=get_routers_responses(422, AuthorizationError),
)
async def generate_auth_token(
    db: DBAsyncSession, request: Request, data: UserAuthTokenRequest
):
    """Generate an auth token

    Issuing a new token replaces the previous one.
    """
    email = data.email.strip().lower()
    _user: User | None = (
        await db.scalars(
            select(User).where(User.email == email, User.is_deleted == False).limit(1)
        )
    ).first()
    if _user is None or not verify_password(data.password, _user.password_hash):
        log.auth_error(request, None, "email or password mismatch")
        raise AuthorizationError("email or password mismatch")
    if _user.is_banned:
        log.auth_error(request, _user.id, "user is banned")
        raise AuthorizationError("user is banned")

    # Generate new auth token
    new_token = secrets.token_hex()
    hashed_token = hashlib.sha256(new_token.encode()).hexdigest()
    valid_duration = (
        data.valid_duration
        if data.valid_duration is not None
        else AUTH_TOKEN_DEFAULT_VALID_DURATION
    )
    usage_start = naive_utcnow()

    # Register auth token
    await db.execute(delete(AuthToken).where(AuthToken.user_id == _user.id))
    _token = AuthToken()
    _token.user_id = _user.id
    _token.auth_token = hashed_token
    _token.usage_start = usage_start
    _token.valid_duration = valid_duration
    db.add(_token)
    await db.commit()

    log.auth_info(request, _user.id, "auth token has been issued")

    return json_response(
        {
            "auth_token": new_token,
            "usage_start": to_local_isoformat(usage_start),
            "valid_duration": valid_duration,
        }
    )


# DELETE: /users/auth_token
@router.delete(
    "/users/auth_token",
    operation_id="DeleteAuthToken",
    response_model=None,
    responses=get_routers_responses(AuthorizationError),
)
async def delete_auth_token(
    db: DBAsyncSession,
    request: Request,
    authorization: Optional[str] = Header(None),
):
    """Revoke the caller's auth token"""
    user = await check_auth(request=request, db=db, authorization=authorization)

    await db.execute(delete(AuthToken).where(AuthToken.user_id == user.id))
    await db.commit()

    return


# GET: /users/me
@router.get(
    "/users/me",
    operation_id="RetrieveMyProfile",
    response_model=UserResponse,
    responses=get_routers_responses(AuthorizationError),
)
async def retrieve_my_profile(
    db: DBAsyncSession,
    request: Request,
    authorization: Optional[str] = Header(None),
):
    """Retrieve the caller's profile"""
    user = await check_auth(request=request, db=db, authorization=authorization)
    roles = await get_roles(db, user.id)

    return json_response(
        {
            **user.json(),
            "roles": roles,
            "created": to_local_isoformat(user.created),
        }
    )
