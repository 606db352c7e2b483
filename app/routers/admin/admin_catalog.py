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
from datetime import UTC
from typing import Annotated, Optional, Sequence

from fastapi import APIRouter, Header, Path, Query, Request
from fastapi.exceptions import HTTPException
from sqlalchemy import desc, func, select
from sqlalchemy.exc import IntegrityError

from app.database import DBAsyncSession
from app.exceptions import (
    AuthorizationError,
    InvalidParameterError,
    PermissionDeniedError,
)
from app.model.db import (
    BotRental,
    DiscountCode,
    DiscountType,
    SiteSetting,
    SiteSettingKey,
)
from app.model.schema import (
    BotRentalOffer,
    CreateBotRentalOfferRequest,
    CreateDiscountCodeRequest,
    DiscountCodeDetail,
    ListDiscountCodesQuery,
    ListDiscountCodesResponse,
    ListSiteSettingsResponse,
    SiteSettingDetail,
    SuccessResponse,
    UpdateBotRentalOfferRequest,
    UpdateSiteSettingRequest,
)
from app.utils.check_utils import check_admin
from app.utils.docs_utils import get_routers_responses
from app.utils.fastapi_utils import json_response, to_local_isoformat

router = APIRouter(prefix="/admin", tags=["admin"])


# GET: /admin/discount_codes
@router.get(
    "/discount_codes",
    operation_id="ListDiscountCodes",
    response_model=ListDiscountCodesResponse,
    responses=get_routers_responses(422, AuthorizationError, PermissionDeniedError),
)
async def list_discount_codes(
    db: DBAsyncSession,
    request: Request,
    get_query: Annotated[ListDiscountCodesQuery, Query()],
    authorization: Optional[str] = Header(None),
):
    """List discount codes"""
    await check_admin(request=request, db=db, authorization=authorization)

    stmt = select(DiscountCode)
    total = await db.scalar(select(func.count()).select_from(stmt.subquery()))

    # Search Filter
    if get_query.is_active is not None:
        stmt = stmt.where(DiscountCode.is_active == get_query.is_active)

    count = await db.scalar(select(func.count()).select_from(stmt.subquery()))

    # Sort
    stmt = stmt.order_by(desc(DiscountCode.created), DiscountCode.code)

    # Pagination
    if get_query.limit is not None:
        stmt = stmt.limit(get_query.limit)
    if get_query.offset is not None:
        stmt = stmt.offset(get_query.offset)

    _codes: Sequence[DiscountCode] = (await db.scalars(stmt)).all()

    resp = {
        "result_set": {
            "count": count,
            "offset": get_query.offset,
            "limit": get_query.limit,
            "total": total,
        },
        "discount_codes": [__discount_code_detail(_code) for _code in _codes],
    }

    return json_response(resp)


# POST: /admin/discount_codes
@router.post(
    "/discount_codes",
    operation_id="CreateDiscountCode",
    response_model=DiscountCodeDetail,
    responses=get_routers_responses(
        422, AuthorizationError, PermissionDeniedError, InvalidParameterError
    ),
)
async def create_discount_code(
    db: DBAsyncSession,
    request: Request,
    data: CreateDiscountCodeRequest,
    authorization: Optional[str] = Header(None),
):
    """Create a discount code"""
    user = await check_admin(request=request, db=db, authorization=authorization)

    if data.discount_type == DiscountType.PERCENT and data.discount_amount > 100:
        raise InvalidParameterError("percentage discount must be 100 or less")

    code = data.code.strip().upper()
    _exists = (
        await db.scalars(
            select(DiscountCode.id).where(DiscountCode.code == code).limit(1)
        )
    ).first()
    if _exists is not None:
        raise InvalidParameterError("discount code already exists")

    expires_at = data.expires_at
    if expires_at is not None and expires_at.tzinfo is not None:
        expires_at = expires_at.astimezone(UTC).replace(tzinfo=None)

    _code = DiscountCode()
    _code.id = str(uuid.uuid4())
    _code.code = code
    _code.discount_type = data.discount_type
    _code.discount_amount = data.discount_amount
    _code.min_order_amount = data.min_order_amount
    _code.max_uses = data.max_uses
    _code.used_count = 0
    _code.expires_at = expires_at
    _code.is_active = True
    _code.created_by = user.id
    db.add(_code)

    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise InvalidParameterError("discount code already exists")

    return json_response(__discount_code_detail(_code))


# DELETE: /admin/discount_codes/{code_id}
@router.delete(
    "/discount_codes/{code_id}",
    operation_id="DeactivateDiscountCode",
    response_model=SuccessResponse,
    responses=get_routers_responses(AuthorizationError, PermissionDeniedError, 404),
)
async def deactivate_discount_code(
    db: DBAsyncSession,
    request: Request,
    code_id: Annotated[str, Path()],
    authorization: Optional[str] = Header(None),
):
    """Deactivate a discount code

    Usage history is kept, so the code is disabled instead of deleted.
    """
    await check_admin(request=request, db=db, authorization=authorization)

    _code: DiscountCode | None = (
        await db.scalars(select(DiscountCode).where(DiscountCode.id == code_id).limit(1))
    ).first()
    if _code is None:
        raise HTTPException(status_code=404, detail="discount code does not exist")

    _code.is_active = False
    await db.commit()

    return json_response({"success": True})


# GET: /admin/site_settings
@router.get(
    "/site_settings",
    operation_id="ListSiteSettings",
    response_model=ListSiteSettingsResponse,
    responses=get_routers_responses(AuthorizationError, PermissionDeniedError),
)
async def list_site_settings(
    db: DBAsyncSession,
    request: Request,
    authorization: Optional[str] = Header(None),
):
    """List site settings

    The telegram bot token is masked.
    """
    await check_admin(request=request, db=db, authorization=authorization)

    _settings: Sequence[SiteSetting] = (
        await db.scalars(select(SiteSetting).order_by(SiteSetting.key))
    ).all()

    return json_response(
        {"settings": [__site_setting_detail(_setting) for _setting in _settings]}
    )


# PUT: /admin/site_settings/{key}
@router.put(
    "/site_settings/{key}",
    operation_id="UpdateSiteSetting",
    response_model=SiteSettingDetail,
    responses=get_routers_responses(
        422, AuthorizationError, PermissionDeniedError, InvalidParameterError
    ),
)
async def update_site_setting(
    db: DBAsyncSession,
    request: Request,
    key: Annotated[str, Path()],
    data: UpdateSiteSettingRequest,
    authorization: Optional[str] = Header(None),
):
    """Create or update a site setting"""
    user = await check_admin(request=request, db=db, authorization=authorization)

    if key not in SiteSettingKey.ALL:
        raise InvalidParameterError(f"unknown setting key: {key}")

    _setting: SiteSetting | None = (
        await db.scalars(select(SiteSetting).where(SiteSetting.key == key).limit(1))
    ).first()
    if _setting is None:
        _setting = SiteSetting()
        _setting.key = key
        db.add(_setting)
    _setting.value = data.value
    _setting.updated_by = user.id
    await db.commit()

    return json_response(__site_setting_detail(_setting))


# POST: /admin/bot_rentals
@router.post(
    "/bot_rentals",
    operation_id="CreateBotRentalOffer",
    response_model=BotRentalOffer,
    responses=get_routers_responses(422, AuthorizationError, PermissionDeniedError),
)
async def create_bot_rental_offer(
    db: DBAsyncSession,
    request: Request,
    data: CreateBotRentalOfferRequest,
    authorization: Optional[str] = Header(None),
):
    """Create a Zalo bot rental offer"""
    await check_admin(request=request, db=db, authorization=authorization)

    _bot = BotRental()
    _bot.id = str(uuid.uuid4())
    for field, value in data.model_dump().items():
        setattr(_bot, field, value)
    db.add(_bot)

    resp = _bot.json()
    await db.commit()

    return json_response(resp)


# PUT: /admin/bot_rentals/{bot_id}
@router.put(
    "/bot_rentals/{bot_id}",
    operation_id="UpdateBotRentalOffer",
    response_model=BotRentalOffer,
    responses=get_routers_responses(
        422, AuthorizationError, PermissionDeniedError, 404
    ),
)
async def update_bot_rental_offer(
    db: DBAsyncSession,
    request: Request,
    bot_id: Annotated[str, Path()],
    data: UpdateBotRentalOfferRequest,
    authorization: Optional[str] = Header(None),
):
    """Update a Zalo bot rental offer

    Only the fields set in the request are updated.
    """
    await check_admin(request=request, db=db, authorization=authorization)

    _bot: BotRental | None = (
        await db.scalars(select(BotRental).where(BotRental.id == bot_id).limit(1))
    ).first()
    if _bot is None:
        raise HTTPException(status_code=404, detail="bot rental does not exist")

    for field, value in data.model_dump(exclude_unset=True).items():
        if value is None and field in ("name", "price", "is_active", "sort_order"):
            continue
        setattr(_bot, field, value)

    resp = _bot.json()
    await db.commit()

    return json_response(resp)


def __discount_code_detail(_code: DiscountCode):
    return {
        "id": _code.id,
        "code": _code.code,
        "discount_type": _code.discount_type,
        "discount_amount": _code.discount_amount,
        "min_order_amount": _code.min_order_amount,
        "max_uses": _code.max_uses,
        "used_count": _code.used_count,
        "expires_at": to_local_isoformat(_code.expires_at),
        "is_active": _code.is_active,
        "created": to_local_isoformat(_code.created),
    }


def __site_setting_detail(_setting: SiteSetting):
    value = _setting.value
    if _setting.key == SiteSettingKey.TELEGRAM_BOT_TOKEN and value:
        value = mask_secret(value)
    return {
        "key": _setting.key,
        "value": value,
        "modified": to_local_isoformat(_setting.modified),
    }


def mask_secret(value: str) -> str:
    if len(value) <= 8:
        return "*" * len(value)
    return f"{value[:4]}{'*' * (len(value) - 8)}{value[-4:]}"
