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
from typing import Annotated, Optional, Sequence

from fastapi import APIRouter, Header, Query, Request
from fastapi.exceptions import HTTPException
from sqlalchemy import desc, func, select
from sqlalchemy.exc import IntegrityError

from app.database import DBAsyncSession
from app.exceptions import (
    AuthorizationError,
    InsufficientBalanceError,
    InvalidParameterError,
)
from app.model.db import (
    GameAccount,
    Product,
    ReviewStatus,
    Seller,
    SellerCoin,
    WithdrawalRequest,
)
from app.model.schema import (
    BasePaginationQuery,
    CreateWithdrawalRequest,
    ListWithdrawalsResponse,
    RegisterSellerRequest,
    SellerProfile,
    SellerWalletResponse,
    UpdateSellerRequest,
    UploadGameAccountRequest,
    UploadItemResponse,
    UploadProductRequest,
    Withdrawal,
)
from app.utils.check_utils import check_auth
from app.utils.coin_utils import get_seller_coin, vnd_to_coin
from app.utils.docs_utils import get_routers_responses
from app.utils.fastapi_utils import json_response, to_local_isoformat
from app.utils.outbound_utils import enqueue_telegram
from app.utils.telegram_utils import TelegramMessageType

router = APIRouter(prefix="/sellers", tags=["seller"])

BANK_FIELDS = ("bank_name", "bank_account_number", "bank_account_name")


# POST: /sellers
@router.post(
    "",
    operation_id="RegisterSeller",
    response_model=SellerProfile,
    responses=get_routers_responses(422, AuthorizationError, InvalidParameterError),
)
async def register_seller(
    db: DBAsyncSession,
    request: Request,
    data: RegisterSellerRequest,
    authorization: Optional[str] = Header(None),
):
    """Register the caller as a seller"""
    user = await check_auth(request=request, db=db, authorization=authorization)

    _exists = (
        await db.scalars(select(Seller.id).where(Seller.user_id == user.id).limit(1))
    ).first()
    if _exists is not None:
        raise InvalidParameterError("seller is already registered")

    _seller = Seller()
    _seller.id = str(uuid.uuid4())
    _seller.user_id = user.id
    for field, value in data.model_dump().items():
        setattr(_seller, field, value)
    _seller.is_verified = False
    _seller.is_profile_complete = __is_profile_complete(_seller)
    db.add(_seller)

    _seller_coin = SellerCoin()
    _seller_coin.id = str(uuid.uuid4())
    _seller_coin.seller_id = _seller.id
    _seller_coin.balance = 0
    _seller_coin.total_earned = 0
    db.add(_seller_coin)

    resp = _seller.json()
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise InvalidParameterError("seller is already registered")

    return json_response(resp)


# GET: /sellers/me
@router.get(
    "/me",
    operation_id="RetrieveMySellerProfile",
    response_model=SellerProfile,
    responses=get_routers_responses(AuthorizationError, 404),
)
async def retrieve_my_seller_profile(
    db: DBAsyncSession,
    request: Request,
    authorization: Optional[str] = Header(None),
):
    """Retrieve the caller's seller profile"""
    user = await check_auth(request=request, db=db, authorization=authorization)
    _seller = await __get_seller(db=db, user_id=user.id)
    return json_response(_seller.json())


# PUT: /sellers/me
@router.put(
    "/me",
    operation_id="UpdateMySellerProfile",
    response_model=SellerProfile,
    responses=get_routers_responses(422, AuthorizationError, 404),
)
async def update_my_seller_profile(
    db: DBAsyncSession,
    request: Request,
    data: UpdateSellerRequest,
    authorization: Optional[str] = Header(None),
):
    """Update the caller's seller profile

    Only the fields set in the request are updated.
    """
    user = await check_auth(request=request, db=db, authorization=authorization)
    _seller = await __get_seller(db=db, user_id=user.id)

    for field, value in data.model_dump(exclude_unset=True).items():
        if field == "display_name" and value is None:
            continue
        setattr(_seller, field, value)
    _seller.is_profile_complete = __is_profile_complete(_seller)

    resp = _seller.json()
    await db.commit()

    return json_response(resp)


# POST: /sellers/me/accounts
@router.post(
    "/me/accounts",
    operation_id="UploadGameAccount",
    response_model=UploadItemResponse,
    responses=get_routers_responses(422, AuthorizationError, 404),
)
async def upload_game_account(
    db: DBAsyncSession,
    request: Request,
    data: UploadGameAccountRequest,
    authorization: Optional[str] = Header(None),
):
    """List a game account for sale"""
    user = await check_auth(request=request, db=db, authorization=authorization)
    _seller = await __get_seller(db=db, user_id=user.id)

    _account = GameAccount()
    _account.id = str(uuid.uuid4())
    _account.seller_id = _seller.id
    for field, value in data.model_dump().items():
        setattr(_account, field, value)
    _account.is_active = True
    _account.is_sold = False
    _account.created_by = user.id
    db.add(_account)

    __enqueue_seller_upload(
        db=db,
        item_type="account",
        item_id=_account.id,
        title=data.title,
        price=data.price,
        seller_name=_seller.display_name,
        user_email=user.email,
    )
    resp = {"id": _account.id}
    await db.commit()

    return json_response(resp)


# POST: /sellers/me/products
@router.post(
    "/me/products",
    operation_id="UploadProduct",
    response_model=UploadItemResponse,
    responses=get_routers_responses(422, AuthorizationError, 404),
)
async def upload_product(
    db: DBAsyncSession,
    request: Request,
    data: UploadProductRequest,
    authorization: Optional[str] = Header(None),
):
    """List a digital product for sale"""
    user = await check_auth(request=request, db=db, authorization=authorization)
    _seller = await __get_seller(db=db, user_id=user.id)

    _product = Product()
    _product.id = str(uuid.uuid4())
    _product.seller_id = _seller.id
    for field, value in data.model_dump().items():
        setattr(_product, field, value)
    _product.is_active = True
    _product.sales = 0
    _product.created_by = user.id
    db.add(_product)

    __enqueue_seller_upload(
        db=db,
        item_type="product",
        item_id=_product.id,
        title=data.title,
        price=data.price,
        seller_name=_seller.display_name,
        user_email=user.email,
    )
    resp = {"id": _product.id}
    await db.commit()

    return json_response(resp)


# GET: /sellers/me/wallet
@router.get(
    "/me/wallet",
    operation_id="RetrieveSellerWallet",
    response_model=SellerWalletResponse,
    responses=get_routers_responses(AuthorizationError, 404),
)
async def retrieve_seller_wallet(
    db: DBAsyncSession,
    request: Request,
    authorization: Optional[str] = Header(None),
):
    """Retrieve the caller's seller balance"""
    user = await check_auth(request=request, db=db, authorization=authorization)
    _seller = await __get_seller(db=db, user_id=user.id)

    _seller_coin = await get_seller_coin(db=db, seller_id=_seller.id)
    if _seller_coin is None:
        return json_response({"balance": 0, "total_earned": 0})

    return json_response(
        {
            "balance": _seller_coin.balance,
            "total_earned": _seller_coin.total_earned,
        }
    )


# POST: /sellers/me/withdrawals
@router.post(
    "/me/withdrawals",
    operation_id="CreateWithdrawal",
    response_model=Withdrawal,
    responses=get_routers_responses(
        422, AuthorizationError, 404, InvalidParameterError, InsufficientBalanceError
    ),
)
async def create_withdrawal(
    db: DBAsyncSession,
    request: Request,
    data: CreateWithdrawalRequest,
    authorization: Optional[str] = Header(None),
):
    """Request a withdrawal of seller coins

    Coins are deducted when an administrator approves the request.
    Bank details default to the ones in the seller profile.
    """
    user = await check_auth(request=request, db=db, authorization=authorization)
    _seller = await __get_seller(db=db, user_id=user.id)

    bank = {
        field: getattr(data, field) or getattr(_seller, field)
        for field in BANK_FIELDS + ("bank_qr_url",)
    }
    missing = [field for field, value in bank.items() if not value]
    if len(missing) > 0:
        raise InvalidParameterError(f"{', '.join(missing)} is required")

    _seller_coin = await get_seller_coin(db=db, seller_id=_seller.id)
    balance = _seller_coin.balance if _seller_coin is not None else 0
    if data.amount > balance:
        raise InsufficientBalanceError("insufficient seller balance")

    _withdrawal = WithdrawalRequest()
    _withdrawal.id = str(uuid.uuid4())
    _withdrawal.seller_id = _seller.id
    _withdrawal.amount = data.amount
    for field, value in bank.items():
        setattr(_withdrawal, field, value)
    db.add(_withdrawal)

    enqueue_telegram(
        db=db,
        message_type=TelegramMessageType.WITHDRAWAL_REQUEST,
        payload={
            "seller_name": _seller.display_name,
            "user_email": user.email,
            "amount": data.amount,
            "withdrawal_id": _withdrawal.id,
            **bank,
        },
    )

    resp = {
        "id": _withdrawal.id,
        "seller_id": _seller.id,
        "amount": data.amount,
        **bank,
        "status": ReviewStatus.PENDING,
        "admin_note": None,
        "processed_at": None,
        "created": None,
    }
    await db.commit()
    resp["created"] = to_local_isoformat(_withdrawal.created)

    return json_response(resp)


# GET: /sellers/me/withdrawals
@router.get(
    "/me/withdrawals",
    operation_id="ListMyWithdrawals",
    response_model=ListWithdrawalsResponse,
    responses=get_routers_responses(422, AuthorizationError, 404),
)
async def list_my_withdrawals(
    db: DBAsyncSession,
    request: Request,
    get_query: Annotated[BasePaginationQuery, Query()],
    authorization: Optional[str] = Header(None),
):
    """List the caller's withdrawal requests (newest first)"""
    user = await check_auth(request=request, db=db, authorization=authorization)
    _seller = await __get_seller(db=db, user_id=user.id)

    stmt = select(WithdrawalRequest).where(WithdrawalRequest.seller_id == _seller.id)
    total = await db.scalar(select(func.count()).select_from(stmt.subquery()))
    count = total

    # Sort
    stmt = stmt.order_by(desc(WithdrawalRequest.created), desc(WithdrawalRequest.id))

    # Pagination
    if get_query.limit is not None:
        stmt = stmt.limit(get_query.limit)
    if get_query.offset is not None:
        stmt = stmt.offset(get_query.offset)

    _withdrawals: Sequence[WithdrawalRequest] = (await db.scalars(stmt)).all()

    resp = {
        "result_set": {
            "count": count,
            "offset": get_query.offset,
            "limit": get_query.limit,
            "total": total,
        },
        "withdrawals": [
            {
                "id": _w.id,
                "seller_id": _w.seller_id,
                "amount": _w.amount,
                "bank_name": _w.bank_name,
                "bank_account_number": _w.bank_account_number,
                "bank_account_name": _w.bank_account_name,
                "bank_qr_url": _w.bank_qr_url,
                "status": _w.status,
                "admin_note": _w.admin_note,
                "processed_at": to_local_isoformat(_w.processed_at),
                "created": to_local_isoformat(_w.created),
            }
            for _w in _withdrawals
        ],
    }

    return json_response(resp)


async def __get_seller(db: DBAsyncSession, user_id: str) -> Seller:
    _seller: Seller | None = (
        await db.scalars(select(Seller).where(Seller.user_id == user_id).limit(1))
    ).first()
    if _seller is None:
        raise HTTPException(status_code=404, detail="seller does not exist")
    return _seller


def __is_profile_complete(_seller: Seller) -> bool:
    if not _seller.display_name:
        return False
    return all(getattr(_seller, field) for field in BANK_FIELDS)


def __enqueue_seller_upload(
    db: DBAsyncSession,
    item_type: str,
    item_id: str,
    title: str,
    price: int,
    seller_name: str,
    user_email: str,
):
    enqueue_telegram(
        db=db,
        message_type=TelegramMessageType.SELLER_UPLOAD,
        payload={
            "item_type": item_type,
            "item_id": item_id,
            "product_title": title,
            "item_price": vnd_to_coin(price),
            "seller_name": seller_name,
            "user_email": user_email,
        },
    )
