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

from typing import Annotated, Sequence

from fastapi import APIRouter, Query
from fastapi.exceptions import HTTPException
from sqlalchemy import desc, func, select

from app.database import DBAsyncSession
from app.model.db import GameAccount, Product
from app.model.schema import (
    GameAccountSummary,
    ListGameAccountsQuery,
    ListGameAccountsResponse,
    ListProductsQuery,
    ListProductsResponse,
    ProductSummary,
)
from app.utils.coin_utils import vnd_to_coin
from app.utils.docs_utils import get_routers_responses
from app.utils.fastapi_utils import json_response, to_local_isoformat

router = APIRouter(tags=["catalog"])


# GET: /products
@router.get(
    "/products",
    operation_id="ListProducts",
    response_model=ListProductsResponse,
    responses=get_routers_responses(422),
)
async def list_products(
    db: DBAsyncSession,
    get_query: Annotated[ListProductsQuery, Query()],
):
    """List products on sale"""
    stmt = select(Product).where(Product.is_active == True)
    total = await db.scalar(select(func.count()).select_from(stmt.subquery()))

    # Search Filter
    if get_query.category is not None:
        stmt = stmt.where(Product.category == get_query.category)
    if get_query.is_free is not None:
        stmt = stmt.where(Product.is_free == get_query.is_free)

    count = await db.scalar(select(func.count()).select_from(stmt.subquery()))

    # Sort
    stmt = stmt.order_by(desc(Product.created), Product.id)

    # Pagination
    if get_query.limit is not None:
        stmt = stmt.limit(get_query.limit)
    if get_query.offset is not None:
        stmt = stmt.offset(get_query.offset)

    _products: Sequence[Product] = (await db.scalars(stmt)).all()

    resp = {
        "result_set": {
            "count": count,
            "offset": get_query.offset,
            "limit": get_query.limit,
            "total": total,
        },
        "products": [__product_summary(_product) for _product in _products],
    }

    return json_response(resp)


# GET: /products/{product_id}
@router.get(
    "/products/{product_id}",
    operation_id="RetrieveProduct",
    response_model=ProductSummary,
    responses=get_routers_responses(404),
)
async def retrieve_product(db: DBAsyncSession, product_id: str):
    """Retrieve a product"""
    _product: Product | None = (
        await db.scalars(
            select(Product)
            .where(Product.id == product_id, Product.is_active == True)
            .limit(1)
        )
    ).first()
    if _product is None:
        raise HTTPException(status_code=404, detail="product does not exist")

    return json_response(__product_summary(_product))


# GET: /accounts
@router.get(
    "/accounts",
    operation_id="ListGameAccounts",
    response_model=ListGameAccountsResponse,
    responses=get_routers_responses(422),
)
async def list_game_accounts(
    db: DBAsyncSession,
    get_query: Annotated[ListGameAccountsQuery, Query()],
):
    """List game accounts on sale

    Sold accounts are hidden unless include_sold is set.
    """
    stmt = select(GameAccount).where(GameAccount.is_active == True)
    total = await db.scalar(select(func.count()).select_from(stmt.subquery()))

    # Search Filter
    if not get_query.include_sold:
        stmt = stmt.where(GameAccount.is_sold == False)
    if get_query.platform is not None:
        stmt = stmt.where(GameAccount.platform == get_query.platform)
    if get_query.category is not None:
        stmt = stmt.where(GameAccount.category == get_query.category)

    count = await db.scalar(select(func.count()).select_from(stmt.subquery()))

    # Sort
    stmt = stmt.order_by(desc(GameAccount.created), GameAccount.id)

    # Pagination
    if get_query.limit is not None:
        stmt = stmt.limit(get_query.limit)
    if get_query.offset is not None:
        stmt = stmt.offset(get_query.offset)

    _accounts: Sequence[GameAccount] = (await db.scalars(stmt)).all()

    resp = {
        "result_set": {
            "count": count,
            "offset": get_query.offset,
            "limit": get_query.limit,
            "total": total,
        },
        "accounts": [__account_summary(_account) for _account in _accounts],
    }

    return json_response(resp)


# GET: /accounts/{account_id}
@router.get(
    "/accounts/{account_id}",
    operation_id="RetrieveGameAccount",
    response_model=GameAccountSummary,
    responses=get_routers_responses(404),
)
async def retrieve_game_account(db: DBAsyncSession, account_id: str):
    """Retrieve a game account

    Login credentials are handed over only through the purchased order.
    """
    _account: GameAccount | None = (
        await db.scalars(
            select(GameAccount)
            .where(GameAccount.id == account_id, GameAccount.is_active == True)
            .limit(1)
        )
    ).first()
    if _account is None:
        raise HTTPException(status_code=404, detail="account does not exist")

    return json_response(__account_summary(_account))


def __product_summary(_product: Product):
    return {
        "id": _product.id,
        "seller_id": _product.seller_id,
        "title": _product.title,
        "description": _product.description,
        "category": _product.category,
        "price": _product.price,
        "coin_price": vnd_to_coin(_product.price),
        "original_price": _product.original_price,
        "image_url": _product.image_url,
        "badge": _product.badge,
        "tech_stack": _product.tech_stack or [],
        "is_free": _product.is_free,
        "sales": _product.sales,
        "created": to_local_isoformat(_product.created),
    }


def __account_summary(_account: GameAccount):
    return {
        "id": _account.id,
        "seller_id": _account.seller_id,
        "title": _account.title,
        "description": _account.description,
        "platform": _account.platform,
        "account_type": _account.account_type,
        "category": _account.category,
        "price": _account.price,
        "coin_price": vnd_to_coin(_account.price),
        "image_url": _account.image_url,
        "features": _account.features or [],
        "is_free": _account.is_free,
        "is_sold": _account.is_sold,
        "created": to_local_isoformat(_account.created),
    }
