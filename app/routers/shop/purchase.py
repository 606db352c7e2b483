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
from sqlalchemy import desc, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app import log
from app.database import DBAsyncSession
from app.exceptions import (
    AuthorizationError,
    BalanceUpdateConflictError,
    InsufficientBalanceError,
    InvalidParameterError,
    ItemNotAvailableError,
    OrderCreationError,
    PriceMismatchError,
)
from app.model.db import (
    CoinHistoryType,
    GameAccount,
    NotificationType,
    Order,
    OrderStatus,
    OrderType,
    Product,
    Seller,
)
from app.model.db.base import naive_utcnow
from app.model.schema import (
    ListOrdersQuery,
    ListOrdersResponse,
    OrderResponse,
    PurchaseWithCoinsRequest,
    PurchaseWithCoinsResponse,
)
from app.utils.check_utils import check_auth
from app.utils.coin_utils import (
    add_coin_history,
    calc_commission_fee,
    credit_seller_coin,
    debit_user_coin,
    get_user_coin,
    restore_user_coin,
    vnd_to_coin,
)
from app.utils.docs_utils import get_routers_responses
from app.utils.fastapi_utils import json_response, to_local_isoformat
from app.utils.notification_utils import add_notification
from app.utils.outbound_utils import enqueue_email, enqueue_telegram
from app.utils.telegram_utils import TelegramMessageType

LOG = log.get_logger()

router = APIRouter(tags=["purchase"])

PURCHASE_SUCCEEDED_MESSAGE = "Mua hàng thành công!"


# POST: /purchases
@router.post(
    "/purchases",
    operation_id="PurchaseWithCoins",
    response_model=PurchaseWithCoinsResponse,
    responses=get_routers_responses(
        422,
        AuthorizationError,
        InvalidParameterError,
        InsufficientBalanceError,
        ItemNotAvailableError,
        PriceMismatchError,
        BalanceUpdateConflictError,
        OrderCreationError,
    ),
)
async def purchase_with_coins(
    db: DBAsyncSession,
    request: Request,
    data: PurchaseWithCoinsRequest,
    authorization: Optional[str] = Header(None),
):
    """Purchase a game account or a product with coins

    - The balance is decreased only if it has not been changed since it was read.
      Otherwise, the request fails with a conflict and the client should retry.
    - If the order can not be created, the balance is written back.
    - Side effects after the order is created (seller credit, history,
      notifications, outbound messages) never fail the purchase.
    """
    # Authentication
    user = await check_auth(request=request, db=db, authorization=authorization)
    user_id = user.id
    user_email = user.email
    user_name = user.display_name

    # Validate request
    required_coins = data.required_coins
    if required_coins is None or required_coins <= 0:
        raise InvalidParameterError("required_coins must be a positive integer")
    if data.account_id is None and data.product_id is None:
        raise InvalidParameterError("account_id or product_id is required")
    if data.account_id is not None and data.product_id is not None:
        raise InvalidParameterError(
            "account_id and product_id can not be specified at the same time"
        )

    # Get current balance
    _coin = await get_user_coin(db, user_id)
    current_balance = _coin.balance if _coin is not None else 0
    if current_balance < required_coins:
        raise InsufficientBalanceError("insufficient coin balance")

    # Get item
    login_credentials = None
    if data.account_id is not None:
        item_type = "account"
        _account: GameAccount | None = (
            await db.scalars(
                select(GameAccount).where(GameAccount.id == data.account_id).limit(1)
            )
        ).first()
        if _account is None or not _account.is_active:
            raise ItemNotAvailableError("account does not exist")
        if _account.is_sold:
            raise ItemNotAvailableError("this account has already been sold")
        if _account.is_free:
            raise ItemNotAvailableError("free accounts can not be purchased with coins")
        item_price = _account.price
        item_title = _account.title
        seller_id = _account.seller_id
        login_credentials = _account.login_credentials()
    else:
        item_type = "product"
        _product: Product | None = (
            await db.scalars(
                select(Product).where(Product.id == data.product_id).limit(1)
            )
        ).first()
        if _product is None or not _product.is_active:
            raise ItemNotAvailableError("product does not exist")
        if _product.is_free:
            raise ItemNotAvailableError("free products can not be purchased with coins")
        item_price = _product.price
        item_title = _product.title
        seller_id = _product.seller_id

    # Check price
    coin_price = vnd_to_coin(item_price)
    if required_coins != coin_price:
        raise PriceMismatchError(
            f"required_coins does not match the item price: {coin_price}"
        )

    # Deduct coins
    new_balance = current_balance - required_coins
    if not await debit_user_coin(db, user_id, current_balance, required_coins):
        await db.rollback()
        raise BalanceUpdateConflictError(
            "balance has been changed by another request, please retry"
        )
    await db.commit()

    # Create order
    order_id = str(uuid.uuid4())
    try:
        order = await __insert_order(
            db=db,
            order_id=order_id,
            buyer_id=user_id,
            seller_id=seller_id,
            account_id=data.account_id,
            product_id=data.product_id,
            amount=required_coins,
            login_credentials=login_credentials,
        )
    except Exception:
        LOG.exception(f"Failed to create order: user_id={user_id}")
        await db.rollback()
        # Write the original balance back
        await restore_user_coin(db, user_id, current_balance)
        await db.commit()
        raise OrderCreationError("failed to create order, coins have been refunded")

    ############################
    # Side effects
    ############################
    if item_type == "account":
        await __mark_account_sold(db, data.account_id, user_id)
    else:
        await __count_product_sale(db, data.product_id)

    commission_fee = 0
    seller_receives = 0
    total_earned = 0
    if seller_id is not None:
        commission_fee = calc_commission_fee(required_coins)
        seller_receives = required_coins - commission_fee
        total_earned = await __credit_seller(db, seller_id, seller_receives)
        if total_earned is not None:
            await __notify_seller(
                db=db,
                seller_id=seller_id,
                order_id=order_id,
                item_type=item_type,
                seller_receives=seller_receives,
                commission_fee=commission_fee,
                total_earned=total_earned,
            )

    await __record_buyer_history(
        db=db,
        user_id=user_id,
        order_id=order_id,
        item_type=item_type,
        item_title=item_title,
        required_coins=required_coins,
    )
    await __notify_buyer(
        db=db,
        user_id=user_id,
        order_id=order_id,
        item_title=item_title,
        required_coins=required_coins,
    )
    await __enqueue_purchase_messages(
        db=db,
        user_email=user_email,
        user_name=user_name,
        order_id=order_id,
        item_type=item_type,
        item_title=item_title,
        required_coins=required_coins,
        seller_id=seller_id,
        seller_receives=seller_receives,
        commission_fee=commission_fee,
        total_earned=total_earned,
    )

    LOG.info(
        f"Purchase succeeded: order_id={order_id}, user_id={user_id}, "
        f"amount={required_coins}, commission_fee={commission_fee}"
    )

    return json_response(
        {
            "order": order,
            "new_balance": new_balance,
            "message": PURCHASE_SUCCEEDED_MESSAGE,
        }
    )


# GET: /orders
@router.get(
    "/orders",
    operation_id="ListMyOrders",
    response_model=ListOrdersResponse,
    responses=get_routers_responses(422, AuthorizationError),
)
async def list_my_orders(
    db: DBAsyncSession,
    request: Request,
    get_query: Annotated[ListOrdersQuery, Query()],
    authorization: Optional[str] = Header(None),
):
    """List the caller's orders (newest first)"""
    user = await check_auth(request=request, db=db, authorization=authorization)

    stmt = select(Order).where(Order.buyer_id == user.id)
    total = await db.scalar(select(func.count()).select_from(stmt.subquery()))
    count = total

    # Sort
    stmt = stmt.order_by(desc(Order.created), desc(Order.id))

    # Pagination
    if get_query.limit is not None:
        stmt = stmt.limit(get_query.limit)
    if get_query.offset is not None:
        stmt = stmt.offset(get_query.offset)

    _orders: Sequence[Order] = (await db.scalars(stmt)).all()

    resp = {
        "result_set": {
            "count": count,
            "offset": get_query.offset,
            "limit": get_query.limit,
            "total": total,
        },
        "orders": [
            {**_order.json(), "created": to_local_isoformat(_order.created)}
            for _order in _orders
        ],
    }

    return json_response(resp)


# GET: /orders/{order_id}
@router.get(
    "/orders/{order_id}",
    operation_id="RetrieveMyOrder",
    response_model=OrderResponse,
    responses=get_routers_responses(404, AuthorizationError),
)
async def retrieve_my_order(
    db: DBAsyncSession,
    request: Request,
    order_id: str,
    authorization: Optional[str] = Header(None),
):
    """Retrieve an order of the caller

    Login credentials are returned for game account orders
    and the download url for product orders.
    """
    user = await check_auth(request=request, db=db, authorization=authorization)

    _order: Order | None = (
        await db.scalars(
            select(Order)
            .where(Order.id == order_id, Order.buyer_id == user.id)
            .limit(1)
        )
    ).first()
    if _order is None:
        raise HTTPException(status_code=404, detail="order does not exist")

    download_url = None
    if _order.product_id is not None:
        download_url = (
            await db.scalars(
                select(Product.download_url)
                .where(Product.id == _order.product_id)
                .limit(1)
            )
        ).first()

    return json_response(
        {
            **_order.json(),
            "created": to_local_isoformat(_order.created),
            "login_credentials": _order.login_credentials,
            "download_url": download_url,
        }
    )


async def __insert_order(
    db: AsyncSession,
    order_id: str,
    buyer_id: str,
    seller_id: str | None,
    account_id: str | None,
    product_id: str | None,
    amount: int,
    login_credentials: dict | None,
) -> dict:
    _order = Order()
    _order.id = order_id
    _order.buyer_id = buyer_id
    _order.seller_id = seller_id
    _order.account_id = account_id
    _order.product_id = product_id
    _order.amount = amount
    _order.order_type = OrderType.COIN_PURCHASE
    _order.status = OrderStatus.APPROVED
    _order.approved_by = buyer_id
    _order.approved_at = naive_utcnow()
    _order.login_credentials = login_credentials
    db.add(_order)
    await db.commit()
    return {**_order.json(), "created": to_local_isoformat(_order.created)}


async def __mark_account_sold(db: AsyncSession, account_id: str, buyer_id: str):
    try:
        await db.execute(
            update(GameAccount)
            .where(GameAccount.id == account_id)
            .values(is_sold=True, sold_to=buyer_id, sold_at=naive_utcnow())
            .execution_options(synchronize_session=False)
        )
        await db.commit()
    except Exception:
        await db.rollback()
        LOG.exception(f"Failed to mark account as sold: account_id={account_id}")


async def __count_product_sale(db: AsyncSession, product_id: str):
    try:
        await db.execute(
            update(Product)
            .where(Product.id == product_id)
            .values(sales=func.coalesce(Product.sales, 0) + 1)
            .execution_options(synchronize_session=False)
        )
        await db.commit()
    except Exception:
        await db.rollback()
        LOG.exception(f"Failed to count product sale: product_id={product_id}")


async def __credit_seller(
    db: AsyncSession, seller_id: str, seller_receives: int
) -> int | None:
    try:
        total_earned = await credit_seller_coin(db, seller_id, seller_receives)
        await db.commit()
        return total_earned
    except Exception:
        await db.rollback()
        LOG.exception(f"Failed to credit seller: seller_id={seller_id}")
        return None


async def __notify_seller(
    db: AsyncSession,
    seller_id: str,
    order_id: str,
    item_type: str,
    seller_receives: int,
    commission_fee: int,
    total_earned: int,
):
    try:
        seller_user_id = (
            await db.scalars(
                select(Seller.user_id).where(Seller.id == seller_id).limit(1)
            )
        ).first()
        if seller_user_id is None:
            return
        item_label = "sản phẩm" if item_type == "product" else "tài khoản"
        add_notification(
            db=db,
            user_id=seller_user_id,
            title="💰 Bán hàng thành công!",
            message=f'Bạn đã bán "{item_label}" và nhận được +{seller_receives} xu '
            f"(trừ {commission_fee} xu phí). Tổng thu nhập: {total_earned} xu.",
            notice_type=NotificationType.SELLER_SALE,
            reference_id=order_id,
        )
        await db.commit()
    except Exception:
        await db.rollback()
        LOG.exception(f"Failed to notify seller: seller_id={seller_id}")


async def __record_buyer_history(
    db: AsyncSession,
    user_id: str,
    order_id: str,
    item_type: str,
    item_title: str,
    required_coins: int,
):
    try:
        add_coin_history(
            db=db,
            user_id=user_id,
            amount=-required_coins,
            history_type=(
                CoinHistoryType.PRODUCT_PURCHASE
                if item_type == "product"
                else CoinHistoryType.ACCOUNT_PURCHASE
            ),
            description=f'Mua "{item_title}"',
            reference_id=order_id,
        )
        await db.commit()
    except Exception:
        await db.rollback()
        LOG.exception(f"Failed to record coin history: order_id={order_id}")


async def __notify_buyer(
    db: AsyncSession,
    user_id: str,
    order_id: str,
    item_title: str,
    required_coins: int,
):
    try:
        add_notification(
            db=db,
            user_id=user_id,
            title="🎉 Mua hàng thành công!",
            message=f'Bạn đã mua "{item_title}" với {required_coins} xu. '
            'Vào "Đơn hàng của tôi" để xem chi tiết.',
            notice_type=NotificationType.PURCHASE,
            reference_id=order_id,
        )
        await db.commit()
    except Exception:
        await db.rollback()
        LOG.exception(f"Failed to notify buyer: order_id={order_id}")


async def __enqueue_purchase_messages(
    db: AsyncSession,
    user_email: str,
    user_name: str | None,
    order_id: str,
    item_type: str,
    item_title: str,
    required_coins: int,
    seller_id: str | None,
    seller_receives: int,
    commission_fee: int,
    total_earned: int,
):
    try:
        enqueue_email(
            db=db,
            message_type="purchase",
            payload={
                "user_email": user_email,
                "user_name": user_name or "",
                "product_title": item_title,
                "product_type": item_type,
                "amount": required_coins,
                "order_id": order_id,
            },
        )
        enqueue_telegram(
            db=db,
            message_type=(
                TelegramMessageType.PRODUCT_PURCHASE
                if item_type == "product"
                else TelegramMessageType.ACCOUNT_PURCHASE
            ),
            payload={
                "user_email": user_email,
                "product_title": item_title,
                "amount": required_coins,
                "order_id": order_id,
            },
        )
        if seller_id is not None and seller_receives > 0:
            enqueue_telegram(
                db=db,
                message_type=TelegramMessageType.SELLER_SALE,
                payload={
                    "item_type": item_type,
                    "buyer_email": user_email,
                    "product_title": item_title,
                    "coins_earned": seller_receives,
                    "commission_fee": commission_fee,
                    "total_earnings": total_earned,
                    "order_id": order_id,
                },
            )
        await db.commit()
    except Exception:
        await db.rollback()
        LOG.exception(f"Failed to queue purchase messages: order_id={order_id}")
