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

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.model.db import CoinHistory, CoinHistoryType, SellerCoin, UserCoin
from app.model.db.base import naive_utcnow
from config import COIN_UNIT_PRICE_VND

# Flat commission fee retained by the platform per sale
# - (minimum sale amount, fee)
COMMISSION_FEE_TIERS = [
    (100, 10),
    (50, 7),
    (20, 5),
    (10, 3),
]
MINIMUM_COMMISSION_FEE = 1


def vnd_to_coin(price_vnd: int) -> int:
    """Convert a VND price to coins (rounded up)"""
    return -(-price_vnd // COIN_UNIT_PRICE_VND)


def calc_commission_fee(sale_amount: int) -> int:
    """Calculate the commission fee of a sale

    :param sale_amount: sale amount (coin)
    :return: commission fee (coin)
    """
    for min_amount, fee in COMMISSION_FEE_TIERS:
        if sale_amount >= min_amount:
            return fee
    return MINIMUM_COMMISSION_FEE


async def get_user_coin(db: AsyncSession, user_id: str) -> UserCoin | None:
    return (
        await db.scalars(select(UserCoin).where(UserCoin.user_id == user_id).limit(1))
    ).first()


async def get_seller_coin(db: AsyncSession, seller_id: str) -> SellerCoin | None:
    return (
        await db.scalars(
            select(SellerCoin).where(SellerCoin.seller_id == seller_id).limit(1)
        )
    ).first()


async def debit_user_coin(
    db: AsyncSession, user_id: str, expected_balance: int, amount: int
) -> bool:
    """Decrease the balance of a user wallet

    The update is applied only if the balance is still equal to the value read
    before. Returns False when the balance has been changed by another request.
    """
    result = await db.execute(
        update(UserCoin)
        .where(UserCoin.user_id == user_id, UserCoin.balance == expected_balance)
        .values(balance=expected_balance - amount, modified=naive_utcnow())
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1


async def restore_user_coin(db: AsyncSession, user_id: str, balance: int) -> None:
    """Write a previously read balance back to a user wallet"""
    await db.execute(
        update(UserCoin)
        .where(UserCoin.user_id == user_id)
        .values(balance=balance, modified=naive_utcnow())
        .execution_options(synchronize_session=False)
    )


async def credit_user_coin(db: AsyncSession, user_id: str, amount: int) -> None:
    """Increase the balance of a user wallet, creating the wallet if needed"""
    result = await db.execute(
        update(UserCoin)
        .where(UserCoin.user_id == user_id)
        .values(balance=UserCoin.balance + amount, modified=naive_utcnow())
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        _coin = UserCoin()
        _coin.id = str(uuid.uuid4())
        _coin.user_id = user_id
        _coin.balance = amount
        db.add(_coin)
        await db.flush()


async def credit_seller_coin(db: AsyncSession, seller_id: str, amount: int) -> int:
    """Increase the balance and total earnings of a seller

    :return: total earnings after the credit
    """
    result = await db.execute(
        update(SellerCoin)
        .where(SellerCoin.seller_id == seller_id)
        .values(
            balance=SellerCoin.balance + amount,
            total_earned=SellerCoin.total_earned + amount,
            modified=naive_utcnow(),
        )
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        _coin = SellerCoin()
        _coin.id = str(uuid.uuid4())
        _coin.seller_id = seller_id
        _coin.balance = amount
        _coin.total_earned = amount
        db.add(_coin)
        await db.flush()
        return amount

    total_earned = (
        await db.scalars(
            select(SellerCoin.total_earned)
            .where(SellerCoin.seller_id == seller_id)
            .limit(1)
        )
    ).first()
    return total_earned


async def debit_seller_coin(db: AsyncSession, seller_id: str, amount: int) -> bool:
    """Decrease the balance of a seller

    Returns False when the balance does not cover the amount.
    """
    result = await db.execute(
        update(SellerCoin)
        .where(SellerCoin.seller_id == seller_id, SellerCoin.balance >= amount)
        .values(balance=SellerCoin.balance - amount, modified=naive_utcnow())
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1


def add_coin_history(
    db: AsyncSession,
    user_id: str,
    amount: int,
    history_type: CoinHistoryType,
    description: str | None = None,
    reference_id: str | None = None,
) -> CoinHistory:
    _history = CoinHistory()
    _history.id = str(uuid.uuid4())
    _history.user_id = user_id
    _history.amount = amount
    _history.type = history_type
    _history.description = description
    _history.reference_id = reference_id
    db.add(_history)
    return _history
