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

from datetime import datetime
from enum import StrEnum

from sqlalchemy import BigInteger, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base
from .review import ReviewStatus


class UserCoin(Base):
    """Coin wallet of a user"""

    __tablename__ = "user_coin"

    # id (UUID)
    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    # user id
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, unique=True)
    # coin balance
    balance: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)


class CoinHistoryType(StrEnum):
    ACCOUNT_PURCHASE = "account_purchase"
    PRODUCT_PURCHASE = "product_purchase"
    COIN_TOPUP = "coin_topup"
    REFERRAL_REWARD = "referral_reward"
    REFUND = "refund"


class CoinHistory(Base):
    """Coin balance change history of a user"""

    __tablename__ = "coin_history"

    # id (UUID)
    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    # user id
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    # amount (negative value means decrease)
    amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    # history type
    type: Mapped[CoinHistoryType] = mapped_column(String(30), nullable=False)
    # description
    description: Mapped[str | None] = mapped_column(String(500))
    # reference id (order id, coin purchase id, etc)
    reference_id: Mapped[str | None] = mapped_column(String(36))

    def json(self):
        return {
            "id": self.id,
            "amount": self.amount,
            "type": self.type,
            "description": self.description,
            "reference_id": self.reference_id,
        }


class CoinPurchase(Base):
    """Coin top-up request paid by bank transfer"""

    __tablename__ = "coin_purchase"

    # id (UUID)
    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    # user id
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    # amount of coins
    amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    # transfer receipt image url
    receipt_url: Mapped[str | None] = mapped_column(String(2000))
    # review status
    status: Mapped[ReviewStatus] = mapped_column(
        String(20), nullable=False, default=ReviewStatus.PENDING, index=True
    )
    # note from administrator
    admin_note: Mapped[str | None] = mapped_column(String(1000))
    # reviewer user id
    approved_by: Mapped[str | None] = mapped_column(String(36))
    # reviewed datetime(UTC)
    approved_at: Mapped[datetime | None] = mapped_column(DateTime)
