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

from sqlalchemy import JSON, BigInteger, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class OrderStatus(StrEnum):
    PENDING = "pending"
    APPROVED = "approved"
    CANCELLED = "cancelled"


class OrderType(StrEnum):
    COIN_PURCHASE = "coin_purchase"


class Order(Base):
    """Purchase order"""

    __tablename__ = "order"

    # order id (UUID)
    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    # buyer user id
    buyer_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    # seller id
    seller_id: Mapped[str | None] = mapped_column(String(36))
    # purchased game account id
    account_id: Mapped[str | None] = mapped_column(String(36))
    # purchased product id
    product_id: Mapped[str | None] = mapped_column(String(36))
    # amount of coins paid
    amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    # order type
    order_type: Mapped[OrderType] = mapped_column(String(30), nullable=False)
    # order status
    status: Mapped[OrderStatus] = mapped_column(String(20), nullable=False)
    # approver user id
    approved_by: Mapped[str | None] = mapped_column(String(36))
    # approved datetime(UTC)
    approved_at: Mapped[datetime | None] = mapped_column(DateTime)
    # login credentials of the purchased game account
    login_credentials: Mapped[dict | None] = mapped_column(JSON)

    def json(self):
        return {
            "id": self.id,
            "buyer_id": self.buyer_id,
            "seller_id": self.seller_id,
            "account_id": self.account_id,
            "product_id": self.product_id,
            "amount": self.amount,
            "order_type": self.order_type,
            "status": self.status,
        }
