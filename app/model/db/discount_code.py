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

from sqlalchemy import BigInteger, Boolean, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class DiscountType(StrEnum):
    PERCENT = "percent"
    FIXED = "fixed"


class DiscountCode(Base):
    """Discount code"""

    __tablename__ = "discount_code"

    # id (UUID)
    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    # code (upper case)
    code: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    # discount type
    discount_type: Mapped[DiscountType] = mapped_column(String(10), nullable=False)
    # discount percentage or fixed amount of coins
    discount_amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    # minimum order amount (coins)
    min_order_amount: Mapped[int] = mapped_column(BigInteger, default=0)
    # maximum number of uses
    # - None: unlimited
    max_uses: Mapped[int | None] = mapped_column(Integer)
    # number of uses
    used_count: Mapped[int] = mapped_column(Integer, default=0)
    # expiration datetime(UTC)
    expires_at: Mapped[datetime | None] = mapped_column(DateTime)
    # enabled flag
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    # creator user id
    created_by: Mapped[str | None] = mapped_column(String(36))


class DiscountCodeUse(Base):
    """Usage history of a discount code"""

    __tablename__ = "discount_code_use"

    # id (UUID)
    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    # discount code id
    code_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    # user id
    user_id: Mapped[str] = mapped_column(String(36), nullable=False)
    # order id
    order_id: Mapped[str | None] = mapped_column(String(36))
