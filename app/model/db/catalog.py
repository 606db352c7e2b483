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

from sqlalchemy import JSON, BigInteger, Boolean, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class GameAccount(Base):
    """Game account listed for sale"""

    __tablename__ = "game_account"

    # account id (UUID)
    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    # seller id
    seller_id: Mapped[str | None] = mapped_column(String(36), index=True)
    # title
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    # description
    description: Mapped[str | None] = mapped_column(Text)
    # game platform
    platform: Mapped[str] = mapped_column(String(50), nullable=False)
    # account type
    account_type: Mapped[str] = mapped_column(String(50), nullable=False)
    # category
    category: Mapped[str | None] = mapped_column(String(50))
    # price (VND)
    price: Mapped[int] = mapped_column(BigInteger, nullable=False)
    # image url
    image_url: Mapped[str | None] = mapped_column(String(2000))
    # features
    features: Mapped[list | None] = mapped_column(JSON)
    # listed flag
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    # free giveaway flag
    is_free: Mapped[bool] = mapped_column(Boolean, default=False)
    # sold flag
    is_sold: Mapped[bool] = mapped_column(Boolean, default=False)
    # login email
    login_email: Mapped[str | None] = mapped_column(String(255))
    # login username
    login_username: Mapped[str | None] = mapped_column(String(255))
    # login phone number
    login_phone: Mapped[str | None] = mapped_column(String(20))
    # login password
    login_password: Mapped[str | None] = mapped_column(String(255))
    # additional information handed to the buyer
    additional_info: Mapped[str | None] = mapped_column(Text)
    # buyer user id
    sold_to: Mapped[str | None] = mapped_column(String(36))
    # sold datetime(UTC)
    sold_at: Mapped[datetime | None] = mapped_column(DateTime)
    # creator user id
    created_by: Mapped[str | None] = mapped_column(String(36))

    def login_credentials(self):
        return {
            "email": self.login_email,
            "username": self.login_username,
            "phone": self.login_phone,
            "password": self.login_password,
            "additional_info": self.additional_info,
        }


class Product(Base):
    """Digital product listed for sale"""

    __tablename__ = "product"

    # product id (UUID)
    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    # seller id
    seller_id: Mapped[str | None] = mapped_column(String(36), index=True)
    # title
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    # description
    description: Mapped[str | None] = mapped_column(Text)
    # category
    category: Mapped[str] = mapped_column(String(50), nullable=False)
    # price (VND)
    price: Mapped[int] = mapped_column(BigInteger, nullable=False)
    # price before discount (VND)
    original_price: Mapped[int | None] = mapped_column(BigInteger)
    # image url
    image_url: Mapped[str | None] = mapped_column(String(2000))
    # download url
    download_url: Mapped[str | None] = mapped_column(String(2000))
    # badge label
    badge: Mapped[str | None] = mapped_column(String(50))
    # technology stack
    tech_stack: Mapped[list | None] = mapped_column(JSON)
    # listed flag
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    # free giveaway flag
    is_free: Mapped[bool] = mapped_column(Boolean, default=False)
    # number of sales
    sales: Mapped[int] = mapped_column(Integer, default=0)
    # creator user id
    created_by: Mapped[str | None] = mapped_column(String(36))
