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

from sqlalchemy import BigInteger, Boolean, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base
from .review import ReviewStatus


class Seller(Base):
    """Seller profile"""

    __tablename__ = "seller"

    # seller id (UUID)
    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    # user id
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, unique=True)
    # display name
    display_name: Mapped[str] = mapped_column(String(100), nullable=False)
    # phone number
    phone: Mapped[str | None] = mapped_column(String(20))
    # description
    description: Mapped[str | None] = mapped_column(String(2000))
    # avatar image url
    avatar_url: Mapped[str | None] = mapped_column(String(2000))
    # bank name
    bank_name: Mapped[str | None] = mapped_column(String(100))
    # bank account number
    bank_account_number: Mapped[str | None] = mapped_column(String(50))
    # bank account holder name
    bank_account_name: Mapped[str | None] = mapped_column(String(100))
    # bank QR code image url
    bank_qr_url: Mapped[str | None] = mapped_column(String(2000))
    # verified by administrator
    is_verified: Mapped[bool] = mapped_column(Boolean, default=False)
    # display name and all bank details are set
    is_profile_complete: Mapped[bool] = mapped_column(Boolean, default=False)

    def json(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "display_name": self.display_name,
            "phone": self.phone,
            "description": self.description,
            "avatar_url": self.avatar_url,
            "bank_name": self.bank_name,
            "bank_account_number": self.bank_account_number,
            "bank_account_name": self.bank_account_name,
            "bank_qr_url": self.bank_qr_url,
            "is_verified": self.is_verified,
            "is_profile_complete": self.is_profile_complete,
        }


class SellerCoin(Base):
    """Coin balance earned by a seller"""

    __tablename__ = "seller_coin"

    # id (UUID)
    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    # seller id
    seller_id: Mapped[str] = mapped_column(String(36), nullable=False, unique=True)
    # withdrawable balance
    balance: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    # total coins earned from sales
    total_earned: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)


class WithdrawalRequest(Base):
    """Withdrawal request of seller coins"""

    __tablename__ = "withdrawal_request"

    # id (UUID)
    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    # seller id
    seller_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    # amount of coins
    amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    # bank name
    bank_name: Mapped[str | None] = mapped_column(String(100))
    # bank account number
    bank_account_number: Mapped[str | None] = mapped_column(String(50))
    # bank account holder name
    bank_account_name: Mapped[str | None] = mapped_column(String(100))
    # bank QR code image url
    bank_qr_url: Mapped[str | None] = mapped_column(String(2000))
    # review status
    status: Mapped[ReviewStatus] = mapped_column(
        String(20), nullable=False, default=ReviewStatus.PENDING, index=True
    )
    # note from administrator
    admin_note: Mapped[str | None] = mapped_column(String(1000))
    # reviewer user id
    processed_by: Mapped[str | None] = mapped_column(String(36))
    # reviewed datetime(UTC)
    processed_at: Mapped[datetime | None] = mapped_column(DateTime)
