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

from sqlalchemy import JSON, BigInteger, Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base
from .review import ReviewStatus


class BotRental(Base):
    """Zalo bot rental offer"""

    __tablename__ = "bot_rental"

    # bot id (UUID)
    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    # name
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    # description
    description: Mapped[str | None] = mapped_column(String(2000))
    # icon
    icon: Mapped[str | None] = mapped_column(String(50))
    # rental price (VND)
    price: Mapped[int] = mapped_column(BigInteger, nullable=False)
    # rental duration label
    duration: Mapped[str | None] = mapped_column(String(50))
    # features
    features: Mapped[list | None] = mapped_column(JSON)
    # zalo contact number
    zalo_number: Mapped[str | None] = mapped_column(String(20))
    # listed flag
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    # display order
    sort_order: Mapped[int] = mapped_column(Integer, default=0)

    def json(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "icon": self.icon,
            "price": self.price,
            "duration": self.duration,
            "features": self.features or [],
            "zalo_number": self.zalo_number,
            "is_active": self.is_active,
            "sort_order": self.sort_order,
        }


class BotRentalRequest(Base):
    """Bot rental request paid by bank transfer"""

    __tablename__ = "bot_rental_request"

    # id (UUID)
    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    # bot id
    bot_id: Mapped[str] = mapped_column(String(36), nullable=False)
    # requester user id
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    # transfer receipt image url
    receipt_url: Mapped[str | None] = mapped_column(String(2000))
    # review status
    status: Mapped[ReviewStatus] = mapped_column(
        String(20), nullable=False, default=ReviewStatus.PENDING, index=True
    )
    # note from administrator
    admin_note: Mapped[str | None] = mapped_column(String(1000))
