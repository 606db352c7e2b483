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

from enum import StrEnum

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class NotificationType(StrEnum):
    PURCHASE = "purchase"
    SELLER_SALE = "seller_sale"
    COIN_APPROVED = "coin_approved"
    COIN_REJECTED = "coin_rejected"
    WITHDRAWAL_APPROVED = "withdrawal_approved"
    WITHDRAWAL_REJECTED = "withdrawal_rejected"
    BOT_RENTAL_APPROVED = "bot_rental_approved"
    BOT_RENTAL_REJECTED = "bot_rental_rejected"
    SCAM_REPORT_APPROVED = "scam_report_approved"
    SCAM_REPORT_REJECTED = "scam_report_rejected"
    REFERRAL = "referral"


class Notification(Base):
    """In-app notification"""

    __tablename__ = "notification"

    # notification id (UUID)
    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    # recipient user id
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    # title
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    # message body
    message: Mapped[str] = mapped_column(String(2000), nullable=False)
    # notification type
    type: Mapped[NotificationType] = mapped_column(String(30), nullable=False)
    # read flag
    is_read: Mapped[bool] = mapped_column(Boolean, default=False)
    # reference id (order id, coin purchase id, etc)
    reference_id: Mapped[str | None] = mapped_column(String(36))
