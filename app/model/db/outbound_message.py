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

from enum import IntEnum, StrEnum

from sqlalchemy import JSON, BigInteger, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class OutboundChannel(StrEnum):
    EMAIL = "email"
    TELEGRAM = "telegram"


class OutboundMessageStatus(IntEnum):
    """
    0:PENDING
    1:SENT: Delivered, or skipped because the channel is not configured
    2:FAILED: Delivery failed more than the maximum number of retries
    """

    PENDING = 0
    SENT = 1
    FAILED = 2


class OutboundMessage(Base):
    """Message queued for delivery to an external service"""

    __tablename__ = "outbound_message"

    # sequence id
    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    # delivery channel
    channel: Mapped[OutboundChannel] = mapped_column(String(20), nullable=False)
    # message type (e.g. account_purchase, answer_callback)
    message_type: Mapped[str] = mapped_column(String(50), nullable=False)
    # message payload
    payload: Mapped[dict] = mapped_column(JSON, nullable=False)
    # delivery status
    status: Mapped[OutboundMessageStatus] = mapped_column(
        Integer, nullable=False, default=OutboundMessageStatus.PENDING, index=True
    )
    # number of failed attempts
    retry_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # last delivery error
    last_error: Mapped[str | None] = mapped_column(Text)
