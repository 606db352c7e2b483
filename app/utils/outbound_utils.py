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

from sqlalchemy.ext.asyncio import AsyncSession

from app.model.db import OutboundChannel, OutboundMessage, OutboundMessageStatus
from app.model.db.base import aware_utcnow


def enqueue_telegram(
    db: AsyncSession, message_type: str, payload: dict
) -> OutboundMessage:
    """Queue a Telegram message for the outbound message processor"""
    return __enqueue(db, OutboundChannel.TELEGRAM, message_type, payload)


def enqueue_email(db: AsyncSession, message_type: str, payload: dict) -> OutboundMessage:
    """Queue an email webhook call for the outbound message processor"""
    return __enqueue(db, OutboundChannel.EMAIL, message_type, payload)


def __enqueue(
    db: AsyncSession, channel: OutboundChannel, message_type: str, payload: dict
) -> OutboundMessage:
    _message = OutboundMessage()
    _message.channel = channel
    _message.message_type = message_type
    _message.payload = {"occurred_at": aware_utcnow().isoformat(), **payload}
    _message.status = OutboundMessageStatus.PENDING
    _message.retry_count = 0
    db.add(_message)
    return _message
