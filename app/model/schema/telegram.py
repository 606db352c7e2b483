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

from typing import Optional

from pydantic import BaseModel, Field


class TelegramChat(BaseModel):
    id: int


class TelegramMessage(BaseModel):
    message_id: int
    chat: TelegramChat


class TelegramUser(BaseModel):
    id: int
    username: Optional[str] = None


class TelegramCallbackQuery(BaseModel):
    id: str
    data: Optional[str] = None
    message: Optional[TelegramMessage] = None
    from_user: Optional[TelegramUser] = Field(None, alias="from")


############################
# REQUEST
############################
class TelegramUpdate(BaseModel):
    """Telegram Bot API Update object (REQUEST)"""

    update_id: Optional[int] = None
    callback_query: Optional[TelegramCallbackQuery] = None


############################
# RESPONSE
############################
class TelegramWebhookResponse(BaseModel):
    """Telegram Webhook schema (RESPONSE)"""

    ok: bool = True
