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

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class SiteSetting(Base):
    """Key-value site setting"""

    __tablename__ = "site_setting"

    # setting key
    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    # setting value
    value: Mapped[str | None] = mapped_column(Text)
    # last updater user id
    updated_by: Mapped[str | None] = mapped_column(String(36))


class SiteSettingKey:
    TELEGRAM_BOT_TOKEN = "telegram_bot_token"
    TELEGRAM_CHAT_ID = "telegram_chat_id"
    BANK_NAME = "bank_name"
    BANK_ACCOUNT_NUMBER = "bank_account_number"
    BANK_ACCOUNT_NAME = "bank_account_name"
    BANK_QR_URL = "bank_qr_url"

    ALL = (
        TELEGRAM_BOT_TOKEN,
        TELEGRAM_CHAT_ID,
        BANK_NAME,
        BANK_ACCOUNT_NUMBER,
        BANK_ACCOUNT_NAME,
        BANK_QR_URL,
    )
