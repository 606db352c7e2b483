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

from sqlalchemy import BigInteger, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class Referral(Base):
    """Referral relationship between two users"""

    __tablename__ = "referral"

    # id (UUID)
    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    # referrer user id
    referrer_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    # referred user id (a user can be referred only once)
    referred_id: Mapped[str] = mapped_column(String(36), nullable=False, unique=True)
    # redeemed referral code
    referral_code: Mapped[str] = mapped_column(String(16), nullable=False)
    # coins credited to the referrer
    coins_rewarded: Mapped[int] = mapped_column(BigInteger, default=0)
    # rewarded datetime(UTC)
    rewarded_at: Mapped[datetime | None] = mapped_column(DateTime)
