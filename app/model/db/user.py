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

from sqlalchemy import Boolean, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, naive_utcnow


class User(Base):
    """User profile"""

    __tablename__ = "user"

    # user id (UUID)
    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    # login email
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    # password hash (bcrypt)
    password_hash: Mapped[str] = mapped_column(String(200), nullable=False)
    # display name
    display_name: Mapped[str | None] = mapped_column(String(100))
    # phone number
    phone: Mapped[str | None] = mapped_column(String(20))
    # avatar image url
    avatar_url: Mapped[str | None] = mapped_column(String(2000))
    # referral code
    referral_code: Mapped[str | None] = mapped_column(String(16), unique=True)
    # banned flag
    is_banned: Mapped[bool] = mapped_column(Boolean, default=False)
    # delete flag
    is_deleted: Mapped[bool] = mapped_column(Boolean, default=False)

    def json(self):
        return {
            "id": self.id,
            "email": self.email,
            "display_name": self.display_name,
            "phone": self.phone,
            "avatar_url": self.avatar_url,
            "referral_code": self.referral_code,
        }


class UserRoleType(StrEnum):
    ADMIN = "admin"
    MODERATOR = "moderator"
    USER = "user"


class UserRole(Base):
    """Role granted to a user"""

    __tablename__ = "user_role"

    # id (UUID)
    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    # user id
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    # role
    role: Mapped[UserRoleType] = mapped_column(String(20), nullable=False)
    # protected role can not be revoked
    protected: Mapped[bool] = mapped_column(Boolean, default=False)


class AuthToken(Base):
    """Authentication Token"""

    __tablename__ = "auth_token"

    # user id
    user_id: Mapped[str] = mapped_column(String(36), primary_key=True)
    # authentication token (sha256 hashed)
    auth_token: Mapped[str | None] = mapped_column(String(64), index=True)
    # usage start
    usage_start: Mapped[datetime | None] = mapped_column(DateTime, default=naive_utcnow)
    # valid duration (sec)
    # - 0: endless
    valid_duration: Mapped[int | None] = mapped_column(Integer, nullable=False)
