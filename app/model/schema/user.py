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

from app.model.db import UserRoleType


############################
# REQUEST
############################
class RegisterUserRequest(BaseModel):
    """Register User schema (REQUEST)"""

    email: str = Field(
        ..., max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
    )
    password: str
    display_name: Optional[str] = Field(None, max_length=100)
    referral_code: Optional[str] = Field(None, max_length=16)


class UserAuthTokenRequest(BaseModel):
    """Create Auth Token schema (REQUEST)"""

    email: str
    password: str
    valid_duration: Optional[int] = Field(
        None, ge=0, le=259200
    )  # The maximum valid duration shall be 3 days.


############################
# RESPONSE
############################
class UserResponse(BaseModel):
    """User schema (RESPONSE)"""

    id: str
    email: str
    display_name: Optional[str]
    phone: Optional[str]
    avatar_url: Optional[str]
    referral_code: Optional[str]
    roles: list[UserRoleType]
    created: Optional[str]


class UserAuthTokenResponse(BaseModel):
    """Auth Token schema (RESPONSE)"""

    auth_token: str
    usage_start: str
    valid_duration: int


class AdminVerifyResponse(BaseModel):
    """Admin Verification schema (RESPONSE)"""

    is_admin: bool
    user_id: str
