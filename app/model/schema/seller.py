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

from pydantic import BaseModel, Field, PositiveInt

from app.model.db import ReviewStatus
from app.model.schema.base import ResultSet


############################
# COMMON
############################
class SellerProfile(BaseModel):
    id: str
    user_id: str
    display_name: str
    phone: Optional[str]
    description: Optional[str]
    avatar_url: Optional[str]
    bank_name: Optional[str]
    bank_account_number: Optional[str]
    bank_account_name: Optional[str]
    bank_qr_url: Optional[str]
    is_verified: bool
    is_profile_complete: bool


class Withdrawal(BaseModel):
    id: str
    seller_id: str
    amount: int
    bank_name: Optional[str]
    bank_account_number: Optional[str]
    bank_account_name: Optional[str]
    bank_qr_url: Optional[str]
    status: ReviewStatus
    admin_note: Optional[str]
    processed_at: Optional[str]
    created: str


############################
# REQUEST
############################
class RegisterSellerRequest(BaseModel):
    """Register Seller schema (REQUEST)"""

    display_name: str = Field(..., min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=20)
    description: Optional[str] = Field(None, max_length=2000)
    avatar_url: Optional[str] = Field(None, max_length=2000)
    bank_name: Optional[str] = Field(None, max_length=100)
    bank_account_number: Optional[str] = Field(None, max_length=50)
    bank_account_name: Optional[str] = Field(None, max_length=100)
    bank_qr_url: Optional[str] = Field(None, max_length=2000)


class UpdateSellerRequest(BaseModel):
    """Update Seller schema (REQUEST)"""

    display_name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=20)
    description: Optional[str] = Field(None, max_length=2000)
    avatar_url: Optional[str] = Field(None, max_length=2000)
    bank_name: Optional[str] = Field(None, max_length=100)
    bank_account_number: Optional[str] = Field(None, max_length=50)
    bank_account_name: Optional[str] = Field(None, max_length=100)
    bank_qr_url: Optional[str] = Field(None, max_length=2000)


class UploadGameAccountRequest(BaseModel):
    """Upload Game Account schema (REQUEST)"""

    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    platform: str = Field(..., max_length=50)
    account_type: str = Field(..., max_length=50)
    category: Optional[str] = Field(None, max_length=50)
    price: int = Field(..., ge=0, description="Price (VND)")
    image_url: Optional[str] = Field(None, max_length=2000)
    features: Optional[list[str]] = None
    is_free: bool = False
    login_email: Optional[str] = Field(None, max_length=255)
    login_username: Optional[str] = Field(None, max_length=255)
    login_phone: Optional[str] = Field(None, max_length=20)
    login_password: Optional[str] = Field(None, max_length=255)
    additional_info: Optional[str] = None


class UploadProductRequest(BaseModel):
    """Upload Product schema (REQUEST)"""

    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    category: str = Field(..., max_length=50)
    price: int = Field(..., ge=0, description="Price (VND)")
    original_price: Optional[int] = Field(None, ge=0)
    image_url: Optional[str] = Field(None, max_length=2000)
    download_url: Optional[str] = Field(None, max_length=2000)
    tech_stack: Optional[list[str]] = None
    is_free: bool = False


class CreateWithdrawalRequest(BaseModel):
    """Create Withdrawal schema (REQUEST)"""

    amount: PositiveInt
    bank_name: Optional[str] = Field(None, max_length=100)
    bank_account_number: Optional[str] = Field(None, max_length=50)
    bank_account_name: Optional[str] = Field(None, max_length=100)
    bank_qr_url: Optional[str] = Field(None, max_length=2000)


############################
# RESPONSE
############################
class SellerWalletResponse(BaseModel):
    """Seller wallet schema (RESPONSE)"""

    balance: int
    total_earned: int


class UploadItemResponse(BaseModel):
    """Upload item schema (RESPONSE)"""

    id: str


class ListWithdrawalsResponse(BaseModel):
    """List withdrawals schema (RESPONSE)"""

    result_set: ResultSet
    withdrawals: list[Withdrawal]
