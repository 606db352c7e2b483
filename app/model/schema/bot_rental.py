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

from pydantic import BaseModel, Field, NonNegativeInt

from app.model.db import ReviewStatus
from app.model.schema.base import ResultSet


############################
# COMMON
############################
class BotRentalOffer(BaseModel):
    id: str
    name: str
    description: Optional[str]
    icon: Optional[str]
    price: int = Field(..., description="Rental price (VND)")
    duration: Optional[str]
    features: list[str]
    zalo_number: Optional[str]
    is_active: bool
    sort_order: int


class BotRentalRequestDetail(BaseModel):
    id: str
    bot_id: str
    user_id: str
    receipt_url: Optional[str]
    status: ReviewStatus
    admin_note: Optional[str]
    created: str


############################
# REQUEST
############################
class CreateBotRentalRequest(BaseModel):
    """Create Bot Rental Request schema (REQUEST)"""

    receipt_url: str = Field(..., min_length=1, max_length=2000)


class CreateBotRentalOfferRequest(BaseModel):
    """Create Bot Rental Offer schema (REQUEST)"""

    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=2000)
    icon: Optional[str] = Field(None, max_length=50)
    price: NonNegativeInt
    duration: Optional[str] = Field(None, max_length=50)
    features: Optional[list[str]] = None
    zalo_number: Optional[str] = Field(None, max_length=20)
    is_active: bool = True
    sort_order: int = 0


class UpdateBotRentalOfferRequest(BaseModel):
    """Update Bot Rental Offer schema (REQUEST)"""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=2000)
    icon: Optional[str] = Field(None, max_length=50)
    price: Optional[NonNegativeInt] = None
    duration: Optional[str] = Field(None, max_length=50)
    features: Optional[list[str]] = None
    zalo_number: Optional[str] = Field(None, max_length=20)
    is_active: Optional[bool] = None
    sort_order: Optional[int] = None


############################
# RESPONSE
############################
class ListBotRentalOffersResponse(BaseModel):
    """List bot rental offers schema (RESPONSE)"""

    bots: list[BotRentalOffer]


class ListBotRentalRequestsResponse(BaseModel):
    """List bot rental requests schema (RESPONSE)"""

    result_set: ResultSet
    requests: list[BotRentalRequestDetail]
