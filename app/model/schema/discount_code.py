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
from typing import Optional

from pydantic import BaseModel, Field, NonNegativeInt, PositiveInt

from app.model.db import DiscountType
from app.model.schema.base import BasePaginationQuery, ResultSet


############################
# COMMON
############################
class DiscountCodeDetail(BaseModel):
    id: str
    code: str
    discount_type: DiscountType
    discount_amount: int
    min_order_amount: int
    max_uses: Optional[int]
    used_count: int
    expires_at: Optional[str]
    is_active: bool
    created: str


############################
# REQUEST
############################
class CheckDiscountCodeRequest(BaseModel):
    """Check Discount Code schema (REQUEST)"""

    code: str = Field(..., min_length=1, max_length=50)
    order_amount: NonNegativeInt = Field(..., description="Order amount (coin)")


class CreateDiscountCodeRequest(BaseModel):
    """Create Discount Code schema (REQUEST)"""

    code: str = Field(..., min_length=1, max_length=50)
    discount_type: DiscountType
    discount_amount: PositiveInt
    min_order_amount: NonNegativeInt = 0
    max_uses: Optional[PositiveInt] = None
    expires_at: Optional[datetime] = Field(
        None, description="Expiration datetime (ISO 8601, naive values are UTC)"
    )


class ListDiscountCodesQuery(BasePaginationQuery):
    is_active: Optional[bool] = Field(None, description="Enabled flag")


############################
# RESPONSE
############################
class CheckDiscountCodeResponse(BaseModel):
    """Check Discount Code schema (RESPONSE)"""

    code_id: str
    code: str
    discount_type: DiscountType
    discount: int = Field(..., description="Discount (coin)")
    final_amount: int = Field(..., description="Order amount after discount (coin)")


class ListDiscountCodesResponse(BaseModel):
    """List discount codes schema (RESPONSE)"""

    result_set: ResultSet
    discount_codes: list[DiscountCodeDetail]
