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
class CoinPurchaseRequestDetail(BaseModel):
    id: str
    user_id: str
    amount: int
    receipt_url: Optional[str]
    status: ReviewStatus
    admin_note: Optional[str]
    approved_at: Optional[str]
    created: str


############################
# REQUEST
############################
class CreateCoinPurchaseRequest(BaseModel):
    """Create Coin Purchase schema (REQUEST)"""

    amount: PositiveInt = Field(..., description="Amount of coins")
    receipt_url: str = Field(..., min_length=1, max_length=2000)


############################
# RESPONSE
############################
class ListCoinPurchasesResponse(BaseModel):
    """List coin purchases schema (RESPONSE)"""

    result_set: ResultSet
    coin_purchases: list[CoinPurchaseRequestDetail]
