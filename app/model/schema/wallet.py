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

from app.model.db import CoinHistoryType
from app.model.schema.base import BasePaginationQuery, ResultSet


############################
# COMMON
############################
class CoinHistoryEntry(BaseModel):
    id: str
    amount: int
    type: CoinHistoryType
    description: Optional[str]
    reference_id: Optional[str]
    created: str


############################
# REQUEST
############################
class ListCoinHistoryQuery(BasePaginationQuery):
    type: Optional[CoinHistoryType] = Field(None, description="History type")


############################
# RESPONSE
############################
class WalletResponse(BaseModel):
    """Coin wallet schema (RESPONSE)"""

    balance: int


class ListCoinHistoryResponse(BaseModel):
    """List coin history schema (RESPONSE)"""

    result_set: ResultSet
    history: list[CoinHistoryEntry]
