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

from app.model.db import OrderStatus, OrderType
from app.model.schema.base import BasePaginationQuery, ResultSet


############################
# COMMON
############################
class OrderSummary(BaseModel):
    id: str
    buyer_id: str
    seller_id: Optional[str]
    account_id: Optional[str]
    product_id: Optional[str]
    amount: int
    order_type: OrderType
    status: OrderStatus
    created: str


class LoginCredentials(BaseModel):
    email: Optional[str]
    username: Optional[str]
    phone: Optional[str]
    password: Optional[str]
    additional_info: Optional[str]


############################
# REQUEST
############################
class PurchaseWithCoinsRequest(BaseModel):
    """Purchase With Coins schema (REQUEST)"""

    # NOTE: Values are checked in the handler after authentication
    required_coins: Optional[int] = Field(None, description="Coin price of the item")
    account_id: Optional[str] = Field(None, description="Game account id")
    product_id: Optional[str] = Field(None, description="Product id")


class ListOrdersQuery(BasePaginationQuery):
    pass


############################
# RESPONSE
############################
class PurchaseWithCoinsResponse(BaseModel):
    """Purchase With Coins schema (RESPONSE)"""

    order: OrderSummary
    new_balance: int
    message: str


class ListOrdersResponse(BaseModel):
    """List orders schema (RESPONSE)"""

    result_set: ResultSet
    orders: list[OrderSummary]


class OrderResponse(OrderSummary):
    """Order schema (RESPONSE)"""

    login_credentials: Optional[LoginCredentials] = Field(
        None, description="Login credentials of the purchased game account"
    )
    download_url: Optional[str] = Field(
        None, description="Download url of the purchased product"
    )
