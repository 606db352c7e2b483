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

from app.model.schema.base import BasePaginationQuery, ResultSet


############################
# COMMON
############################
class ProductSummary(BaseModel):
    id: str
    seller_id: Optional[str]
    title: str
    description: Optional[str]
    category: str
    price: int = Field(..., description="Price (VND)")
    coin_price: int = Field(..., description="Price (coin)")
    original_price: Optional[int]
    image_url: Optional[str]
    badge: Optional[str]
    tech_stack: list[str]
    is_free: bool
    sales: int
    created: str


class GameAccountSummary(BaseModel):
    id: str
    seller_id: Optional[str]
    title: str
    description: Optional[str]
    platform: str
    account_type: str
    category: Optional[str]
    price: int = Field(..., description="Price (VND)")
    coin_price: int = Field(..., description="Price (coin)")
    image_url: Optional[str]
    features: list[str]
    is_free: bool
    is_sold: bool
    created: str


############################
# REQUEST
############################
class ListProductsQuery(BasePaginationQuery):
    category: Optional[str] = Field(None, description="Category")
    is_free: Optional[bool] = Field(None, description="Free item only")


class ListGameAccountsQuery(BasePaginationQuery):
    platform: Optional[str] = Field(None, description="Game platform")
    category: Optional[str] = Field(None, description="Category")
    include_sold: bool = Field(False, description="Include sold accounts")


############################
# RESPONSE
############################
class ListProductsResponse(BaseModel):
    """List products schema (RESPONSE)"""

    result_set: ResultSet
    products: list[ProductSummary]


class ListGameAccountsResponse(BaseModel):
    """List game accounts schema (RESPONSE)"""

    result_set: ResultSet
    accounts: list[GameAccountSummary]
