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

from enum import StrEnum
from typing import Optional

from pydantic import BaseModel, Field

from app.model.db import ReviewStatus
from app.model.schema.base import BasePaginationQuery, ResultSet


class ReviewTarget(StrEnum):
    """Kind of request reviewed by administrators"""

    COIN_PURCHASES = "coin_purchases"
    WITHDRAWALS = "withdrawals"
    BOT_RENTAL_REQUESTS = "bot_rental_requests"
    SCAM_REPORTS = "scam_reports"


############################
# REQUEST
############################
class ListReviewItemsQuery(BasePaginationQuery):
    status: Optional[ReviewStatus] = Field(None, description="Review status")


class ReviewDecisionRequest(BaseModel):
    """Approve/Reject schema (REQUEST)"""

    admin_note: Optional[str] = Field(None, max_length=1000)


############################
# RESPONSE
############################
class ReviewItem(BaseModel):
    id: str
    requester_id: Optional[str] = Field(
        ..., description="User id or seller id of the requester"
    )
    amount: Optional[int]
    status: ReviewStatus
    admin_note: Optional[str]
    detail: dict
    created: str


class ListReviewItemsResponse(BaseModel):
    """List review items schema (RESPONSE)"""

    result_set: ResultSet
    items: list[ReviewItem]


class ReviewDecisionResponse(BaseModel):
    """Approve/Reject schema (RESPONSE)"""

    id: str
    status: ReviewStatus
