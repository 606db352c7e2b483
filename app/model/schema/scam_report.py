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

from app.model.db import ReviewStatus, ScamSeverity
from app.model.schema.base import BasePaginationQuery, ResultSet


############################
# COMMON
############################
class ScamReportDetail(BaseModel):
    id: str
    title: str
    description: str
    scammer_name: Optional[str]
    scammer_contact: Optional[str]
    severity: ScamSeverity
    evidence_urls: list[str]
    status: ReviewStatus
    created: str


############################
# REQUEST
############################
class CreateScamReportRequest(BaseModel):
    """Create Scam Report schema (REQUEST)"""

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    scammer_name: Optional[str] = Field(None, max_length=100)
    scammer_contact: Optional[str] = Field(None, max_length=200)
    severity: ScamSeverity = ScamSeverity.MEDIUM
    evidence_urls: Optional[list[str]] = Field(None, max_length=10)


class ListScamReportsQuery(BasePaginationQuery):
    severity: Optional[ScamSeverity] = Field(None, description="Severity")
    keyword: Optional[str] = Field(
        None, description="Search keyword (title, scammer name, scammer contact)"
    )


############################
# RESPONSE
############################
class ListScamReportsResponse(BaseModel):
    """List scam reports schema (RESPONSE)"""

    result_set: ResultSet
    scam_reports: list[ScamReportDetail]


class CreateScamReportResponse(BaseModel):
    """Create Scam Report schema (RESPONSE)"""

    id: str
    status: ReviewStatus
