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

import uuid
from typing import Annotated, Optional, Sequence

from fastapi import APIRouter, Header, Query, Request
from sqlalchemy import desc, func, or_, select

from app.database import DBAsyncSession
from app.exceptions import AuthorizationError
from app.model.db import ReviewStatus, ScamReport
from app.model.schema import (
    CreateScamReportRequest,
    CreateScamReportResponse,
    ListScamReportsQuery,
    ListScamReportsResponse,
)
from app.utils.check_utils import check_auth
from app.utils.docs_utils import get_routers_responses
from app.utils.fastapi_utils import json_response, to_local_isoformat

router = APIRouter(tags=["scam_report"])


# GET: /scam_reports
@router.get(
    "/scam_reports",
    operation_id="ListScamReports",
    response_model=ListScamReportsResponse,
    responses=get_routers_responses(422),
)
async def list_scam_reports(
    db: DBAsyncSession,
    get_query: Annotated[ListScamReportsQuery, Query()],
):
    """List approved scam reports"""
    stmt = select(ScamReport).where(ScamReport.status == ReviewStatus.APPROVED)
    total = await db.scalar(select(func.count()).select_from(stmt.subquery()))

    # Search Filter
    if get_query.severity is not None:
        stmt = stmt.where(ScamReport.severity == get_query.severity)
    if get_query.keyword is not None:
        keyword = f"%{get_query.keyword}%"
        stmt = stmt.where(
            or_(
                ScamReport.title.like(keyword),
                ScamReport.scammer_name.like(keyword),
                ScamReport.scammer_contact.like(keyword),
            )
        )

    count = await db.scalar(select(func.count()).select_from(stmt.subquery()))

    # Sort
    stmt = stmt.order_by(desc(ScamReport.created), desc(ScamReport.id))

    # Pagination
    if get_query.limit is not None:
        stmt = stmt.limit(get_query.limit)
    if get_query.offset is not None:
        stmt = stmt.offset(get_query.offset)

    _reports: Sequence[ScamReport] = (await db.scalars(stmt)).all()

    resp = {
        "result_set": {
            "count": count,
            "offset": get_query.offset,
            "limit": get_query.limit,
            "total": total,
        },
        "scam_reports": [
            {**_report.json(), "created": to_local_isoformat(_report.created)}
            for _report in _reports
        ],
    }

    return json_response(resp)


# POST: /scam_reports
@router.post(
    "/scam_reports",
    operation_id="CreateScamReport",
    response_model=CreateScamReportResponse,
    responses=get_routers_responses(422, AuthorizationError),
)
async def create_scam_report(
    db: DBAsyncSession,
    request: Request,
    data: CreateScamReportRequest,
    authorization: Optional[str] = Header(None),
):
    """Submit a scam report

    The report is published after an administrator approves it.
    """
    user = await check_auth(request=request, db=db, authorization=authorization)

    _report = ScamReport()
    _report.id = str(uuid.uuid4())
    _report.title = data.title
    _report.description = data.description
    _report.scammer_name = data.scammer_name
    _report.scammer_contact = data.scammer_contact
    _report.severity = data.severity
    _report.evidence_urls = data.evidence_urls or []
    _report.status = ReviewStatus.PENDING
    _report.created_by = user.id
    db.add(_report)

    resp = {"id": _report.id, "status": ReviewStatus.PENDING}
    await db.commit()

    return json_response(resp)
