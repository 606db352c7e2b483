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

from typing import Annotated, Optional, Sequence

from fastapi import APIRouter, Header, Path, Query, Request
from sqlalchemy import desc, func, select

from app import log
from app.database import DBAsyncSession
from app.exceptions import (
    AuthorizationError,
    InsufficientBalanceError,
    PermissionDeniedError,
    ReviewAlreadyProcessedError,
)
from app.model.db import (
    BotRentalRequest,
    CoinPurchase,
    ReviewStatus,
    ScamReport,
    WithdrawalRequest,
)
from app.model.schema import (
    AdminVerifyResponse,
    ListReviewItemsQuery,
    ListReviewItemsResponse,
    ReviewDecisionRequest,
    ReviewDecisionResponse,
    ReviewTarget,
)
from app.utils import review_utils
from app.utils.check_utils import check_admin
from app.utils.docs_utils import get_routers_responses
from app.utils.fastapi_utils import json_response, to_local_isoformat

router = APIRouter(prefix="/admin", tags=["admin"])

LOG = log.get_logger()

# target -> (model, approve, reject)
REVIEW_TARGETS = {
    ReviewTarget.COIN_PURCHASES: (
        CoinPurchase,
        review_utils.approve_coin_purchase,
        review_utils.reject_coin_purchase,
    ),
    ReviewTarget.WITHDRAWALS: (
        WithdrawalRequest,
        review_utils.approve_withdrawal,
        review_utils.reject_withdrawal,
    ),
    ReviewTarget.BOT_RENTAL_REQUESTS: (
        BotRentalRequest,
        review_utils.approve_bot_rental_request,
        review_utils.reject_bot_rental_request,
    ),
    ReviewTarget.SCAM_REPORTS: (
        ScamReport,
        review_utils.approve_scam_report,
        review_utils.reject_scam_report,
    ),
}


# GET: /admin/verify
@router.get(
    "/verify",
    operation_id="VerifyAdmin",
    response_model=AdminVerifyResponse,
    responses=get_routers_responses(AuthorizationError, PermissionDeniedError),
)
async def verify_admin(
    db: DBAsyncSession,
    request: Request,
    authorization: Optional[str] = Header(None),
):
    """Verify that the caller is an administrator"""
    user = await check_admin(request=request, db=db, authorization=authorization)
    return json_response({"is_admin": True, "user_id": user.id})


# GET: /admin/{target}
@router.get(
    "/{target}",
    operation_id="ListReviewItems",
    response_model=ListReviewItemsResponse,
    responses=get_routers_responses(422, AuthorizationError, PermissionDeniedError),
)
async def list_review_items(
    db: DBAsyncSession,
    request: Request,
    target: Annotated[ReviewTarget, Path()],
    get_query: Annotated[ListReviewItemsQuery, Query()],
    authorization: Optional[str] = Header(None),
):
    """List requests waiting for (or finished with) administrator review"""
    await check_admin(request=request, db=db, authorization=authorization)
    model = REVIEW_TARGETS[target][0]

    stmt = select(model)
    total = await db.scalar(select(func.count()).select_from(stmt.subquery()))

    # Search Filter
    if get_query.status is not None:
        stmt = stmt.where(model.status == get_query.status)

    count = await db.scalar(select(func.count()).select_from(stmt.subquery()))

    # Sort
    stmt = stmt.order_by(desc(model.created), desc(model.id))

    # Pagination
    if get_query.limit is not None:
        stmt = stmt.limit(get_query.limit)
    if get_query.offset is not None:
        stmt = stmt.offset(get_query.offset)

    _items: Sequence = (await db.scalars(stmt)).all()

    resp = {
        "result_set": {
            "count": count,
            "offset": get_query.offset,
            "limit": get_query.limit,
            "total": total,
        },
        "items": [__review_item(target, _item) for _item in _items],
    }

    return json_response(resp)


# POST: /admin/{target}/{item_id}/approve
@router.post(
    "/{target}/{item_id}/approve",
    operation_id="ApproveReviewItem",
    response_model=ReviewDecisionResponse,
    responses=get_routers_responses(
        422,
        AuthorizationError,
        PermissionDeniedError,
        404,
        InsufficientBalanceError,
        ReviewAlreadyProcessedError,
    ),
)
async def approve_review_item(
    db: DBAsyncSession,
    request: Request,
    target: Annotated[ReviewTarget, Path()],
    item_id: Annotated[str, Path()],
    data: Optional[ReviewDecisionRequest] = None,
    authorization: Optional[str] = Header(None),
):
    """Approve a pending request

    - coin_purchases: credit coins to the user
    - withdrawals: deduct coins from the seller balance
    - bot_rental_requests, scam_reports: notify the requester
    """
    user = await check_admin(request=request, db=db, authorization=authorization)
    reviewer_id = user.id

    approve = REVIEW_TARGETS[target][1]
    await approve(
        db,
        item_id,
        reviewer_id=reviewer_id,
        admin_note=data.admin_note if data is not None else None,
    )
    LOG.info(f"{target} approved: id={item_id}, reviewer={reviewer_id}")

    return json_response({"id": item_id, "status": ReviewStatus.APPROVED})


# POST: /admin/{target}/{item_id}/reject
@router.post(
    "/{target}/{item_id}/reject",
    operation_id="RejectReviewItem",
    response_model=ReviewDecisionResponse,
    responses=get_routers_responses(
        422,
        AuthorizationError,
        PermissionDeniedError,
        404,
        ReviewAlreadyProcessedError,
    ),
)
async def reject_review_item(
    db: DBAsyncSession,
    request: Request,
    target: Annotated[ReviewTarget, Path()],
    item_id: Annotated[str, Path()],
    data: Optional[ReviewDecisionRequest] = None,
    authorization: Optional[str] = Header(None),
):
    """Reject a pending request"""
    user = await check_admin(request=request, db=db, authorization=authorization)
    reviewer_id = user.id

    reject = REVIEW_TARGETS[target][2]
    await reject(
        db,
        item_id,
        reviewer_id=reviewer_id,
        admin_note=data.admin_note if data is not None else None,
    )
    LOG.info(f"{target} rejected: id={item_id}, reviewer={reviewer_id}")

    return json_response({"id": item_id, "status": ReviewStatus.REJECTED})


def __review_item(target: ReviewTarget, _item):
    if target == ReviewTarget.COIN_PURCHASES:
        requester_id = _item.user_id
        amount = _item.amount
        detail = {
            "receipt_url": _item.receipt_url,
            "approved_by": _item.approved_by,
            "approved_at": to_local_isoformat(_item.approved_at),
        }
    elif target == ReviewTarget.WITHDRAWALS:
        requester_id = _item.seller_id
        amount = _item.amount
        detail = {
            "bank_name": _item.bank_name,
            "bank_account_number": _item.bank_account_number,
            "bank_account_name": _item.bank_account_name,
            "bank_qr_url": _item.bank_qr_url,
            "processed_by": _item.processed_by,
            "processed_at": to_local_isoformat(_item.processed_at),
        }
    elif target == ReviewTarget.BOT_RENTAL_REQUESTS:
        requester_id = _item.user_id
        amount = None
        detail = {"bot_id": _item.bot_id, "receipt_url": _item.receipt_url}
    else:
        requester_id = _item.created_by
        amount = None
        detail = _item.json()

    return {
        "id": _item.id,
        "requester_id": requester_id,
        "amount": amount,
        "status": _item.status,
        "admin_note": getattr(_item, "admin_note", None),
        "detail": detail,
        "created": to_local_isoformat(_item.created),
    }
