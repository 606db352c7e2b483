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

from typing import Type

from fastapi import HTTPException
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import InsufficientBalanceError, ReviewAlreadyProcessedError
from app.model.db import (
    BotRental,
    BotRentalRequest,
    CoinHistoryType,
    CoinPurchase,
    NotificationType,
    ReviewStatus,
    ScamReport,
    Seller,
    WithdrawalRequest,
)
from app.model.db.base import naive_utcnow
from app.utils.coin_utils import add_coin_history, credit_user_coin, debit_seller_coin
from app.utils.notification_utils import add_notification
from app.utils.telegram_utils import format_number

ReviewModel = Type[CoinPurchase | WithdrawalRequest | BotRentalRequest | ScamReport]


async def transition_review_status(
    db: AsyncSession,
    model: ReviewModel,
    item_id: str,
    new_status: ReviewStatus,
    admin_note: str | None = None,
    reviewer_id: str | None = None,
) -> None:
    """Move a pending request to approved or rejected

    The update is applied only while the request is pending,
    so a request is processed at most once.

    :raises ReviewAlreadyProcessedError: the request is not pending
    """
    values = {
        "status": new_status,
        "admin_note": admin_note,
        "modified": naive_utcnow(),
    }
    if model is CoinPurchase:
        values["approved_by"] = reviewer_id
        values["approved_at"] = naive_utcnow()
    elif model is WithdrawalRequest:
        values["processed_by"] = reviewer_id
        values["processed_at"] = naive_utcnow()
    elif model is ScamReport:
        values["reviewed_by"] = reviewer_id

    result = await db.execute(
        update(model)
        .where(model.id == item_id, model.status == ReviewStatus.PENDING)
        .values(**values)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        raise ReviewAlreadyProcessedError("this request has already been processed")


async def get_review_item(db: AsyncSession, model: ReviewModel, item_id: str):
    _item = (await db.scalars(select(model).where(model.id == item_id).limit(1))).first()
    if _item is None:
        raise HTTPException(status_code=404, detail="request does not exist")
    return _item


############################
# Coin purchase
############################
async def approve_coin_purchase(
    db: AsyncSession,
    purchase_id: str,
    reviewer_id: str | None = None,
    admin_note: str | None = None,
) -> CoinPurchase:
    _purchase: CoinPurchase = await get_review_item(db, CoinPurchase, purchase_id)
    await transition_review_status(
        db=db,
        model=CoinPurchase,
        item_id=purchase_id,
        new_status=ReviewStatus.APPROVED,
        admin_note=admin_note,
        reviewer_id=reviewer_id,
    )
    await credit_user_coin(db, _purchase.user_id, _purchase.amount)
    add_coin_history(
        db=db,
        user_id=_purchase.user_id,
        amount=_purchase.amount,
        history_type=CoinHistoryType.COIN_TOPUP,
        description=f"Nạp {format_number(_purchase.amount)} xu",
        reference_id=purchase_id,
    )
    add_notification(
        db=db,
        user_id=_purchase.user_id,
        title="✅ Nạp xu thành công!",
        message=f"Bạn đã được cộng {format_number(_purchase.amount)} xu vào tài khoản.",
        notice_type=NotificationType.COIN_APPROVED,
        reference_id=purchase_id,
    )
    await db.commit()
    return _purchase


async def reject_coin_purchase(
    db: AsyncSession,
    purchase_id: str,
    reviewer_id: str | None = None,
    admin_note: str | None = None,
) -> CoinPurchase:
    _purchase: CoinPurchase = await get_review_item(db, CoinPurchase, purchase_id)
    await transition_review_status(
        db=db,
        model=CoinPurchase,
        item_id=purchase_id,
        new_status=ReviewStatus.REJECTED,
        admin_note=admin_note,
        reviewer_id=reviewer_id,
    )
    add_notification(
        db=db,
        user_id=_purchase.user_id,
        title="❌ Yêu cầu nạp xu bị từ chối",
        message=f"Yêu cầu nạp {format_number(_purchase.amount)} xu đã bị từ chối. "
        "Vui lòng liên hệ Admin để biết thêm chi tiết.",
        notice_type=NotificationType.COIN_REJECTED,
        reference_id=purchase_id,
    )
    await db.commit()
    return _purchase


############################
# Withdrawal
############################
async def approve_withdrawal(
    db: AsyncSession,
    withdrawal_id: str,
    reviewer_id: str | None = None,
    admin_note: str | None = None,
) -> WithdrawalRequest:
    _withdrawal: WithdrawalRequest = await get_review_item(
        db, WithdrawalRequest, withdrawal_id
    )
    await transition_review_status(
        db=db,
        model=WithdrawalRequest,
        item_id=withdrawal_id,
        new_status=ReviewStatus.APPROVED,
        admin_note=admin_note,
        reviewer_id=reviewer_id,
    )
    if not await debit_seller_coin(db, _withdrawal.seller_id, _withdrawal.amount):
        await db.rollback()
        raise InsufficientBalanceError(
            "seller balance does not cover the withdrawal amount"
        )

    seller_user_id = await __get_seller_user_id(db, _withdrawal.seller_id)
    if seller_user_id is not None:
        add_notification(
            db=db,
            user_id=seller_user_id,
            title="✅ Rút tiền thành công!",
            message=f"Yêu cầu rút {format_number(_withdrawal.amount)} xu đã được duyệt. "
            "Tiền sẽ được chuyển vào tài khoản của bạn.",
            notice_type=NotificationType.WITHDRAWAL_APPROVED,
            reference_id=withdrawal_id,
        )
    await db.commit()
    return _withdrawal


async def reject_withdrawal(
    db: AsyncSession,
    withdrawal_id: str,
    reviewer_id: str | None = None,
    admin_note: str | None = None,
) -> WithdrawalRequest:
    _withdrawal: WithdrawalRequest = await get_review_item(
        db, WithdrawalRequest, withdrawal_id
    )
    await transition_review_status(
        db=db,
        model=WithdrawalRequest,
        item_id=withdrawal_id,
        new_status=ReviewStatus.REJECTED,
        admin_note=admin_note,
        reviewer_id=reviewer_id,
    )
    seller_user_id = await __get_seller_user_id(db, _withdrawal.seller_id)
    if seller_user_id is not None:
        add_notification(
            db=db,
            user_id=seller_user_id,
            title="❌ Yêu cầu rút tiền bị từ chối",
            message=f"Yêu cầu rút {format_number(_withdrawal.amount)} xu đã bị từ chối. "
            "Vui lòng liên hệ Admin để biết thêm chi tiết.",
            notice_type=NotificationType.WITHDRAWAL_REJECTED,
            reference_id=withdrawal_id,
        )
    await db.commit()
    return _withdrawal


############################
# Bot rental request
############################
async def approve_bot_rental_request(
    db: AsyncSession,
    request_id: str,
    reviewer_id: str | None = None,
    admin_note: str | None = None,
) -> BotRentalRequest:
    return await __review_bot_rental_request(
        db, request_id, ReviewStatus.APPROVED, reviewer_id, admin_note
    )


async def reject_bot_rental_request(
    db: AsyncSession,
    request_id: str,
    reviewer_id: str | None = None,
    admin_note: str | None = None,
) -> BotRentalRequest:
    return await __review_bot_rental_request(
        db, request_id, ReviewStatus.REJECTED, reviewer_id, admin_note
    )


async def __review_bot_rental_request(
    db: AsyncSession,
    request_id: str,
    new_status: ReviewStatus,
    reviewer_id: str | None,
    admin_note: str | None,
) -> BotRentalRequest:
    _request: BotRentalRequest = await get_review_item(
        db, BotRentalRequest, request_id
    )
    await transition_review_status(
        db=db,
        model=BotRentalRequest,
        item_id=request_id,
        new_status=new_status,
        admin_note=admin_note,
        reviewer_id=reviewer_id,
    )
    bot_name = (
        await db.scalars(
            select(BotRental.name).where(BotRental.id == _request.bot_id).limit(1)
        )
    ).first() or "Bot Zalo"
    if new_status == ReviewStatus.APPROVED:
        add_notification(
            db=db,
            user_id=_request.user_id,
            title="✅ Thuê bot thành công!",
            message=f'Yêu cầu thuê "{bot_name}" đã được duyệt. '
            "Admin sẽ liên hệ với bạn qua Zalo.",
            notice_type=NotificationType.BOT_RENTAL_APPROVED,
            reference_id=request_id,
        )
    else:
        add_notification(
            db=db,
            user_id=_request.user_id,
            title="❌ Yêu cầu thuê bot bị từ chối",
            message=f'Yêu cầu thuê "{bot_name}" đã bị từ chối. '
            "Vui lòng liên hệ Admin để biết thêm chi tiết.",
            notice_type=NotificationType.BOT_RENTAL_REJECTED,
            reference_id=request_id,
        )
    await db.commit()
    return _request


############################
# Scam report
############################
async def approve_scam_report(
    db: AsyncSession,
    report_id: str,
    reviewer_id: str | None = None,
    admin_note: str | None = None,
) -> ScamReport:
    return await __review_scam_report(
        db, report_id, ReviewStatus.APPROVED, reviewer_id, admin_note
    )


async def reject_scam_report(
    db: AsyncSession,
    report_id: str,
    reviewer_id: str | None = None,
    admin_note: str | None = None,
) -> ScamReport:
    return await __review_scam_report(
        db, report_id, ReviewStatus.REJECTED, reviewer_id, admin_note
    )


async def __review_scam_report(
    db: AsyncSession,
    report_id: str,
    new_status: ReviewStatus,
    reviewer_id: str | None,
    admin_note: str | None,
) -> ScamReport:
    _report: ScamReport = await get_review_item(db, ScamReport, report_id)
    await transition_review_status(
        db=db,
        model=ScamReport,
        item_id=report_id,
        new_status=new_status,
        admin_note=admin_note,
        reviewer_id=reviewer_id,
    )
    if _report.created_by is not None:
        if new_status == ReviewStatus.APPROVED:
            add_notification(
                db=db,
                user_id=_report.created_by,
                title="✅ Báo cáo lừa đảo đã được duyệt",
                message=f'Báo cáo "{_report.title}" đã được công khai. '
                "Cảm ơn bạn đã cảnh báo cộng đồng!",
                notice_type=NotificationType.SCAM_REPORT_APPROVED,
                reference_id=report_id,
            )
        else:
            add_notification(
                db=db,
                user_id=_report.created_by,
                title="❌ Báo cáo lừa đảo bị từ chối",
                message=f'Báo cáo "{_report.title}" chưa đủ bằng chứng để công khai.',
                notice_type=NotificationType.SCAM_REPORT_REJECTED,
                reference_id=report_id,
            )
    await db.commit()
    return _report


async def __get_seller_user_id(db: AsyncSession, seller_id: str) -> str | None:
    return (
        await db.scalars(select(Seller.user_id).where(Seller.id == seller_id).limit(1))
    ).first()
