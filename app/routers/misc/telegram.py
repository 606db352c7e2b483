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

from fastapi import APIRouter, Header, Request
from fastapi.exceptions import HTTPException

from app import log
from app.database import DBAsyncSession
from app.exceptions import (
    AuthorizationError,
    InsufficientBalanceError,
    ReviewAlreadyProcessedError,
)
from app.model.schema import TelegramUpdate, TelegramWebhookResponse
from app.utils import review_utils
from app.utils.docs_utils import get_routers_responses
from app.utils.fastapi_utils import json_response
from app.utils.outbound_utils import enqueue_telegram
from app.utils.telegram_utils import (
    ADMIN_NOTE_APPROVED,
    ADMIN_NOTE_REJECTED,
    CallbackAction,
    TelegramMessageType,
    coin_purchase_approved_text,
    coin_purchase_rejected_text,
    parse_callback_data,
    withdrawal_approved_text,
    withdrawal_rejected_text,
)
from config import TELEGRAM_WEBHOOK_SECRET

router = APIRouter(prefix="/telegram", tags=["telegram"])

LOG = log.get_logger()


# POST: /telegram/webhook
@router.post(
    "/webhook",
    operation_id="ReceiveTelegramUpdate",
    response_model=TelegramWebhookResponse,
    responses=get_routers_responses(422, AuthorizationError),
)
async def receive_telegram_update(
    db: DBAsyncSession,
    request: Request,
    update: TelegramUpdate,
    x_telegram_bot_api_secret_token: Optional[str] = Header(None),
):
    """Receive an update from the Telegram bot

    Approve/Reject buttons attached to coin purchase and withdrawal
    notifications are handled here.
    The response is always `{"ok": true}` so that Telegram does not retry.
    """
    if (
        TELEGRAM_WEBHOOK_SECRET is not None
        and x_telegram_bot_api_secret_token != TELEGRAM_WEBHOOK_SECRET
    ):
        log.auth_error(request, None, "invalid telegram webhook secret token")
        raise AuthorizationError("invalid secret token")

    callback_query = update.callback_query
    if callback_query is None:
        return json_response({"ok": True})

    enqueue_telegram(
        db=db,
        message_type=TelegramMessageType.ANSWER_CALLBACK,
        payload={"callback_query_id": callback_query.id},
    )
    await db.commit()

    parsed = parse_callback_data(callback_query.data)
    if parsed is None:
        LOG.warning(f"Unknown callback data: {callback_query.data}")
        return json_response({"ok": True})

    action, item_id = parsed
    try:
        text = await __process_callback(db=db, action=action, item_id=item_id)
    except ReviewAlreadyProcessedError:
        text = "⚠️ Yêu cầu này đã được xử lý trước đó"
    except InsufficientBalanceError:
        text = "❌ Số dư của seller không đủ để duyệt yêu cầu rút tiền này!"
    except HTTPException:
        text = "❌ Không tìm thấy yêu cầu này!"
    except Exception as err:
        LOG.exception(err)
        await db.rollback()
        text = "❌ Lỗi khi xử lý yêu cầu"

    if callback_query.message is not None:
        enqueue_telegram(
            db=db,
            message_type=TelegramMessageType.EDIT_MESSAGE,
            payload={
                "chat_id": callback_query.message.chat.id,
                "message_id": callback_query.message.message_id,
                "text": text,
            },
        )
    await db.commit()

    return json_response({"ok": True})


async def __process_callback(
    db: DBAsyncSession, action: CallbackAction, item_id: str
) -> str:
    """Run the review transition and return the text shown on the admin chat"""
    if action == CallbackAction.APPROVE_COIN:
        _purchase = await review_utils.approve_coin_purchase(
            db, item_id, admin_note=ADMIN_NOTE_APPROVED
        )
        LOG.info(f"Coin purchase approved via telegram: id={item_id}")
        return coin_purchase_approved_text(_purchase.amount)
    elif action == CallbackAction.REJECT_COIN:
        _purchase = await review_utils.reject_coin_purchase(
            db, item_id, admin_note=ADMIN_NOTE_REJECTED
        )
        LOG.info(f"Coin purchase rejected via telegram: id={item_id}")
        return coin_purchase_rejected_text(_purchase.amount)
    elif action == CallbackAction.APPROVE_WITHDRAWAL:
        _withdrawal = await review_utils.approve_withdrawal(
            db, item_id, admin_note=ADMIN_NOTE_APPROVED
        )
        LOG.info(f"Withdrawal approved via telegram: id={item_id}")
        return withdrawal_approved_text(
            _withdrawal.amount, _withdrawal.bank_name, _withdrawal.bank_account_number
        )
    else:
        _withdrawal = await review_utils.reject_withdrawal(
            db, item_id, admin_note=ADMIN_NOTE_REJECTED
        )
        LOG.info(f"Withdrawal rejected via telegram: id={item_id}")
        return withdrawal_rejected_text(_withdrawal.amount)
