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

from datetime import datetime
from enum import StrEnum

import pytz

from config import COIN_UNIT_PRICE_VND, TZ

local_tz = pytz.timezone(TZ)

ADMIN_NOTE_APPROVED = "Duyệt qua Telegram Bot"
ADMIN_NOTE_REJECTED = "Từ chối qua Telegram Bot"


class TelegramMessageType(StrEnum):
    NEW_REGISTRATION = "new_registration"
    COIN_PURCHASE = "coin_purchase"
    PRODUCT_PURCHASE = "product_purchase"
    ACCOUNT_PURCHASE = "account_purchase"
    SELLER_UPLOAD = "seller_upload"
    SELLER_SALE = "seller_sale"
    WITHDRAWAL_REQUEST = "withdrawal_request"
    BOT_RENTAL = "bot_rental"
    ANSWER_CALLBACK = "answer_callback"
    EDIT_MESSAGE = "edit_message"


class CallbackAction(StrEnum):
    APPROVE_COIN = "approve_coin_"
    REJECT_COIN = "reject_coin_"
    APPROVE_WITHDRAWAL = "approve_withdrawal_"
    REJECT_WITHDRAWAL = "reject_withdrawal_"


def format_number(value: int | None) -> str:
    """Format an integer with "." as the thousands separator (vi-VN)"""
    return f"{value or 0:,}".replace(",", ".")


def format_local_datetime(value: str | None = None) -> str:
    """Format an ISO-8601 datetime in the local timezone

    The current time is used when the value is not given.
    """
    if value is None:
        dt = datetime.now(local_tz)
    else:
        dt = datetime.fromisoformat(value)
        if dt.tzinfo is None:
            dt = pytz.utc.localize(dt)
        dt = dt.astimezone(local_tz)
    return dt.strftime("%H:%M:%S %d/%m/%Y")


def short_id(value: str | None) -> str:
    return value[:8] if value else "N/A"


def parse_callback_data(data: str | None) -> tuple[CallbackAction, str] | None:
    """Split callback data into the action and the target id"""
    if not data:
        return None
    for action in CallbackAction:
        if data.startswith(action.value):
            item_id = data[len(action.value) :]
            if item_id:
                return action, item_id
    return None


def review_keyboard(
    approve_label: str, approve_action: CallbackAction, reject_action: CallbackAction, item_id: str
) -> dict:
    return {
        "inline_keyboard": [
            [
                {"text": approve_label, "callback_data": f"{approve_action}{item_id}"},
                {"text": "❌ Từ chối", "callback_data": f"{reject_action}{item_id}"},
            ]
        ]
    }


def render_message(message_type: str, payload: dict) -> tuple[str, str | None, dict | None]:
    """Render an admin notification

    :param message_type: TelegramMessageType
    :param payload: message payload
    :return: (text, photo url, reply markup)
    :raises ValueError: unknown message type
    """
    now = format_local_datetime(payload.get("occurred_at"))
    photo_url = None
    reply_markup = None

    if message_type == TelegramMessageType.NEW_REGISTRATION:
        text = (
            "🆕 *ĐĂNG KÝ MỚI*\n\n"
            f"👤 Tên: {payload.get('user_name') or 'Chưa đặt tên'}\n"
            f"📧 Email: {payload.get('user_email')}\n"
            f"🕐 Thời gian: {now}"
        )
    elif message_type == TelegramMessageType.COIN_PURCHASE:
        amount = payload.get("amount") or 0
        text = (
            "💰 *YÊU CẦU NẠP XU*\n\n"
            f"👤 Email: {payload.get('user_email')}\n"
            f"🪙 Số xu: {format_number(amount)} xu\n"
            f"💵 Số tiền: {format_number(amount * COIN_UNIT_PRICE_VND)} VNĐ\n"
            f"🕐 Thời gian: {now}"
        )
        photo_url = payload.get("receipt_url")
        if payload.get("purchase_id"):
            reply_markup = review_keyboard(
                "✅ Duyệt đơn",
                CallbackAction.APPROVE_COIN,
                CallbackAction.REJECT_COIN,
                payload["purchase_id"],
            )
    elif message_type in (
        TelegramMessageType.PRODUCT_PURCHASE,
        TelegramMessageType.ACCOUNT_PURCHASE,
    ):
        type_label = (
            "SẢN PHẨM"
            if message_type == TelegramMessageType.PRODUCT_PURCHASE
            else "TÀI KHOẢN"
        )
        text = (
            f"🛒 *MUA {type_label}*\n\n"
            f"👤 Email: {payload.get('user_email')}\n"
            f"📦 Sản phẩm: {payload.get('product_title') or 'Không rõ'}\n"
            f"🪙 Số xu: {format_number(payload.get('amount'))} xu\n"
            f"🆔 Mã đơn: `{short_id(payload.get('order_id'))}`\n"
            f"🕐 Thời gian: {now}"
        )
    elif message_type == TelegramMessageType.SELLER_UPLOAD:
        item_label = "SẢN PHẨM" if payload.get("item_type") == "product" else "TÀI KHOẢN"
        text = (
            f"📤 *SELLER UPLOAD {item_label}*\n\n"
            f"👤 Seller: {payload.get('seller_name') or 'Không rõ'}\n"
            f"📧 Email: {payload.get('user_email') or 'N/A'}\n"
            f"📦 Tên: {payload.get('product_title') or 'Không rõ'}\n"
            f"🪙 Giá: {format_number(payload.get('item_price'))} xu\n"
            f"🆔 ID: `{short_id(payload.get('item_id'))}`\n"
            f"🕐 Thời gian: {now}"
        )
    elif message_type == TelegramMessageType.SELLER_SALE:
        item_label = "SẢN PHẨM" if payload.get("item_type") == "product" else "TÀI KHOẢN"
        text = (
            f"💸 *BÁN {item_label} THÀNH CÔNG!*\n\n"
            f"👤 Người mua: {payload.get('buyer_email') or 'Ẩn danh'}\n"
            f"📦 Sản phẩm: {payload.get('product_title') or 'Không rõ'}\n"
            f"💰 Xu nhận được: +{format_number(payload.get('coins_earned'))} xu\n"
            f"📊 Phí hoa hồng: {payload.get('commission_fee') or 0} xu\n"
            f"🏦 Tổng thu nhập: {format_number(payload.get('total_earnings'))} xu\n"
            f"🆔 Mã đơn: `{short_id(payload.get('order_id'))}`\n"
            f"🕐 Thời gian: {now}"
        )
    elif message_type == TelegramMessageType.WITHDRAWAL_REQUEST:
        amount = payload.get("amount") or 0
        text = (
            "💳 *YÊU CẦU RÚT TIỀN*\n\n"
            f"👤 Seller: {payload.get('seller_name') or 'Không rõ'}\n"
            f"📧 Email: {payload.get('user_email') or 'N/A'}\n"
            f"🪙 Số xu: {format_number(amount)} xu\n"
            f"💵 Số tiền: {format_number(amount * COIN_UNIT_PRICE_VND)} VNĐ\n\n"
            "🏦 *THÔNG TIN NGÂN HÀNG:*\n"
            f"• Ngân hàng: {payload.get('bank_name') or 'N/A'}\n"
            f"• Chủ TK: {payload.get('bank_account_name') or 'N/A'}\n"
            f"• STK: `{payload.get('bank_account_number') or 'N/A'}`\n"
            f"🕐 Thời gian: {now}"
        )
        photo_url = payload.get("bank_qr_url")
        if payload.get("withdrawal_id"):
            reply_markup = review_keyboard(
                "✅ Duyệt rút tiền",
                CallbackAction.APPROVE_WITHDRAWAL,
                CallbackAction.REJECT_WITHDRAWAL,
                payload["withdrawal_id"],
            )
    elif message_type == TelegramMessageType.BOT_RENTAL:
        text = (
            "🤖 *YÊU CẦU THUÊ BOT ZALO*\n\n"
            f"👤 Email: {payload.get('user_email') or 'N/A'}\n"
            f"🤖 Bot: {payload.get('bot_name') or 'Không rõ'}\n"
            f"💵 Giá: {format_number(payload.get('price'))} VNĐ\n"
            f"🕐 Thời gian: {now}"
        )
        photo_url = payload.get("receipt_url")
    else:
        raise ValueError(f"unknown message type: {message_type}")

    return text, photo_url, reply_markup


############################
# Review results shown on the admin chat
############################
def coin_purchase_approved_text(amount: int) -> str:
    return (
        "✅ *ĐÃ DUYỆT*\n\n"
        f"🪙 Đã cộng {format_number(amount)} xu cho người dùng.\n"
        f"🕐 {format_local_datetime()}"
    )


def coin_purchase_rejected_text(amount: int) -> str:
    return (
        "❌ *ĐÃ TỪ CHỐI*\n\n"
        f"Đơn nạp {format_number(amount)} xu đã bị từ chối.\n"
        f"🕐 {format_local_datetime()}"
    )


def withdrawal_approved_text(
    amount: int, bank_name: str | None, bank_account_number: str | None
) -> str:
    return (
        "✅ *ĐÃ DUYỆT RÚT TIỀN*\n\n"
        f"🪙 Số xu: {format_number(amount)} xu\n"
        f"💵 Số tiền: {format_number(amount * COIN_UNIT_PRICE_VND)} VNĐ\n"
        f"🏦 {bank_name} - {bank_account_number}\n"
        f"🕐 {format_local_datetime()}"
    )


def withdrawal_rejected_text(amount: int) -> str:
    return (
        "❌ *ĐÃ TỪ CHỐI RÚT TIỀN*\n\n"
        f"🪙 Số xu: {format_number(amount)} xu\n"
        "📝 Xu không bị trừ (chưa duyệt)\n"
        f"🕐 {format_local_datetime()}"
    )
