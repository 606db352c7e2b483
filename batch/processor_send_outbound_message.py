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

import asyncio
import sys
from asyncio import Event
from typing import Sequence

import httpx
import uvloop
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import BatchAsyncSessionLocal
from app.model.db import (
    OutboundChannel,
    OutboundMessage,
    OutboundMessageStatus,
    SiteSetting,
    SiteSettingKey,
)
from app.utils.telegram_utils import TelegramMessageType, render_message
from batch import free_malloc
from batch.utils import batch_log
from batch.utils.signal_handler import setup_signal_handler
from config import (
    EMAIL_WEBHOOK_URL,
    OUTBOUND_MESSAGE_INTERVAL,
    OUTBOUND_MESSAGE_LOT_SIZE,
    OUTBOUND_MESSAGE_MAX_RETRY,
    OUTBOUND_REQUEST_TIMEOUT,
    TELEGRAM_API_URL,
)

"""
[PROCESSOR-Send-Outbound-Message]

- Delivers messages queued in the outbound_message table.
- email: the payload is POSTed to EMAIL_WEBHOOK_URL
- telegram: the payload is rendered and sent to the admin chat
  configured in the site settings
- Messages whose channel is not configured are marked as sent without delivery.
- Failed deliveries are retried up to OUTBOUND_MESSAGE_MAX_RETRY times.
"""

process_name = "PROCESSOR-Send-Outbound-Message"
LOG = batch_log.get_logger(process_name=process_name)

PARSE_MODE = "Markdown"


class DeliveryError(Exception):
    pass


class InvalidMessageError(Exception):
    pass


class Processor:
    def __init__(self, is_shutdown: Event):
        self.is_shutdown = is_shutdown

    async def process(self):
        db: AsyncSession = BatchAsyncSessionLocal()
        try:
            message_list: Sequence[OutboundMessage] = (
                await db.scalars(
                    select(OutboundMessage)
                    .where(OutboundMessage.status == OutboundMessageStatus.PENDING)
                    .order_by(OutboundMessage.id)
                    .limit(OUTBOUND_MESSAGE_LOT_SIZE)
                )
            ).all()
            if len(message_list) == 0:
                return

            LOG.info("Process Start")

            bot_token, chat_id = await self.__get_telegram_settings(db)
            async with httpx.AsyncClient(timeout=OUTBOUND_REQUEST_TIMEOUT) as client:
                for message in message_list:
                    # Graceful shutdown
                    if self.is_shutdown.is_set():
                        return

                    try:
                        if message.channel == OutboundChannel.EMAIL:
                            await self.__send_email(client, message)
                        else:
                            await self.__send_telegram(
                                client, message, bot_token, chat_id
                            )
                        message.status = OutboundMessageStatus.SENT
                    except InvalidMessageError as err:
                        LOG.error(f"Invalid message: id={message.id}, {err}")
                        message.status = OutboundMessageStatus.FAILED
                        message.last_error = str(err)
                    except (httpx.HTTPError, DeliveryError) as err:
                        message.retry_count += 1
                        message.last_error = str(err)
                        if message.retry_count >= OUTBOUND_MESSAGE_MAX_RETRY:
                            LOG.error(
                                f"Delivery failed: id={message.id}, retry={message.retry_count}"
                            )
                            message.status = OutboundMessageStatus.FAILED
                        else:
                            LOG.warning(
                                f"Delivery failed, will retry: id={message.id}, retry={message.retry_count}"
                            )
                    await db.merge(message)
                    await db.commit()

            LOG.info("Process End")
        finally:
            await db.close()

    @staticmethod
    async def __get_telegram_settings(db: AsyncSession):
        _settings: Sequence[SiteSetting] = (
            await db.scalars(
                select(SiteSetting).where(
                    SiteSetting.key.in_(
                        [
                            SiteSettingKey.TELEGRAM_BOT_TOKEN,
                            SiteSettingKey.TELEGRAM_CHAT_ID,
                        ]
                    )
                )
            )
        ).all()
        settings = {_setting.key: _setting.value for _setting in _settings}
        return (
            settings.get(SiteSettingKey.TELEGRAM_BOT_TOKEN) or None,
            settings.get(SiteSettingKey.TELEGRAM_CHAT_ID) or None,
        )

    @staticmethod
    async def __send_email(client: httpx.AsyncClient, message: OutboundMessage):
        if EMAIL_WEBHOOK_URL is None:
            LOG.info(f"Email webhook is not configured, skipped: id={message.id}")
            return
        resp = await client.post(
            EMAIL_WEBHOOK_URL, json={"type": message.message_type, **message.payload}
        )
        resp.raise_for_status()

    async def __send_telegram(
        self,
        client: httpx.AsyncClient,
        message: OutboundMessage,
        bot_token: str | None,
        chat_id: str | None,
    ):
        if bot_token is None:
            LOG.info(f"Telegram is not configured, skipped: id={message.id}")
            return

        api_url = f"{TELEGRAM_API_URL}/bot{bot_token}"
        payload = message.payload

        if message.message_type == TelegramMessageType.ANSWER_CALLBACK:
            await self.__call_api(
                client,
                f"{api_url}/answerCallbackQuery",
                {"callback_query_id": payload["callback_query_id"]},
            )
            return

        if message.message_type == TelegramMessageType.EDIT_MESSAGE:
            target = {
                "chat_id": payload["chat_id"],
                "message_id": payload["message_id"],
                "parse_mode": PARSE_MODE,
            }
            # Photo messages carry the text as a caption
            if not await self.__call_api(
                client,
                f"{api_url}/editMessageCaption",
                {**target, "caption": payload["text"]},
                raise_error=False,
            ):
                await self.__call_api(
                    client,
                    f"{api_url}/editMessageText",
                    {**target, "text": payload["text"]},
                )
            return

        if chat_id is None:
            LOG.info(f"Telegram chat is not configured, skipped: id={message.id}")
            return

        try:
            text, photo_url, reply_markup = render_message(
                message.message_type, payload
            )
        except ValueError as err:
            raise InvalidMessageError(err)
        body = {"chat_id": chat_id, "parse_mode": PARSE_MODE}
        if reply_markup is not None:
            body["reply_markup"] = reply_markup

        if photo_url is not None:
            if await self.__call_api(
                client,
                f"{api_url}/sendPhoto",
                {**body, "photo": photo_url, "caption": text},
                raise_error=False,
            ):
                return
            LOG.warning(f"sendPhoto failed, falling back to sendMessage: id={message.id}")
        await self.__call_api(client, f"{api_url}/sendMessage", {**body, "text": text})

    @staticmethod
    async def __call_api(
        client: httpx.AsyncClient, url: str, body: dict, raise_error: bool = True
    ) -> bool:
        resp = await client.post(url, json=body)
        try:
            is_ok = resp.json().get("ok") is True
        except ValueError:
            is_ok = False
        if resp.status_code == 200 and is_ok:
            return True
        if raise_error:
            raise DeliveryError(
                f"telegram api error: status={resp.status_code}, body={resp.text}"
            )
        return False


async def main():
    LOG.info("Service started successfully")

    is_shutdown = asyncio.Event()
    setup_signal_handler(logger=LOG, is_shutdown=is_shutdown)

    processor = Processor(is_shutdown)

    try:
        while not is_shutdown.is_set():
            try:
                await processor.process()
            except SQLAlchemyError as sa_err:
                LOG.error(
                    f"A database error has occurred: code={sa_err.code}\n{sa_err}"
                )
            except Exception:
                LOG.exception("An error occurred during processing")

            await asyncio.sleep(OUTBOUND_MESSAGE_INTERVAL)
            free_malloc()
    finally:
        LOG.info("Service is shutdown")


if __name__ == "__main__":
    try:
        uvloop.run(main())
    except KeyboardInterrupt:
        sys.exit(1)
