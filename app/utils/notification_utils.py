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

from sqlalchemy.ext.asyncio import AsyncSession

from app.model.db import Notification, NotificationType


def add_notification(
    db: AsyncSession,
    user_id: str,
    title: str,
    message: str,
    notice_type: NotificationType,
    reference_id: str | None = None,
) -> Notification:
    _notification = Notification()
    _notification.id = str(uuid.uuid4())
    _notification.user_id = user_id
    _notification.title = title
    _notification.message = message
    _notification.type = notice_type
    _notification.is_read = False
    _notification.reference_id = reference_id
    db.add(_notification)
    return _notification
