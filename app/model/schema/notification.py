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

from app.model.db import NotificationType
from app.model.schema.base import BasePaginationQuery, ResultSet


############################
# COMMON
############################
class NotificationDetail(BaseModel):
    id: str
    title: str
    message: str
    type: NotificationType
    is_read: bool
    reference_id: Optional[str]
    created: str


############################
# REQUEST
############################
class ListAllNotificationsQuery(BasePaginationQuery):
    is_read: Optional[bool] = Field(None, description="Read flag")
    type: Optional[NotificationType] = Field(None, description="Notification type")


############################
# RESPONSE
############################
class ListAllNotificationsResponse(BaseModel):
    """List notifications schema (RESPONSE)"""

    result_set: ResultSet
    unread_count: int
    notifications: list[NotificationDetail]


class MarkAllNotificationsReadResponse(BaseModel):
    """Mark all notifications as read schema (RESPONSE)"""

    updated_count: int
