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

from fastapi import APIRouter
from sqlalchemy import func, select

from app import log
from app.database import DBAsyncSession
from app.exceptions import ServiceUnavailableError
from app.model.db import OutboundMessage, OutboundMessageStatus
from app.utils.docs_utils import get_routers_responses
from app.utils.fastapi_utils import json_response
from config import OUTBOUND_MESSAGE_LOT_SIZE

router = APIRouter(tags=["common"])

LOG = log.get_logger()


# GET: /healthcheck
@router.get(
    "/healthcheck",
    operation_id="ServiceHealthCheck",
    response_model=None,
    responses=get_routers_responses(ServiceUnavailableError),
)
async def service_health_check(db: DBAsyncSession):
    """Service health check

    Check following services are available:
    - Database
    - Outbound message queue
    """
    errors = []

    try:
        # Check database is available
        await db.connection()
        # Check outbound messages are being delivered
        await __check_outbound_queue(errors, db)
    except Exception as err:
        LOG.exception(err)
        errors.append("Can't connect to database")

    if len(errors) > 0:
        raise ServiceUnavailableError(errors)

    return json_response({})


async def __check_outbound_queue(errors: list, db: DBAsyncSession):
    pending_count = await db.scalar(
        select(func.count(OutboundMessage.id)).where(
            OutboundMessage.status == OutboundMessageStatus.PENDING
        )
    )
    # More than ten lots waiting means the batch processor is not running
    if pending_count > OUTBOUND_MESSAGE_LOT_SIZE * 10:
        errors.append("Outbound message queue is not being processed")
