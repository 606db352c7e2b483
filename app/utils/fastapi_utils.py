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

import decimal
from datetime import datetime
from typing import Any

import orjson
import pytz
from fastapi.responses import ORJSONResponse

from config import RESPONSE_VALIDATION_MODE, TZ

local_tz = pytz.timezone(TZ)
utc_tz = pytz.timezone("UTC")


def decimal_default(obj):
    if isinstance(obj, decimal.Decimal):
        return float(obj)
    raise TypeError


class CustomORJSONResponse(ORJSONResponse):
    media_type = "application/json"

    def render(self, content: Any) -> bytes:
        return orjson.dumps(
            content,
            option=orjson.OPT_NON_STR_KEYS,
            default=decimal_default,
        )


def json_response(content: dict | list):
    if RESPONSE_VALIDATION_MODE:
        return content
    else:
        return CustomORJSONResponse(content=content)


def to_local_isoformat(dt: datetime | None) -> str | None:
    """Convert a naive UTC datetime read from the database to local ISO-8601"""
    if dt is None:
        return None
    return utc_tz.localize(dt).astimezone(local_tz).isoformat()
