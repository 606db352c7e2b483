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

import logging
import sys

from config import APP_ENV, LOG_LEVEL

logging.basicConfig(level=LOG_LEVEL)

INFO_FORMAT = "[%(asctime)s] [{}] [%(process)d] [%(levelname)s] %(message)s"
DEBUG_FORMAT = "[%(asctime)s] [{}] [%(process)d] [%(levelname)s] %(message)s [in %(pathname)s:%(lineno)d]"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S %z"


def get_logger(process_name: str | None = None):
    LOG = logging.getLogger("bonzshop_batch")
    LOG.propagate = False

    if APP_ENV == "live":
        stream_handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            INFO_FORMAT.format(process_name), TIMESTAMP_FORMAT
        )
        stream_handler.setFormatter(formatter)
        LOG.addHandler(stream_handler)

    if APP_ENV == "dev" or APP_ENV == "local":
        stream_handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            DEBUG_FORMAT.format(process_name), TIMESTAMP_FORMAT
        )
        stream_handler.setFormatter(formatter)
        LOG.addHandler(stream_handler)

    return LOG
