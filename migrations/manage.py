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

import os
import sys

path = os.path.join(os.path.dirname(__file__), "../")
sys.path.append(path)

from sqlalchemy import MetaData, Table

from app.database import engine, get_db_schema


def reset():
    """Drop the alembic version table so that migrations run from the start"""
    table = Table("alembic_version", MetaData(), schema=get_db_schema())
    table.drop(engine, checkfirst=True)


argv = sys.argv

if len(argv) > 1:
    if argv[1] == "reset":
        reset()
