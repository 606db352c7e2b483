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


############################
# REQUEST
############################
class UpdateSiteSettingRequest(BaseModel):
    """Update Site Setting schema (REQUEST)"""

    value: Optional[str] = Field(None, max_length=2000)


############################
# RESPONSE
############################
class SiteSettingDetail(BaseModel):
    key: str
    value: Optional[str]
    modified: Optional[str]


class ListSiteSettingsResponse(BaseModel):
    """List site settings schema (RESPONSE)"""

    settings: list[SiteSettingDetail]
