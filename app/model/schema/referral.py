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

from pydantic import BaseModel, Field


############################
# REQUEST
############################
class RedeemReferralCodeRequest(BaseModel):
    """Redeem Referral Code schema (REQUEST)"""

    referral_code: str = Field(..., min_length=1, max_length=16)


############################
# RESPONSE
############################
class ReferralInfoResponse(BaseModel):
    """Referral information schema (RESPONSE)"""

    referral_code: str
    referral_count: int
    referred: bool = Field(..., description="The caller has redeemed a code")


class RedeemReferralCodeResponse(BaseModel):
    """Redeem Referral Code schema (RESPONSE)"""

    referrer_id: str
    coins_rewarded: int
