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

from .base import Base
from .bot_rental import BotRental, BotRentalRequest
from .catalog import GameAccount, Product
from .coin import CoinHistory, CoinHistoryType, CoinPurchase, UserCoin
from .discount_code import DiscountCode, DiscountCodeUse, DiscountType
from .notification import Notification, NotificationType
from .order import Order, OrderStatus, OrderType
from .outbound_message import (
    OutboundChannel,
    OutboundMessage,
    OutboundMessageStatus,
)
from .referral import Referral
from .review import ReviewStatus
from .scam_report import ScamReport, ScamSeverity
from .seller import Seller, SellerCoin, WithdrawalRequest
from .site_setting import SiteSetting, SiteSettingKey
from .user import AuthToken, User, UserRole, UserRoleType
