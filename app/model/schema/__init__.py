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

from .base import BasePaginationQuery, ResultSet, SortOrder, SuccessResponse
from .bot_rental import (
    BotRentalOffer,
    BotRentalRequestDetail,
    CreateBotRentalOfferRequest,
    CreateBotRentalRequest,
    ListBotRentalOffersResponse,
    ListBotRentalRequestsResponse,
    UpdateBotRentalOfferRequest,
)
from .catalog import (
    GameAccountSummary,
    ListGameAccountsQuery,
    ListGameAccountsResponse,
    ListProductsQuery,
    ListProductsResponse,
    ProductSummary,
)
from .coin_purchase import (
    CoinPurchaseRequestDetail,
    CreateCoinPurchaseRequest,
    ListCoinPurchasesResponse,
)
from .discount_code import (
    CheckDiscountCodeRequest,
    CheckDiscountCodeResponse,
    CreateDiscountCodeRequest,
    DiscountCodeDetail,
    ListDiscountCodesQuery,
    ListDiscountCodesResponse,
)
from .notification import (
    ListAllNotificationsQuery,
    ListAllNotificationsResponse,
    MarkAllNotificationsReadResponse,
    NotificationDetail,
)
from .purchase import (
    ListOrdersQuery,
    ListOrdersResponse,
    OrderResponse,
    OrderSummary,
    PurchaseWithCoinsRequest,
    PurchaseWithCoinsResponse,
)
from .referral import (
    RedeemReferralCodeRequest,
    RedeemReferralCodeResponse,
    ReferralInfoResponse,
)
from .review import (
    ListReviewItemsQuery,
    ListReviewItemsResponse,
    ReviewDecisionRequest,
    ReviewDecisionResponse,
    ReviewItem,
    ReviewTarget,
)
from .scam_report import (
    CreateScamReportRequest,
    CreateScamReportResponse,
    ListScamReportsQuery,
    ListScamReportsResponse,
    ScamReportDetail,
)
from .seller import (
    CreateWithdrawalRequest,
    ListWithdrawalsResponse,
    RegisterSellerRequest,
    SellerProfile,
    SellerWalletResponse,
    UpdateSellerRequest,
    UploadGameAccountRequest,
    UploadItemResponse,
    UploadProductRequest,
    Withdrawal,
)
from .site_setting import (
    ListSiteSettingsResponse,
    SiteSettingDetail,
    UpdateSiteSettingRequest,
)
from .telegram import TelegramCallbackQuery, TelegramUpdate, TelegramWebhookResponse
from .user import (
    AdminVerifyResponse,
    RegisterUserRequest,
    UserAuthTokenRequest,
    UserAuthTokenResponse,
    UserResponse,
)
from .wallet import (
    CoinHistoryEntry,
    ListCoinHistoryQuery,
    ListCoinHistoryResponse,
    WalletResponse,
)
