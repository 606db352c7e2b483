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

from fastapi import status


class AppError(Exception):
    status_code: int
    code: int | None = None


################################################
# 400_BAD_REQUEST
################################################
class BadRequestError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


class InvalidParameterError(BadRequestError):
    code = 1


class InsufficientBalanceError(BadRequestError):
    """
    Coin balance does not cover the requested amount
    """

    code = 2


class PriceMismatchError(BadRequestError):
    """
    Requested coin amount does not match the price of the item
    """

    code = 3


class ItemNotAvailableError(BadRequestError):
    """
    Item does not exist, is already sold, or is free
    """

    code = 4


class DiscountCodeNotApplicableError(BadRequestError):
    code = 5


class ReferralNotApplicableError(BadRequestError):
    code = 6


class EmailAlreadyRegisteredError(BadRequestError):
    code = 7


################################################
# 401_UNAUTHORIZED
################################################
class AuthorizationError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = 1


################################################
# 403_FORBIDDEN
################################################
class PermissionDeniedError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    code = 1


################################################
# 409_CONFLICT
################################################
class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT


class BalanceUpdateConflictError(ConflictError):
    """
    The balance was changed by another request between read and update.
    The client is expected to retry.
    """

    code = 1


class ReviewAlreadyProcessedError(ConflictError):
    """
    The request has already been approved or rejected
    """

    code = 2


################################################
# 500_INTERNAL_SERVER_ERROR
################################################
class OrderCreationError(AppError):
    """
    Order could not be created after the balance was deducted.
    The deducted coins have been written back.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = 1


################################################
# 503_SERVICE_UNAVAILABLE
################################################
class ServiceUnavailableError(AppError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    code = 1
