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

import ctypes
from ctypes.util import find_library
from datetime import UTC, datetime

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from pydantic_core import ArgsKwargs, ErrorDetails
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.database import DBAsyncSession
from app.exceptions import (
    AuthorizationError,
    BadRequestError,
    ConflictError,
    OrderCreationError,
    PermissionDeniedError,
    ServiceUnavailableError,
)
from app.log import LOG, output_access_log
from app.routers.admin import admin, admin_catalog
from app.routers.misc import telegram
from app.routers.seller import seller
from app.routers.shop import (
    bot_rental,
    catalog,
    coin_purchase,
    common,
    discount_code,
    notification,
    purchase,
    referral,
    scam_report,
    user,
    wallet,
)
from app.utils.docs_utils import custom_openapi
from config import SERVER_NAME

tags_metadata = [
    {"name": "root", "description": ""},
    {"name": "common", "description": "Common functions"},
    {"name": "user", "description": "User registration and authentication"},
    {"name": "wallet", "description": "Coin balance and history"},
    {"name": "catalog", "description": "Products and game accounts for sale"},
    {"name": "purchase", "description": "Purchase with coins and orders"},
    {"name": "coin_purchase", "description": "Coin top-up by bank transfer"},
    {"name": "bot_rental", "description": "Zalo bot rental"},
    {"name": "referral", "description": "Referral codes"},
    {"name": "discount_code", "description": "Discount codes"},
    {"name": "notification", "description": "Notifications for users"},
    {"name": "scam_report", "description": "Scam reports"},
    {"name": "seller", "description": "Seller marketplace"},
    {"name": "admin", "description": "Administration"},
    {"name": "telegram", "description": "Telegram bot webhook"},
]

app = FastAPI(
    title="BonzShop API",
    description="Digital goods storefront with a coin wallet",
    version="1.0",
    openapi_tags=tags_metadata,
)


@app.middleware("http")
async def api_call_handler(request: Request, call_next):
    request_start_time = datetime.now(UTC).replace(tzinfo=None)
    response = await call_next(request)
    output_access_log(request, response, request_start_time)
    return response


app.openapi = custom_openapi(app)

libc = ctypes.CDLL(find_library("c"))


###############################################################
# ROUTER
###############################################################


@app.get("/", tags=["root"])
async def root(db: DBAsyncSession):
    try:
        # Check DB Connection
        await db.connection()
    except Exception as err:
        LOG.exception("error")
        raise ServiceUnavailableError(err)
    libc.malloc_trim(0)
    return {"server": SERVER_NAME}


app.include_router(common.router)
app.include_router(user.router)
app.include_router(wallet.router)
app.include_router(catalog.router)
app.include_router(purchase.router)
app.include_router(coin_purchase.router)
app.include_router(bot_rental.router)
app.include_router(referral.router)
app.include_router(discount_code.router)
app.include_router(notification.router)
app.include_router(scam_report.router)
app.include_router(seller.router)
# NOTE: admin_catalog must precede admin, whose "/admin/{target}" route
#       would otherwise capture "/admin/discount_codes" and "/admin/site_settings"
app.include_router(admin_catalog.router)
app.include_router(admin.router)
app.include_router(telegram.router)

###############################################################
# EXCEPTION
###############################################################


# 500:InternalServerError
@app.exception_handler(500)
async def internal_server_error_handler(request: Request, exc: Exception):
    meta = {"code": 1, "title": "InternalServerError"}
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=jsonable_encoder({"meta": meta}),
    )


def convert_errors(
    e: ValidationError | RequestValidationError,
) -> list[ErrorDetails]:
    new_errors: list[ErrorDetails] = []
    for error in e.errors():
        # "url" field which Pydantic V2 adds when validation error occurs is not needed for API response.
        # https://docs.pydantic.dev/2.1/errors/errors/
        if "url" in error.keys():
            error.pop("url", None)

        # "input" field generated from GET query model_validator is ArgsKwargs instance.
        # This cannot be serialized to json as it is, so nested field should be picked.
        if "input" in error.keys() and isinstance(error["input"], ArgsKwargs):
            error["input"] = error["input"].kwargs
        new_errors.append(error)
    return new_errors


# 422:RequestValidationError
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    meta = {"code": 1, "title": "RequestValidationError"}
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=jsonable_encoder({"meta": meta, "detail": convert_errors(exc)}),
    )


# 422:ValidationError
# NOTE: for exceptions raised directly from Pydantic validation
@app.exception_handler(ValidationError)
async def query_validation_exception_handler(request: Request, exc: ValidationError):
    meta = {"code": 1, "title": "RequestValidationError"}
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=jsonable_encoder({"meta": meta, "detail": convert_errors(exc)}),
    )


# 400:BadRequestError
@app.exception_handler(BadRequestError)
async def bad_request_error_handler(request: Request, exc: BadRequestError):
    return __app_error_response(exc)


# 401:AuthorizationError
@app.exception_handler(AuthorizationError)
async def authorization_error_handler(request: Request, exc: AuthorizationError):
    return __app_error_response(exc)


# 403:PermissionDeniedError
@app.exception_handler(PermissionDeniedError)
async def permission_denied_error_handler(
    request: Request, exc: PermissionDeniedError
):
    return __app_error_response(exc)


# 404:NotFound
@app.exception_handler(404)
async def not_found_error_handler(request: Request, exc: StarletteHTTPException):
    meta = {"code": 1, "title": "NotFound"}
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=jsonable_encoder({"meta": meta, "detail": exc.detail}),
    )


# 405:MethodNotAllowed
@app.exception_handler(405)
async def method_not_allowed_error_handler(
    request: Request, exc: StarletteHTTPException
):
    meta = {"code": 1, "title": "MethodNotAllowed"}
    return JSONResponse(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        content=jsonable_encoder({"meta": meta}),
    )


# 409:ConflictError
@app.exception_handler(ConflictError)
async def conflict_error_handler(request: Request, exc: ConflictError):
    return __app_error_response(exc)


# 500:OrderCreationError
@app.exception_handler(OrderCreationError)
async def order_creation_error_handler(request: Request, exc: OrderCreationError):
    return __app_error_response(exc)


# 503:ServiceUnavailable
@app.exception_handler(ServiceUnavailableError)
async def service_unavailable_error_handler(
    request: Request, exc: ServiceUnavailableError
):
    return __app_error_response(exc)


def __app_error_response(exc: Exception):
    meta = {"code": exc.code, "title": exc.__class__.__name__}
    if len(exc.args) > 0:
        return JSONResponse(
            status_code=exc.status_code,
            content=jsonable_encoder({"meta": meta, "detail": exc.args[0]}),
        )
    else:
        return JSONResponse(
            status_code=exc.status_code,
            content=jsonable_encoder({"meta": meta}),
        )
