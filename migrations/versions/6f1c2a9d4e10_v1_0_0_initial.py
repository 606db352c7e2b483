"""v1_0_0_initial

Revision ID: 6f1c2a9d4e10
Revises:
Create Date: 2026-10-17 10:00:00.000000

"""

from alembic import op
import sqlalchemy as sa


from app.database import get_db_schema

# revision identifiers, used by Alembic.
revision = "6f1c2a9d4e10"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column("created", sa.DateTime(), nullable=True),
        sa.Column("modified", sa.DateTime(), nullable=True),
    ]


def upgrade():
    op.create_table(
        "user",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=200), nullable=False),
        sa.Column("display_name", sa.String(length=100), nullable=True),
        sa.Column("phone", sa.String(length=20), nullable=True),
        sa.Column("avatar_url", sa.String(length=2000), nullable=True),
        sa.Column("referral_code", sa.String(length=16), nullable=True),
        sa.Column("is_banned", sa.Boolean(), nullable=True),
        sa.Column("is_deleted", sa.Boolean(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
        sa.UniqueConstraint("referral_code"),
        schema=get_db_schema(),
    )
    op.create_table(
        "user_role",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=False),
        sa.Column("protected", sa.Boolean(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        schema=get_db_schema(),
    )
    op.create_index(
        op.f("ix_user_role_user_id"),
        "user_role",
        ["user_id"],
        unique=False,
        schema=get_db_schema(),
    )
    op.create_table(
        "auth_token",
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("auth_token", sa.String(length=64), nullable=True),
        sa.Column("usage_start", sa.DateTime(), nullable=True),
        sa.Column("valid_duration", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("user_id"),
        schema=get_db_schema(),
    )
    op.create_index(
        op.f("ix_auth_token_auth_token"),
        "auth_token",
        ["auth_token"],
        unique=False,
        schema=get_db_schema(),
    )
    op.create_table(
        "user_coin",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("balance", sa.BigInteger(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id"),
        schema=get_db_schema(),
    )
    op.create_table(
        "coin_history",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("amount", sa.BigInteger(), nullable=False),
        sa.Column("type", sa.String(length=30), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=True),
        sa.Column("reference_id", sa.String(length=36), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        schema=get_db_schema(),
    )
    op.create_index(
        op.f("ix_coin_history_user_id"),
        "coin_history",
        ["user_id"],
        unique=False,
        schema=get_db_schema(),
    )
    op.create_table(
        "coin_purchase",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("amount", sa.BigInteger(), nullable=False),
        sa.Column("receipt_url", sa.String(length=2000), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("admin_note", sa.String(length=1000), nullable=True),
        sa.Column("approved_by", sa.String(length=36), nullable=True),
        sa.Column("approved_at", sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        schema=get_db_schema(),
    )
    op.create_index(
        op.f("ix_coin_purchase_user_id"),
        "coin_purchase",
        ["user_id"],
        unique=False,
        schema=get_db_schema(),
    )
    op.create_index(
        op.f("ix_coin_purchase_status"),
        "coin_purchase",
        ["status"],
        unique=False,
        schema=get_db_schema(),
    )
    op.create_table(
        "seller",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("display_name", sa.String(length=100), nullable=False),
        sa.Column("phone", sa.String(length=20), nullable=True),
        sa.Column("description", sa.String(length=2000), nullable=True),
        sa.Column("avatar_url", sa.String(length=2000), nullable=True),
        sa.Column("bank_name", sa.String(length=100), nullable=True),
        sa.Column("bank_account_number", sa.String(length=50), nullable=True),
        sa.Column("bank_account_name", sa.String(length=100), nullable=True),
        sa.Column("bank_qr_url", sa.String(length=2000), nullable=True),
        sa.Column("is_verified", sa.Boolean(), nullable=True),
        sa.Column("is_profile_complete", sa.Boolean(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id"),
        schema=get_db_schema(),
    )
    op.create_table(
        "seller_coin",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("seller_id", sa.String(length=36), nullable=False),
        sa.Column("balance", sa.BigInteger(), nullable=False),
        sa.Column("total_earned", sa.BigInteger(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("seller_id"),
        schema=get_db_schema(),
    )
    op.create_table(
        "withdrawal_request",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("seller_id", sa.String(length=36), nullable=False),
        sa.Column("amount", sa.BigInteger(), nullable=False),
        sa.Column("bank_name", sa.String(length=100), nullable=True),
        sa.Column("bank_account_number", sa.String(length=50), nullable=True),
        sa.Column("bank_account_name", sa.String(length=100), nullable=True),
        sa.Column("bank_qr_url", sa.String(length=2000), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("admin_note", sa.String(length=1000), nullable=True),
        sa.Column("processed_by", sa.String(length=36), nullable=True),
        sa.Column("processed_at", sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        schema=get_db_schema(),
    )
    op.create_index(
        op.f("ix_withdrawal_request_seller_id"),
        "withdrawal_request",
        ["seller_id"],
        unique=False,
        schema=get_db_schema(),
    )
    op.create_index(
        op.f("ix_withdrawal_request_status"),
        "withdrawal_request",
        ["status"],
        unique=False,
        schema=get_db_schema(),
    )
    op.create_table(
        "game_account",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("seller_id", sa.String(length=36), nullable=True),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("platform", sa.String(length=50), nullable=False),
        sa.Column("account_type", sa.String(length=50), nullable=False),
        sa.Column("category", sa.String(length=50), nullable=True),
        sa.Column("price", sa.BigInteger(), nullable=False),
        sa.Column("image_url", sa.String(length=2000), nullable=True),
        sa.Column("features", sa.JSON(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=True),
        sa.Column("is_free", sa.Boolean(), nullable=True),
        sa.Column("is_sold", sa.Boolean(), nullable=True),
        sa.Column("login_email", sa.String(length=255), nullable=True),
        sa.Column("login_username", sa.String(length=255), nullable=True),
        sa.Column("login_phone", sa.String(length=20), nullable=True),
        sa.Column("login_password", sa.String(length=255), nullable=True),
        sa.Column("additional_info", sa.Text(), nullable=True),
        sa.Column("sold_to", sa.String(length=36), nullable=True),
        sa.Column("sold_at", sa.DateTime(), nullable=True),
        sa.Column("created_by", sa.String(length=36), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        schema=get_db_schema(),
    )
    op.create_index(
        op.f("ix_game_account_seller_id"),
        "game_account",
        ["seller_id"],
        unique=False,
        schema=get_db_schema(),
    )
    op.create_table(
        "product",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("seller_id", sa.String(length=36), nullable=True),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category", sa.String(length=50), nullable=False),
        sa.Column("price", sa.BigInteger(), nullable=False),
        sa.Column("original_price", sa.BigInteger(), nullable=True),
        sa.Column("image_url", sa.String(length=2000), nullable=True),
        sa.Column("download_url", sa.String(length=2000), nullable=True),
        sa.Column("badge", sa.String(length=50), nullable=True),
        sa.Column("tech_stack", sa.JSON(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=True),
        sa.Column("is_free", sa.Boolean(), nullable=True),
        sa.Column("sales", sa.Integer(), nullable=True),
        sa.Column("created_by", sa.String(length=36), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        schema=get_db_schema(),
    )
    op.create_index(
        op.f("ix_product_seller_id"),
        "product",
        ["seller_id"],
        unique=False,
        schema=get_db_schema(),
    )
    op.create_table(
        "order",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("buyer_id", sa.String(length=36), nullable=False),
        sa.Column("seller_id", sa.String(length=36), nullable=True),
        sa.Column("account_id", sa.String(length=36), nullable=True),
        sa.Column("product_id", sa.String(length=36), nullable=True),
        sa.Column("amount", sa.BigInteger(), nullable=False),
        sa.Column("order_type", sa.String(length=30), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("approved_by", sa.String(length=36), nullable=True),
        sa.Column("approved_at", sa.DateTime(), nullable=True),
        sa.Column("login_credentials", sa.JSON(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        schema=get_db_schema(),
    )
    op.create_index(
        op.f("ix_order_buyer_id"),
        "order",
        ["buyer_id"],
        unique=False,
        schema=get_db_schema(),
    )
    op.create_table(
        "notification",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("message", sa.String(length=2000), nullable=False),
        sa.Column("type", sa.String(length=30), nullable=False),
        sa.Column("is_read", sa.Boolean(), nullable=True),
        sa.Column("reference_id", sa.String(length=36), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        schema=get_db_schema(),
    )
    op.create_index(
        op.f("ix_notification_user_id"),
        "notification",
        ["user_id"],
        unique=False,
        schema=get_db_schema(),
    )
    op.create_table(
        "bot_rental",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.String(length=2000), nullable=True),
        sa.Column("icon", sa.String(length=50), nullable=True),
        sa.Column("price", sa.BigInteger(), nullable=False),
        sa.Column("duration", sa.String(length=50), nullable=True),
        sa.Column("features", sa.JSON(), nullable=True),
        sa.Column("zalo_number", sa.String(length=20), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        schema=get_db_schema(),
    )
    op.create_table(
        "bot_rental_request",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("bot_id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("receipt_url", sa.String(length=2000), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("admin_note", sa.String(length=1000), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        schema=get_db_schema(),
    )
    op.create_index(
        op.f("ix_bot_rental_request_user_id"),
        "bot_rental_request",
        ["user_id"],
        unique=False,
        schema=get_db_schema(),
    )
    op.create_index(
        op.f("ix_bot_rental_request_status"),
        "bot_rental_request",
        ["status"],
        unique=False,
        schema=get_db_schema(),
    )
    op.create_table(
        "referral",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("referrer_id", sa.String(length=36), nullable=False),
        sa.Column("referred_id", sa.String(length=36), nullable=False),
        sa.Column("referral_code", sa.String(length=16), nullable=False),
        sa.Column("coins_rewarded", sa.BigInteger(), nullable=True),
        sa.Column("rewarded_at", sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("referred_id"),
        schema=get_db_schema(),
    )
    op.create_index(
        op.f("ix_referral_referrer_id"),
        "referral",
        ["referrer_id"],
        unique=False,
        schema=get_db_schema(),
    )
    op.create_table(
        "discount_code",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("code", sa.String(length=50), nullable=False),
        sa.Column("discount_type", sa.String(length=10), nullable=False),
        sa.Column("discount_amount", sa.BigInteger(), nullable=False),
        sa.Column("min_order_amount", sa.BigInteger(), nullable=True),
        sa.Column("max_uses", sa.Integer(), nullable=True),
        sa.Column("used_count", sa.Integer(), nullable=True),
        sa.Column("expires_at", sa.DateTime(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=True),
        sa.Column("created_by", sa.String(length=36), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("code"),
        schema=get_db_schema(),
    )
    op.create_table(
        "discount_code_use",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("code_id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("order_id", sa.String(length=36), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        schema=get_db_schema(),
    )
    op.create_index(
        op.f("ix_discount_code_use_code_id"),
        "discount_code_use",
        ["code_id"],
        unique=False,
        schema=get_db_schema(),
    )
    op.create_table(
        "scam_report",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("scammer_name", sa.String(length=100), nullable=True),
        sa.Column("scammer_contact", sa.String(length=200), nullable=True),
        sa.Column("severity", sa.String(length=10), nullable=False),
        sa.Column("evidence_urls", sa.JSON(), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("created_by", sa.String(length=36), nullable=True),
        sa.Column("admin_note", sa.Text(), nullable=True),
        sa.Column("reviewed_by", sa.String(length=36), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        schema=get_db_schema(),
    )
    op.create_index(
        op.f("ix_scam_report_status"),
        "scam_report",
        ["status"],
        unique=False,
        schema=get_db_schema(),
    )
    op.create_table(
        "site_setting",
        sa.Column("key", sa.String(length=100), nullable=False),
        sa.Column("value", sa.Text(), nullable=True),
        sa.Column("updated_by", sa.String(length=36), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("key"),
        schema=get_db_schema(),
    )
    op.create_table(
        "outbound_message",
        sa.Column(
            "id",
            sa.BigInteger().with_variant(sa.Integer(), "sqlite"),
            autoincrement=True,
            nullable=False,
        ),
        sa.Column("channel", sa.String(length=20), nullable=False),
        sa.Column("message_type", sa.String(length=50), nullable=False),
        sa.Column("payload", sa.JSON(), nullable=False),
        sa.Column("status", sa.Integer(), nullable=False),
        sa.Column("retry_count", sa.Integer(), nullable=False),
        sa.Column("last_error", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        schema=get_db_schema(),
    )
    op.create_index(
        op.f("ix_outbound_message_status"),
        "outbound_message",
        ["status"],
        unique=False,
        schema=get_db_schema(),
    )


def downgrade():
    for table_name in [
        "outbound_message",
        "site_setting",
        "scam_report",
        "discount_code_use",
        "discount_code",
        "referral",
        "bot_rental_request",
        "bot_rental",
        "notification",
        "order",
        "product",
        "game_account",
        "withdrawal_request",
        "seller_coin",
        "seller",
        "coin_purchase",
        "coin_history",
        "user_coin",
        "auth_token",
        "user_role",
        "user",
    ]:
        op.drop_table(table_name, schema=get_db_schema())
