"""initial_schema

Create the provisioning schema:
- Invites (codes, validity, use counters, usage history, admin notify prefs)
- Profiles (policy, homescreen and companion templates applied to new accounts)
- Linked identities (one chat identity per account and platform)
- Email addresses (contact address per account)
- Account expiries

Revision ID: 3c1f0a9d7e21
Revises:
Create Date: 2026-10-17 10:12:44.381205

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f0a9d7e21"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # ========================================================================
    # INVITES table
    # ========================================================================
    op.create_table(
        "invites",
        sa.Column("code", sa.String(64), nullable=False),
        sa.Column("label", sa.String(255), nullable=False, server_default=""),
        sa.Column(
            "created",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column("valid_till", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("remaining_uses", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("no_limit", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("profile", sa.String(255), nullable=False, server_default=""),
        sa.Column("user_expiry", postgresql.JSONB(), nullable=True),
        sa.Column(
            "used_by", postgresql.JSONB(), nullable=False, server_default=sa.text("'[]'::jsonb")
        ),
        sa.Column(
            "notify", postgresql.JSONB(), nullable=False, server_default=sa.text("'{}'::jsonb")
        ),
        sa.Column("send_to", sa.Text(), nullable=False, server_default=""),
        sa.Column(
            "keys",
            postgresql.ARRAY(sa.Text()),
            nullable=False,
            server_default=sa.text("'{}'::text[]"),
        ),
        sa.CheckConstraint(
            "remaining_uses >= 0", name="ck_invites_remaining_uses_non_negative"
        ),
        sa.PrimaryKeyConstraint("code"),
    )

    # Housekeeping scans by expiry
    op.create_index("idx_invites_valid_till", "invites", ["valid_till"])

    # ========================================================================
    # PROFILES table
    # ========================================================================
    op.create_table(
        "profiles",
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("is_default", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("from_account", sa.String(255), nullable=False, server_default=""),
        sa.Column("library_access", sa.String(255), nullable=False, server_default=""),
        sa.Column(
            "policy", postgresql.JSONB(), nullable=False, server_default=sa.text("'{}'::jsonb")
        ),
        sa.Column(
            "configuration",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column(
            "display_preferences",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column(
            "companion_template",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.PrimaryKeyConstraint("name"),
    )

    # ========================================================================
    # LINKED IDENTITIES table
    # ========================================================================
    op.create_table(
        "linked_identities",
        sa.Column("account_id", sa.String(64), nullable=False),
        sa.Column("platform", sa.String(20), nullable=False),  # 'discord', 'matrix', 'telegram'
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("display_name", sa.String(255), nullable=False, server_default=""),
        sa.Column("channel_id", sa.String(255), nullable=False, server_default=""),
        sa.Column("contact", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("lang", sa.String(20), nullable=True),
        sa.Column(
            "linked_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("account_id", "platform"),
    )
    op.create_index(
        "idx_linked_identities_account_id", "linked_identities", ["account_id"]
    )

    # ========================================================================
    # EMAIL ADDRESSES table
    # ========================================================================
    op.create_table(
        "email_addresses",
        sa.Column("account_id", sa.String(64), nullable=False),
        sa.Column("address", sa.String(255), nullable=False),
        sa.Column("contact", sa.Boolean(), nullable=False, server_default="true"),
        sa.PrimaryKeyConstraint("account_id"),
    )

    # ========================================================================
    # ACCOUNT EXPIRIES table
    # ========================================================================
    op.create_table(
        "account_expiries",
        sa.Column("account_id", sa.String(64), nullable=False),
        sa.Column("expiry", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("account_id"),
    )
    op.create_index("idx_account_expiries_expiry", "account_expiries", ["expiry"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_account_expiries_expiry", table_name="account_expiries")
    op.drop_table("account_expiries")
    op.drop_table("email_addresses")
    op.drop_index("idx_linked_identities_account_id", table_name="linked_identities")
    op.drop_table("linked_identities")
    op.drop_table("profiles")
    op.drop_index("idx_invites_valid_till", table_name="invites")
    op.drop_table("invites")
