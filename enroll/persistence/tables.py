"""SQLAlchemy table definitions.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    Column,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import ARRAY, JSONB, TIMESTAMP

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# INVITES TABLE
# ============================================================================
invites_table = Table(
    "invites",
    metadata,
    Column("code", String(64), primary_key=True),
    Column("label", String(255), nullable=False, server_default=""),
    Column("created", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"),
    Column("valid_till", TIMESTAMP(timezone=True), nullable=False),
    Column("remaining_uses", Integer, nullable=False, server_default="1"),
    Column("no_limit", Boolean, nullable=False, server_default="false"),
    Column("profile", String(255), nullable=False, server_default=""),
    Column("user_expiry", JSONB, nullable=True),  # {months, days, hours, minutes}
    Column("used_by", JSONB, nullable=False, server_default="[]"),  # [{identity, used_at}]
    Column("notify", JSONB, nullable=False, server_default="{}"),  # address -> prefs
    Column("send_to", Text, nullable=False, server_default=""),
    Column("keys", ARRAY(Text), nullable=False, server_default="{}"),
    Column("reserved", Integer, nullable=False, server_default="0"),
)

Index("idx_invites_valid_till", invites_table.c.valid_till)

# ============================================================================
# PROFILES TABLE
# ============================================================================
profiles_table = Table(
    "profiles",
    metadata,
    Column("name", String(255), primary_key=True),
    Column("is_default", Boolean, nullable=False, server_default="false"),
    Column("from_account", String(255), nullable=False, server_default=""),
    Column("library_access", String(255), nullable=False, server_default=""),
    Column("policy", JSONB, nullable=False, server_default="{}"),
    Column("configuration", JSONB, nullable=False, server_default="{}"),
    Column("display_preferences", JSONB, nullable=False, server_default="{}"),
    Column("companion_template", JSONB, nullable=False, server_default="{}"),
)

# ============================================================================
# LINKED IDENTITIES TABLE (one per account and platform)
# ============================================================================
linked_identities_table = Table(
    "linked_identities",
    metadata,
    Column("account_id", String(64), nullable=False),
    Column("platform", String(20), nullable=False),  # 'discord', 'matrix', 'telegram'
    Column("user_id", String(255), nullable=False),
    Column("display_name", String(255), nullable=False, server_default=""),
    Column("channel_id", String(255), nullable=False, server_default=""),
    Column("contact", Boolean, nullable=False, server_default="true"),
    Column("lang", String(20), nullable=True),
    Column("linked_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"),
    PrimaryKeyConstraint("account_id", "platform"),
)

Index("idx_linked_identities_account_id", linked_identities_table.c.account_id)

# ============================================================================
# EMAIL ADDRESSES TABLE
# ============================================================================
email_addresses_table = Table(
    "email_addresses",
    metadata,
    Column("account_id", String(64), primary_key=True),
    Column("address", String(255), nullable=False),
    Column("contact", Boolean, nullable=False, server_default="true"),
)

# ============================================================================
# ACCOUNT EXPIRIES TABLE
# ============================================================================
account_expiries_table = Table(
    "account_expiries",
    metadata,
    Column("account_id", String(64), primary_key=True),
    Column("expiry", TIMESTAMP(timezone=True), nullable=False),
)

Index("idx_account_expiries_expiry", account_expiries_table.c.expiry)

# ============================================================================
# ANNOUNCEMENT TEMPLATES TABLE
# ============================================================================
announcement_templates_table = Table(
    "announcement_templates",
    metadata,
    Column("name", String(255), primary_key=True),
    Column("subject", Text, nullable=False),
    Column("body", Text, nullable=False),
)
