"""SQLAlchemy table definitions.

Core tables only; rows are mapped to immutable domain models by hand in
mappers.py. They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

metadata = MetaData()

# Transaction-local setting read by the principals guard trigger.
# Only the trusted operator path sets it, and only for its own write.
TRUSTED_OPERATOR_SETTING = "elevate.trusted_operator"

# SQLSTATE raised by the guard trigger (insufficient_privilege)
GUARD_SQLSTATE = "42501"

# ============================================================================
# PRINCIPALS TABLE
# ============================================================================
principals_table = Table(
    "principals",
    metadata,
    # Assigned by the identity provider, never generated here
    Column("id", UUID, primary_key=True),
    Column("email", String(255), nullable=False),
    Column("display_name", String(100), nullable=True),
    Column("avatar_url", Text, nullable=True),
    Column("is_admin", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_principals_email", principals_table.c.email)

# ============================================================================
# ADMIN TOKENS TABLE
# ============================================================================
admin_tokens_table = Table(
    "admin_tokens",
    metadata,
    Column("value", String(255), primary_key=True),
    Column("bound_email", String(255), nullable=False),
    # No foreign key: the operator context issues under the service principal id
    Column("issued_by", UUID, nullable=False),
    Column(
        "issued_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    Column("consumed_at", TIMESTAMP(timezone=True), nullable=True),
    Column("consumed_by", UUID, ForeignKey("principals.id"), nullable=True),
    CheckConstraint(
        "(consumed_at IS NULL) = (consumed_by IS NULL)",
        name="ck_admin_tokens_consumed_pair",
    ),
    CheckConstraint("expires_at > issued_at", name="ck_admin_tokens_window"),
)

Index("idx_admin_tokens_bound_email", admin_tokens_table.c.bound_email)
Index("idx_admin_tokens_issued_at", admin_tokens_table.c.issued_at.desc())
# Cleanup scans only unconsumed tokens
Index(
    "idx_admin_tokens_unconsumed_expiry",
    admin_tokens_table.c.expires_at,
    postgresql_where=admin_tokens_table.c.consumed_at.is_(None),
)
