"""admin_elevation_schema

Create the schema for admin elevation:
- Principals (identity-provider id and email, profile fields, is_admin)
- Admin tokens (single-use, email-bound, time-limited)
- Guard trigger rejecting is_admin changes outside the operator path

Revision ID: 4c2e9a1f7b3d
Revises:
Create Date: 2026-10-17 09:12:44.518203

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "4c2e9a1f7b3d"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # ========================================================================
    # PRINCIPALS table
    # ========================================================================
    op.create_table(
        "principals",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("display_name", sa.String(length=100), nullable=True),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.Column(
            "is_admin", sa.Boolean(), server_default=sa.text("false"), nullable=False
        ),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_principals_email", "principals", ["email"])

    # ========================================================================
    # ADMIN_TOKENS table
    # ========================================================================
    op.create_table(
        "admin_tokens",
        sa.Column("value", sa.String(length=255), nullable=False),
        sa.Column("bound_email", sa.String(length=255), nullable=False),
        sa.Column("issued_by", sa.UUID(), nullable=False),
        sa.Column(
            "issued_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.Column("expires_at", postgresql.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("consumed_at", postgresql.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("consumed_by", sa.UUID(), nullable=True),
        sa.ForeignKeyConstraint(["consumed_by"], ["principals.id"]),
        sa.CheckConstraint(
            "(consumed_at IS NULL) = (consumed_by IS NULL)",
            name="ck_admin_tokens_consumed_pair",
        ),
        sa.CheckConstraint("expires_at > issued_at", name="ck_admin_tokens_window"),
        sa.PrimaryKeyConstraint("value"),
    )
    op.create_index("idx_admin_tokens_bound_email", "admin_tokens", ["bound_email"])
    op.create_index(
        "idx_admin_tokens_issued_at",
        "admin_tokens",
        [sa.text("issued_at DESC")],
    )
    op.create_index(
        "idx_admin_tokens_unconsumed_expiry",
        "admin_tokens",
        ["expires_at"],
        postgresql_where=sa.text("consumed_at IS NULL"),
    )

    # ========================================================================
    # Guard trigger: compares OLD and NEW, so it sees the pre-update value.
    # Only a transaction that set elevate.trusted_operator = 'on' may change
    # is_admin, or insert a row with is_admin = true.
    # ========================================================================
    op.execute("""
        CREATE OR REPLACE FUNCTION principals_guard_is_admin()
        RETURNS TRIGGER AS $$
        DECLARE
            old_is_admin BOOLEAN := false;
        BEGIN
            IF TG_OP = 'UPDATE' THEN
                old_is_admin := OLD.is_admin;
                IF NEW.id IS DISTINCT FROM OLD.id THEN
                    RAISE EXCEPTION 'principal id is immutable'
                        USING ERRCODE = '42501';
                END IF;
            END IF;

            IF NEW.is_admin IS DISTINCT FROM old_is_admin
               AND coalesce(current_setting('elevate.trusted_operator', true), '') <> 'on'
            THEN
                RAISE EXCEPTION 'Permission denied: users cannot modify their own admin status'
                    USING ERRCODE = '42501';
            END IF;

            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql
    """)

    op.execute("""
        CREATE TRIGGER principals_guard_is_admin
        BEFORE INSERT OR UPDATE ON principals
        FOR EACH ROW
        EXECUTE FUNCTION principals_guard_is_admin()
    """)


def downgrade() -> None:
    """Downgrade schema."""
    op.execute("DROP TRIGGER IF EXISTS principals_guard_is_admin ON principals")
    op.execute("DROP FUNCTION IF EXISTS principals_guard_is_admin()")
    op.drop_index("idx_admin_tokens_unconsumed_expiry", table_name="admin_tokens")
    op.drop_index("idx_admin_tokens_issued_at", table_name="admin_tokens")
    op.drop_index("idx_admin_tokens_bound_email", table_name="admin_tokens")
    op.drop_table("admin_tokens")
    op.drop_index("idx_principals_email", table_name="principals")
    op.drop_table("principals")
