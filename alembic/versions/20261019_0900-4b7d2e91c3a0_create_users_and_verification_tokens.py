"""create_users_and_verification_tokens

Revision ID: 4b7d2e91c3a0
Revises:
Create Date: 2026-10-19 09:00:00.000000+00:00

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "4b7d2e91c3a0"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users and verification_tokens tables."""
    op.create_table(
        "users",
        # Primary key and timestamps from BaseMutableModel
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "email",
            sa.String(length=255),
            nullable=False,
            comment="User email address (unique, lowercase)",
        ),
        sa.Column(
            "username",
            sa.String(length=20),
            nullable=False,
            comment="Public handle (unique, lowercase, 3-20 word characters)",
        ),
        sa.Column("display_name", sa.String(length=100), nullable=True),
        sa.Column(
            "password_hash",
            sa.String(length=255),
            nullable=True,
            comment="Bcrypt hashed password (null for passwordless accounts)",
        ),
        sa.Column("role", sa.String(length=20), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("email_verified_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)
    op.create_index(op.f("ix_users_username"), "users", ["username"], unique=True)
    op.create_index(op.f("ix_users_status"), "users", ["status"], unique=False)

    op.create_table(
        "verification_tokens",
        sa.Column("identifier", sa.String(length=320), nullable=False),
        sa.Column("token", sa.String(length=128), nullable=False),
        sa.Column("expires", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("identifier", "token"),
        sa.UniqueConstraint("token"),
    )
    op.create_index(
        "idx_verification_tokens_identifier",
        "verification_tokens",
        ["identifier"],
        unique=False,
    )
    op.create_index(
        "idx_verification_tokens_expires",
        "verification_tokens",
        ["expires"],
        unique=False,
    )


def downgrade() -> None:
    """Drop verification_tokens and users tables."""
    op.drop_index("idx_verification_tokens_expires", table_name="verification_tokens")
    op.drop_index("idx_verification_tokens_identifier", table_name="verification_tokens")
    op.drop_table("verification_tokens")
    op.drop_index(op.f("ix_users_status"), table_name="users")
    op.drop_index(op.f("ix_users_username"), table_name="users")
    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_table("users")
