"""loans

Revision ID: 0001_loans
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa

revision = "0001_loans"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "loans",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("amount", sa.Numeric(18, 2), nullable=False),
        sa.Column("current_balance", sa.Numeric(18, 2), nullable=False),
        sa.Column("applicant_name", sa.String(length=200), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False, server_default="0"),
        sa.CheckConstraint("amount > 0", name="ck_loans_amount_positive"),
        sa.CheckConstraint("current_balance >= 0 AND current_balance <= amount", name="ck_loans_balance_range"),
    )
    op.create_index("ix_loans_created_at", "loans", ["created_at"])


def downgrade():
    op.drop_index("ix_loans_created_at", table_name="loans")
    op.drop_table("loans")
