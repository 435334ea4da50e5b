"""Works council schema — employees, works_councils, council_memberships.

Revision ID: 001_works_council_schema
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_works_council_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "employees",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("technical_business_unit_id", UUID(as_uuid=True), nullable=False),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(50), nullable=False, server_default=""),
        sa.Column("role", sa.String(100), nullable=False, server_default=""),
        sa.Column("start_date", sa.Date, nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index(
        "ix_employees_technical_business_unit_id", "employees",
        ["technical_business_unit_id"],
    )

    op.create_table(
        "works_councils",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("unit_id", UUID(as_uuid=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index(
        "ix_works_councils_unit_id", "works_councils", ["unit_id"], unique=True,
    )

    op.create_table(
        "council_memberships",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "council_id", UUID(as_uuid=True),
            sa.ForeignKey("works_councils.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("unit_id", UUID(as_uuid=True), nullable=False),
        sa.Column(
            "employee_id", UUID(as_uuid=True),
            sa.ForeignKey("employees.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("category", sa.String(20), nullable=False),
        sa.Column("position", sa.Integer, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint(
            "employee_id", "category",
            name="uq_council_memberships_employee_category",
        ),
    )
    op.create_index(
        "ix_council_memberships_council_id", "council_memberships", ["council_id"],
    )
    op.create_index(
        "ix_council_memberships_unit_category", "council_memberships",
        ["unit_id", "category"],
    )


def downgrade() -> None:
    op.drop_table("council_memberships")
    op.drop_table("works_councils")
    op.drop_table("employees")
