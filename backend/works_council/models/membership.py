"""CouncilMembership ORM — one employee's seat in one category of one council.

Invariants:
    - Always belongs to a WorksCouncil (council_id FK, ON DELETE CASCADE)
    - (employee_id, category) is unique: one membership per employee per category
    - category stores the lowercase Category code
    - position is the display/voting order inside the (unit_id, category) scope

Design Decisions:
    - unit_id denormalized: scope queries by (unit, category) without joining councils
    - No unique constraint on (unit_id, category, position): removal leaves gaps and
      ties are resolved by created_at
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    String, Integer, DateTime, ForeignKey, UniqueConstraint, Index,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from works_council.db.base import Base


class CouncilMembership(Base):
    """Membership entity — an employee seated in a category."""
    __tablename__ = "council_memberships"
    __table_args__ = (
        UniqueConstraint(
            "employee_id", "category",
            name="uq_council_memberships_employee_category",
        ),
        Index("ix_council_memberships_unit_category", "unit_id", "category"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    council_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("works_councils.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    unit_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False,
    )
    employee_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
    )
    category: Mapped[str] = mapped_column(String(20), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    council: Mapped["WorksCouncil"] = relationship(
        "WorksCouncil", back_populates="memberships",
    )

    def move_to(self, position: int) -> None:
        self.position = position
        self.updated_at = datetime.now(timezone.utc)
