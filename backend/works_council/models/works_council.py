"""WorksCouncil ORM — the per-unit aggregate that owns all memberships.

Invariants:
    - At most one council per unit (unique index on unit_id)
    - Created lazily the first time a membership is requested for the unit
    - Never deleted by this service; deleting one cascades to its memberships

Design Decisions:
    - cascade="all, delete-orphan" mirrors the FK ON DELETE CASCADE on memberships
    - reassign_unit is the only mutator; it refreshes updated_at
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from works_council.db.base import Base


class WorksCouncil(Base):
    """Works council aggregate root — owns CouncilMembership rows."""
    __tablename__ = "works_councils"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    unit_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, unique=True, index=True,
    )
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
    memberships: Mapped[list["CouncilMembership"]] = relationship(
        "CouncilMembership", back_populates="council",
        cascade="all, delete-orphan", passive_deletes=True,
    )

    def reassign_unit(self, unit_id: uuid.UUID) -> None:
        self.unit_id = unit_id
        self.updated_at = datetime.now(timezone.utc)
