"""Council Repository — SQLAlchemy persistence for WorksCouncil rows.

Invariants:
    - create() commits before returning: the council is durable before memberships reference it
    - A second council for the same unit is rejected by the unique index and
      surfaces as UniqueConstraintError after rollback (never a silent duplicate)

Design Decisions:
    - Takes the request AsyncSession: one session per request, shared with the membership repository
"""

import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from works_council.core.errors import ErrorContext, UniqueConstraintError
from works_council.models.works_council import WorksCouncil

logger = logging.getLogger(__name__)


class SqlCouncilRepository:
    """CouncilRepository backed by the works_councils table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_unit(self, unit_id: UUID) -> WorksCouncil | None:
        result = await self.db.execute(
            select(WorksCouncil).where(WorksCouncil.unit_id == unit_id),
        )
        return result.scalar_one_or_none()

    async def get_by_id(self, council_id: UUID) -> WorksCouncil | None:
        result = await self.db.execute(
            select(WorksCouncil).where(WorksCouncil.id == council_id),
        )
        return result.scalar_one_or_none()

    async def create(self, unit_id: UUID) -> WorksCouncil:
        now = datetime.now(timezone.utc)
        council = WorksCouncil(unit_id=unit_id, created_at=now, updated_at=now)
        self.db.add(council)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(
                f"Council insert rejected by unique index: {e}",
                extra={"unit_id": unit_id},
            )
            raise UniqueConstraintError(
                "WorksCouncil", f"unit_id={unit_id}",
                ErrorContext(unit_id=str(unit_id)),
            )
        return council

    async def update(self, council: WorksCouncil) -> WorksCouncil:
        council.updated_at = datetime.now(timezone.utc)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"Council update rejected by unique index: {e}")
            raise UniqueConstraintError(
                "WorksCouncil", f"unit_id={council.unit_id}",
                ErrorContext(unit_id=str(council.unit_id)),
            )
        return council
