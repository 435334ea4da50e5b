"""Membership Repository — SQLAlchemy persistence for CouncilMembership rows.

Invariants:
    - Every mutating call commits before returning
    - Scope reads come back ordered by position, then created_at
    - A duplicate (employee_id, category) insert surfaces as UniqueConstraintError after rollback
    - bulk_add and bulk_remove_by_employees_and_category are single commits

Design Decisions:
    - Entities built here from plain fields: core never constructs ORM objects
    - Category stored as its lowercase code (Category.value)
"""

import logging
from datetime import datetime, timezone
from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from works_council.core.domain_types import Category
from works_council.core.errors import ErrorContext, UniqueConstraintError
from works_council.models.membership import CouncilMembership

logger = logging.getLogger(__name__)

_SCOPE_ORDER = (CouncilMembership.position, CouncilMembership.created_at)


class SqlMembershipRepository:
    """MembershipRepository backed by the council_memberships table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_unit(self, unit_id: UUID) -> list[CouncilMembership]:
        result = await self.db.execute(
            select(CouncilMembership)
            .where(CouncilMembership.unit_id == unit_id)
            .order_by(CouncilMembership.category, *_SCOPE_ORDER)
        )
        return list(result.scalars().all())

    async def get_by_unit_and_category(
        self, unit_id: UUID, category: Category,
    ) -> list[CouncilMembership]:
        result = await self.db.execute(
            select(CouncilMembership)
            .where(CouncilMembership.unit_id == unit_id)
            .where(CouncilMembership.category == category.value)
            .order_by(*_SCOPE_ORDER)
        )
        return list(result.scalars().all())

    async def get_by_employee_and_category(
        self, employee_id: UUID, category: Category,
    ) -> CouncilMembership | None:
        result = await self.db.execute(
            select(CouncilMembership)
            .where(CouncilMembership.employee_id == employee_id)
            .where(CouncilMembership.category == category.value)
        )
        return result.scalar_one_or_none()

    async def get_by_employee(self, employee_id: UUID) -> list[CouncilMembership]:
        result = await self.db.execute(
            select(CouncilMembership)
            .where(CouncilMembership.employee_id == employee_id)
            .order_by(CouncilMembership.category, *_SCOPE_ORDER)
        )
        return list(result.scalars().all())

    async def get_by_employees_and_category(
        self, employee_ids: Sequence[UUID], category: Category,
    ) -> list[CouncilMembership]:
        if not employee_ids:
            return []
        result = await self.db.execute(
            select(CouncilMembership)
            .where(CouncilMembership.employee_id.in_(list(employee_ids)))
            .where(CouncilMembership.category == category.value)
        )
        return list(result.scalars().all())

    async def add(
        self, council_id: UUID, unit_id: UUID, employee_id: UUID,
        category: Category, position: int,
    ) -> CouncilMembership:
        membership = self._build(council_id, unit_id, employee_id, category, position)
        self.db.add(membership)
        await self._commit(category, employee_id=employee_id)
        return membership

    async def bulk_add(
        self, council_id: UUID, unit_id: UUID, category: Category,
        placements: Sequence[tuple[UUID, int]],
    ) -> list[CouncilMembership]:
        memberships = [
            self._build(council_id, unit_id, employee_id, category, position)
            for employee_id, position in placements
        ]
        if not memberships:
            return []
        self.db.add_all(memberships)
        await self._commit(category)
        return memberships

    async def update(self, membership: CouncilMembership) -> CouncilMembership:
        membership.updated_at = datetime.now(timezone.utc)
        await self._commit(
            Category(membership.category), employee_id=membership.employee_id,
        )
        return membership

    async def remove(self, membership_id: UUID) -> bool:
        membership = await self.db.get(CouncilMembership, membership_id)
        if membership is None:
            return False
        await self.db.delete(membership)
        await self.db.commit()
        return True

    async def bulk_remove_by_employees_and_category(
        self, employee_ids: Sequence[UUID], category: Category,
    ) -> list[CouncilMembership]:
        doomed = await self.get_by_employees_and_category(employee_ids, category)
        if not doomed:
            return []
        for membership in doomed:
            await self.db.delete(membership)
        await self.db.commit()
        return doomed

    @staticmethod
    def _build(
        council_id: UUID, unit_id: UUID, employee_id: UUID,
        category: Category, position: int,
    ) -> CouncilMembership:
        now = datetime.now(timezone.utc)
        return CouncilMembership(
            council_id=council_id,
            unit_id=unit_id,
            employee_id=employee_id,
            category=category.value,
            position=position,
            created_at=now,
            updated_at=now,
        )

    async def _commit(
        self, category: Category, employee_id: UUID | None = None,
    ) -> None:
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(
                f"Membership write rejected by unique constraint: {e}",
                extra={"employee_id": employee_id, "category": category.value},
            )
            raise UniqueConstraintError(
                "CouncilMembership",
                f"employee_id={employee_id}, category={category.value}",
                ErrorContext(
                    employee_id=str(employee_id) if employee_id else None,
                    category=category.value,
                ),
            )
