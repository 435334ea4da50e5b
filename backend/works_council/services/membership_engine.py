"""Membership Engine — explicit routing from membership operations to handlers.

Invariants:
    - Every operation returns Ok | NotFound | Conflict | Invalid (never raises for
      business outcomes; cancellation and storage failures do raise)
    - Handlers share one MembershipStores and one cancel signal per engine
    - Policies come from the caller first, then from the engine defaults

Design Decisions:
    - Facade over handler classes split by concern: single, bulk, reorder
    - build_engine wires the SQL stores on one AsyncSession (one per request)
"""

import asyncio
from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from works_council.config import Settings
from works_council.core.domain_types import UnlistedPolicy, UnresolvedPolicy
from works_council.core.repository_protocols import CouncilLike
from works_council.core.results import CouncilResolution, Outcome
from works_council.infrastructure.council_repository import SqlCouncilRepository
from works_council.infrastructure.employee_lookup import SqlEmployeeLookup
from works_council.infrastructure.membership_repository import (
    SqlMembershipRepository,
)
from works_council.schemas.membership import (
    CouncilResponse, EmployeeMembershipsResponse, MemberResponse,
)
from works_council.services.council_resolution import resolve_council
from works_council.services.handle_bulk_members import BulkMemberHandlers
from works_council.services.handle_members import MemberHandlers
from works_council.services.handle_reorder import ReorderHandlers
from works_council.services.membership_context import MembershipStores


class MembershipEngine:
    """Works-council membership operations for one request."""

    def __init__(
        self, stores: MembershipStores,
        unresolved_policy: UnresolvedPolicy = UnresolvedPolicy.SKIP,
        unlisted_policy: UnlistedPolicy = UnlistedPolicy.APPEND,
        cancel: asyncio.Event | None = None,
    ):
        self.stores = stores
        self.cancel = cancel
        self._members = MemberHandlers(stores, cancel)
        self._bulk = BulkMemberHandlers(stores, unresolved_policy, cancel)
        self._reorder = ReorderHandlers(stores, unlisted_policy, cancel)

    async def resolve_council(
        self, unit_id: UUID,
    ) -> CouncilResolution[CouncilLike]:
        return await resolve_council(self.stores.councils, unit_id, self.cancel)

    async def get_council(self, unit_id: UUID) -> Outcome[CouncilResponse]:
        return await self._members.get_council(unit_id)

    async def add_member(
        self, employee_id: UUID, category: str | None,
        unit_id: UUID | None = None,
    ) -> Outcome[list[MemberResponse]]:
        return await self._members.add_member(unit_id, employee_id, category)

    async def remove_member(
        self, employee_id: UUID, category: str | None,
        unit_id: UUID | None = None,
    ) -> Outcome[MemberResponse]:
        return await self._members.remove_member(unit_id, employee_id, category)

    async def bulk_add_members(
        self, unit_id: UUID, employee_ids: Sequence[UUID], category: str | None,
        policy: UnresolvedPolicy | None = None,
    ) -> Outcome[list[EmployeeMembershipsResponse]]:
        return await self._bulk.bulk_add(unit_id, employee_ids, category, policy)

    async def bulk_remove_members(
        self, unit_id: UUID, employee_ids: Sequence[UUID], category: str | None,
        policy: UnresolvedPolicy | None = None,
    ) -> Outcome[list[EmployeeMembershipsResponse]]:
        return await self._bulk.bulk_remove(
            unit_id, employee_ids, category, policy,
        )

    async def reorder_members(
        self, unit_id: UUID, category: str | None, ordered_ids: Sequence[UUID],
    ) -> Outcome[list[MemberResponse]]:
        return await self._reorder.reorder(unit_id, category, ordered_ids)

    async def list_members(
        self, unit_id: UUID, category: str | None = None,
    ) -> Outcome[list[MemberResponse]]:
        return await self._members.list_members(unit_id, category)


def build_engine(
    db: AsyncSession, settings: Settings,
    cancel: asyncio.Event | None = None,
) -> MembershipEngine:
    stores = MembershipStores(
        employees=SqlEmployeeLookup(db),
        councils=SqlCouncilRepository(db),
        memberships=SqlMembershipRepository(db),
    )
    return MembershipEngine(
        stores,
        unresolved_policy=settings.bulk_unresolved_policy,
        unlisted_policy=settings.reorder_unlisted_policy,
        cancel=cancel,
    )
