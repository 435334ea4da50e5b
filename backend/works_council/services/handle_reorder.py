"""Reorder Handlers — rewrite positions inside one (unit, category) scope.

Invariants:
    - Category and ordered ids validated before any read: repeated ids are Invalid
    - Listed members get base, base + 1, ... in list order; unknown ids are ignored
    - Unlisted members follow the configured UnlistedPolicy (APPEND by default)
    - Only memberships whose position changes are written
"""

import asyncio
import logging
from typing import Sequence
from uuid import UUID

from works_council.core.domain_types import UnlistedPolicy, parse_category
from works_council.core.errors import ErrorContext
from works_council.core.ordering import (
    changed_positions, find_repeated_ids, plan_reorder, sort_scope,
)
from works_council.core.results import Invalid, Ok, Outcome
from works_council.schemas.membership import MemberResponse
from works_council.services.member_projection import project_members
from works_council.services.membership_context import (
    MembershipHandlerBase, MembershipStores,
)

logger = logging.getLogger(__name__)


class ReorderHandlers(MembershipHandlerBase):
    """Explicit reordering of a category."""

    def __init__(
        self, stores: MembershipStores,
        unlisted_policy: UnlistedPolicy = UnlistedPolicy.APPEND,
        cancel: asyncio.Event | None = None,
    ):
        super().__init__(stores, cancel)
        self.unlisted_policy = unlisted_policy

    async def reorder(
        self, unit_id: UUID, category_text: str | None,
        ordered_ids: Sequence[UUID],
    ) -> Outcome[list[MemberResponse]]:
        category = parse_category(category_text)
        if isinstance(category, Invalid):
            return category
        repeated = find_repeated_ids(ordered_ids)
        if repeated:
            return Invalid(
                field="ordered_ids",
                message=(
                    "Employee ids repeated in ordering: "
                    + ", ".join(str(i) for i in repeated)
                ),
                context=ErrorContext(
                    unit_id=str(unit_id), category=category.value,
                ),
            )

        self._checkpoint("reorder_members", unit_id=str(unit_id))
        scope = await self.stores.memberships.get_by_unit_and_category(
            unit_id, category,
        )
        if not scope:
            return Ok([])

        targets = plan_reorder(scope, ordered_ids, self.unlisted_policy)
        moves = changed_positions(scope, targets)
        for membership, position in moves:
            membership.move_to(position)
            self._checkpoint(
                "reorder_members", employee_id=str(membership.employee_id),
            )
            await self.stores.memberships.update(membership)

        logger.info(
            "Category reordered",
            extra={
                "unit_id": unit_id, "category": category.value,
                "count": len(moves),
            },
        )
        ordered = sort_scope(scope)
        employees = await self._employee_index(
            unit_id, ordered, "reorder_members",
        )
        return Ok(project_members(ordered, employees))
