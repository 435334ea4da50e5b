"""Bulk Member Handlers — bulk_add, bulk_remove (2 methods).

Invariants:
    - Category parsed first; an empty id list returns Ok([]) without touching storage
    - Repeated ids collapse to their first occurrence
    - Every id is resolved against the employee directory before any write
    - Under SKIP, ids that do not resolve to an employee of the unit are dropped and
      logged; under FAIL the first such id aborts the batch with nothing written
    - bulk_add appends new members after the scope's current maximum position, in
      input order; existing holders of the category are left untouched
    - bulk_remove is idempotent per employee and never fails for non-members
    - Both return one EmployeeMembershipsResponse per resolved employee, input order
    - Resolved employees are snapshotted as EmployeeView before council resolution:
      a lost creation race rolls the session back and expires every loaded row

Design Decisions:
    - Policy chosen per call, falling back to the configured default
    - One bulk write per operation: partial batches are as atomic as the store makes them
"""

import asyncio
import logging
from typing import Sequence
from uuid import UUID

from works_council.core.domain_types import (
    Category, UnresolvedPolicy, parse_category,
)
from works_council.core.errors import ErrorContext, UniqueConstraintError
from works_council.core.ordering import (
    dedupe_preserving_order, plan_appended_positions,
)
from works_council.core.results import (
    Conflict, Invalid, NotFound, Ok, Outcome,
)
from works_council.schemas.membership import (
    EmployeeMembershipsResponse, EmployeeView,
)
from works_council.services.council_resolution import resolve_council
from works_council.services.member_projection import memberships_map
from works_council.services.membership_context import (
    MembershipHandlerBase, MembershipStores,
)

logger = logging.getLogger(__name__)


class BulkMemberHandlers(MembershipHandlerBase):
    """Batch membership commands for one unit and one category."""

    def __init__(
        self, stores: MembershipStores,
        default_policy: UnresolvedPolicy = UnresolvedPolicy.SKIP,
        cancel: asyncio.Event | None = None,
    ):
        super().__init__(stores, cancel)
        self.default_policy = default_policy

    async def bulk_add(
        self, unit_id: UUID, employee_ids: Sequence[UUID],
        category_text: str | None, policy: UnresolvedPolicy | None = None,
    ) -> Outcome[list[EmployeeMembershipsResponse]]:
        category = parse_category(category_text)
        if isinstance(category, Invalid):
            return category
        ids = dedupe_preserving_order(employee_ids)
        if not ids:
            return Ok([])

        resolved = await self._resolve_employees(
            unit_id, ids, category, policy or self.default_policy, "bulk_add",
        )
        if not isinstance(resolved, list):
            return resolved
        if not resolved:
            return Ok([])

        resolution = await resolve_council(
            self.stores.councils, unit_id, self.cancel,
        )
        resolved_ids = [e.id for e in resolved]
        self._checkpoint("bulk_add", unit_id=str(unit_id))
        holders = await self.stores.memberships.get_by_employees_and_category(
            resolved_ids, category,
        )
        self._checkpoint("bulk_add", unit_id=str(unit_id))
        scope = await self.stores.memberships.get_by_unit_and_category(
            unit_id, category,
        )
        placements = plan_appended_positions(
            scope, resolved_ids, {m.employee_id for m in holders},
        )

        if placements:
            self._checkpoint("bulk_add", unit_id=str(unit_id))
            try:
                await self.stores.memberships.bulk_add(
                    resolution.council.id, unit_id, category, placements,
                )
            except UniqueConstraintError:
                return Conflict(
                    f"A concurrent write already placed one of these employees "
                    f"in category '{category.value}'",
                    ErrorContext(unit_id=str(unit_id), category=category.value),
                )
        logger.info(
            "Bulk add completed",
            extra={
                "unit_id": unit_id, "category": category.value,
                "count": len(placements),
            },
        )
        return Ok(await self._membership_sets(resolved, "bulk_add"))

    async def bulk_remove(
        self, unit_id: UUID, employee_ids: Sequence[UUID],
        category_text: str | None, policy: UnresolvedPolicy | None = None,
    ) -> Outcome[list[EmployeeMembershipsResponse]]:
        category = parse_category(category_text)
        if isinstance(category, Invalid):
            return category
        ids = dedupe_preserving_order(employee_ids)
        if not ids:
            return Ok([])

        resolved = await self._resolve_employees(
            unit_id, ids, category, policy or self.default_policy, "bulk_remove",
        )
        if not isinstance(resolved, list):
            return resolved
        if not resolved:
            return Ok([])

        self._checkpoint("bulk_remove", unit_id=str(unit_id))
        removed = await self.stores.memberships.bulk_remove_by_employees_and_category(
            [e.id for e in resolved], category,
        )
        logger.info(
            "Bulk remove completed",
            extra={
                "unit_id": unit_id, "category": category.value,
                "count": len(removed),
            },
        )
        return Ok(await self._membership_sets(resolved, "bulk_remove"))

    async def _resolve_employees(
        self, unit_id: UUID, ids: list[UUID], category: Category,
        policy: UnresolvedPolicy, operation: str,
    ) -> list[EmployeeView] | NotFound | Invalid:
        self._checkpoint(operation, unit_id=str(unit_id))
        directory = {e.id: e for e in await self.stores.employees.get_all()}
        resolved: list[EmployeeView] = []
        for employee_id in ids:
            context = ErrorContext(
                unit_id=str(unit_id), employee_id=str(employee_id),
                category=category.value,
            )
            employee = directory.get(employee_id)
            if employee is None:
                if policy is UnresolvedPolicy.FAIL:
                    return NotFound("Employee", str(employee_id), context)
                logger.warning(
                    "Skipping unknown employee",
                    extra={
                        "unit_id": unit_id, "employee_id": employee_id,
                        "category": category.value,
                    },
                )
                continue
            if employee.technical_business_unit_id != unit_id:
                if policy is UnresolvedPolicy.FAIL:
                    return Invalid(
                        field="unit_id",
                        message=(
                            f"Employee {employee_id} does not belong to "
                            f"unit {unit_id}"
                        ),
                        context=context,
                    )
                logger.warning(
                    "Skipping employee of another unit",
                    extra={
                        "unit_id": unit_id, "employee_id": employee_id,
                        "category": category.value,
                    },
                )
                continue
            resolved.append(EmployeeView.model_validate(employee))
        return resolved

    async def _membership_sets(
        self, employees: list[EmployeeView], operation: str,
    ) -> list[EmployeeMembershipsResponse]:
        sets = []
        for employee in employees:
            self._checkpoint(operation, employee_id=str(employee.id))
            held = await self.stores.memberships.get_by_employee(employee.id)
            sets.append(memberships_map(employee, held))
        return sets
