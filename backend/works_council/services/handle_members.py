"""Member Handlers — add, remove, list, and council lookup (4 methods).

Invariants:
    - Category parsed before any store call: bad text never reaches storage
    - add: employee must resolve, must belong to the addressed unit, and must not
      already hold the category anywhere (one membership per employee per category)
    - add appends at base + count of the scope, read fresh on every call
    - remove deletes exactly one membership and never renumbers the rest
    - list and get_council are read-only and never create a council

Design Decisions:
    - Business outcomes returned as Ok | NotFound | Conflict | Invalid, never raised
    - A storage uniqueness rejection on insert is reported as Conflict, same as the
      pre-check, so a concurrent duplicate looks identical to a sequential one
"""

import logging
from uuid import UUID

from works_council.core.domain_types import Category, parse_category
from works_council.core.errors import ErrorContext, UniqueConstraintError
from works_council.core.ordering import next_position_by_count, sort_scope
from works_council.core.results import (
    Conflict, Invalid, NotFound, Ok, Outcome,
)
from works_council.schemas.membership import CouncilResponse, MemberResponse
from works_council.services.council_resolution import resolve_council
from works_council.services.member_projection import (
    member_view, project_members, sort_for_listing,
)
from works_council.services.membership_context import MembershipHandlerBase

logger = logging.getLogger(__name__)


class MemberHandlers(MembershipHandlerBase):
    """Single-member commands and read-only queries."""

    async def add_member(
        self, unit_id: UUID | None, employee_id: UUID, category_text: str | None,
    ) -> Outcome[list[MemberResponse]]:
        """Append one employee to a category; returns the whole scope in order."""
        category = parse_category(category_text)
        if isinstance(category, Invalid):
            return category
        context = ErrorContext(
            unit_id=str(unit_id) if unit_id else None,
            employee_id=str(employee_id), category=category.value,
        )

        self._checkpoint("add_member", employee_id=str(employee_id))
        employee = await self.stores.employees.get_by_id(employee_id)
        if employee is None:
            return NotFound("Employee", str(employee_id), context)
        if unit_id is not None and employee.technical_business_unit_id != unit_id:
            return Invalid(
                field="unit_id",
                message=f"Employee {employee_id} does not belong to unit {unit_id}",
                context=context,
            )
        unit_id = employee.technical_business_unit_id

        self._checkpoint("add_member", employee_id=str(employee_id))
        existing = await self.stores.memberships.get_by_employee_and_category(
            employee_id, category,
        )
        if existing is not None:
            return _duplicate(employee_id, category, context)

        resolution = await resolve_council(
            self.stores.councils, unit_id, self.cancel,
        )
        self._checkpoint("add_member", unit_id=str(unit_id))
        scope = await self.stores.memberships.get_by_unit_and_category(
            unit_id, category,
        )
        position = next_position_by_count(scope)

        self._checkpoint("add_member", unit_id=str(unit_id))
        try:
            await self.stores.memberships.add(
                resolution.council.id, unit_id, employee_id, category, position,
            )
        except UniqueConstraintError:
            return _duplicate(employee_id, category, context)

        logger.info(
            f"Member added at position {position}",
            extra={
                "unit_id": unit_id, "employee_id": employee_id,
                "category": category.value,
            },
        )
        return Ok(await self._scope_view(unit_id, category, "add_member"))

    async def remove_member(
        self, unit_id: UUID | None, employee_id: UUID, category_text: str | None,
    ) -> Outcome[MemberResponse]:
        """Delete one membership; returns it as it was before deletion."""
        category = parse_category(category_text)
        if isinstance(category, Invalid):
            return category
        context = ErrorContext(
            unit_id=str(unit_id) if unit_id else None,
            employee_id=str(employee_id), category=category.value,
        )

        self._checkpoint("remove_member", employee_id=str(employee_id))
        membership = await self.stores.memberships.get_by_employee_and_category(
            employee_id, category,
        )
        if membership is None or (
            unit_id is not None and membership.unit_id != unit_id
        ):
            return NotFound(
                "CouncilMembership",
                f"employee_id={employee_id}, category={category.value}",
                context,
            )

        self._checkpoint("remove_member", employee_id=str(employee_id))
        employee = await self.stores.employees.get_by_id(employee_id)
        removed = member_view(membership, employee)

        self._checkpoint("remove_member", employee_id=str(employee_id))
        await self.stores.memberships.remove(membership.id)
        logger.info(
            f"Member removed from position {removed.position}",
            extra={
                "unit_id": removed.unit_id, "employee_id": employee_id,
                "category": category.value,
            },
        )
        return Ok(removed)

    async def list_members(
        self, unit_id: UUID, category_text: str | None = None,
    ) -> Outcome[list[MemberResponse]]:
        """Memberships of a unit, optionally one category, in display order."""
        category: Category | None = None
        if category_text:
            parsed = parse_category(category_text)
            if isinstance(parsed, Invalid):
                return parsed
            category = parsed

        self._checkpoint("list_members", unit_id=str(unit_id))
        if category is None:
            rows = await self.stores.memberships.get_by_unit(unit_id)
        else:
            rows = await self.stores.memberships.get_by_unit_and_category(
                unit_id, category,
            )
        rows = sort_for_listing(rows)
        employees = await self._employee_index(unit_id, rows, "list_members")
        return Ok(project_members(rows, employees))

    async def get_council(self, unit_id: UUID) -> Outcome[CouncilResponse]:
        self._checkpoint("get_council", unit_id=str(unit_id))
        council = await self.stores.councils.get_by_unit(unit_id)
        if council is None:
            return NotFound(
                "WorksCouncil", str(unit_id),
                ErrorContext(unit_id=str(unit_id)),
            )
        return Ok(CouncilResponse.model_validate(council))

    async def _scope_view(
        self, unit_id: UUID, category: Category, operation: str,
    ) -> list[MemberResponse]:
        self._checkpoint(operation, unit_id=str(unit_id))
        scope = sort_scope(
            await self.stores.memberships.get_by_unit_and_category(
                unit_id, category,
            ),
        )
        employees = await self._employee_index(unit_id, scope, operation)
        return project_members(scope, employees)


def _duplicate(
    employee_id: UUID, category: Category, context: ErrorContext,
) -> Conflict:
    return Conflict(
        f"Employee {employee_id} is already a member of category "
        f"'{category.value}'",
        context,
    )
