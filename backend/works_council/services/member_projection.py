"""Member Projection — map stored memberships to response shapes.

Invariants:
    - Pure: no IO, callers pass the employees they already fetched
    - Listing order is category declaration order, then position, then created_at
    - memberships_map always carries all four categories
"""

from typing import Iterable, Mapping
from uuid import UUID

from works_council.core.domain_types import CATEGORY_ORDER, Category
from works_council.core.ordering import as_instant
from works_council.core.repository_protocols import EmployeeLike, MembershipLike
from works_council.schemas.membership import (
    EmployeeMembershipsResponse,
    EmployeeView,
    MemberResponse,
    MembershipInfo,
)


def member_view(
    membership: MembershipLike, employee: EmployeeLike | None,
) -> MemberResponse:
    return MemberResponse(
        id=membership.id,
        council_id=membership.council_id,
        unit_id=membership.unit_id,
        employee_id=membership.employee_id,
        category=membership.category,
        position=membership.position,
        created_at=membership.created_at,
        updated_at=membership.updated_at,
        employee=(
            EmployeeView.model_validate(employee) if employee is not None else None
        ),
    )


def project_members(
    rows: Iterable[MembershipLike], employees: Mapping[UUID, EmployeeLike],
) -> list[MemberResponse]:
    return [member_view(m, employees.get(m.employee_id)) for m in rows]


def sort_for_listing(rows: Iterable[MembershipLike]) -> list[MembershipLike]:
    return sorted(
        rows,
        key=lambda m: (
            CATEGORY_ORDER[Category(m.category)], m.position,
            as_instant(m.created_at),
        ),
    )


def memberships_map(
    employee: EmployeeLike, held: Iterable[MembershipLike],
) -> EmployeeMembershipsResponse:
    """Per-category view of one employee: member flag plus position when held."""
    by_category = {m.category: m for m in held}
    memberships = {}
    for category in Category:
        membership = by_category.get(category.value)
        memberships[category.value] = MembershipInfo(
            member=membership is not None,
            position=membership.position if membership is not None else None,
        )
    return EmployeeMembershipsResponse(
        employee=EmployeeView.model_validate(employee),
        memberships=memberships,
    )
