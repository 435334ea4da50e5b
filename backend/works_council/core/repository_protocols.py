"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - Every mutating store call is durable when it returns

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO,
      the pure ordering functions that consume their results are never async
    - Entity shapes are Protocols too, so tests can pass plain objects
"""

from datetime import datetime
from typing import Protocol, Sequence
from uuid import UUID

from works_council.core.domain_types import Category


class EmployeeLike(Protocol):
    """Structural contract for employees resolved through the lookup."""
    id: UUID
    technical_business_unit_id: UUID
    first_name: str
    last_name: str


class CouncilLike(Protocol):
    """Structural contract for a works council record."""
    id: UUID
    unit_id: UUID
    created_at: datetime
    updated_at: datetime


class MembershipLike(Protocol):
    """Structural contract for one employee's seat in one category."""
    id: UUID
    council_id: UUID
    unit_id: UUID
    employee_id: UUID
    category: str
    position: int
    created_at: datetime
    updated_at: datetime

    def move_to(self, position: int) -> None: ...


class EmployeeLookup(Protocol):
    """Read-only employee directory — owned by the employee CRUD side."""
    async def get_by_id(self, employee_id: UUID) -> EmployeeLike | None: ...
    async def get_all(self) -> list[EmployeeLike]: ...
    async def get_by_unit(self, unit_id: UUID) -> list[EmployeeLike]: ...


class CouncilRepository(Protocol):
    """Contract for council persistence — implemented by shell."""
    async def get_by_unit(self, unit_id: UUID) -> CouncilLike | None: ...
    async def get_by_id(self, council_id: UUID) -> CouncilLike | None: ...
    async def create(self, unit_id: UUID) -> CouncilLike: ...
    async def update(self, council: CouncilLike) -> CouncilLike: ...


class MembershipRepository(Protocol):
    """Contract for membership persistence — implemented by shell."""
    async def get_by_unit(self, unit_id: UUID) -> list[MembershipLike]: ...
    async def get_by_unit_and_category(
        self, unit_id: UUID, category: Category,
    ) -> list[MembershipLike]: ...
    async def get_by_employee_and_category(
        self, employee_id: UUID, category: Category,
    ) -> MembershipLike | None: ...
    async def get_by_employee(self, employee_id: UUID) -> list[MembershipLike]: ...
    async def get_by_employees_and_category(
        self, employee_ids: Sequence[UUID], category: Category,
    ) -> list[MembershipLike]: ...
    async def add(
        self, council_id: UUID, unit_id: UUID, employee_id: UUID,
        category: Category, position: int,
    ) -> MembershipLike: ...
    async def bulk_add(
        self, council_id: UUID, unit_id: UUID, category: Category,
        placements: Sequence[tuple[UUID, int]],
    ) -> list[MembershipLike]: ...
    async def update(self, membership: MembershipLike) -> MembershipLike: ...
    async def remove(self, membership_id: UUID) -> bool: ...
    async def bulk_remove_by_employees_and_category(
        self, employee_ids: Sequence[UUID], category: Category,
    ) -> list[MembershipLike]: ...
