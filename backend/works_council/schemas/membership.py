"""Membership Schemas — Pydantic models for the works-council API boundary.

Invariants:
    - Bodies are camelCase on the wire; snake_case is accepted on input too
    - category stays free-form text here: the engine owns category validation
    - Response models read straight off ORM rows (from_attributes)

Design Decisions:
    - alias_generator over per-field aliases: one rule for every model
    - strict is optional: absent means the configured bulk policy applies
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for every works-council body: camelCase aliases, ORM-readable."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# --- Requests ----------------------------------------------------------------

class MemberRequest(CamelModel):
    """Single add / single remove body."""
    employee_id: UUID
    category: str


class BulkMembersRequest(CamelModel):
    """Bulk add / bulk remove body."""
    employee_ids: list[UUID] = Field(default_factory=list)
    category: str
    strict: bool | None = None


class ReorderRequest(CamelModel):
    """Desired order of employees inside one category."""
    category: str
    ordered_ids: list[UUID] = Field(default_factory=list)


# --- Responses ---------------------------------------------------------------

class EmployeeView(CamelModel):
    id: UUID
    technical_business_unit_id: UUID
    first_name: str
    last_name: str
    email: str | None = None
    role: str | None = None
    status: str | None = None


class MemberResponse(CamelModel):
    """One membership paired with the employee holding it."""
    id: UUID
    council_id: UUID
    unit_id: UUID
    employee_id: UUID
    category: str
    position: int
    created_at: datetime
    updated_at: datetime
    employee: EmployeeView | None = None


class MembershipInfo(CamelModel):
    member: bool
    position: int | None = None


class EmployeeMembershipsResponse(CamelModel):
    """An employee and every category it currently holds, keyed by category code."""
    employee: EmployeeView
    memberships: dict[str, MembershipInfo] = Field(default_factory=dict)


class CouncilResponse(CamelModel):
    id: UUID
    unit_id: UUID
    created_at: datetime
    updated_at: datetime
