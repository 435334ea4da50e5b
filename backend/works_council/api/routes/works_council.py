"""Works Council Routes — membership management for one organizational unit.

Invariants:
    - Every endpoint delegates to MembershipEngine and unwraps its Outcome:
      failures raise the mapped WorksCouncilError, rendered by the global handler
    - Bodies are camelCase (MemberRequest, BulkMembersRequest, ReorderRequest)
    - DELETE /members carries a JSON body, like POST

Design Decisions:
    - Engine built per request by a dependency: one AsyncSession, current settings
    - strict=None leaves the configured bulk policy in charge
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from works_council.config import Settings, get_settings
from works_council.core.domain_types import UnresolvedPolicy
from works_council.infrastructure.database import get_db
from works_council.schemas.membership import (
    BulkMembersRequest,
    CouncilResponse,
    EmployeeMembershipsResponse,
    MemberRequest,
    MemberResponse,
    ReorderRequest,
)
from works_council.services.membership_engine import MembershipEngine, build_engine

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/works-council", tags=["works-council"])


async def get_engine(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> MembershipEngine:
    return build_engine(db, settings)


def _policy(strict: bool | None) -> UnresolvedPolicy | None:
    if strict is None:
        return None
    return UnresolvedPolicy.FAIL if strict else UnresolvedPolicy.SKIP


@router.get("/{unit_id}", response_model=CouncilResponse)
async def get_council(
    unit_id: UUID, engine: MembershipEngine = Depends(get_engine),
):
    return (await engine.get_council(unit_id)).unwrap()


@router.get("/{unit_id}/members", response_model=list[MemberResponse])
async def list_members(
    unit_id: UUID,
    category: str | None = Query(None),
    engine: MembershipEngine = Depends(get_engine),
):
    return (await engine.list_members(unit_id, category)).unwrap()


@router.post("/{unit_id}/members", response_model=list[MemberResponse])
async def add_member(
    unit_id: UUID, body: MemberRequest,
    engine: MembershipEngine = Depends(get_engine),
):
    """Add one employee; responds with the category's full ordered scope."""
    return (
        await engine.add_member(body.employee_id, body.category, unit_id=unit_id)
    ).unwrap()


@router.delete("/{unit_id}/members", response_model=MemberResponse)
async def remove_member(
    unit_id: UUID, body: MemberRequest,
    engine: MembershipEngine = Depends(get_engine),
):
    return (
        await engine.remove_member(
            body.employee_id, body.category, unit_id=unit_id,
        )
    ).unwrap()


@router.post(
    "/{unit_id}/members/bulk-add",
    response_model=list[EmployeeMembershipsResponse],
)
async def bulk_add_members(
    unit_id: UUID, body: BulkMembersRequest,
    engine: MembershipEngine = Depends(get_engine),
):
    return (
        await engine.bulk_add_members(
            unit_id, body.employee_ids, body.category, _policy(body.strict),
        )
    ).unwrap()


@router.post(
    "/{unit_id}/members/bulk-remove",
    response_model=list[EmployeeMembershipsResponse],
)
async def bulk_remove_members(
    unit_id: UUID, body: BulkMembersRequest,
    engine: MembershipEngine = Depends(get_engine),
):
    return (
        await engine.bulk_remove_members(
            unit_id, body.employee_ids, body.category, _policy(body.strict),
        )
    ).unwrap()


@router.post("/{unit_id}/reorder", response_model=list[MemberResponse])
async def reorder_members(
    unit_id: UUID, body: ReorderRequest,
    engine: MembershipEngine = Depends(get_engine),
):
    return (
        await engine.reorder_members(unit_id, body.category, body.ordered_ids)
    ).unwrap()
