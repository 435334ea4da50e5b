"""Membership Ordering — pure position arithmetic for a (unit, category) scope.

Invariants:
    - Positions start at POSITION_BASE and ascend within a scope
    - Scope order is position ascending, ties broken by created_at (insertion order)
    - Next position is always derived from a fresh read, never cached
    - plan_* functions are PURE: they return plans, the shell applies them

Design Decisions:
    - Single add appends at base + count; bulk add appends after the current maximum
    - Reorder rewrites listed members densely, then applies the unlisted policy
"""

from datetime import datetime, timezone
from typing import Iterable, Protocol, Sequence
from uuid import UUID

from works_council.core.domain_types import UnlistedPolicy


POSITION_BASE: int = 0


class Positioned(Protocol):
    """Structural contract for anything that sits at a position in a scope."""
    id: UUID
    employee_id: UUID
    position: int
    created_at: datetime


def as_instant(moment: datetime) -> datetime:
    """Naive timestamps are read as UTC so stored and fresh rows compare."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def sort_scope(memberships: Iterable[Positioned]) -> list[Positioned]:
    """Order a scope for display: position, then insertion order."""
    return sorted(
        memberships, key=lambda m: (m.position, as_instant(m.created_at)),
    )


def next_position_by_count(scope: Sequence[Positioned]) -> int:
    return POSITION_BASE + len(scope)


def next_position_after_max(scope: Sequence[Positioned]) -> int:
    if not scope:
        return POSITION_BASE
    return max(m.position for m in scope) + 1


def plan_appended_positions(
    scope: Sequence[Positioned],
    employee_ids: Sequence[UUID],
    already_members: set[UUID],
) -> list[tuple[UUID, int]]:
    """Assign positions to new members in input order, skipping existing holders."""
    position = next_position_after_max(scope)
    taken = set(already_members) | {m.employee_id for m in scope}
    plan: list[tuple[UUID, int]] = []
    for employee_id in employee_ids:
        if employee_id in taken:
            continue
        taken.add(employee_id)
        plan.append((employee_id, position))
        position += 1
    return plan


def find_repeated_ids(ids: Sequence[UUID]) -> list[UUID]:
    seen: set[UUID] = set()
    repeated: list[UUID] = []
    for item in ids:
        if item in seen and item not in repeated:
            repeated.append(item)
        seen.add(item)
    return repeated


def dedupe_preserving_order(ids: Iterable[UUID]) -> list[UUID]:
    return list(dict.fromkeys(ids))


def plan_reorder(
    scope: Sequence[Positioned],
    ordered_employee_ids: Sequence[UUID],
    unlisted: UnlistedPolicy = UnlistedPolicy.APPEND,
) -> dict[UUID, int]:
    """Target position per membership id after a reorder.

    Listed employees that hold a membership in the scope get POSITION_BASE,
    POSITION_BASE + 1, ... in list order; unknown ids are ignored. Unlisted
    members are appended in their previous relative order (APPEND) or keep
    their current position (KEEP).
    """
    by_employee = {m.employee_id: m for m in scope}
    targets: dict[UUID, int] = {}
    position = POSITION_BASE
    for employee_id in dedupe_preserving_order(ordered_employee_ids):
        membership = by_employee.get(employee_id)
        if membership is None:
            continue
        targets[membership.id] = position
        position += 1

    for membership in sort_scope(scope):
        if membership.id in targets:
            continue
        if unlisted is UnlistedPolicy.APPEND:
            targets[membership.id] = position
            position += 1
        else:
            targets[membership.id] = membership.position
    return targets


def changed_positions(
    scope: Sequence[Positioned], targets: dict[UUID, int],
) -> list[tuple[Positioned, int]]:
    """Memberships whose position differs from the plan — the only ones to write."""
    return [
        (m, targets[m.id])
        for m in scope
        if m.id in targets and targets[m.id] != m.position
    ]
