"""Membership Ordering — pure position planning.

Tests:
    - next position by count and after max
    - appended placements follow input order and skip existing holders
    - reorder with APPEND and KEEP policies, unknown ids ignored
    - only changed positions are reported for writing
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from uuid import UUID, uuid4

from works_council.core.domain_types import UnlistedPolicy
from works_council.core.ordering import (
    POSITION_BASE,
    as_instant,
    changed_positions,
    dedupe_preserving_order,
    find_repeated_ids,
    next_position_after_max,
    next_position_by_count,
    plan_appended_positions,
    plan_reorder,
    sort_scope,
)

T0 = datetime(2026, 1, 1, tzinfo=timezone.utc)


@dataclass
class Seat:
    position: int
    created_at: datetime = T0
    employee_id: UUID = field(default_factory=uuid4)
    id: UUID = field(default_factory=uuid4)


def _scope(*positions):
    return [
        Seat(p, created_at=T0 + timedelta(seconds=i))
        for i, p in enumerate(positions)
    ]


def test_position_base_is_zero():
    assert POSITION_BASE == 0


def test_next_position_by_count():
    assert next_position_by_count([]) == 0
    assert next_position_by_count(_scope(0, 2)) == 2


def test_next_position_after_max():
    assert next_position_after_max([]) == 0
    assert next_position_after_max(_scope(0, 5, 2)) == 6


def test_sort_scope_breaks_ties_by_created_at():
    later = Seat(1, created_at=T0 + timedelta(minutes=1))
    earlier = Seat(1, created_at=T0)
    first = Seat(0, created_at=T0 + timedelta(hours=1))
    assert sort_scope([later, earlier, first]) == [first, earlier, later]


def test_sort_scope_mixes_naive_and_aware_timestamps():
    naive = Seat(1, created_at=datetime(2026, 1, 1))
    aware = Seat(1, created_at=datetime(2026, 1, 2, tzinfo=timezone.utc))
    assert sort_scope([aware, naive]) == [naive, aware]


def test_as_instant_reads_naive_as_utc():
    assert as_instant(datetime(2026, 1, 1)).tzinfo is timezone.utc


def test_plan_appended_positions_in_input_order():
    scope = _scope(0, 1)
    e1, e2, e3 = uuid4(), uuid4(), uuid4()
    plan = plan_appended_positions(scope, [e1, e2, e3], already_members=set())
    assert plan == [(e1, 2), (e2, 3), (e3, 4)]


def test_plan_appended_positions_skips_holders_and_repeats():
    scope = _scope(0)
    holder = scope[0].employee_id
    other_holder, new = uuid4(), uuid4()
    plan = plan_appended_positions(
        scope, [holder, new, other_holder, new], already_members={other_holder},
    )
    assert plan == [(new, 1)]


def test_find_repeated_ids():
    a, b, c = uuid4(), uuid4(), uuid4()
    assert find_repeated_ids([a, b, a, c, a, b]) == [a, b]
    assert find_repeated_ids([a, b, c]) == []


def test_dedupe_preserving_order():
    a, b = uuid4(), uuid4()
    assert dedupe_preserving_order([b, a, b, a]) == [b, a]


def test_reorder_appends_unlisted_members():
    a, b, c = _scope(0, 1, 2)
    targets = plan_reorder([a, b, c], [c.employee_id, a.employee_id])
    assert targets == {c.id: 0, a.id: 1, b.id: 2}


def test_reorder_ignores_unknown_ids():
    a, b = _scope(0, 1)
    targets = plan_reorder([a, b], [uuid4(), b.employee_id])
    assert targets == {b.id: 0, a.id: 1}


def test_reorder_keep_policy_leaves_unlisted_in_place():
    a, b, c = _scope(0, 1, 2)
    targets = plan_reorder(
        [a, b, c], [c.employee_id], unlisted=UnlistedPolicy.KEEP,
    )
    assert targets == {c.id: 0, a.id: 0, b.id: 1}


def test_reorder_compacts_gaps():
    a, b = _scope(0, 4)
    targets = plan_reorder([a, b], [])
    assert targets == {a.id: 0, b.id: 1}


def test_changed_positions_only_reports_moves():
    a, b, c = _scope(0, 1, 2)
    targets = {a.id: 1, b.id: 0, c.id: 2}
    assert changed_positions([a, b, c], targets) == [(a, 1), (b, 0)]
