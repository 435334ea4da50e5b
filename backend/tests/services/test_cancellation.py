"""Cancellation — a set event stops the engine at the next store call."""

import asyncio

import pytest

from works_council.core.errors import OperationCancelledError
from works_council.services.council_resolution import resolve_council
from works_council.services.membership_engine import MembershipEngine


async def test_cancelled_before_start_touches_nothing(fakes, unit_id):
    (e1,) = fakes.hire(unit_id)
    cancel = asyncio.Event()
    cancel.set()

    with pytest.raises(OperationCancelledError) as exc:
        await MembershipEngine(fakes.stores, cancel=cancel).add_member(
            e1.id, "workers",
        )

    assert exc.value.http_status == 408
    assert fakes.calls == []


async def test_cancel_mid_operation_stops_before_next_call(fakes, unit_id):
    (e1,) = fakes.hire(unit_id)
    cancel = asyncio.Event()
    original = fakes.stores.memberships.get_by_employee_and_category

    async def cancel_after_lookup(employee_id, category):
        result = await original(employee_id, category)
        cancel.set()
        return result

    fakes.stores.memberships.get_by_employee_and_category = cancel_after_lookup

    with pytest.raises(OperationCancelledError):
        await MembershipEngine(fakes.stores, cancel=cancel).add_member(
            e1.id, "workers",
        )

    assert "councils.get_by_unit" not in fakes.calls
    assert fakes.stores.memberships.rows == []


async def test_resolve_council_honours_cancel(fakes, unit_id):
    cancel = asyncio.Event()
    cancel.set()
    with pytest.raises(OperationCancelledError):
        await resolve_council(fakes.stores.councils, unit_id, cancel)
    assert fakes.stores.councils.councils == {}


async def test_unset_event_changes_nothing(fakes, unit_id):
    (e1,) = fakes.hire(unit_id)
    engine = MembershipEngine(fakes.stores, cancel=asyncio.Event())
    scope = (await engine.add_member(e1.id, "workers")).unwrap()
    assert len(scope) == 1
