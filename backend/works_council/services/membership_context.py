"""Membership Context — stores and cancellation shared by every membership handler.

Invariants:
    - check_cancelled() runs before every store call: a set event stops the operation
      at the next suspension point with OperationCancelledError
    - Handlers never cache store reads between calls

Design Decisions:
    - Stores bundled in one dataclass so the engine wires them once per request
    - asyncio.Event as the cancellation signal: callers flip it from any task
"""

import asyncio
from dataclasses import dataclass
from typing import Iterable
from uuid import UUID

from works_council.core.errors import ErrorContext, OperationCancelledError
from works_council.core.repository_protocols import (
    CouncilRepository,
    EmployeeLike,
    EmployeeLookup,
    MembershipLike,
    MembershipRepository,
)


@dataclass
class MembershipStores:
    employees: EmployeeLookup
    councils: CouncilRepository
    memberships: MembershipRepository


def check_cancelled(
    cancel: asyncio.Event | None, operation: str,
    context: ErrorContext | None = None,
) -> None:
    if cancel is not None and cancel.is_set():
        raise OperationCancelledError(operation, context)


class MembershipHandlerBase:
    """Common wiring for membership handlers: stores, cancel signal, employee index."""

    def __init__(
        self, stores: MembershipStores, cancel: asyncio.Event | None = None,
    ):
        self.stores = stores
        self.cancel = cancel

    def _checkpoint(self, operation: str, **context) -> None:
        check_cancelled(self.cancel, operation, ErrorContext(**context))

    async def _employee_index(
        self, unit_id: UUID, rows: Iterable[MembershipLike], operation: str,
    ) -> dict[UUID, EmployeeLike]:
        """Employees referenced by rows, fetched by unit then individually for strays."""
        wanted = {m.employee_id for m in rows}
        if not wanted:
            return {}
        self._checkpoint(operation, unit_id=str(unit_id))
        index = {
            e.id: e for e in await self.stores.employees.get_by_unit(unit_id)
            if e.id in wanted
        }
        for employee_id in wanted - index.keys():
            self._checkpoint(operation, employee_id=str(employee_id))
            employee = await self.stores.employees.get_by_id(employee_id)
            if employee is not None:
                index[employee_id] = employee
        return index
