"""Council Resolution — get-or-create the works council for a unit.

Invariants:
    - Returns Found when the unit already had a council, Created when this call made it
    - At most one council per unit: a lost creation race re-reads the winner and
      reports Found (the unique index on unit_id is the backstop)
    - The created council is durable before resolve_council returns

Design Decisions:
    - Named operation rather than a hidden step inside add: tests assert the branch
    - No application lock: the storage uniqueness constraint arbitrates concurrent creators
"""

import asyncio
import logging
from uuid import UUID

from works_council.core.errors import UniqueConstraintError
from works_council.core.repository_protocols import CouncilLike, CouncilRepository
from works_council.core.results import CouncilResolution, Created, Found
from works_council.services.membership_context import check_cancelled

logger = logging.getLogger(__name__)


async def resolve_council(
    councils: CouncilRepository, unit_id: UUID,
    cancel: asyncio.Event | None = None,
) -> CouncilResolution[CouncilLike]:
    check_cancelled(cancel, "resolve_council")
    council = await councils.get_by_unit(unit_id)
    if council is not None:
        return Found(council)

    check_cancelled(cancel, "resolve_council")
    try:
        council = await councils.create(unit_id)
    except UniqueConstraintError:
        check_cancelled(cancel, "resolve_council")
        winner = await councils.get_by_unit(unit_id)
        if winner is None:
            raise
        logger.warning(
            "Council created concurrently, using existing record",
            extra={"unit_id": unit_id, "council_id": winner.id},
        )
        return Found(winner)

    logger.info(
        "Works council created",
        extra={"unit_id": unit_id, "council_id": council.id},
    )
    return Created(council)
