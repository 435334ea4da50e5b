"""ORM Models — SQLAlchemy declarative models for all persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - WorksCouncil is the aggregate root; memberships scoped by council_id

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from works_council.models.employee import Employee  # noqa: F401
from works_council.models.works_council import WorksCouncil  # noqa: F401
from works_council.models.membership import CouncilMembership  # noqa: F401
