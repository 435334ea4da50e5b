"""Operation Results — tagged outcomes returned by every engine operation.

Invariants:
    - Every engine operation returns exactly one of Ok | NotFound | Conflict | Invalid
    - Each failure variant maps to exactly one WorksCouncilError subclass
    - unwrap() on Ok returns the value; on a failure it raises the mapped error
    - Council resolution is tagged Found | Created so callers see which branch fired

Design Decisions:
    - Results over exceptions for business outcomes: callers branch on the variant,
      exception types are not part of the engine contract
    - Routes call unwrap() and let the global handler render the envelope
"""

from dataclasses import dataclass, field as dataclass_field
from typing import Any, Generic, TypeVar

from works_council.core.errors import (
    CategoryValidationError,
    DuplicateMembershipError,
    ErrorContext,
    OrderingValidationError,
    ResourceNotFoundError,
    UnitMismatchError,
    WorksCouncilError,
)

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class NotFound:
    """Referenced employee, membership or council does not exist."""
    resource_type: str
    resource_id: str
    context: ErrorContext = dataclass_field(
        default_factory=ErrorContext, compare=False,
    )

    @property
    def ok(self) -> bool:
        return False

    def to_error(self) -> WorksCouncilError:
        return ResourceNotFoundError(
            self.resource_type, self.resource_id, self.context,
        )

    def unwrap(self) -> Any:
        raise self.to_error()


@dataclass(frozen=True)
class Conflict:
    """Employee already holds a membership in the category."""
    message: str
    context: ErrorContext = dataclass_field(
        default_factory=ErrorContext, compare=False,
    )

    @property
    def ok(self) -> bool:
        return False

    def to_error(self) -> WorksCouncilError:
        return DuplicateMembershipError(self.message, self.context)

    def unwrap(self) -> Any:
        raise self.to_error()


# field -> error class raised for an Invalid on that field
_INVALID_ERRORS: dict[str, type[WorksCouncilError]] = {
    "category": CategoryValidationError,
    "ordered_ids": OrderingValidationError,
    "unit_id": UnitMismatchError,
}


@dataclass(frozen=True)
class Invalid:
    """Input rejected before any storage mutation."""
    field: str
    message: str
    context: ErrorContext = dataclass_field(
        default_factory=ErrorContext, compare=False,
    )

    @property
    def ok(self) -> bool:
        return False

    def to_error(self) -> WorksCouncilError:
        error_cls = _INVALID_ERRORS.get(self.field, CategoryValidationError)
        return error_cls(self.message, self.context)

    def unwrap(self) -> Any:
        raise self.to_error()


Outcome = Ok[T] | NotFound | Conflict | Invalid


# ─── Council resolution ──────────────────────────────────────────

@dataclass(frozen=True)
class Found(Generic[T]):
    """Council already existed for the unit."""
    council: T
    created: bool = False


@dataclass(frozen=True)
class Created(Generic[T]):
    """Council was created by this call."""
    council: T
    created: bool = True


CouncilResolution = Found[T] | Created[T]
