"""Operation Results — variant tags and error mapping.

Tests:
    - Ok.unwrap returns the value
    - every failure variant raises its mapped WorksCouncilError with the right status
    - Found / Created tag which branch fired
"""

import pytest

from works_council.core.errors import (
    CategoryValidationError,
    DuplicateMembershipError,
    ErrorContext,
    OrderingValidationError,
    ResourceNotFoundError,
    UnitMismatchError,
)
from works_council.core.results import (
    Conflict, Created, Found, Invalid, NotFound, Ok,
)


def test_ok_unwrap_returns_value():
    result = Ok([1, 2])
    assert result.ok
    assert result.unwrap() == [1, 2]


def test_not_found_raises_404():
    result = NotFound("Employee", "abc")
    assert not result.ok
    with pytest.raises(ResourceNotFoundError) as exc:
        result.unwrap()
    assert exc.value.http_status == 404
    assert "abc" in exc.value.message


def test_conflict_raises_duplicate_membership_400():
    with pytest.raises(DuplicateMembershipError) as exc:
        Conflict("already a member").unwrap()
    assert exc.value.http_status == 400
    assert exc.value.code == "DUPLICATE_MEMBERSHIP"


@pytest.mark.parametrize("field,error_cls", [
    ("category", CategoryValidationError),
    ("ordered_ids", OrderingValidationError),
    ("unit_id", UnitMismatchError),
    ("something_else", CategoryValidationError),
])
def test_invalid_maps_by_field(field, error_cls):
    error = Invalid(field, "bad").to_error()
    assert type(error) is error_cls
    assert error.http_status == 400


def test_context_travels_into_error():
    context = ErrorContext(employee_id="e-1", category="workers")
    error = Conflict("dup", context).to_error()
    assert error.context is context


def test_context_is_ignored_by_equality():
    assert Invalid("category", "bad", ErrorContext(unit_id="u")) == Invalid(
        "category", "bad",
    )


def test_council_resolution_tags():
    assert Found("council").created is False
    assert Created("council").created is True
    assert Found("c") != Created("c")
