"""Domain Types — membership categories and the policies that steer bulk and reorder.

Invariants:
    - Category is a closed set of four election constituencies
    - Category.value is the canonical lowercase code used at the API boundary and in storage
    - parse_category(format_category(c)) == c for every Category

Design Decisions:
    - str Enums: serialize to JSON without custom encoders
    - parse_category returns Invalid instead of raising: callers branch on the result
"""

from enum import Enum

from works_council.core.results import Invalid


# ─── Enums ───────────────────────────────────────────────────────

class Category(str, Enum):
    """Election constituency — declaration order is the display order."""
    WORKERS = "workers"
    CLERKS = "clerks"
    MANAGEMENT = "management"
    YOUNG_WORKERS = "young_workers"


class UnresolvedPolicy(str, Enum):
    """What a bulk operation does with ids that do not resolve to a unit employee."""
    SKIP = "skip"
    FAIL = "fail"


class UnlistedPolicy(str, Enum):
    """What reorder does with members the caller did not mention."""
    APPEND = "append"
    KEEP = "keep"


CATEGORY_ORDER: dict[Category, int] = {
    category: index for index, category in enumerate(Category)
}


def parse_category(text: str | None) -> Category | Invalid:
    """Case-insensitive match against the canonical codes."""
    if not text:
        return Invalid(
            field="category",
            message=f"Invalid category value: {text!r}",
        )
    try:
        return Category(text.lower())
    except ValueError:
        return Invalid(
            field="category",
            message=f"Invalid category value: {text!r}",
        )


def format_category(category: Category) -> str:
    return category.value
