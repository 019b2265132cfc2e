import re
from datetime import date
from enum import Enum
from typing import List

YEAR_PATTERN = re.compile(r"^\d{4}$")


class YearRule(Enum):
    DEFAULT = "default"
    MIN_TO_CURRENT = "min_to_current"
    MIN_TO_MAX = "min_to_max"


def is_year(value: str | None) -> bool:
    return value is not None and YEAR_PATTERN.match(value) is not None


def select_rule(
    min_year: str | None, max_year: str | None, entry_count: int
) -> YearRule:
    """
    Decision table for the belastingjaar filter of a Lv01-BLJ request.

    | min year | max year | min == max with a single entry | rule           |
    |----------|----------|--------------------------------|----------------|
    | absent   | any      | any                            | DEFAULT        |
    | present  | absent   | any                            | MIN_TO_CURRENT |
    | present  | present  | yes                            | MIN_TO_CURRENT |
    | present  | present  | no                             | MIN_TO_MAX     |
    """
    if not is_year(min_year):
        return YearRule.DEFAULT
    if not is_year(max_year):
        return YearRule.MIN_TO_CURRENT
    if min_year == max_year and entry_count == 1:
        return YearRule.MIN_TO_CURRENT
    return YearRule.MIN_TO_MAX


def tax_years(
    min_year: str | None,
    max_year: str | None,
    entry_count: int,
    today: date | None = None,
) -> List[str]:
    """
    Returns the inclusive list of belastingjaren to search for. A minimum above the maximum
    results in an empty list.
    """
    current_year = (today or date.today()).year
    rule = select_rule(min_year, max_year, entry_count)

    if rule is YearRule.DEFAULT:
        return [str(current_year), str(current_year - 1)]

    start = int(min_year)  # type: ignore[arg-type]
    end = current_year if rule is YearRule.MIN_TO_CURRENT else int(max_year)  # type: ignore[arg-type]

    return [str(year) for year in range(start, end + 1)]
