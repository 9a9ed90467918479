"""Date availability engine.

All functions are pure: the rule set and the reference "today" are passed
in, nothing is read from storage or the system clock.  Lead time is always
counted strictly after ``today`` and only on days that are not excluded.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterator, List, Optional

from .models import DeliveryRuleSet, weekday_index

ONE_DAY = timedelta(days=1)


def is_excluded(day: date, rule_set: DeliveryRuleSet) -> bool:
    return weekday_index(day) in rule_set.excluded_weekdays or day in rule_set.excluded_dates


def is_date_available(candidate: date, rule_set: DeliveryRuleSet, today: date) -> bool:
    """True when ``candidate`` is after today and not excluded.

    Lead time is not checked here; see :func:`count_available_days_between`.
    """
    if candidate <= today:
        return False
    return not is_excluded(candidate, rule_set)


def count_available_days_between(today: date, candidate: date, rule_set: DeliveryRuleSet) -> int:
    """Count non-excluded days in the half-open range ``(today, candidate]``."""
    count = 0
    cursor = today
    while cursor < candidate:
        cursor += ONE_DAY
        if not is_excluded(cursor, rule_set):
            count += 1
    return count


def has_open_weekday(rule_set: DeliveryRuleSet) -> bool:
    return len(rule_set.excluded_weekdays) < 7


def earliest_available_date(today: date, rule_set: DeliveryRuleSet) -> Optional[date]:
    """First date that both satisfies the lead time and is itself available.

    Returns None when every weekday is excluded, since no date can ever
    qualify in that case.
    """
    if not has_open_weekday(rule_set):
        return None

    target = max(rule_set.minimum_lead_days, 1)
    counted = 0
    cursor = today
    while True:
        cursor += ONE_DAY
        if is_excluded(cursor, rule_set):
            continue
        counted += 1
        if counted >= target:
            return cursor


def iter_available_dates(today: date, rule_set: DeliveryRuleSet) -> Iterator[date]:
    """Accepted delivery dates in ascending order, starting at the earliest."""
    cursor = earliest_available_date(today, rule_set)
    if cursor is None:
        return
    while True:
        if not is_excluded(cursor, rule_set):
            yield cursor
        cursor += ONE_DAY


def available_dates(today: date, rule_set: DeliveryRuleSet, limit: int) -> List[date]:
    result = []
    if limit <= 0:
        return result
    for day in iter_available_dates(today, rule_set):
        result.append(day)
        if len(result) >= limit:
            break
    return result
