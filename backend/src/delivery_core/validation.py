"""Checkout decision list shared by the advisory and authoritative paths."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from .availability import count_available_days_between
from .errors import DeliveryDateError
from .models import DeliveryRuleSet, ValidationResult, parse_iso_date, weekday_index

logger = logging.getLogger(__name__)


def _reject(error: DeliveryDateError, rule_set: DeliveryRuleSet, candidate=None, available_days=0) -> ValidationResult:
    logger.info("Delivery date rejected (%s): %s", error.code, candidate)
    return ValidationResult(
        valid=False,
        candidate=candidate,
        error=error,
        message=error.message(rule_set.minimum_lead_days),
        available_days=available_days,
    )


def validate_delivery_date(raw: Any, rule_set: DeliveryRuleSet, today: date) -> ValidationResult:
    """Evaluate the rules in a fixed order and report the first failure.

    ``raw`` may be a ``date`` or a ``YYYY-MM-DD`` string.
    """
    candidate = parse_iso_date(raw)
    if candidate is None:
        return _reject(DeliveryDateError.INVALID_DATE, rule_set)

    if candidate <= today:
        return _reject(DeliveryDateError.PAST_OR_TODAY_DATE, rule_set, candidate)

    available_days = count_available_days_between(today, candidate, rule_set)
    if available_days < rule_set.minimum_lead_days:
        return _reject(DeliveryDateError.INSUFFICIENT_LEAD_TIME, rule_set, candidate, available_days)

    if weekday_index(candidate) in rule_set.excluded_weekdays:
        return _reject(DeliveryDateError.WEEKDAY_EXCLUDED, rule_set, candidate, available_days)

    if candidate in rule_set.excluded_dates:
        return _reject(DeliveryDateError.DATE_EXCLUDED, rule_set, candidate, available_days)

    return ValidationResult(valid=True, candidate=candidate, available_days=available_days)
