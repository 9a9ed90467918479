"""Turns stored delivery settings into an evaluation-ready rule set."""

from __future__ import annotations

from .models import WEEKEND, DeliveryRuleSet, DeliverySettings


def resolve_excluded_weekdays(settings: DeliverySettings) -> frozenset:
    # The weekend shortcut replaces the individual flags, it is not merged with them.
    if settings.auto_weekend_disable:
        return WEEKEND
    return frozenset(index for index, disabled in enumerate(settings.weekday_flags()) if disabled)


def resolve_rule_set(settings: DeliverySettings) -> DeliveryRuleSet:
    return DeliveryRuleSet(
        minimum_lead_days=max(0, int(settings.minimum_days)),
        excluded_weekdays=resolve_excluded_weekdays(settings),
        excluded_dates=frozenset(entry.date for entry in settings.custom_dayoffs),
    )
