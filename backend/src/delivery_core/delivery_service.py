"""High level orchestration for delivery date rules, checkout and day-offs."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Any, Iterable, List, Optional

import pytz

from .availability import available_dates, earliest_available_date
from .display import format_long_date, render_email_block
from .errors import DayOffAlreadyExistsError, InvalidDateError, MissingDateError
from .models import (
    WEEKDAY_FLAGS,
    DayOff,
    DeliveryRuleSet,
    DeliverySettings,
    DeliveryWindow,
    ValidationResult,
    parse_iso_date,
)
from .rules import resolve_rule_set
from .settings_store import MAX_MINIMUM_DAYS
from .validation import validate_delivery_date

logger = logging.getLogger(__name__)

UPCOMING_DATES = 14


class DeliveryService:
    def __init__(
        self,
        settings_store,
        order_store=None,
        notifier=None,
        timezone: str = "UTC",
    ) -> None:
        self.settings_store = settings_store
        self.order_store = order_store
        self.notifier = notifier
        self.timezone = timezone

    def today(self) -> date:
        return datetime.now(pytz.timezone(self.timezone)).date()

    # Rules -----------------------------------------------------------------

    def get_settings(self) -> DeliverySettings:
        return self.settings_store.get_settings()

    def rule_set(self) -> DeliveryRuleSet:
        # Settings can change between requests, so never cache the resolved rules.
        return resolve_rule_set(self.get_settings())

    def delivery_window(self, today: Optional[date] = None) -> DeliveryWindow:
        today = today or self.today()
        rules = self.rule_set()
        return DeliveryWindow(
            today=today,
            earliest=earliest_available_date(today, rules),
            rule_set=rules,
            upcoming=available_dates(today, rules, UPCOMING_DATES),
        )

    def check_delivery_date(self, raw: Any, today: Optional[date] = None) -> ValidationResult:
        return validate_delivery_date(raw, self.rule_set(), today or self.today())

    # Checkout --------------------------------------------------------------

    def accept_delivery_date(
        self,
        order_id: str,
        raw: Any,
        today: Optional[date] = None,
        recipients: Iterable[str] = (),
    ) -> ValidationResult:
        result = self.check_delivery_date(raw, today)
        if not result.valid:
            logger.warning("Rejected delivery date %r for order %s: %s", raw, order_id, result.error.code)
            return result

        if self.order_store is not None:
            self.order_store.set_delivery_date(order_id, result.candidate)
        self._notify(order_id, result.candidate, recipients)
        return result

    def order_delivery_date(self, order_id: str) -> Optional[date]:
        if self.order_store is None:
            return None
        stored = self.order_store.get_delivery_date(order_id)
        return stored.delivery_date if stored else None

    # Settings administration ----------------------------------------------

    def update_settings(
        self,
        minimum_days: int,
        disabled_weekdays: Iterable[int] = (),
        auto_weekend_disable: bool = False,
    ) -> DeliverySettings:
        if isinstance(minimum_days, bool) or not isinstance(minimum_days, int):
            raise ValueError("minimumDays must be an integer")
        if minimum_days < 0 or minimum_days > MAX_MINIMUM_DAYS:
            raise ValueError(f"minimumDays must be between 0 and {MAX_MINIMUM_DAYS}")

        disabled = set(disabled_weekdays)
        if any(not isinstance(day, int) or day < 0 or day > 6 for day in disabled):
            raise ValueError("disabled weekdays must be integers 0-6")
        if auto_weekend_disable:
            disabled |= {0, 6}

        current = self.get_settings()
        flags = {name: index in disabled for index, name in enumerate(WEEKDAY_FLAGS)}
        updated = replace(
            current,
            minimum_days=minimum_days,
            auto_weekend_disable=auto_weekend_disable,
            **flags,
        )
        self.settings_store.save_settings(updated)
        return updated

    # Day-off registry ------------------------------------------------------

    def list_dayoffs(self) -> List[DayOff]:
        return self.get_settings().sorted_dayoffs()

    def add_dayoff(self, raw_date: Any, reason: Optional[str] = "") -> DayOff:
        day = self._require_date(raw_date)
        settings = self.get_settings()
        if any(entry.date == day for entry in settings.custom_dayoffs):
            raise DayOffAlreadyExistsError(day)

        entry = DayOff(day, "" if reason is None else str(reason).strip())
        settings.custom_dayoffs.append(entry)
        self.settings_store.save_settings(settings)
        logger.info("Added day-off %s (%s)", day.isoformat(), entry.reason or "no reason")
        return entry

    def remove_dayoff(self, raw_date: Any) -> None:
        day = self._require_date(raw_date)
        settings = self.get_settings()
        remaining = [entry for entry in settings.custom_dayoffs if entry.date != day]
        if len(remaining) == len(settings.custom_dayoffs):
            logger.info("Day-off %s not present, nothing to remove", day.isoformat())
            return
        settings.custom_dayoffs = remaining
        self.settings_store.save_settings(settings)
        logger.info("Removed day-off %s", day.isoformat())

    @staticmethod
    def _require_date(raw_date: Any) -> date:
        if raw_date is None or (isinstance(raw_date, str) and not raw_date.strip()):
            raise MissingDateError()
        day = parse_iso_date(raw_date)
        if day is None:
            raise InvalidDateError(raw_date)
        return day

    def _notify(self, order_id: str, delivery_date: date, recipients: Iterable[str]) -> None:
        if isinstance(recipients, str):
            recipients = [recipients]
        elif not isinstance(recipients, (list, tuple, set, frozenset)):
            recipients = []
        targets = [addr for addr in recipients if isinstance(addr, str) and addr.strip()]
        if not self.notifier or not targets:
            return
        subject = f"Order {order_id}: delivery on {format_long_date(delivery_date)}"
        body = f"Thank you for your order {order_id}.\n" + render_email_block(delivery_date, plain_text=True)
        html_body = f"<p>Thank you for your order {order_id}.</p>" + render_email_block(delivery_date)
        # The order is already stamped; a mail failure must not undo the checkout.
        try:
            self.notifier.send(subject, body, targets, html_body=html_body)
        except Exception as error:  # pylint: disable=broad-except
            logger.warning("Failed to send delivery date mail for order %s: %s", order_id, error)
