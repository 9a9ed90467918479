"""Abstraction over the DynamoDB item holding the delivery date settings."""

from __future__ import annotations

import logging
import os
from decimal import Decimal
from typing import Any, Dict, List, Optional

import boto3
from botocore.exceptions import ClientError
import yaml

from .models import DayOff, DeliverySettings, parse_iso_date

logger = logging.getLogger(__name__)

MAX_MINIMUM_DAYS = 30

FALLBACK_DEFAULTS: Dict[str, Any] = {
    "minimumDays": 2,
    "disableSunday": True,
    "disableMonday": False,
    "disableTuesday": False,
    "disableWednesday": False,
    "disableThursday": False,
    "disableFriday": False,
    "disableSaturday": False,
    "autoWeekendDisable": False,
    "customDayoffs": [],
}

_FLAG_FIELDS = {
    "disableSunday": "disable_sunday",
    "disableMonday": "disable_monday",
    "disableTuesday": "disable_tuesday",
    "disableWednesday": "disable_wednesday",
    "disableThursday": "disable_thursday",
    "disableFriday": "disable_friday",
    "disableSaturday": "disable_saturday",
    "autoWeekendDisable": "auto_weekend_disable",
}


def load_default_config() -> Dict[str, Any]:
    config_path = os.environ.get("DEFAULT_CONFIG_PATH", "config.default.yaml")
    if os.path.exists(config_path):
        with open(config_path, "r", encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle) or {}
            return {**FALLBACK_DEFAULTS, **loaded}
    return dict(FALLBACK_DEFAULTS)


def _coerce_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, Decimal)) and value in (0, 1):
        return bool(value)
    if isinstance(value, str) and value.lower() in ("true", "1", "yes", "false", "0", "no", ""):
        return value.lower() in ("true", "1", "yes")
    return default


def _coerce_minimum_days(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        days = int(value)
    except (TypeError, ValueError):
        return default
    if isinstance(value, (float, Decimal)) and value != days:
        return default
    return min(max(days, 0), MAX_MINIMUM_DAYS)


def _coerce_dayoffs(entries: Any) -> List[DayOff]:
    if not isinstance(entries, list):
        return []
    dayoffs: List[DayOff] = []
    seen = set()
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        day = parse_iso_date(entry.get("date"))
        if day is None or day in seen:
            continue
        seen.add(day)
        dayoffs.append(DayOff(day, str(entry.get("reason") or "")))
    return dayoffs


def build_settings(item: Optional[Dict[str, Any]], defaults: Dict[str, Any]) -> DeliverySettings:
    """Merge a stored item over the defaults, clamping malformed values."""
    merged = {**defaults, **(item or {})}
    base_days = _coerce_minimum_days(defaults.get("minimumDays"), FALLBACK_DEFAULTS["minimumDays"])
    values: Dict[str, Any] = {
        "minimum_days": _coerce_minimum_days(merged.get("minimumDays"), base_days),
        "custom_dayoffs": _coerce_dayoffs(merged.get("customDayoffs")),
    }
    for key, attribute in _FLAG_FIELDS.items():
        base = _coerce_bool(defaults.get(key), FALLBACK_DEFAULTS[key])
        values[attribute] = _coerce_bool(merged.get(key), base)
    return DeliverySettings(**values)


def settings_to_item(settings: DeliverySettings) -> Dict[str, Any]:
    return settings.to_dict()


class SettingsStore:
    """Loads and saves the single delivery settings item in DynamoDB."""

    KEY = {"PK": "SETTINGS", "SK": "DELIVERY"}

    def __init__(
        self,
        table_name: Optional[str] = None,
        region_name: Optional[str] = None,
        dynamodb_resource=None,
        default_config: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.table_name = table_name or os.environ.get("CONFIG_TABLE_NAME")
        if not self.table_name:
            raise ValueError("CONFIG_TABLE_NAME env var is required")

        endpoint_url = os.environ.get("DYNAMODB_ENDPOINT_URL")
        if endpoint_url:
            self._dynamodb = dynamodb_resource or boto3.resource(
                "dynamodb", region_name=region_name, endpoint_url=endpoint_url
            )
        else:
            self._dynamodb = dynamodb_resource or boto3.resource("dynamodb", region_name=region_name)
        self._table = self._dynamodb.Table(self.table_name)

        self._defaults = default_config or load_default_config()

    def get_settings(self) -> DeliverySettings:
        try:
            result = self._table.get_item(Key=self.KEY)
        except ClientError as error:
            raise RuntimeError(f"Failed to load delivery settings: {error}") from error
        item = result.get("Item")
        if not item:
            logger.info("No delivery settings stored, using defaults")
        return build_settings(item, self._defaults)

    def save_settings(self, settings: DeliverySettings) -> None:
        item = {**self.KEY, **settings_to_item(settings)}
        try:
            logger.info("Saving delivery settings (%d day-offs)", len(settings.custom_dayoffs))
            self._table.put_item(Item=item)
        except ClientError as error:
            logger.error("Failed to persist delivery settings: %s", error)
            raise RuntimeError(f"Failed to persist delivery settings: {error}") from error
