"""Shared delivery date logic for the AWS Lambda handlers and local runner."""

from .availability import (  # noqa: F401
    count_available_days_between,
    earliest_available_date,
    is_date_available,
)
from .delivery_client import DeliveryDateClient  # noqa: F401
from .delivery_service import DeliveryService  # noqa: F401
from .errors import (  # noqa: F401
    DayOffAlreadyExistsError,
    DayOffError,
    DeliveryDateError,
    InvalidDateError,
    MissingDateError,
    UnauthorizedError,
)
from .local_store import LocalOrderStore, LocalSettingsStore  # noqa: F401
from .models import DayOff, DeliveryRuleSet, DeliverySettings, DeliveryWindow, ValidationResult  # noqa: F401
from .order_store import OrderStore  # noqa: F401
from .rules import resolve_rule_set  # noqa: F401
from .ses_notifier import SesNotifier  # noqa: F401
from .settings_store import SettingsStore  # noqa: F401
from .validation import validate_delivery_date  # noqa: F401

__all__ = [
	"count_available_days_between",
	"earliest_available_date",
	"is_date_available",
	"DeliveryDateClient",
	"DeliveryService",
	"DayOffAlreadyExistsError",
	"DayOffError",
	"DeliveryDateError",
	"InvalidDateError",
	"MissingDateError",
	"UnauthorizedError",
	"LocalOrderStore",
	"LocalSettingsStore",
	"DayOff",
	"DeliveryRuleSet",
	"DeliverySettings",
	"DeliveryWindow",
	"ValidationResult",
	"OrderStore",
	"resolve_rule_set",
	"SesNotifier",
	"SettingsStore",
	"validate_delivery_date",
]
