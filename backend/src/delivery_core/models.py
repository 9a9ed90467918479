from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, FrozenSet, List, Optional

from .errors import DeliveryDateError

ISO_FORMAT = "%Y-%m-%d"

# 0=Sunday ... 6=Saturday
SUNDAY = 0
SATURDAY = 6
WEEKEND = frozenset({SUNDAY, SATURDAY})
WEEKDAY_FLAGS = (
    "disable_sunday",
    "disable_monday",
    "disable_tuesday",
    "disable_wednesday",
    "disable_thursday",
    "disable_friday",
    "disable_saturday",
)


def weekday_index(day: date) -> int:
    """Convert Python's Monday-based weekday into the Sunday=0 numbering."""
    return (day.weekday() + 1) % 7


def parse_iso_date(value: Any) -> Optional[date]:
    """Strict ``YYYY-MM-DD`` parsing; returns None for anything else."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    if len(text) != 10:
        return None
    try:
        return datetime.strptime(text, ISO_FORMAT).date()
    except ValueError:
        return None


@dataclass(frozen=True)
class DayOff:
    """A single blocked calendar date with an optional reason."""

    date: date
    reason: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {"date": self.date.isoformat(), "reason": self.reason}


@dataclass
class DeliverySettings:
    """Raw admin configuration as stored, after clamping to defaults."""

    minimum_days: int = 2
    disable_sunday: bool = True
    disable_monday: bool = False
    disable_tuesday: bool = False
    disable_wednesday: bool = False
    disable_thursday: bool = False
    disable_friday: bool = False
    disable_saturday: bool = False
    auto_weekend_disable: bool = False
    custom_dayoffs: List[DayOff] = field(default_factory=list)

    def weekday_flags(self) -> List[bool]:
        return [getattr(self, name) for name in WEEKDAY_FLAGS]

    def sorted_dayoffs(self) -> List[DayOff]:
        return sorted(self.custom_dayoffs, key=lambda entry: entry.date)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "minimumDays": self.minimum_days,
            "disableSunday": self.disable_sunday,
            "disableMonday": self.disable_monday,
            "disableTuesday": self.disable_tuesday,
            "disableWednesday": self.disable_wednesday,
            "disableThursday": self.disable_thursday,
            "disableFriday": self.disable_friday,
            "disableSaturday": self.disable_saturday,
            "autoWeekendDisable": self.auto_weekend_disable,
            "customDayoffs": [entry.to_dict() for entry in self.sorted_dayoffs()],
        }


@dataclass(frozen=True)
class DeliveryRuleSet:
    """Evaluation-ready rules: lead days plus the two exclusion sets."""

    minimum_lead_days: int
    excluded_weekdays: FrozenSet[int] = frozenset()
    excluded_dates: FrozenSet[date] = frozenset()

    def __post_init__(self) -> None:
        if self.minimum_lead_days < 0:
            raise ValueError("minimum_lead_days must be >= 0")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "minimumDays": self.minimum_lead_days,
            "excludedWeekdays": sorted(self.excluded_weekdays),
            "excludedDates": sorted(day.isoformat() for day in self.excluded_dates),
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "DeliveryRuleSet":
        dates = set()
        for raw in payload.get("excludedDates") or []:
            parsed = parse_iso_date(raw)
            if parsed is None:
                raise ValueError(f"Invalid excluded date: {raw!r}")
            dates.add(parsed)
        weekdays = {int(day) for day in payload.get("excludedWeekdays") or []}
        if any(day < 0 or day > 6 for day in weekdays):
            raise ValueError("excludedWeekdays must be integers 0-6")
        return cls(
            minimum_lead_days=int(payload.get("minimumDays", 0)),
            excluded_weekdays=frozenset(weekdays),
            excluded_dates=frozenset(dates),
        )


@dataclass
class ValidationResult:
    """Outcome of the checkout decision list for one candidate date."""

    valid: bool
    candidate: Optional[date] = None
    error: Optional[DeliveryDateError] = None
    message: str = ""
    available_days: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "valid": self.valid,
            "date": self.candidate.isoformat() if self.candidate else None,
            "error": self.error.code if self.error else None,
            "message": self.message,
            "availableDays": self.available_days,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "ValidationResult":
        error_code = payload.get("error")
        return cls(
            valid=bool(payload.get("valid")),
            candidate=parse_iso_date(payload.get("date")),
            error=DeliveryDateError.from_code(error_code) if error_code else None,
            message=payload.get("message") or "",
            available_days=int(payload.get("availableDays") or 0),
        )


@dataclass
class DeliveryWindow:
    """Advisory data a storefront date picker needs."""

    today: date
    earliest: Optional[date]
    rule_set: DeliveryRuleSet
    upcoming: List[date] = field(default_factory=list)

    @property
    def placeholder(self) -> str:
        days = self.rule_set.minimum_lead_days
        unit = "day" if days == 1 else "days"
        return f"Select delivery date (min. {days} {unit} processing)"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "today": self.today.isoformat(),
            "earliestDate": self.earliest.isoformat() if self.earliest else None,
            "placeholder": self.placeholder,
            "upcomingDates": [day.isoformat() for day in self.upcoming],
            **self.rule_set.to_dict(),
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "DeliveryWindow":
        today = parse_iso_date(payload.get("today"))
        if today is None:
            raise ValueError("Window payload is missing 'today'")
        return cls(
            today=today,
            earliest=parse_iso_date(payload.get("earliestDate")),
            rule_set=DeliveryRuleSet.from_dict(payload),
            upcoming=[d for d in (parse_iso_date(raw) for raw in payload.get("upcomingDates") or []) if d],
        )


@dataclass
class OrderDeliveryDate:
    order_id: str
    delivery_date: date
