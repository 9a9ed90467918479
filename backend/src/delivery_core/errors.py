"""Error taxonomy shared by checkout validation and the admin registry."""

from __future__ import annotations

from enum import Enum


class DeliveryDateError(Enum):
    """Checkout rejection reasons, one shopper-facing message each."""

    INVALID_DATE = ("InvalidDate", "Please enter a valid delivery date.")
    PAST_OR_TODAY_DATE = ("PastOrTodayDate", "Delivery date cannot be today or in the past.")
    INSUFFICIENT_LEAD_TIME = (
        "InsufficientLeadTime",
        "Delivery date must have at least {minimum_days} available day(s) for processing "
        "(excluding disabled days).",
    )
    WEEKDAY_EXCLUDED = ("WeekdayExcluded", "Delivery is not available on the selected day of the week.")
    DATE_EXCLUDED = ("DateExcluded", "Delivery is not available on this date.")

    def __init__(self, code: str, template: str) -> None:
        self.code = code
        self.template = template

    def message(self, minimum_days: int = 0) -> str:
        return self.template.format(minimum_days=minimum_days)

    @classmethod
    def from_code(cls, code: str) -> "DeliveryDateError":
        for member in cls:
            if member.code == code:
                return member
        raise ValueError(f"Unknown delivery date error code: {code}")


class DayOffError(ValueError):
    code = "DayOffError"


class MissingDateError(DayOffError):
    code = "MissingDate"

    def __init__(self) -> None:
        super().__init__("Date is required")


class InvalidDateError(DayOffError):
    code = "InvalidDate"

    def __init__(self, value: object) -> None:
        super().__init__("Please enter a valid date")
        self.value = value


class DayOffAlreadyExistsError(DayOffError):
    code = "AlreadyExists"

    def __init__(self, day: object) -> None:
        super().__init__("This date is already added")
        self.day = day


class UnauthorizedError(PermissionError):
    code = "Unauthorized"

    def __init__(self) -> None:
        super().__init__("Unauthorized")
