from datetime import date
from unittest.mock import MagicMock

import pytest

from delivery_core import DeliveryDateClient, DeliveryDateError

WINDOW = {
    "today": "2024-06-07",
    "earliestDate": "2024-06-10",
    "placeholder": "Select delivery date (min. 2 days processing)",
    "upcomingDates": ["2024-06-10", "2024-06-11"],
    "minimumDays": 2,
    "excludedWeekdays": [0],
    "excludedDates": ["2024-06-12"],
}


def fake_response(status_code, payload):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    response.text = str(payload)
    return response


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def client(session):
    return DeliveryDateClient("https://shop.example.com/api/", session=session)


def test_fetch_window(client, session):
    session.get.return_value = fake_response(200, WINDOW)
    window = client.fetch_window()
    assert session.get.call_args.args[0] == "https://shop.example.com/api/delivery/window"
    assert window.today == date(2024, 6, 7)
    assert window.earliest == date(2024, 6, 10)
    assert window.rule_set.excluded_weekdays == frozenset({0})
    assert window.rule_set.excluded_dates == frozenset({date(2024, 6, 12)})


def test_check_posts_iso_date(client, session):
    session.post.return_value = fake_response(
        200,
        {"valid": False, "date": "2024-06-12", "error": "DateExcluded", "message": "Delivery is not available on this date.", "availableDays": 3},
    )
    result = client.check(date(2024, 6, 12))
    assert session.post.call_args.kwargs["json"] == {"date": "2024-06-12"}
    assert result.error is DeliveryDateError.DATE_EXCLUDED
    assert result.available_days == 3


def test_precheck_uses_shared_validator(client, session):
    session.get.return_value = fake_response(200, WINDOW)
    assert client.precheck("2024-06-10").valid
    assert client.precheck("2024-06-09").error is DeliveryDateError.INSUFFICIENT_LEAD_TIME
    assert client.precheck("2024-06-12").error is DeliveryDateError.DATE_EXCLUDED
    assert client.precheck("2024-06-16").error is DeliveryDateError.WEEKDAY_EXCLUDED


def test_error_status_raises(client, session):
    session.get.return_value = fake_response(500, {"message": "Failed to load delivery settings"})
    with pytest.raises(RuntimeError, match="Failed to load delivery settings"):
        client.fetch_window()
