import base64
import json

import pytest

import app
from conftest import MONDAY

TOKEN = "s3cret-admin-token"


@pytest.fixture(autouse=True)
def wired_service(service, monkeypatch):
    monkeypatch.setattr(service, "today", lambda: MONDAY)
    monkeypatch.setattr(app, "_SERVICE", service)
    monkeypatch.setenv("ADMIN_API_TOKEN", TOKEN)
    monkeypatch.delenv("ADMIN_API_TOKEN_SSM_PARAM", raising=False)
    return service


def call(route, body=None, method="POST", headers=None, query=None, raw_body=None):
    event = {
        "resource": route,
        "httpMethod": method,
        "headers": headers or {},
        "queryStringParameters": query,
        "body": raw_body if raw_body is not None else (json.dumps(body) if body is not None else None),
    }
    result = app.api_handler(event, None)
    return result["statusCode"], json.loads(result["body"])


def admin(route, body=None, method="POST"):
    return call(route, body, method=method, headers={"X-Admin-Token": TOKEN})


def test_unknown_route():
    status, body = call("/nope")
    assert status == 404


def test_delivery_window():
    status, body = call("/delivery/window", method="GET")
    assert status == 200
    assert body["today"] == "2024-06-03"
    assert body["earliestDate"] == "2024-06-05"
    assert body["excludedWeekdays"] == [0]
    assert body["minimumDays"] == 2


def test_check_reports_error_code():
    status, body = call("/delivery/check", {"date": "2024-06-04"})
    assert status == 200
    assert body["valid"] is False
    assert body["error"] == "InsufficientLeadTime"


def test_check_accepts_query_string():
    status, body = call("/delivery/check", method="GET", query={"date": "2024-06-05"})
    assert status == 200
    assert body["valid"] is True


def test_check_rejects_malformed_json():
    status, body = call("/delivery/check", raw_body="{not json")
    assert status == 400


def test_checkout_accepts_and_stamps_order(wired_service):
    status, body = call("/checkout/delivery-date", {"orderId": "1001", "date": "2024-06-05"})
    assert status == 200
    assert body["valid"] is True
    assert wired_service.order_delivery_date("1001").isoformat() == "2024-06-05"

    status, body = call("/orders/delivery-date", method="GET", query={"orderId": "1001"})
    assert status == 200
    assert body["formattedDate"] == "Wednesday, June 5, 2024"
    assert body["thankYouHtml"].startswith("<p><strong>Your selected delivery date:</strong>")


def test_checkout_blocks_invalid_date(wired_service):
    status, body = call("/checkout/delivery-date", {"orderId": "1002", "date": "2024-06-03"})
    assert status == 422
    assert body["error"] == "PastOrTodayDate"
    assert body["message"] == "Delivery date cannot be today or in the past."
    assert wired_service.order_delivery_date("1002") is None


def test_checkout_without_date_is_not_validated():
    status, body = call("/checkout/delivery-date", {"orderId": "1003"})
    assert status == 200
    assert body["date"] is None


def test_checkout_requires_order_id():
    status, _ = call("/checkout/delivery-date", {"date": "2024-06-05"})
    assert status == 400


def test_unknown_order_is_404():
    status, _ = call("/orders/delivery-date", method="GET", query={"orderId": "missing"})
    assert status == 404


def test_admin_routes_require_token():
    for route, method in [
        ("/admin/settings", "GET"),
        ("/admin/settings", "POST"),
        ("/admin/dayoffs/add", "POST"),
        ("/admin/dayoffs/remove", "POST"),
    ]:
        status, body = call(route, {"date": "2024-12-25", "minimumDays": 2}, method=method, headers={"X-Admin-Token": "wrong"})
        assert status == 403
        assert body["error"] == "Unauthorized"


def test_admin_denied_when_no_token_configured(monkeypatch):
    monkeypatch.delenv("ADMIN_API_TOKEN")
    status, _ = admin("/admin/settings", method="GET")
    assert status == 403


def test_bearer_token_is_accepted():
    status, _ = call("/admin/settings", method="GET", headers={"Authorization": f"Bearer {TOKEN}"})
    assert status == 200


def test_add_and_list_dayoffs():
    status, body = admin("/admin/dayoffs/add", {"date": "2024-12-25", "reason": "Christmas"})
    assert status == 200
    assert body == {"date": "2024-12-25", "formatted_date": "December 25, 2024", "day_name": "Wednesday", "reason": "Christmas"}

    admin("/admin/dayoffs/add", {"date": "2024-07-04"})
    status, body = admin("/admin/settings", method="GET")
    assert status == 200
    assert [entry["date"] for entry in body["customDayoffs"]] == ["2024-07-04", "2024-12-25"]
    assert body["customDayoffs"][1]["day_name"] == "Wednesday"


def test_add_duplicate_dayoff_conflicts():
    admin("/admin/dayoffs/add", {"date": "2024-12-25"})
    status, body = admin("/admin/dayoffs/add", {"date": "2024-12-25"})
    assert status == 409
    assert body["error"] == "AlreadyExists"
    assert body["message"] == "This date is already added"


def test_add_dayoff_requires_date():
    status, body = admin("/admin/dayoffs/add", {"reason": "no date"})
    assert status == 400
    assert body["error"] == "MissingDate"


def test_remove_absent_dayoff_succeeds():
    status, _ = admin("/admin/dayoffs/remove", {"date": "2030-01-01"})
    assert status == 200


def test_remove_dayoff_changes_checkout_verdict():
    admin("/admin/dayoffs/add", {"date": "2024-06-06"})
    assert call("/delivery/check", {"date": "2024-06-06"})[1]["error"] == "DateExcluded"
    admin("/admin/dayoffs/remove", {"date": "2024-06-06"})
    assert call("/delivery/check", {"date": "2024-06-06"})[1]["valid"] is True


def test_update_settings():
    status, body = admin(
        "/admin/settings",
        {"minimumDays": 3, "disableMonday": True, "disableSunday": False, "autoWeekendDisable": False},
    )
    assert status == 200
    assert body["minimumDays"] == 3
    assert body["disableMonday"] is True
    assert body["disableSunday"] is False

    status, window = call("/delivery/window", method="GET")
    assert window["excludedWeekdays"] == [1]
    assert window["earliestDate"] == "2024-06-06"


def test_update_settings_validates_minimum_days():
    assert admin("/admin/settings", {"minimumDays": 99})[0] == 400
    assert admin("/admin/settings", {})[0] == 400


def test_base64_body_is_decoded():
    raw = base64.b64encode(json.dumps({"date": "2024-06-05"}).encode()).decode()
    event = {"resource": "/delivery/check", "httpMethod": "POST", "body": raw, "isBase64Encoded": True}
    result = app.api_handler(event, None)
    assert json.loads(result["body"])["valid"] is True


@pytest.mark.parametrize("email", [5, {"to": "a@example.com"}, ["a@example.com", 5]])
def test_checkout_rejects_malformed_email_without_writing(wired_service, email):
    status, body = call("/checkout/delivery-date", {"orderId": "42", "date": "2024-06-05", "email": email})
    assert status == 400
    assert body["message"] == "email must be a string or a list of strings"
    assert wired_service.order_delivery_date("42") is None


def test_add_dayoff_with_numeric_reason():
    status, body = admin("/admin/dayoffs/add", {"date": "2024-12-25", "reason": 7})
    assert status == 200
    assert body["reason"] == "7"
