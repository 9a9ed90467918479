from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from delivery_core.models import DayOff, DeliverySettings
from delivery_core.settings_store import FALLBACK_DEFAULTS, SettingsStore, build_settings, load_default_config


@pytest.fixture
def table():
    return MagicMock()


@pytest.fixture
def store(table):
    resource = MagicMock()
    resource.Table.return_value = table
    return SettingsStore(table_name="DeliveryDates", dynamodb_resource=resource, default_config=dict(FALLBACK_DEFAULTS))


def client_error(operation):
    return ClientError({"Error": {"Code": "InternalServerError", "Message": "boom"}}, operation)


def test_requires_table_name(monkeypatch):
    monkeypatch.delenv("CONFIG_TABLE_NAME", raising=False)
    with pytest.raises(ValueError):
        SettingsStore(dynamodb_resource=MagicMock(), default_config=dict(FALLBACK_DEFAULTS))


def test_missing_item_yields_defaults(store, table):
    table.get_item.return_value = {}
    settings = store.get_settings()
    assert settings == DeliverySettings()
    table.get_item.assert_called_once_with(Key={"PK": "SETTINGS", "SK": "DELIVERY"})


def test_dynamodb_item_is_hydrated(store, table):
    table.get_item.return_value = {
        "Item": {
            "PK": "SETTINGS",
            "SK": "DELIVERY",
            "minimumDays": Decimal("3"),
            "disableSunday": False,
            "disableWednesday": True,
            "autoWeekendDisable": False,
            "customDayoffs": [{"date": "2024-12-25", "reason": "Christmas"}],
        }
    }
    settings = store.get_settings()
    assert settings.minimum_days == 3
    assert settings.disable_sunday is False
    assert settings.disable_wednesday is True
    assert settings.custom_dayoffs == [DayOff(date(2024, 12, 25), "Christmas")]


def test_save_writes_camel_case_item(store, table):
    store.save_settings(DeliverySettings(minimum_days=4, custom_dayoffs=[DayOff(date(2024, 7, 4))]))
    item = table.put_item.call_args.kwargs["Item"]
    assert item["PK"] == "SETTINGS"
    assert item["minimumDays"] == 4
    assert item["disableSunday"] is True
    assert item["customDayoffs"] == [{"date": "2024-07-04", "reason": ""}]


def test_storage_failures_are_wrapped(store, table):
    table.get_item.side_effect = client_error("GetItem")
    with pytest.raises(RuntimeError, match="Failed to load delivery settings"):
        store.get_settings()
    table.put_item.side_effect = client_error("PutItem")
    with pytest.raises(RuntimeError, match="Failed to persist delivery settings"):
        store.save_settings(DeliverySettings())


@pytest.mark.parametrize(
    "stored, expected",
    [("abc", 2), (None, 2), (-4, 0), (45, 30), ("5", 5), (2.5, 2), (True, 2), (Decimal("7"), 7)],
)
def test_minimum_days_is_clamped(stored, expected):
    assert build_settings({"minimumDays": stored}, dict(FALLBACK_DEFAULTS)).minimum_days == expected


def test_malformed_flags_fall_back_to_defaults():
    settings = build_settings({"disableSunday": "maybe", "disableMonday": "yes", "autoWeekendDisable": 3}, dict(FALLBACK_DEFAULTS))
    assert settings.disable_sunday is True
    assert settings.disable_monday is True
    assert settings.auto_weekend_disable is False


def test_malformed_and_duplicate_dayoffs_are_dropped():
    settings = build_settings(
        {
            "customDayoffs": [
                {"date": "2024-12-25", "reason": "Christmas"},
                {"date": "2024-12-25", "reason": "again"},
                {"date": "not a date"},
                "2024-01-01",
                {"reason": "no date"},
            ]
        },
        dict(FALLBACK_DEFAULTS),
    )
    assert settings.custom_dayoffs == [DayOff(date(2024, 12, 25), "Christmas")]


def test_yaml_defaults_override_fallbacks(tmp_path, monkeypatch):
    config_file = tmp_path / "config.default.yaml"
    config_file.write_text("minimumDays: 5\ndisableSaturday: true\n", encoding="utf-8")
    monkeypatch.setenv("DEFAULT_CONFIG_PATH", str(config_file))
    defaults = load_default_config()
    settings = build_settings(None, defaults)
    assert settings.minimum_days == 5
    assert settings.disable_saturday is True
    assert settings.disable_sunday is True


def test_missing_yaml_uses_fallbacks(tmp_path, monkeypatch):
    monkeypatch.setenv("DEFAULT_CONFIG_PATH", str(tmp_path / "absent.yaml"))
    assert load_default_config() == FALLBACK_DEFAULTS
