"""TinyDB-backed stores for running the service without DynamoDB."""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Any, Dict, Optional

from tinydb import Query, TinyDB

from .models import DeliverySettings, OrderDeliveryDate, parse_iso_date
from .settings_store import build_settings, load_default_config, settings_to_item

logger = logging.getLogger(__name__)

SETTINGS_TBL_NM = "settings"
ORDERS_TBL_NM = "orders"
SETTINGS_KEY = "delivery"


def open_db(db_file: str) -> TinyDB:
    return TinyDB(db_file, ensure_ascii=False, encoding="utf-8")


class LocalSettingsStore:
    def __init__(self, db: TinyDB, default_config: Optional[Dict[str, Any]] = None) -> None:
        self._table = db.table(SETTINGS_TBL_NM)
        self._defaults = default_config or load_default_config()

    def get_settings(self) -> DeliverySettings:
        item = self._table.get(Query().key == SETTINGS_KEY)
        return build_settings(dict(item) if item else None, self._defaults)

    def save_settings(self, settings: DeliverySettings) -> None:
        logger.info("Saving delivery settings locally (%d day-offs)", len(settings.custom_dayoffs))
        self._table.upsert({"key": SETTINGS_KEY, **settings_to_item(settings)}, Query().key == SETTINGS_KEY)


class LocalOrderStore:
    def __init__(self, db: TinyDB) -> None:
        self._table = db.table(ORDERS_TBL_NM)

    def set_delivery_date(self, order_id: str, delivery_date: date) -> None:
        value = delivery_date.isoformat()
        logger.info("Stamping delivery date %s on order %s", value, order_id)
        self._table.upsert(
            {
                "orderId": order_id,
                "deliveryDate": value,
                "billingDate": value,
                "updatedAt": datetime.now(timezone.utc).isoformat(),
            },
            Query().orderId == order_id,
        )

    def get_delivery_date(self, order_id: str) -> Optional[OrderDeliveryDate]:
        item = self._table.get(Query().orderId == order_id)
        if not item:
            return None
        stored = parse_iso_date(item.get("deliveryDate") or item.get("billingDate"))
        if stored is None:
            return None
        return OrderDeliveryDate(order_id, stored)
