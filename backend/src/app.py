"""Lambda entrypoint for the delivery date API."""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

from delivery_core import (
    DeliveryService,
    LocalOrderStore,
    LocalSettingsStore,
    OrderStore,
    SesNotifier,
    SettingsStore,
)
from delivery_core.http import http_method, response
from delivery_core.local_store import open_db

LOGGER = logging.getLogger()
if not LOGGER.handlers:
    logging.basicConfig(level=logging.INFO)
LOGGER.setLevel(logging.INFO)

_SERVICE: Optional[DeliveryService] = None


def _build_service() -> DeliveryService:
    global _SERVICE
    if _SERVICE:
        return _SERVICE

    local_db_file = os.environ.get("LOCAL_DB_FILE")
    if local_db_file:
        LOGGER.info("Using local TinyDB store: %s", local_db_file)
        db = open_db(local_db_file)
        settings_store = LocalSettingsStore(db)
        order_store = LocalOrderStore(db)
    else:
        settings_store = SettingsStore()
        order_store = OrderStore()

    notifier = None
    if os.environ.get("SES_SENDER_EMAIL"):
        notifier = SesNotifier()

    _SERVICE = DeliveryService(
        settings_store=settings_store,
        order_store=order_store,
        notifier=notifier,
        timezone=os.environ.get("DEFAULT_TIMEZONE", "UTC"),
    )
    return _SERVICE


def api_handler(event: Dict[str, Any], _context: Any) -> Dict[str, Any]:
    route = event.get("resource") or event.get("rawPath") or ""
    method = http_method(event)
    LOGGER.info("Received API event: %s %s", method, route)

    if method == "OPTIONS":
        return response(200, {})

    if route == "/delivery/window":
        from delivery_window import delivery_window_handler
        return delivery_window_handler(event, _context, _build_service())

    if route == "/delivery/check":
        from check_delivery_date import check_delivery_date_handler
        return check_delivery_date_handler(event, _context, _build_service())

    if route == "/checkout/delivery-date":
        from checkout_delivery_date import checkout_delivery_date_handler
        return checkout_delivery_date_handler(event, _context, _build_service())

    if route == "/orders/delivery-date":
        from order_delivery_date import order_delivery_date_handler
        return order_delivery_date_handler(event, _context, _build_service())

    if route == "/admin/settings":
        if method == "GET":
            from get_delivery_settings import get_delivery_settings_handler
            return get_delivery_settings_handler(event, _context, _build_service())
        from update_delivery_settings import update_delivery_settings_handler
        return update_delivery_settings_handler(event, _context, _build_service())

    if route == "/admin/dayoffs/add":
        from add_dayoff import add_dayoff_handler
        return add_dayoff_handler(event, _context, _build_service())

    if route == "/admin/dayoffs/remove":
        from remove_dayoff import remove_dayoff_handler
        return remove_dayoff_handler(event, _context, _build_service())

    LOGGER.warning("Unknown route: %s", route)
    return response(404, {"message": f"Unknown route: {route}"})
