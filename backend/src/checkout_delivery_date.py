"""Authoritative checkout handler: validates and stamps the delivery date"""
import logging
from typing import Any, Dict

from delivery_core import DeliveryService
from delivery_core.http import parse_body, response

LOGGER = logging.getLogger()
if not LOGGER.handlers:
    logging.basicConfig(level=logging.INFO)
LOGGER.setLevel(logging.INFO)


def checkout_delivery_date_handler(event: Dict[str, Any], _context: Any, service: DeliveryService) -> Dict[str, Any]:
    """Block the order unless the requested delivery date passes every rule."""
    LOGGER.info("=== CHECKOUT DELIVERY DATE HANDLER STARTED ===")

    try:
        LOGGER.info("Step 1: Parsing request body")
        payload = parse_body(event)
    except ValueError as error:
        LOGGER.warning("Client error: %s", error)
        return response(400, {"message": str(error)})

    LOGGER.info("Step 2: Validating required fields")
    order_id = payload.get("orderId")
    if not order_id:
        return response(400, {"message": "orderId is required"})

    raw_date = payload.get("date")
    if raw_date is None or (isinstance(raw_date, str) and not raw_date.strip()):
        # No delivery date was requested for this order.
        LOGGER.info("No delivery date supplied for order %s", order_id)
        return response(200, {"orderId": str(order_id), "valid": True, "date": None})

    recipients = payload.get("email") or []
    if isinstance(recipients, str):
        recipients = [recipients]
    if not isinstance(recipients, list) or not all(isinstance(addr, str) for addr in recipients):
        LOGGER.warning("Rejected email field for order %s: %r", order_id, payload.get("email"))
        return response(400, {"message": "email must be a string or a list of strings"})

    try:
        LOGGER.info("Step 3: Validating delivery date %s for order %s", raw_date, order_id)
        result = service.accept_delivery_date(str(order_id), raw_date, recipients=recipients)
    except Exception as error:  # pylint: disable=broad-except
        LOGGER.error("=== CHECKOUT DELIVERY DATE HANDLER FAILED ===")
        LOGGER.exception("Error accepting delivery date: %s", str(error))
        return response(500, {"message": str(error)})

    if not result.valid:
        return response(422, {"orderId": str(order_id), **result.to_dict()})

    LOGGER.info("=== CHECKOUT DELIVERY DATE HANDLER COMPLETED SUCCESSFULLY ===")
    return response(200, {"orderId": str(order_id), **result.to_dict()})
