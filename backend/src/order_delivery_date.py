"""Order delivery date display handler (admin view, thank-you page)"""
import logging
from typing import Any, Dict

from delivery_core import DeliveryService
from delivery_core.display import (
    format_long_date,
    render_admin_line,
    render_email_block,
    render_thankyou_line,
)
from delivery_core.http import request_params, response

LOGGER = logging.getLogger()
if not LOGGER.handlers:
    logging.basicConfig(level=logging.INFO)
LOGGER.setLevel(logging.INFO)


def order_delivery_date_handler(event: Dict[str, Any], _context: Any, service: DeliveryService) -> Dict[str, Any]:
    LOGGER.info("=== ORDER DELIVERY DATE HANDLER STARTED ===")
    try:
        params = request_params(event)
    except ValueError as error:
        return response(400, {"message": str(error)})

    order_id = params.get("orderId")
    if not order_id:
        return response(400, {"message": "orderId is required"})

    try:
        delivery_date = service.order_delivery_date(str(order_id))
    except Exception as error:  # pylint: disable=broad-except
        LOGGER.exception("Error loading order %s: %s", order_id, str(error))
        return response(500, {"message": str(error)})

    if delivery_date is None:
        return response(404, {"message": f"No delivery date for order {order_id}"})

    return response(200, {
        "orderId": str(order_id),
        "date": delivery_date.isoformat(),
        "formattedDate": format_long_date(delivery_date),
        "adminHtml": render_admin_line(delivery_date),
        "thankYouHtml": render_thankyou_line(delivery_date),
        "emailText": render_email_block(delivery_date, plain_text=True),
    })
