"""Advisory delivery date check handler"""
import logging
from typing import Any, Dict

from delivery_core import DeliveryService
from delivery_core.http import request_params, response

LOGGER = logging.getLogger()
if not LOGGER.handlers:
    logging.basicConfig(level=logging.INFO)
LOGGER.setLevel(logging.INFO)


def check_delivery_date_handler(event: Dict[str, Any], _context: Any, service: DeliveryService) -> Dict[str, Any]:
    """Evaluate a date with the checkout rules without stamping any order."""
    LOGGER.info("=== CHECK DELIVERY DATE HANDLER STARTED ===")
    try:
        params = request_params(event)
    except ValueError as error:
        LOGGER.warning("Client error: %s", error)
        return response(400, {"message": str(error)})

    try:
        result = service.check_delivery_date(params.get("date"))
        LOGGER.info("Check result for %s: %s", params.get("date"), result.error.code if result.error else "valid")
        return response(200, result.to_dict())
    except Exception as error:  # pylint: disable=broad-except
        LOGGER.error("=== CHECK DELIVERY DATE HANDLER FAILED ===")
        LOGGER.exception("Error checking delivery date: %s", str(error))
        return response(500, {"message": str(error)})
