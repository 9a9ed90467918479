"""Advisory delivery window handler for the storefront date picker"""
import logging
from typing import Any, Dict

from delivery_core import DeliveryService
from delivery_core.http import response

LOGGER = logging.getLogger()
if not LOGGER.handlers:
    logging.basicConfig(level=logging.INFO)
LOGGER.setLevel(logging.INFO)


def delivery_window_handler(event: Dict[str, Any], _context: Any, service: DeliveryService) -> Dict[str, Any]:
    """Earliest selectable date, exclusions and upcoming dates."""
    LOGGER.info("=== DELIVERY WINDOW HANDLER STARTED ===")
    try:
        window = service.delivery_window()
        LOGGER.info("Earliest delivery date for %s: %s", window.today, window.earliest)
        return response(200, window.to_dict())
    except Exception as error:  # pylint: disable=broad-except
        LOGGER.error("=== DELIVERY WINDOW HANDLER FAILED ===")
        LOGGER.exception("Error building delivery window: %s", str(error))
        return response(500, {"message": str(error)})
