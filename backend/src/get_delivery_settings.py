"""Get delivery settings handler (admin)"""
import logging
from typing import Any, Dict

from delivery_core import DeliveryService, UnauthorizedError
from delivery_core.display import day_name, format_short_date
from delivery_core.http import require_admin, response

LOGGER = logging.getLogger()
if not LOGGER.handlers:
    logging.basicConfig(level=logging.INFO)
LOGGER.setLevel(logging.INFO)


def get_delivery_settings_handler(event: Dict[str, Any], _context: Any, service: DeliveryService) -> Dict[str, Any]:
    """Current settings with the day-off list sorted by date."""
    LOGGER.info("=== GET DELIVERY SETTINGS HANDLER STARTED ===")
    try:
        require_admin(event)
        settings = service.get_settings()
        body = settings.to_dict()
        body["customDayoffs"] = [
            {
                **entry.to_dict(),
                "formatted_date": format_short_date(entry.date),
                "day_name": day_name(entry.date),
            }
            for entry in settings.sorted_dayoffs()
        ]
        return response(200, body)
    except UnauthorizedError as error:
        return response(403, {"message": str(error), "error": error.code})
    except Exception as error:  # pylint: disable=broad-except
        LOGGER.error("=== GET DELIVERY SETTINGS HANDLER FAILED ===")
        LOGGER.exception("Error getting settings: %s", str(error))
        return response(500, {"message": str(error)})
