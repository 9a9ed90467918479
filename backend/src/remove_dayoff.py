"""Remove day-off handler (admin)"""
import logging
from typing import Any, Dict

from delivery_core import DayOffError, DeliveryService, UnauthorizedError
from delivery_core.http import parse_body, require_admin, response

LOGGER = logging.getLogger()
if not LOGGER.handlers:
    logging.basicConfig(level=logging.INFO)
LOGGER.setLevel(logging.INFO)


def remove_dayoff_handler(event: Dict[str, Any], _context: Any, service: DeliveryService) -> Dict[str, Any]:
    """Removing a date that is not scheduled still succeeds."""
    LOGGER.info("=== REMOVE DAY-OFF HANDLER STARTED ===")
    try:
        require_admin(event)
        payload = parse_body(event)
        service.remove_dayoff(payload.get("date"))
        return response(200, {"message": "Day-off removed", "date": payload.get("date")})
    except UnauthorizedError as error:
        return response(403, {"message": str(error), "error": error.code})
    except DayOffError as error:
        return response(400, {"message": str(error), "error": error.code})
    except ValueError as error:
        return response(400, {"message": str(error)})
    except Exception as error:  # pylint: disable=broad-except
        LOGGER.error("=== REMOVE DAY-OFF HANDLER FAILED ===")
        LOGGER.exception("Error removing day-off: %s", str(error))
        return response(500, {"message": str(error)})
