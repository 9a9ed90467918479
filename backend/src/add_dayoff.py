"""Add day-off handler (admin)"""
import logging
from typing import Any, Dict

from delivery_core import DayOffAlreadyExistsError, DayOffError, DeliveryService, UnauthorizedError
from delivery_core.display import day_name, format_short_date
from delivery_core.http import parse_body, require_admin, response

LOGGER = logging.getLogger()
if not LOGGER.handlers:
    logging.basicConfig(level=logging.INFO)
LOGGER.setLevel(logging.INFO)


def add_dayoff_handler(event: Dict[str, Any], _context: Any, service: DeliveryService) -> Dict[str, Any]:
    LOGGER.info("=== ADD DAY-OFF HANDLER STARTED ===")
    try:
        require_admin(event)
        payload = parse_body(event)
        entry = service.add_dayoff(payload.get("date"), payload.get("reason"))
        return response(200, {
            "date": entry.date.isoformat(),
            "formatted_date": format_short_date(entry.date),
            "day_name": day_name(entry.date),
            "reason": entry.reason,
        })
    except UnauthorizedError as error:
        return response(403, {"message": str(error), "error": error.code})
    except DayOffAlreadyExistsError as error:
        return response(409, {"message": str(error), "error": error.code})
    except DayOffError as error:
        return response(400, {"message": str(error), "error": error.code})
    except ValueError as error:
        return response(400, {"message": str(error)})
    except Exception as error:  # pylint: disable=broad-except
        LOGGER.error("=== ADD DAY-OFF HANDLER FAILED ===")
        LOGGER.exception("Error adding day-off: %s", str(error))
        return response(500, {"message": str(error)})
