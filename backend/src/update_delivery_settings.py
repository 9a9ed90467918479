"""Update delivery settings handler (admin)"""
import logging
from typing import Any, Dict

from delivery_core import DeliveryService, UnauthorizedError
from delivery_core.http import parse_body, require_admin, response
from delivery_core.models import WEEKDAY_FLAGS

LOGGER = logging.getLogger()
if not LOGGER.handlers:
    logging.basicConfig(level=logging.INFO)
LOGGER.setLevel(logging.INFO)

# camelCase request field for each weekday flag, Sunday first
WEEKDAY_FIELDS = [
    "disable" + name[len("disable_"):].capitalize() for name in WEEKDAY_FLAGS
]


def update_delivery_settings_handler(event: Dict[str, Any], _context: Any, service: DeliveryService) -> Dict[str, Any]:
    """Save lead time and weekday rules; existing day-offs are kept."""
    LOGGER.info("=== UPDATE DELIVERY SETTINGS HANDLER STARTED ===")
    try:
        require_admin(event)

        LOGGER.info("Step 1: Parsing request body")
        payload = parse_body(event)
        LOGGER.info("Parsed payload: %s", payload)

        LOGGER.info("Step 2: Validating fields")
        if "minimumDays" not in payload:
            return response(400, {"message": "minimumDays is required"})
        disabled = [index for index, name in enumerate(WEEKDAY_FIELDS) if payload.get(name) is True]
        auto_weekend = payload.get("autoWeekendDisable") is True

        LOGGER.info("Step 3: Saving settings")
        settings = service.update_settings(payload.get("minimumDays"), disabled, auto_weekend)

        LOGGER.info("=== UPDATE DELIVERY SETTINGS HANDLER COMPLETED SUCCESSFULLY ===")
        return response(200, {"message": "Settings saved successfully!", **settings.to_dict()})
    except UnauthorizedError as error:
        return response(403, {"message": str(error), "error": error.code})
    except ValueError as error:
        LOGGER.warning("Client error: %s", error)
        return response(400, {"message": str(error)})
    except Exception as error:  # pylint: disable=broad-except
        LOGGER.error("=== UPDATE DELIVERY SETTINGS HANDLER FAILED ===")
        LOGGER.exception("Error updating settings: %s", str(error))
        return response(500, {"message": str(error)})
