"""Handler for the WaterBot status endpoint."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..config import load_config
from ..database import connect
from ..errors import ErrorCode
from ..services import WaterBotStatusService
from ..stores import WaterBotStatusStore

if TYPE_CHECKING:
    from .base_handler import BaseHandler

logger = logging.getLogger(__name__)


class WaterBotHandler:
    """Handler for /robots/status."""

    @staticmethod
    def handle_status(router: "BaseHandler") -> None:
        """Returns the latest state of every WaterBot as a JSON array.

        Args:
            router: The router with request context
        """
        logger.info("HTTP trigger for GetWaterBotLatestStatus processed a request.")
        try:
            with connect(load_config()) as session:
                states = WaterBotStatusService(WaterBotStatusStore(session)).get_latest_states()
            router._send_json([state.to_dict() for state in states], status_code=ErrorCode.OK)
        except Exception as e:
            code, response = router.error_handler.handle_error(e, default_message="Error loading WaterBot status")
            router._send_error_response(code, response)
