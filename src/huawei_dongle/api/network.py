"""
Huawei Dongle Client - Network Endpoints

Network mode selection and the registered operator.
"""

import logging

from ..core.exceptions import ResponseParseError
from ..core.payload import is_ok_response
from ..core.pipeline import RequestPipeline
from ..shared.constants import API_NET_CURRENT_PLMN, API_NET_MODE
from .models import CurrentPlmn, NetworkMode

logger = logging.getLogger("huawei-dongle")


class NetworkApi:
    """Network mode and operator endpoints."""

    def __init__(self, pipeline: RequestPipeline):
        self.pipeline = pipeline

    async def mode(self) -> NetworkMode:
        """Fetch the configured network mode and band masks."""
        logger.debug("Fetching network mode")
        text = await self.pipeline.call(API_NET_MODE, authenticated=False, operation="network_mode")
        mode = NetworkMode.from_xml(text)
        logger.debug(f"Network mode: {mode.network_mode} ({mode.mode_text})")
        return mode

    async def set_mode(self, mode: NetworkMode) -> None:
        """Change the network mode. Requires login.

        The device drops its mobile connection while it re-registers.
        """
        logger.warning(
            f"Changing network mode to {mode.network_mode} ({mode.mode_text}); "
            "the device will disconnect temporarily"
        )
        text = await self.pipeline.authenticated_call(
            API_NET_MODE, mode.to_request(), operation="set_network_mode"
        )
        if not is_ok_response(text):
            raise ResponseParseError("Unexpected response to network mode change", response_text=text)
        logger.info("Network mode changed")

    async def current_plmn(self) -> CurrentPlmn:
        logger.debug("Fetching current PLMN")
        text = await self.pipeline.call(
            API_NET_CURRENT_PLMN, authenticated=False, operation="current_plmn"
        )
        return CurrentPlmn.from_xml(text)
