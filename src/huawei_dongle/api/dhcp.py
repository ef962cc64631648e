"""
Huawei Dongle Client - DHCP Endpoints
"""

import logging

from ..core.exceptions import ResponseParseError
from ..core.payload import is_ok_response
from ..core.pipeline import RequestPipeline
from ..shared.constants import API_DHCP_SETTINGS
from .models import DhcpSettings, gateway_subnet

logger = logging.getLogger("huawei-dongle")


class DhcpApi:
    """LAN gateway and DHCP server settings. Requires login."""

    def __init__(self, pipeline: RequestPipeline):
        self.pipeline = pipeline

    async def settings(self) -> DhcpSettings:
        logger.debug("Fetching DHCP settings")
        settings = await self.pipeline.authenticated_call(
            API_DHCP_SETTINGS, parse=DhcpSettings.from_xml, operation="dhcp_settings"
        )
        logger.debug(f"DHCP gateway IP: {settings.dhcp_ip_address}")
        return settings

    async def set_settings(self, settings: DhcpSettings) -> None:
        """Write LAN and DHCP settings.

        Clients on the LAN may lose their connection until they renew their lease.
        """
        logger.warning(f"Setting DHCP gateway IP to {settings.dhcp_ip_address}")
        text = await self.pipeline.authenticated_call(
            API_DHCP_SETTINGS, settings.to_request(), operation="set_dhcp_settings"
        )
        if not is_ok_response(text):
            raise ResponseParseError("Unexpected response to DHCP settings change", response_text=text)
        logger.info("DHCP settings changed")

    async def set_gateway(self, ip: str) -> DhcpSettings:
        """Move the LAN to the gateway ``ip`` (``192.168.x.1``) and return the new settings.

        Raises:
            ConfigurationError: If ``ip`` is not of the form ``192.168.x.1``
        """
        gateway_subnet(ip)
        current = await self.settings()
        updated = current.with_gateway(ip)
        await self.set_settings(updated)
        return updated
