"""
Huawei Dongle Client - Device Endpoints

Device information and power control.
"""

import logging

from ..core.exceptions import ResponseParseError
from ..core.payload import build_request, is_ok_response
from ..core.pipeline import RequestPipeline
from ..shared.constants import (
    API_DEVICE_CONTROL,
    API_DEVICE_INFORMATION,
    DEVICE_CONTROL_POWER_OFF,
    DEVICE_CONTROL_REBOOT,
)
from .models import DeviceInformation

logger = logging.getLogger("huawei-dongle")


class DeviceApi:
    """Device information and control endpoints."""

    def __init__(self, pipeline: RequestPipeline):
        self.pipeline = pipeline

    async def information(self) -> DeviceInformation:
        """Fetch device information (name, IMEI, firmware versions, ...)."""
        logger.debug("Fetching device information")
        text = await self.pipeline.call(
            API_DEVICE_INFORMATION, authenticated=False, operation="device_information"
        )
        return DeviceInformation.from_xml(text)

    async def reboot(self) -> None:
        """Reboot the device. Requires login."""
        logger.debug("Rebooting device")
        await self._control(DEVICE_CONTROL_REBOOT, "device_reboot")
        logger.info("Device reboot initiated")

    async def power_off(self) -> None:
        """Power off the device. Requires login."""
        logger.debug("Powering off device")
        await self._control(DEVICE_CONTROL_POWER_OFF, "device_power_off")
        logger.info("Device power off initiated")

    async def _control(self, control: int, operation: str) -> None:
        body = build_request({"Control": str(control)})
        text = await self.pipeline.authenticated_call(API_DEVICE_CONTROL, body, operation=operation)
        if not is_ok_response(text):
            raise ResponseParseError(
                f"Unexpected response to device control {control}", response_text=text
            )
