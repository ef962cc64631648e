"""
Huawei Dongle Client - Monitoring Endpoints
"""

import logging

from ..core.pipeline import RequestPipeline
from ..shared.constants import API_MONITORING_STATUS
from .models import MonitoringStatus

logger = logging.getLogger("huawei-dongle")


class MonitoringApi:
    """Connection and signal monitoring endpoints."""

    def __init__(self, pipeline: RequestPipeline):
        self.pipeline = pipeline

    async def status(self) -> MonitoringStatus:
        logger.debug("Fetching monitoring status")
        return await self.pipeline.authenticated_call(
            API_MONITORING_STATUS, parse=MonitoringStatus.from_xml, operation="monitoring_status"
        )
