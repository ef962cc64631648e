"""
Huawei Dongle Client - SMS Endpoints

Message counters, listing, sending, deleting and marking messages read.
"""

import logging
from datetime import datetime
from typing import Iterable, Optional

from ..core.exceptions import ConfigurationError, ResponseParseError
from ..core.payload import build_request, is_ok_response
from ..core.pipeline import RequestPipeline
from ..shared.constants import (
    API_SMS_COUNT,
    API_SMS_DELETE,
    API_SMS_LIST,
    API_SMS_SEND,
    API_SMS_SET_READ,
)
from .models import SmsCount, SmsList, SmsListRequest

logger = logging.getLogger("huawei-dongle")

SMS_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class SmsApi:
    """SMS endpoints. All of them require login."""

    def __init__(self, pipeline: RequestPipeline):
        self.pipeline = pipeline

    async def count(self) -> SmsCount:
        logger.debug("Fetching SMS count")
        count = await self.pipeline.authenticated_call(
            API_SMS_COUNT, parse=SmsCount.from_xml, operation="sms_count"
        )
        logger.debug(
            f"SMS count - local unread: {count.local_unread}, "
            f"SIM unread: {count.sim_unread}, total unread: {count.total_unread}"
        )
        return count

    async def list(self, request: Optional[SmsListRequest] = None) -> SmsList:
        """Fetch one page of messages; defaults to the newest 20 of the local inbox."""
        request = request or SmsListRequest()
        logger.debug(
            f"Fetching SMS list - page: {request.page_index}, "
            f"count: {request.read_count}, box: {request.box_type}"
        )
        sms_list = await self.pipeline.authenticated_call(
            API_SMS_LIST, request.to_request(), parse=SmsList.from_xml, operation="sms_list"
        )
        logger.debug(f"Retrieved {len(sms_list.messages)} SMS messages")
        return sms_list

    async def send(self, phones: Iterable[str], content: str) -> None:
        """Send ``content`` to each of ``phones``.

        Raises:
            ConfigurationError: If no recipient or no content is given
        """
        phones = [phone.strip() for phone in phones if phone.strip()]
        if not phones:
            raise ConfigurationError("At least one recipient phone number is required")
        if not content:
            raise ConfigurationError("Message content must not be empty")

        logger.debug(f"Sending SMS to {len(phones)} recipient(s)")
        body = build_request({
            "Index": -1,
            "Phones": {"Phone": phones},
            "Sca": "",
            "Content": content,
            "Length": len(content),
            "Reserved": 1,
            "Date": datetime.now().strftime(SMS_DATE_FORMAT),
        })
        await self._expect_ok(API_SMS_SEND, body, "sms_send")
        logger.info("SMS sent")

    async def delete(self, message_id: str) -> None:
        logger.debug(f"Deleting SMS message {message_id}")
        await self._expect_ok(API_SMS_DELETE, build_request({"Index": message_id}), "sms_delete")
        logger.info(f"SMS message {message_id} deleted")

    async def mark_read(self, message_id: str) -> None:
        logger.debug(f"Marking SMS message {message_id} as read")
        await self._expect_ok(API_SMS_SET_READ, build_request({"Index": message_id}), "sms_set_read")

    async def _expect_ok(self, path: str, body: str, operation: str) -> None:
        text = await self.pipeline.authenticated_call(path, body, operation=operation)
        if not is_ok_response(text):
            raise ResponseParseError(f"Unexpected response to {operation}", response_text=text)
