"""
Huawei Dongle Client - CSRF Token Acquisition

Obtains a fresh CSRF token from the device. Firmware is inconsistent about where
the token is exposed, so two sources are tried in order:

1. the ``/api/webserver/token`` endpoint (``<response><token>..</token></response>``)
2. ``<meta>`` tags of the device's root HTML page

The first stage failing is expected on some firmware and only logged at debug
level. If both fail, a ``SessionError`` is raised.
"""

import logging
import xml.etree.ElementTree as ET
from contextlib import nullcontext
from typing import Optional

import httpx
from aiolimiter import AsyncLimiter
from bs4 import BeautifulSoup

from ..shared.constants import API_WEBSERVER_TOKEN, HOMEPAGE_PATH
from .exceptions import SessionError

logger = logging.getLogger("huawei-dongle")

HEURISTIC_TOKEN_MIN_LENGTH = 20


def extract_token_from_xml(xml: str) -> str:
    """Return the text of the first ``<token>`` element.

    Raises:
        SessionError: If the body is not XML or holds no non-empty token
    """
    try:
        root = ET.fromstring(xml.strip())
    except ET.ParseError as e:
        raise SessionError(f"Invalid token response XML: {e}")

    element = root if root.tag == "token" else root.find(".//token")
    token = (element.text or "").strip() if element is not None else ""
    if not token:
        raise SessionError("Could not find token in XML response")
    return token


def extract_token_from_html(html: str) -> str:
    """Find the CSRF token in the ``<meta>`` tags of an HTML page.

    Matches are tried most specific first:
        1. ``<meta name="csrf_token" content="...">``
        2. any meta tag whose content mentions ``csrf``
        3. any meta tag whose content is alphanumeric and longer than 20 characters

    Raises:
        SessionError: If no candidate is found
    """
    soup = BeautifulSoup(html, "html.parser")

    named = soup.find("meta", attrs={"name": "csrf_token"})
    if named is not None and named.get("content"):
        return named["content"]

    metas = soup.find_all("meta", attrs={"content": True})

    for meta in metas:
        content = meta["content"]
        if content and "csrf" in content:
            return content

    for meta in metas:
        content = meta["content"]
        if len(content) > HEURISTIC_TOKEN_MIN_LENGTH and content.isalnum():
            logger.warning(
                f"Using unlabelled meta tag as CSRF token ({content[:10]}...); "
                "this firmware does not expose a named token"
            )
            return content

    raise SessionError("Could not find CSRF token in HTML")


class TokenFetcher:
    """Fetches CSRF tokens from the device without touching session state."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        base_url: str,
        limiter: Optional[AsyncLimiter] = None,
    ):
        """Initialize token fetcher.

        Args:
            http_client: Client shared with the request pipeline (cookie jar included)
            base_url: Device base URL without trailing slash
            limiter: Optional request throttle shared with the pipeline
        """
        self.http_client = http_client
        self.base_url = base_url.rstrip("/")
        self.limiter = limiter

    async def acquire(self) -> str:
        """Obtain a fresh token, trying the API endpoint and then the homepage.

        Raises:
            SessionError: If neither source yields a token
        """
        logger.debug(f"Fetching new CSRF token from {API_WEBSERVER_TOKEN}")
        try:
            token = await self._from_api_endpoint()
        except (SessionError, httpx.RequestError) as e:
            logger.debug(f"API token fetch failed: {e}, trying homepage fallback")
        else:
            logger.debug("Successfully fetched token from API endpoint")
            return token

        try:
            token = await self._from_homepage()
        except httpx.RequestError as e:
            raise SessionError(
                f"Failed to fetch homepage: {e}",
                context={"endpoint": HOMEPAGE_PATH, "error": str(e)},
            )

        logger.debug("Successfully extracted token from homepage HTML")
        return token

    async def _get(self, path: str) -> httpx.Response:
        async with self.limiter or nullcontext():
            return await self.http_client.get(f"{self.base_url}{path}")

    async def _from_api_endpoint(self) -> str:
        response = await self._get(API_WEBSERVER_TOKEN)
        if not response.is_success:
            raise SessionError(f"Failed to fetch token: HTTP {response.status_code}")

        logger.debug(f"Token response length: {len(response.text)} chars")
        return extract_token_from_xml(response.text)

    async def _from_homepage(self) -> str:
        logger.debug("Fetching CSRF token from homepage HTML")
        response = await self._get(HOMEPAGE_PATH)
        if not response.is_success:
            raise SessionError(f"Failed to fetch homepage: HTTP {response.status_code}")

        logger.debug(f"Homepage HTML length: {len(response.text)} chars")
        return extract_token_from_html(response.text)
