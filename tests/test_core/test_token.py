"""
Tests for Huawei Dongle Client CSRF token acquisition.

This module tests token extraction from the token endpoint and the homepage
HTML, and the fallback between the two sources.
"""

import logging

import httpx
import pytest

from fixtures.device_responses import HOMEPAGE_HTML, TEST_TOKEN, token_xml
from fixtures.transport import MockTransport
from huawei_dongle.core.exceptions import SessionError
from huawei_dongle.core.token import (
    TokenFetcher,
    extract_token_from_html,
    extract_token_from_xml,
)


class TestExtractTokenFromXml:
    """Test parsing of the token endpoint body."""

    def test_response_document(self):
        assert extract_token_from_xml(token_xml("abc123")) == "abc123"

    def test_bare_token_element(self):
        assert extract_token_from_xml("<token> abc123 </token>") == "abc123"

    def test_empty_token(self):
        with pytest.raises(SessionError):
            extract_token_from_xml("<response><token></token></response>")

    def test_missing_token(self):
        with pytest.raises(SessionError):
            extract_token_from_xml("<response><other>x</other></response>")

    def test_invalid_xml(self):
        with pytest.raises(SessionError):
            extract_token_from_xml("<html><body>not xml")


class TestExtractTokenFromHtml:
    """Test parsing of the homepage meta tags."""

    def test_named_csrf_meta(self):
        assert extract_token_from_html(HOMEPAGE_HTML) == TEST_TOKEN

    def test_named_meta_preferred(self):
        html = (
            '<html><head><meta name="other" content="csrf-other">'
            '<meta name="csrf_token" content="named-token"></head></html>'
        )
        assert extract_token_from_html(html) == "named-token"

    def test_content_mentioning_csrf(self):
        html = '<html><head><meta name="token" content="csrf_abcdef"></head></html>'
        assert extract_token_from_html(html) == "csrf_abcdef"

    def test_long_alphanumeric_content_logs_warning(self, caplog):
        value = "A1b2C3d4E5f6G7h8I9j0K1l2"
        html = (
            '<html><head><meta name="viewport" content="width=device-width">'
            f'<meta name="x" content="{value}"></head></html>'
        )

        with caplog.at_level(logging.WARNING, logger="huawei-dongle"):
            assert extract_token_from_html(html) == value

        assert any("unlabelled meta tag" in r.message for r in caplog.records)

    def test_short_alphanumeric_content_is_ignored(self):
        html = '<html><head><meta name="x" content="abc123"></head></html>'
        with pytest.raises(SessionError):
            extract_token_from_html(html)

    def test_no_meta_tags(self):
        with pytest.raises(SessionError):
            extract_token_from_html("<html><body>Hello</body></html>")


@pytest.mark.asyncio
class TestTokenFetcher:
    """Test the two-stage token acquisition."""

    async def _acquire(self, transport: MockTransport) -> str:
        async with httpx.AsyncClient(transport=transport) as http_client:
            fetcher = TokenFetcher(http_client, "http://192.168.8.1/")
            return await fetcher.acquire()

    async def test_token_from_api_endpoint(self):
        transport = MockTransport({"/api/webserver/token": token_xml("api-token"), "/": HOMEPAGE_HTML})

        assert await self._acquire(transport) == "api-token"
        assert transport.requests_to("/") == []

    async def test_fallback_to_homepage_on_http_error(self):
        transport = MockTransport({"/api/webserver/token": (404, "Not Found"), "/": HOMEPAGE_HTML})

        assert await self._acquire(transport) == TEST_TOKEN
        assert len(transport.requests_to("/api/webserver/token")) == 1
        assert len(transport.requests_to("/")) == 1

    async def test_fallback_to_homepage_on_missing_token(self):
        transport = MockTransport({
            "/api/webserver/token": "<response></response>",
            "/": HOMEPAGE_HTML,
        })

        assert await self._acquire(transport) == TEST_TOKEN

    async def test_fallback_to_homepage_on_network_error(self):
        transport = MockTransport({
            "/api/webserver/token": httpx.ConnectError("refused"),
            "/": HOMEPAGE_HTML,
        })

        assert await self._acquire(transport) == TEST_TOKEN

    async def test_both_sources_fail(self):
        transport = MockTransport({
            "/api/webserver/token": (500, "error"),
            "/": "<html><body>No token here</body></html>",
        })

        with pytest.raises(SessionError):
            await self._acquire(transport)

    async def test_homepage_network_error_becomes_session_error(self):
        transport = MockTransport({
            "/api/webserver/token": (404, "Not Found"),
            "/": httpx.ConnectError("refused"),
        })

        with pytest.raises(SessionError) as exc_info:
            await self._acquire(transport)
        assert exc_info.value.retryable is True
