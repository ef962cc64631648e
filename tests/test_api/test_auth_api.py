"""
Tests for Huawei Dongle Client authentication endpoints.

This module tests the login flow (state check, lock handling, password
encoding, device login errors) and logout against a mock device.
"""

import xml.etree.ElementTree as ET

import pytest

from fixtures.device_responses import (
    LOCKED_STATE_XML,
    LOGGED_IN_STATE_XML,
    LOGGED_OUT_STATE_XML,
    OK_XML,
    error_xml,
    response_xml,
)
from huawei_dongle import DongleClient
from huawei_dongle.core.exceptions import (
    AccountLockedError,
    ConfigurationError,
    InvalidCredentialsError,
    InvalidPasswordError,
    InvalidUsernameError,
    ResponseParseError,
    TooManyLoginAttemptsError,
)

STATE_PATH = "/api/user/state-login"
LOGIN_PATH = "/api/user/login"
LOGOUT_PATH = "/api/user/logout"

ADMIN_SHA256 = "8c6976e5b5410415bde908bd4dee15dfb167a9c873fc4bb8a81f6f2ab448a918"


def request_fields(request) -> dict:
    root = ET.fromstring(request.content)
    assert root.tag == "request"
    return {child.tag: child.text or "" for child in root}


@pytest.mark.asyncio
class TestLoginState:
    """Test the unauthenticated login state endpoint."""

    async def test_logged_out(self, dongle_client, mock_transport):
        mock_transport.routes[STATE_PATH] = LOGGED_OUT_STATE_XML

        state = await dongle_client.auth.state_login()

        assert state.is_logged_in is False
        assert state.is_locked is False
        assert state.password_type == "4"
        request = mock_transport.requests_to(STATE_PATH)[0]
        assert "__RequestVerificationToken" not in request.headers

    async def test_logged_in(self, dongle_client, mock_transport):
        mock_transport.routes[STATE_PATH] = LOGGED_IN_STATE_XML

        state = await dongle_client.auth.state_login()

        assert state.is_logged_in is True
        assert state.username == "admin"


@pytest.mark.asyncio
class TestLogin:
    """Test the login flow."""

    async def test_login_sha256(self, dongle_client, mock_transport):
        mock_transport.routes[STATE_PATH] = LOGGED_OUT_STATE_XML
        mock_transport.routes[LOGIN_PATH] = OK_XML

        await dongle_client.login()

        fields = request_fields(mock_transport.requests_to(LOGIN_PATH)[0])
        assert fields == {"Username": "admin", "Password": ADMIN_SHA256, "password_type": "4"}
        assert await dongle_client.is_authenticated() is True
        assert await dongle_client.username() == "admin"

    async def test_login_base64(self, dongle_client, mock_transport):
        mock_transport.routes[STATE_PATH] = response_xml(State=-1, password_type=0, lockstatus=0)
        mock_transport.routes[LOGIN_PATH] = OK_XML

        await dongle_client.login("admin", "admin")

        fields = request_fields(mock_transport.requests_to(LOGIN_PATH)[0])
        assert fields["Password"] == "YWRtaW4="
        assert fields["password_type"] == "0"

    async def test_login_post_carries_token(self, dongle_client, mock_transport):
        mock_transport.routes[STATE_PATH] = LOGGED_OUT_STATE_XML
        mock_transport.routes[LOGIN_PATH] = OK_XML

        await dongle_client.login()

        request = mock_transport.requests_to(LOGIN_PATH)[0]
        assert request.headers["__RequestVerificationToken"]

    async def test_already_logged_in(self, dongle_client, mock_transport):
        mock_transport.routes[STATE_PATH] = LOGGED_IN_STATE_XML

        await dongle_client.login()

        assert mock_transport.requests_to(LOGIN_PATH) == []
        assert await dongle_client.is_authenticated() is True
        assert await dongle_client.username() == "admin"

    async def test_account_locked(self, dongle_client, mock_transport):
        mock_transport.routes[STATE_PATH] = LOCKED_STATE_XML

        with pytest.raises(AccountLockedError) as exc_info:
            await dongle_client.login()

        assert exc_info.value.remaining_wait_time == 300
        assert exc_info.value.retryable is False
        assert "300 seconds" in exc_info.value.message
        assert mock_transport.requests_to(LOGIN_PATH) == []
        assert await dongle_client.is_authenticated() is False

    @pytest.mark.parametrize(
        "code,error_class",
        [
            (108001, InvalidUsernameError),
            (108002, InvalidPasswordError),
            (108006, InvalidCredentialsError),
            (108007, TooManyLoginAttemptsError),
        ],
    )
    async def test_login_errors(self, dongle_client, mock_transport, code, error_class):
        mock_transport.routes[STATE_PATH] = LOGGED_OUT_STATE_XML
        mock_transport.routes[LOGIN_PATH] = error_xml(code)

        with pytest.raises(error_class) as exc_info:
            await dongle_client.login()

        assert exc_info.value.device_code == code
        assert len(mock_transport.requests_to(LOGIN_PATH)) == 1
        assert await dongle_client.is_authenticated() is False

    async def test_unexpected_login_response(self, dongle_client, mock_transport):
        mock_transport.routes[STATE_PATH] = LOGGED_OUT_STATE_XML
        mock_transport.routes[LOGIN_PATH] = response_xml(Something="else")

        with pytest.raises(ResponseParseError):
            await dongle_client.login()

        assert await dongle_client.is_authenticated() is False

    async def test_login_without_credentials(self, dongle_config, mock_transport):
        config = dongle_config.model_copy(update={"username": None, "password": None})
        async with DongleClient(config, transport=mock_transport) as client:
            with pytest.raises(ConfigurationError):
                await client.login()

        assert mock_transport.requests_made == []


@pytest.mark.asyncio
class TestLogout:
    """Test logout."""

    async def test_logout(self, dongle_client, mock_transport):
        mock_transport.routes[LOGOUT_PATH] = OK_XML
        await dongle_client.session.mark_authenticated("admin")

        await dongle_client.logout()

        fields = request_fields(mock_transport.requests_to(LOGOUT_PATH)[0])
        assert fields == {"Logout": "1"}
        state = await dongle_client.session_state()
        assert state.is_authenticated is False
        assert state.csrf_token is None
        assert state.username is None

    async def test_logout_when_device_reports_no_login(self, dongle_client, mock_transport):
        mock_transport.routes[LOGOUT_PATH] = error_xml(100003)
        await dongle_client.session.mark_authenticated("admin")

        await dongle_client.logout()

        assert await dongle_client.is_authenticated() is False

    async def test_login_after_logout(self, dongle_client, mock_transport):
        mock_transport.routes[STATE_PATH] = LOGGED_OUT_STATE_XML
        mock_transport.routes[LOGIN_PATH] = OK_XML
        mock_transport.routes[LOGOUT_PATH] = OK_XML

        await dongle_client.login()
        await dongle_client.logout()
        await dongle_client.login()

        assert await dongle_client.is_authenticated() is True
        assert len(mock_transport.requests_to("/api/webserver/token")) == 2
