"""
Shared pytest configuration and fixtures for Huawei Dongle Client tests.

This module provides common fixtures used across all test modules including:
- Device configurations
- A mock transport playing the device's web server
- Client fixtures wired to the mock transport
"""

from typing import Any
from unittest.mock import patch

import pytest
import pytest_asyncio

from fixtures.device_responses import LOGGED_OUT_STATE_XML, OK_XML, token_xml
from fixtures.transport import MockTransport
from huawei_dongle import DongleClient, DongleConfig

# ========== Configuration Fixtures ==========


@pytest.fixture
def dongle_config() -> DongleConfig:
    """Provide a device configuration with credentials and instant retries."""
    return DongleConfig(
        url="http://192.168.8.1",
        username="admin",
        password="admin",
        timeout=5.0,
        max_retries=3,
        retry_delay=0.0,
        jitter=False,
    )


@pytest.fixture
def dongle_config_dict() -> dict[str, Any]:
    """Provide a dictionary version of the device configuration."""
    return {
        "url": "http://192.168.8.1",
        "username": "admin",
        "password": "admin",
        "verify_ssl": True,
    }


# ========== Client Fixtures ==========


@pytest.fixture
def mock_transport() -> MockTransport:
    """Provide a mock device that only hands out tokens; tests add routes."""
    return MockTransport({"/api/webserver/token": token_xml()})


@pytest_asyncio.fixture
async def dongle_client(dongle_config, mock_transport):
    """Provide a client talking to the mock transport."""
    client = DongleClient(dongle_config, transport=mock_transport)
    yield client
    await client.close()


@pytest.fixture
def cli_device(dongle_config, mock_transport):
    """Point the device commands at the mock transport with a profile that can log in."""
    mock_transport.routes.update({
        "/api/user/state-login": LOGGED_OUT_STATE_XML,
        "/api/user/login": OK_XML,
        "/api/user/logout": OK_XML,
    })
    with (
        patch("huawei_dongle.cli.session.ConfigLoader.load", return_value=dongle_config),
        patch(
            "huawei_dongle.cli.session.DongleClient",
            side_effect=lambda config: DongleClient(config, transport=mock_transport),
        ),
    ):
        yield mock_transport


# ========== Pytest Configuration ==========


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "asyncio: mark test as an asyncio test")
    config.addinivalue_line("markers", "unit: mark test as a unit test")
