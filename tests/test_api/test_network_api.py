"""
Tests for Huawei Dongle Client network endpoints.
"""

import xml.etree.ElementTree as ET

import pytest

from fixtures.device_responses import CURRENT_PLMN_XML, NETWORK_MODE_XML, OK_XML, error_xml
from huawei_dongle.api.models import NetworkMode
from huawei_dongle.core.exceptions import LoginRequiredError, ResponseParseError

MODE_PATH = "/api/net/net-mode"
PLMN_PATH = "/api/net/current-plmn"


@pytest.mark.asyncio
class TestNetworkMode:
    """Test reading and changing the network mode."""

    async def test_mode(self, dongle_client, mock_transport):
        mock_transport.routes[MODE_PATH] = NETWORK_MODE_XML

        mode = await dongle_client.network.mode()

        assert mode.network_mode == "03"
        assert mode.mode_text == "4G Only (LTE)"
        assert mode.is_4g_only is True
        assert mode.lte_band == "7FFFFFFFFFFFFFFF"
        assert mock_transport.requests_to("/api/webserver/token") == []

    async def test_set_mode(self, dongle_client, mock_transport):
        mock_transport.routes[MODE_PATH] = OK_XML

        await dongle_client.network.set_mode(NetworkMode.lte_preferred())

        request = mock_transport.requests_to(MODE_PATH)[0]
        assert request.method == "POST"
        assert request.headers["__RequestVerificationToken"]
        root = ET.fromstring(request.content)
        assert root.findtext("NetworkMode") == "0302"
        assert root.findtext("NetworkBand") == "3fffffff"
        assert root.findtext("LTEBand") == "80800C5"

    async def test_set_mode_requires_login(self, dongle_client, mock_transport):
        mock_transport.routes[MODE_PATH] = error_xml(100003)

        with pytest.raises(LoginRequiredError):
            await dongle_client.network.set_mode(NetworkMode.auto())

    async def test_set_mode_unexpected_response(self, dongle_client, mock_transport):
        mock_transport.routes[MODE_PATH] = NETWORK_MODE_XML

        with pytest.raises(ResponseParseError):
            await dongle_client.network.set_mode(NetworkMode.lte_only())


@pytest.mark.asyncio
class TestCurrentPlmn:
    """Test the registered operator endpoint."""

    async def test_current_plmn(self, dongle_client, mock_transport):
        mock_transport.routes[PLMN_PATH] = CURRENT_PLMN_XML

        plmn = await dongle_client.network.current_plmn()

        assert plmn.operator_name == "Vodafone.de"
        assert plmn.numeric == "26202"
        assert plmn.rat == "7"
