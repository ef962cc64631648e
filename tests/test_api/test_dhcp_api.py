"""
Tests for Huawei Dongle Client DHCP endpoints.
"""

import xml.etree.ElementTree as ET

import httpx
import pytest

from fixtures.device_responses import DHCP_SETTINGS_XML, OK_XML, error_xml
from huawei_dongle.core.exceptions import ConfigurationError, LoginRequiredError

DHCP_PATH = "/api/dhcp/settings"


def dhcp_route(requests_seen):
    """GET returns the settings, POST acknowledges."""

    def handle(request):
        requests_seen.append(request)
        body = DHCP_SETTINGS_XML if request.method == "GET" else OK_XML
        return httpx.Response(200, text=body, request=request)

    return handle


@pytest.mark.asyncio
class TestDhcpSettings:
    async def test_settings(self, dongle_client, mock_transport):
        mock_transport.routes[DHCP_PATH] = DHCP_SETTINGS_XML

        settings = await dongle_client.dhcp.settings()

        assert settings.dhcp_ip_address == "192.168.8.1"
        assert settings.dhcp_enabled is True
        assert settings.dns_enabled is True
        assert settings.dhcp_lease_time == "86400"

    async def test_settings_requires_login(self, dongle_client, mock_transport):
        mock_transport.routes[DHCP_PATH] = error_xml(100003)

        with pytest.raises(LoginRequiredError):
            await dongle_client.dhcp.settings()

    async def test_set_gateway(self, dongle_client, mock_transport):
        seen = []
        mock_transport.routes[DHCP_PATH] = dhcp_route(seen)

        updated = await dongle_client.dhcp.set_gateway("192.168.9.1")

        assert [r.method for r in seen] == ["GET", "POST"]
        fields = {child.tag: child.text for child in ET.fromstring(seen[1].content)}
        assert fields["DhcpIPAddress"] == "192.168.9.1"
        assert fields["DhcpStartIPAddress"] == "192.168.9.100"
        assert fields["DhcpEndIPAddress"] == "192.168.9.200"
        assert fields["PrimaryDns"] == "192.168.9.1"
        assert fields["SecondaryDns"] == "192.168.9.1"
        assert fields["DhcpLanNetmask"] == "255.255.255.0"
        assert fields["DhcpLeaseTime"] == "86400"
        assert updated.dhcp_ip_address == "192.168.9.1"

    @pytest.mark.parametrize("ip", ["10.0.0.1", "192.168.9.2", "192.168.0.1", "192.168.x.1"])
    async def test_set_gateway_rejects_address(self, dongle_client, mock_transport, ip):
        mock_transport.routes[DHCP_PATH] = DHCP_SETTINGS_XML

        with pytest.raises(ConfigurationError):
            await dongle_client.dhcp.set_gateway(ip)

        assert mock_transport.requests_to(DHCP_PATH) == []
