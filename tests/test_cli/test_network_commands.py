"""
Tests for Huawei Dongle Client network CLI commands.
"""

import json
import xml.etree.ElementTree as ET

from typer.testing import CliRunner

from fixtures.device_responses import CURRENT_PLMN_XML, NETWORK_MODE_XML, OK_XML
from huawei_dongle.cli import app

runner = CliRunner()

MODE_PATH = "/api/net/net-mode"


class TestNetworkCommands:
    """Test network mode and operator commands."""

    def test_mode(self, cli_device):
        cli_device.routes[MODE_PATH] = NETWORK_MODE_XML

        result = runner.invoke(app, ["network", "mode"])

        assert result.exit_code == 0
        assert "4G Only (LTE)" in result.output
        assert "7FFFFFFFFFFFFFFF" in result.output

    def test_set_mode(self, cli_device):
        cli_device.routes[MODE_PATH] = OK_XML

        result = runner.invoke(app, ["network", "set-mode", "0302", "--force"])

        assert result.exit_code == 0
        assert "4G Preferred, 3G Fallback" in result.output
        assert "Network mode changed" in result.output
        root = ET.fromstring(cli_device.requests_to(MODE_PATH)[0].content)
        assert root.findtext("NetworkMode") == "0302"
        assert len(cli_device.requests_to("/api/user/logout")) == 1

    def test_set_mode_custom_bands(self, cli_device):
        cli_device.routes[MODE_PATH] = OK_XML

        result = runner.invoke(
            app, ["network", "set-mode", "03", "--lte-band", "800C5", "--force"]
        )

        assert result.exit_code == 0
        root = ET.fromstring(cli_device.requests_to(MODE_PATH)[0].content)
        assert root.findtext("LTEBand") == "800C5"
        assert root.findtext("NetworkBand") == "3fffffff"

    def test_set_mode_invalid_code(self, cli_device):
        result = runner.invoke(app, ["network", "set-mode", "05", "--force"])

        assert result.exit_code == 1
        assert "Invalid network mode: 05" in result.output
        assert cli_device.requests_made == []

    def test_set_mode_cancelled(self, cli_device):
        result = runner.invoke(app, ["network", "set-mode", "00"], input="n\n")

        assert result.exit_code == 0
        assert "Operation cancelled" in result.output
        assert cli_device.requests_to(MODE_PATH) == []

    def test_operator_json(self, cli_device):
        cli_device.routes["/api/net/current-plmn"] = CURRENT_PLMN_XML

        result = runner.invoke(app, ["network", "operator", "--format", "json"])

        assert result.exit_code == 0
        assert json.loads(result.output) == {
            "operator": "Vodafone.de",
            "numeric": "26202",
            "state": "0",
            "rat": "7",
        }
