"""
Huawei Dongle Client - Test Connection Command

Test connection to the device: information, optional login and monitoring status.
"""

import asyncio
import logging
from typing import Any, Dict

import typer

from ..client import DongleClient
from ..core.config_loader import ConfigLoader
from ..core.exceptions import ConfigurationError, DongleError
from ..core.models import DongleConfig
from ..shared.error_sanitizer import log_error_safely

logger = logging.getLogger("huawei-dongle")


def test_command(
    profile: str = typer.Option("default", "--profile", "-p", help="Profile name to test")
):
    """
    Test connection to the device.

    Examples:
        # Test default profile
        huawei-dongle test-connection

        # Test specific profile
        huawei-dongle test-connection --profile office
    """
    typer.echo("\n🔍 Testing Device Connection\n")
    typer.echo(f"Profile: {typer.style(profile, fg=typer.colors.CYAN, bold=True)}\n")

    try:
        typer.echo("📡 Loading configuration...")
        config = ConfigLoader.load(profile)
    except ConfigurationError as e:
        typer.echo(f"❌ Configuration error: {e}", err=True)
        typer.echo("\n💡 Run 'huawei-dongle setup' to configure the profile")
        raise typer.Exit(1)

    typer.echo(f"URL: {config.url}")
    typer.echo(f"Login: {config.username if config.has_credentials else 'not configured'}\n")

    typer.echo("🔌 Connecting to device...")
    result = asyncio.run(run_connection_test(config))

    if not result["success"]:
        typer.echo(f"\n❌ {typer.style('Connection failed', fg=typer.colors.RED, bold=True)}")
        typer.echo(f"\nError: {result.get('error', 'Unknown error')}")
        typer.echo("\n💡 Troubleshooting tips:")
        typer.echo("   • Verify the device URL (usually http://192.168.8.1)")
        typer.echo("   • Check that this computer is connected to the dongle's network")
        typer.echo("   • Check the username and password used for the web UI")
        raise typer.Exit(1)

    typer.echo(f"\n✅ {typer.style('Connection successful!', fg=typer.colors.GREEN, bold=True)}")

    device = result["device"]
    typer.echo("\n📊 Device Information:")
    typer.echo(f"   Name: {device.device_name}")
    if device.software_version:
        typer.echo(f"   Software: {device.software_version}")
    if device.hardware_version:
        typer.echo(f"   Hardware: {device.hardware_version}")

    status = result.get("status")
    if status is not None:
        typer.echo("\n📶 Connection Status:")
        typer.echo(f"   Status: {status.connection_status_text}")
        typer.echo(f"   Network: {status.network_type_text}")
        if status.signal_level is not None:
            typer.echo(f"   Signal: {status.signal_level}/5 ({status.signal_percentage}%)")


async def run_connection_test(config: DongleConfig) -> Dict[str, Any]:
    """
    Fetch device information and, when credentials are configured, log in and
    read the monitoring status.

    Args:
        config: Device configuration

    Returns:
        Dictionary with test results
    """
    async with DongleClient(config) as client:
        try:
            result: Dict[str, Any] = {"success": True, "device": await client.device.information()}

            if config.has_credentials:
                await client.login()
                try:
                    result["status"] = await client.monitoring.status()
                finally:
                    await client.logout()

            return result

        except DongleError as e:
            return {"success": False, "error": log_error_safely(logger, e, "connection test")}
