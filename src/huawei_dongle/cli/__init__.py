"""
Huawei Dongle Client - CLI Interface

This module provides the command-line interface for managing device profiles,
checking connectivity and running device commands.
"""

import logging
import sys

import typer

from .delete import delete_command
from .device import device_app
from .dhcp import dhcp_app
from .list import list_command
from .monitoring import monitoring_app
from .network import network_app
from .setup import setup_command
from .sms import sms_app
from .test import test_command

# Create main CLI app
app = typer.Typer(
    name="huawei-dongle",
    help="Huawei Dongle Client - device profiles, connection checks and device commands",
    add_completion=False
)


@app.callback()
def configure_logging(
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
):
    """Huawei Dongle Client - device profiles, connection checks and device commands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


# Register commands
app.command(name="setup", help="Configure a device connection profile")(setup_command)
app.command(name="list-profiles", help="List all configured profiles")(list_command)
app.command(name="test-connection", help="Test connection to the device")(test_command)
app.command(name="delete-profile", help="Delete a connection profile")(delete_command)

app.add_typer(device_app, name="device")
app.add_typer(monitoring_app, name="monitoring")
app.add_typer(network_app, name="network")
app.add_typer(sms_app, name="sms")
app.add_typer(dhcp_app, name="dhcp")


def main():
    """CLI entry point."""
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("\n\nOperation cancelled by user")
        sys.exit(1)


if __name__ == "__main__":
    main()
