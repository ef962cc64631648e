"""
Huawei Dongle Client - Setup Command

Interactive setup for configuring a device connection profile.
"""

import asyncio
import getpass

import typer
from pydantic import ValidationError

from ..core.config_loader import ConfigLoader
from ..core.exceptions import ConfigurationError
from ..core.models import DongleConfig
from ..shared.constants import DEFAULT_DEVICE_URL
from .test import run_connection_test


def setup_command(
    profile: str = typer.Option(
        "default", "--profile", "-p", help="Profile name (default, office, travel, etc.)"
    ),
    url: str | None = typer.Option(None, "--url", help=f"Device URL (e.g., {DEFAULT_DEVICE_URL})"),
    username: str | None = typer.Option(None, "--username", help="Web UI username"),
    password: str | None = typer.Option(None, "--password", help="Web UI password"),
    verify_ssl: bool = typer.Option(
        True, "--verify-ssl/--no-verify-ssl", help="Verify SSL certificates"
    ),
    keyring_password: bool = typer.Option(
        True, "--keyring/--no-keyring", help="Store the password in the OS keyring"
    ),
    interactive: bool = typer.Option(
        True, "--interactive/--non-interactive", help="Interactive mode with prompts"
    ),
):
    """
    Configure a device connection profile.

    Examples:
        # Interactive setup
        huawei-dongle setup

        # Non-interactive setup
        huawei-dongle setup --url http://192.168.8.1 --username admin --password secret --non-interactive

        # Setup another profile
        huawei-dongle setup --profile office
    """
    typer.echo("\n🔧 Huawei Dongle Client - Profile Setup\n")
    typer.echo(f"Profile: {typer.style(profile, fg=typer.colors.CYAN, bold=True)}\n")

    if interactive:
        if not url:
            url = typer.prompt("Device URL", default=DEFAULT_DEVICE_URL)

        if not username:
            username = typer.prompt("Username", default="admin")

        if not password:
            password = getpass.getpass("Password (hidden): ")

    elif not url:
        typer.echo("❌ Error: In non-interactive mode, --url is required", err=True)
        raise typer.Exit(1)

    try:
        config = DongleConfig(
            url=url, username=username or None, password=password or None, verify_ssl=verify_ssl
        )
    except ValidationError as e:
        typer.echo(f"❌ Invalid configuration: {e}", err=True)
        raise typer.Exit(1)

    # Test connection before saving
    typer.echo("\n🔍 Testing connection...")
    result = asyncio.run(run_connection_test(config))
    if result["success"]:
        typer.echo("✅ Connection successful!")
    else:
        typer.echo(f"⚠️  Connection failed: {result['error']}")
        if not interactive:
            typer.echo("Setup cancelled", err=True)
            raise typer.Exit(1)
        if not typer.confirm("Save anyway?", default=False):
            typer.echo("Setup cancelled")
            raise typer.Exit(0)

    try:
        ConfigLoader.save_profile(profile, config, store_password_in_keyring=keyring_password)
    except ConfigurationError as e:
        typer.echo(f"\n❌ Error saving profile: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"\n✅ Profile '{profile}' saved successfully!")
    typer.echo(f"\n📍 Config location: {ConfigLoader.DEFAULT_CONFIG_FILE}")
    typer.echo("🔒 File permissions: 0600 (owner read/write only)")

    typer.echo("\n📖 Usage:")
    typer.echo(f"   • Test connection: huawei-dongle test-connection --profile {profile}")
    typer.echo("   • List profiles: huawei-dongle list-profiles")
