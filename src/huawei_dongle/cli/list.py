"""
Huawei Dongle Client - List Profiles Command

List all configured connection profiles.
"""

import typer

from ..core.config_loader import ConfigLoader
from ..core.exceptions import ConfigurationError


def list_command(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show detailed information for each profile"
    )
):
    """
    List all configured device profiles.

    Examples:
        # List all profiles
        huawei-dongle list-profiles

        # List with details
        huawei-dongle list-profiles --verbose
    """
    typer.echo("\n📋 Configured Device Profiles\n")

    try:
        profiles = ConfigLoader.list_profiles()
    except ConfigurationError as e:
        typer.echo(f"❌ Error listing profiles: {e}", err=True)
        raise typer.Exit(1)

    if not profiles:
        typer.echo("❌ No profiles configured yet")
        typer.echo("\n💡 Tip: Run 'huawei-dongle setup' to configure your first profile")
        return

    typer.echo(f"Found {len(profiles)} profile(s):\n")

    for profile in profiles:
        if verbose:
            try:
                info = ConfigLoader.get_profile_info(profile)
            except (ConfigurationError, KeyError) as e:
                typer.echo(f"📦 {profile} - Error loading details: {e}")
                typer.echo()
                continue

            typer.echo(f"📦 {typer.style(profile, fg=typer.colors.CYAN, bold=True)}")
            typer.echo(f"   URL: {info['url']}")
            typer.echo(f"   Username: {info['username'] or '-'}")
            typer.echo(f"   Password: {info['password_source']}")
            typer.echo(f"   SSL Verification: {'✓' if info['verify_ssl'] else '✗'}")
            typer.echo()
        else:
            typer.echo(f"  • {profile}")

    if not verbose:
        typer.echo("\n💡 Tip: Use --verbose to see profile details")

    typer.echo(f"\n📍 Config file: {ConfigLoader.DEFAULT_CONFIG_FILE}")
