"""
Huawei Dongle Client - Delete Profile Command

Delete a connection profile and its stored password.
"""

import typer

from ..core.config_loader import ConfigLoader
from ..core.exceptions import ConfigurationError


def delete_command(
    profile: str = typer.Argument(..., help="Profile name to delete"),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation prompt"),
):
    """
    Delete a connection profile.

    Examples:
        # Delete with confirmation
        huawei-dongle delete-profile office

        # Force delete without confirmation
        huawei-dongle delete-profile office --force
    """
    typer.echo("\n🗑️  Delete Device Profile\n")

    try:
        profiles = ConfigLoader.list_profiles()
        if profile not in profiles:
            typer.echo(f"❌ Profile '{profile}' not found", err=True)
            typer.echo(f"\n📋 Available profiles: {', '.join(profiles) if profiles else 'None'}")
            raise typer.Exit(1)

        info = ConfigLoader.get_profile_info(profile)
        typer.echo(f"Profile: {typer.style(profile, fg=typer.colors.YELLOW, bold=True)}")
        typer.echo(f"URL: {info['url']}\n")

        if not force:
            if not typer.confirm(
                f"⚠️  Are you sure you want to delete profile '{profile}'?", default=False
            ):
                typer.echo("Operation cancelled")
                raise typer.Exit(0)

        ConfigLoader.delete_profile(profile)
        typer.echo(f"\n✅ Profile '{profile}' deleted successfully")

        remaining = ConfigLoader.list_profiles()
        if remaining:
            typer.echo(f"\n📋 Remaining profiles: {', '.join(remaining)}")
        else:
            typer.echo("\n📋 No profiles remaining")
            typer.echo("💡 Run 'huawei-dongle setup' to configure a new profile")

    except ConfigurationError as e:
        typer.echo(f"❌ Error: {e}", err=True)
        raise typer.Exit(1)
