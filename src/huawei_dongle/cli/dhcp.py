"""
Huawei Dongle Client - DHCP Commands
"""

import typer

from ..api.models import gateway_subnet
from ..core.exceptions import ConfigurationError
from .output import FORMAT_OPTION_HELP, OutputFormat, print_output
from .session import PROFILE_OPTION_HELP, run_device_command

dhcp_app = typer.Typer(help="LAN gateway and DHCP server settings", no_args_is_help=True)


@dhcp_app.command("show")
def show_command(
    profile: str = typer.Option("default", "--profile", "-p", help=PROFILE_OPTION_HELP),
    output_format: OutputFormat = typer.Option(
        OutputFormat.TABLE, "--format", "-o", case_sensitive=False, help=FORMAT_OPTION_HELP
    ),
):
    """Show the DHCP settings. Requires login."""
    settings = run_device_command(
        profile, lambda client: client.dhcp.settings(), "dhcp settings", login=True
    )
    print_output(settings, output_format, title="DHCP Settings")


@dhcp_app.command("set-ip")
def set_ip_command(
    ip: str = typer.Argument(..., help="New gateway IP address, in the form 192.168.x.1"),
    profile: str = typer.Option("default", "--profile", "-p", help=PROFILE_OPTION_HELP),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation prompt"),
):
    """
    Move the device's LAN to a new gateway IP. Requires login.

    The DHCP pool becomes .100 to .200 of the new network and DNS points at the
    gateway.

    Examples:
        huawei-dongle dhcp set-ip 192.168.9.1
    """
    try:
        gateway_subnet(ip)
    except ConfigurationError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(1)

    if not force:
        if not typer.confirm(
            f"⚠️  Clients will lose their connection. Change gateway IP to {ip}?", default=False
        ):
            typer.echo("Operation cancelled")
            raise typer.Exit(0)

    settings = run_device_command(
        profile, lambda client: client.dhcp.set_gateway(ip), "set gateway IP", login=True
    )
    typer.echo(f"✅ Gateway IP changed to: {settings.dhcp_ip_address}")
    typer.echo("💡 You may need to reconnect to the new IP address")
