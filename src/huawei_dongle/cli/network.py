"""
Huawei Dongle Client - Network Commands

Network mode and operator information.
"""

import typer

from ..api.models import NETWORK_MODE_TEXT, NetworkMode
from ..core.exceptions import ConfigurationError
from ..shared.constants import DEFAULT_LTE_BAND, DEFAULT_NETWORK_BAND
from .output import FORMAT_OPTION_HELP, OutputFormat, print_output
from .session import PROFILE_OPTION_HELP, run_device_command

network_app = typer.Typer(help="Network mode and operator", no_args_is_help=True)

MODE_HELP = "Network mode code: " + ", ".join(
    f"{code}={text}" for code, text in NETWORK_MODE_TEXT.items()
)


@network_app.command("mode")
def mode_command(
    profile: str = typer.Option("default", "--profile", "-p", help=PROFILE_OPTION_HELP),
    output_format: OutputFormat = typer.Option(
        OutputFormat.TABLE, "--format", "-o", case_sensitive=False, help=FORMAT_OPTION_HELP
    ),
):
    """Show the configured network mode and band masks."""
    mode = run_device_command(profile, lambda client: client.network.mode(), "network mode")
    print_output(
        {
            "network_mode": mode.network_mode,
            "mode": mode.mode_text,
            "network_band": mode.network_band,
            "lte_band": mode.lte_band,
        },
        output_format,
        title="Network Mode",
    )


@network_app.command("set-mode")
def set_mode_command(
    mode: str = typer.Argument(..., help=MODE_HELP),
    network_band: str = typer.Option(
        DEFAULT_NETWORK_BAND, "--network-band", help="Network band mask (hex)"
    ),
    lte_band: str = typer.Option(DEFAULT_LTE_BAND, "--lte-band", help="LTE band mask (hex)"),
    profile: str = typer.Option("default", "--profile", "-p", help=PROFILE_OPTION_HELP),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation prompt"),
):
    """
    Change the network mode. Requires login.

    Examples:
        # 4G only
        huawei-dongle network set-mode 03

        # 4G preferred with 3G fallback, no prompt
        huawei-dongle network set-mode 0302 --force
    """
    try:
        setting = NetworkMode.for_mode(mode, network_band=network_band, lte_band=lte_band)
    except ConfigurationError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Changing network mode to: {setting.network_mode} ({setting.mode_text})")
    if not force:
        if not typer.confirm(
            "⚠️  The device will disconnect temporarily. Continue?", default=False
        ):
            typer.echo("Operation cancelled")
            raise typer.Exit(0)

    run_device_command(
        profile, lambda client: client.network.set_mode(setting), "set network mode", login=True
    )
    typer.echo("✅ Network mode changed")
    typer.echo("💡 The device may need a moment to reconnect")


@network_app.command("operator")
def operator_command(
    profile: str = typer.Option("default", "--profile", "-p", help=PROFILE_OPTION_HELP),
    output_format: OutputFormat = typer.Option(
        OutputFormat.TABLE, "--format", "-o", case_sensitive=False, help=FORMAT_OPTION_HELP
    ),
):
    """Show the operator (PLMN) the device is registered with."""
    plmn = run_device_command(profile, lambda client: client.network.current_plmn(), "current PLMN")
    print_output(
        {
            "operator": plmn.operator_name,
            "numeric": plmn.numeric,
            "state": plmn.state,
            "rat": plmn.rat,
        },
        output_format,
        title="Operator",
    )
