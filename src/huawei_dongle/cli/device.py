"""
Huawei Dongle Client - Device Commands

Device information and power control.
"""

import typer

from .output import FORMAT_OPTION_HELP, OutputFormat, print_output
from .session import PROFILE_OPTION_HELP, run_device_command

device_app = typer.Typer(help="Device information and control", no_args_is_help=True)


@device_app.command("info")
def info_command(
    profile: str = typer.Option("default", "--profile", "-p", help=PROFILE_OPTION_HELP),
    output_format: OutputFormat = typer.Option(
        OutputFormat.TABLE, "--format", "-o", case_sensitive=False, help=FORMAT_OPTION_HELP
    ),
):
    """
    Show device information.

    Examples:
        huawei-dongle device info
        huawei-dongle device info --format json
    """
    information = run_device_command(
        profile, lambda client: client.device.information(), "device information"
    )
    print_output(information, output_format, title="Device Information")


def _confirm_or_cancel(question: str, force: bool) -> None:
    if force:
        return
    if not typer.confirm(f"⚠️  {question}", default=False):
        typer.echo("Operation cancelled")
        raise typer.Exit(0)


@device_app.command("reboot")
def reboot_command(
    profile: str = typer.Option("default", "--profile", "-p", help=PROFILE_OPTION_HELP),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation prompt"),
):
    """Reboot the device. Requires login."""
    _confirm_or_cancel("Are you sure you want to reboot the device?", force)
    run_device_command(profile, lambda client: client.device.reboot(), "device reboot", login=True)
    typer.echo("✅ Device reboot initiated")


@device_app.command("power-off")
def power_off_command(
    profile: str = typer.Option("default", "--profile", "-p", help=PROFILE_OPTION_HELP),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation prompt"),
):
    """Power off the device. Requires login."""
    _confirm_or_cancel("Are you sure you want to power off the device?", force)
    run_device_command(
        profile, lambda client: client.device.power_off(), "device power off", login=True
    )
    typer.echo("✅ Device power off initiated")
