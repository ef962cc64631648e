"""
Huawei Dongle Client - Monitoring Commands

Connection status, once or sampled at an interval.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict

import typer

from ..api.models import MonitoringStatus
from ..client import DongleClient
from ..core.exceptions import DongleError
from ..shared.error_sanitizer import log_error_safely
from .output import FORMAT_OPTION_HELP, OutputFormat, print_output, render
from .session import PROFILE_OPTION_HELP, run_device_command

logger = logging.getLogger("huawei-dongle")

monitoring_app = typer.Typer(help="Connection and signal monitoring", no_args_is_help=True)


def status_summary(status: MonitoringStatus) -> Dict[str, Any]:
    summary: Dict[str, Any] = {
        "connection_status": status.connection_status_text,
        "network_type": status.network_type_text,
    }
    if status.signal_level is not None:
        summary["signal"] = f"{status.signal_level}/5 ({status.signal_percentage}%)"
    summary["sim_ready"] = status.is_sim_ready
    summary["service_available"] = status.is_service_available
    summary["roaming"] = status.is_roaming
    if status.primary_dns:
        summary["primary_dns"] = status.primary_dns
    if status.secondary_dns:
        summary["secondary_dns"] = status.secondary_dns
    return summary


def _sample_line(status: MonitoringStatus) -> str:
    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")
    return (
        f"[{timestamp}] {status.connection_status_text} | {status.network_type_text} | "
        f"Signal: {status.signal_level or 0}/5 | "
        f"SIM: {'Ready' if status.is_sim_ready else 'Not Ready'} | "
        f"Service: {'Available' if status.is_service_available else 'Unavailable'}"
    )


async def watch_status(
    client: DongleClient, output_format: OutputFormat, interval: float, count: int
) -> None:
    """Print a status sample every ``interval`` seconds; ``count`` 0 runs until interrupted."""
    sample = 0
    while not count or sample < count:
        if sample:
            await asyncio.sleep(interval)
        sample += 1
        try:
            status = await client.monitoring.status()
        except DongleError as e:
            typer.echo(f"❌ {log_error_safely(logger, e, 'monitoring status')}", err=True)
            continue

        if output_format is OutputFormat.TABLE:
            typer.echo(_sample_line(status))
        else:
            typer.echo(render(status_summary(status), output_format))


@monitoring_app.command("status")
def status_command(
    profile: str = typer.Option("default", "--profile", "-p", help=PROFILE_OPTION_HELP),
    output_format: OutputFormat = typer.Option(
        OutputFormat.TABLE, "--format", "-o", case_sensitive=False, help=FORMAT_OPTION_HELP
    ),
    watch: bool = typer.Option(False, "--watch", "-w", help="Keep sampling the status"),
    interval: float = typer.Option(5.0, "--interval", min=0.1, help="Seconds between samples"),
    count: int = typer.Option(0, "--count", min=0, help="Stop after this many samples (0: never)"),
):
    """
    Show connection status and signal. Requires login.

    Examples:
        huawei-dongle monitoring status
        huawei-dongle monitoring status --watch --interval 10
    """
    if watch:
        typer.echo("Monitoring status (Press Ctrl+C to stop)...\n")
        run_device_command(
            profile,
            lambda client: watch_status(client, output_format, interval, count),
            "monitoring status",
            login=True,
        )
        return

    status = run_device_command(
        profile, lambda client: client.monitoring.status(), "monitoring status", login=True
    )
    print_output(status_summary(status), output_format, title="Connection Status")
