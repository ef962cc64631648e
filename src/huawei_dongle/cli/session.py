"""
Huawei Dongle Client - Command Sessions

Shared plumbing of the device commands: load the profile, open a client, log in
when the command needs it and turn client errors into a clean exit.
"""

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

import typer

from ..client import DongleClient
from ..core.config_loader import ConfigLoader
from ..core.exceptions import ConfigurationError, DongleError
from ..core.models import DongleConfig
from ..shared.error_sanitizer import log_error_safely

logger = logging.getLogger("huawei-dongle")

T = TypeVar("T")

PROFILE_OPTION_HELP = "Profile name to use"


def load_config(profile: str) -> DongleConfig:
    """Load a profile or exit with a configuration hint."""
    try:
        return ConfigLoader.load(profile)
    except ConfigurationError as e:
        typer.echo(f"❌ Configuration error: {e}", err=True)
        typer.echo("\n💡 Run 'huawei-dongle setup' to configure the profile")
        raise typer.Exit(1)


async def with_client(
    config: DongleConfig,
    action: Callable[[DongleClient], Awaitable[T]],
    login: bool = False,
) -> T:
    """Run ``action`` on a fresh client, logged in for its duration when ``login`` is set."""
    async with DongleClient(config) as client:
        if not login:
            return await action(client)

        await client.login()
        try:
            return await action(client)
        finally:
            await client.logout()


def run_device_command(
    profile: str,
    action: Callable[[DongleClient], Awaitable[T]],
    operation: str,
    login: bool = False,
) -> T:
    """Run a device command for ``profile``; client errors exit with status 1.

    Raises:
        typer.Exit: If the profile cannot be loaded or the device call fails
    """
    config = load_config(profile)
    try:
        return asyncio.run(with_client(config, action, login=login))
    except DongleError as e:
        typer.echo(f"❌ {log_error_safely(logger, e, operation)}", err=True)
        raise typer.Exit(1)
