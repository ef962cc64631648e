"""
Huawei Dongle Client - SMS Commands

Message counters, listing, sending, deleting and marking messages read.
All SMS commands log in with the profile's credentials.
"""

from typing import List

import typer
from pydantic import ValidationError

from ..api.models import SmsListRequest
from ..shared.constants import SMS_MAX_READ_COUNT
from .output import FORMAT_OPTION_HELP, OutputFormat, print_output
from .session import PROFILE_OPTION_HELP, run_device_command

sms_app = typer.Typer(help="SMS management", no_args_is_help=True)


@sms_app.command("count")
def count_command(
    profile: str = typer.Option("default", "--profile", "-p", help=PROFILE_OPTION_HELP),
    output_format: OutputFormat = typer.Option(
        OutputFormat.TABLE, "--format", "-o", case_sensitive=False, help=FORMAT_OPTION_HELP
    ),
):
    """Show message counters of device and SIM storage."""
    count = run_device_command(profile, lambda client: client.sms.count(), "sms count", login=True)
    summary = count.model_dump()
    summary["total_unread"] = count.total_unread
    summary["total_inbox"] = count.total_inbox
    summary["has_new_messages"] = count.has_new_messages
    print_output(summary, output_format, title="SMS Count")


@sms_app.command("list")
def list_command(
    page: int = typer.Option(1, "--page", help="Page index, starting from 1"),
    count: int = typer.Option(20, "--count", help=f"Messages per page (1-{SMS_MAX_READ_COUNT})"),
    box: int = typer.Option(
        1, "--box", help="Box: 1 inbox, 2 outbox, 3 draft; 4-6 the same boxes on the SIM"
    ),
    unread: bool = typer.Option(False, "--unread", help="Show only unread messages"),
    show_content: bool = typer.Option(False, "--show-content", help="Include message text"),
    profile: str = typer.Option("default", "--profile", "-p", help=PROFILE_OPTION_HELP),
    output_format: OutputFormat = typer.Option(
        OutputFormat.TABLE, "--format", "-o", case_sensitive=False, help=FORMAT_OPTION_HELP
    ),
):
    """
    List messages, newest first.

    Examples:
        huawei-dongle sms list --unread --show-content
        huawei-dongle sms list --page 2 --format json
    """
    try:
        request = SmsListRequest(
            page_index=page, read_count=count, box_type=box, unread_preferred=unread
        )
    except ValidationError as e:
        typer.echo(f"❌ Invalid list options: {e.errors()[0]['msg']}", err=True)
        raise typer.Exit(1)

    sms_list = run_device_command(
        profile, lambda client: client.sms.list(request), "sms list", login=True
    )
    messages = sms_list.messages
    if unread:
        messages = [message for message in messages if message.is_unread]

    if not messages:
        typer.echo("No messages found")
        return

    if output_format is not OutputFormat.TABLE:
        print_output(messages, output_format)
        return

    rows = []
    for message in messages:
        row = {
            "ID": message.index,
            "From": message.phone,
            "Date": message.date,
            "Status": message.status_text,
        }
        if show_content:
            row["Content"] = message.content
        rows.append(row)
    print_output(rows, output_format, title=f"SMS Messages ({len(messages)} found)")


@sms_app.command("send")
def send_command(
    phones: List[str] = typer.Argument(..., help="Recipient phone number(s)"),
    message: str = typer.Option(..., "--message", "-m", help="Message text"),
    profile: str = typer.Option("default", "--profile", "-p", help=PROFILE_OPTION_HELP),
):
    """
    Send a message to one or more recipients.

    Examples:
        huawei-dongle sms send +491701234567 --message "Hello"
    """
    run_device_command(
        profile, lambda client: client.sms.send(phones, message), "sms send", login=True
    )
    typer.echo(f"✅ Message sent to {', '.join(phones)}")


@sms_app.command("delete")
def delete_command(
    message_id: str = typer.Argument(..., help="Message ID to delete"),
    profile: str = typer.Option("default", "--profile", "-p", help=PROFILE_OPTION_HELP),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation prompt"),
):
    """Delete a message."""
    if not force:
        if not typer.confirm(
            f"⚠️  Are you sure you want to delete SMS message {message_id}?", default=False
        ):
            typer.echo("Operation cancelled")
            raise typer.Exit(0)

    run_device_command(
        profile, lambda client: client.sms.delete(message_id), "sms delete", login=True
    )
    typer.echo(f"✅ SMS message {message_id} deleted")


@sms_app.command("mark-read")
def mark_read_command(
    message_id: str = typer.Argument(..., help="Message ID to mark as read"),
    profile: str = typer.Option("default", "--profile", "-p", help=PROFILE_OPTION_HELP),
):
    """Mark a message as read."""
    run_device_command(
        profile, lambda client: client.sms.mark_read(message_id), "sms mark read", login=True
    )
    typer.echo(f"✅ SMS message {message_id} marked as read")
