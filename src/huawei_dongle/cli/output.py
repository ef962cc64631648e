"""
Huawei Dongle Client - Command Output

Renders command results as a table, JSON or YAML.
"""

import io
import json
from enum import Enum
from typing import Any, Optional

import typer
import yaml
from pydantic import BaseModel
from rich import box
from rich.console import Console
from rich.table import Table

TABLE_WIDTH = 120


class OutputFormat(str, Enum):
    TABLE = "table"
    JSON = "json"
    YAML = "yaml"


FORMAT_OPTION_HELP = "Output format: table, json or yaml"


def to_data(value: Any) -> Any:
    """Plain JSON-compatible data for records, lists and dicts of records."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, dict):
        return {key: to_data(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_data(item) for item in value]
    return value


def _cell(value: Any) -> str:
    if value is None or value == "":
        return "-"
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def _build_table(data: Any, title: Optional[str]) -> Table:
    table = Table(title=title, box=box.ROUNDED, header_style="bold cyan")

    if isinstance(data, dict):
        table.add_column("Field")
        table.add_column("Value")
        for key, value in data.items():
            table.add_row(str(key), _cell(value))
        return table

    columns: list[str] = []
    for row in data:
        for key in row:
            if key not in columns:
                columns.append(key)
    for column in columns:
        table.add_column(column)
    for row in data:
        table.add_row(*(_cell(row.get(column)) for column in columns))
    return table


def render(value: Any, output_format: OutputFormat, title: Optional[str] = None) -> str:
    """Render ``value`` in the requested format."""
    data = to_data(value)

    if output_format is OutputFormat.JSON:
        return json.dumps(data, indent=2, ensure_ascii=False)
    if output_format is OutputFormat.YAML:
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True).rstrip()

    if not isinstance(data, (dict, list)):
        return _cell(data)
    if isinstance(data, list) and not all(isinstance(row, dict) for row in data):
        return "\n".join(_cell(item) for item in data)

    console = Console(file=io.StringIO(), width=TABLE_WIDTH, color_system=None)
    console.print(_build_table(data, title))
    return console.file.getvalue().rstrip()


def print_output(value: Any, output_format: OutputFormat, title: Optional[str] = None) -> None:
    typer.echo(render(value, output_format, title))
