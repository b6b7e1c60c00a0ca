"""
Root Typer application for the batchguard CLI.

    batchguard check Hold_Types uo
    batchguard check Resource_List 4 --resource ncpus
    batchguard check managers "root@*" --object server --request manager
    batchguard resources --reservation
"""

from __future__ import annotations

import json

import typer

from batchguard.cli.utils import console, output_verdict, print_table
from batchguard.core.enums import Command, ObjectKind, Operator, RequestKind
from batchguard.core.logging import configure_logging
from batchguard.core.settings import get_settings
from batchguard.definitions.builtin import RESERVATION_ATTRIBUTES, RESOURCES
from batchguard.verification.attributes import AttributeValue
from batchguard.verification.registry import verify

app = typer.Typer(
    name="batchguard",
    help="batchguard: verify batch request attribute values.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        from batchguard import __version__

        typer.echo(f"batchguard {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level."),
) -> None:
    """batchguard CLI: check attribute values and inspect definition tables."""
    settings = get_settings()
    configure_logging(
        level="DEBUG" if verbose else settings.log_level,
        json_format=settings.log_format == "json",
    )


@app.command("check")
def check(
    name: str = typer.Argument(..., help="Attribute name, e.g. Hold_Types"),
    value: str = typer.Argument(..., help="Attribute value"),
    object_kind: ObjectKind = typer.Option(ObjectKind.JOB, "--object", "-o"),
    request: RequestKind = typer.Option(RequestKind.QUEUE_JOB, "--request", "-r"),
    command: Command = typer.Option(Command.NONE, "--command", "-c"),
    resource: str | None = typer.Option(None, "--resource", help="Resource name for resource lists"),
    op: Operator = typer.Option(Operator.SET, "--op"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Verify one attribute value. Exit 0 accepted, 1 rejected, 2 fatal."""
    attribute = AttributeValue(name, value, resource=resource, op=op)
    result = verify(request, object_kind, command, attribute)
    output_verdict(result, as_json=json_out)


@app.command("resources")
def resources(
    reservation: bool = typer.Option(False, "--reservation", help="Show reservation attributes instead"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """List the built-in definition table."""
    table = RESERVATION_ATTRIBUTES if reservation else RESOURCES
    rows = [
        {
            "name": definition.name,
            "type": definition.datatype,
            "value_check": "yes" if definition.value_checker else "no",
            "description": definition.description,
        }
        for definition in sorted(table, key=lambda d: d.name)
    ]
    if json_out:
        console.print_json(json.dumps(rows))
        return
    print_table(rows, title=table.name)
