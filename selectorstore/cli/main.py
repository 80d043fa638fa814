#!/usr/bin/env python3
"""
selstore CLI - inspect memoized selector traversals

Main entrypoint for the selstore command-line tool.
"""

import typer
from rich.console import Console
from rich.table import Table

from .. import __version__
from ..core.keys import KEY_VERSION
from ..logging_config import setup_logging
from .commands import key, records

app = typer.Typer(
    name="selstore",
    help="Memoized selector traversal store",
    add_completion=False,
)

console = Console()

app.command(name="key")(key.key_command)
app.command(name="has")(records.has_command)
app.command(name="records")(records.records_command)
app.command(name="decode")(records.decode_command)
app.command(name="list")(records.list_command)


@app.callback()
def _configure() -> None:
    setup_logging()


@app.command()
def version():
    """Show version information."""
    table = Table(show_header=False, box=None)
    table.add_row("[bold]selstore[/bold]", f"v{__version__}")
    table.add_row("Key format", KEY_VERSION)

    console.print(table)


def main():
    """Main entrypoint."""
    app()


if __name__ == "__main__":
    main()
