"""
Key command: show the storage key derived for a root and selector
"""

import json

import typer
from rich.console import Console
from rich.table import Table

from ...core.errors import KeyDerivationError
from ...core.keys import derive_key, key_material
from .._common import parse_root, parse_selector

console = Console()


def key_command(
    root: str = typer.Argument(..., help="Root CID"),
    selector: str = typer.Option(..., "--selector", "-s", help="Selector JSON or JSON file"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Print the storage key for ROOT and a selector.

    Examples:
        selstore key bafy... --selector '{"R": {"l": {"none": {}}}}'
        selstore key bafy... --selector selector.json --json
    """
    root_cid = parse_root(root)
    selector_value = parse_selector(selector)
    try:
        key = derive_key(root_cid, selector_value)
        material = key_material(root_cid, selector_value)
    except KeyDerivationError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)

    if json_output:
        print(json.dumps({"root": str(root_cid), "key": key, "material": material.hex()}))
        return

    table = Table(show_header=False, box=None)
    table.add_row("[bold]Root[/bold]", str(root_cid))
    table.add_row("[bold]Key[/bold]", key)
    table.add_row("[bold]Material[/bold]", f"{len(material)} bytes")
    console.print(table)
