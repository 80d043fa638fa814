"""
Record commands: has, records, decode, list
"""

import json
from pathlib import Path as FsPath
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from ...core.errors import NotFoundError, SelectorStoreError
from ...core.links import TraversedLink
from ...replay.iterator import LinkIterator
from ...store.simple_store import SimpleSelectorStore
from .._common import open_datastore, parse_root, parse_selector, record_dict, records_table_rows

console = Console()

DirOption = typer.Option(None, "--dir", "-d", help="Record directory (default: $SELSTORE_DATA_DIR)")
BucketOption = typer.Option(None, "--bucket", "-b", help="S3 bucket (overrides --dir)")
PrefixOption = typer.Option("traversals", "--prefix", help="S3 key prefix")


def _print_records(title: str, records: List[TraversedLink], json_output: bool) -> None:
    if json_output:
        out = [record_dict(i, tl) for i, tl in enumerate(records)]
        print(json.dumps({"records": out, "count": len(out)}, indent=2))
        return

    if not records:
        console.print("[yellow]Traversal has no records[/yellow]")
        return

    table = Table(title=title)
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Path", style="yellow")
    table.add_column("CID", style="dim")
    table.add_column("Load", style="green")
    for row in records_table_rows(records):
        table.add_row(*row)
    console.print(table)

    failed = sum(1 for tl in records if tl.failed)
    console.print(f"\n[bold]Total records:[/bold] {len(records)} ([red]{failed} failed[/red])")


def has_command(
    root: str = typer.Argument(..., help="Root CID"),
    selector: str = typer.Option(..., "--selector", "-s", help="Selector JSON or JSON file"),
    directory: Optional[str] = DirOption,
    bucket: Optional[str] = BucketOption,
    prefix: str = PrefixOption,
):
    """
    Exit 0 if a traversal of ROOT with the selector is stored, 1 otherwise.
    """
    try:
        store = SimpleSelectorStore(open_datastore(directory, bucket, prefix))
        found = store.has(parse_root(root), parse_selector(selector))
    except SelectorStoreError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)

    console.print("[green]stored[/green]" if found else "[yellow]not stored[/yellow]")
    raise typer.Exit(0 if found else 1)


def records_command(
    root: str = typer.Argument(..., help="Root CID"),
    selector: str = typer.Option(..., "--selector", "-s", help="Selector JSON or JSON file"),
    directory: Optional[str] = DirOption,
    bucket: Optional[str] = BucketOption,
    prefix: str = PrefixOption,
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Replay a stored traversal.

    Examples:
        selstore records bafy... --selector selector.json
        selstore records bafy... --selector selector.json --bucket my-bucket --json
    """
    try:
        store = SimpleSelectorStore(open_datastore(directory, bucket, prefix))
        records = list(store.get(parse_root(root), parse_selector(selector)))
    except NotFoundError:
        if json_output:
            print(json.dumps({"error": "Traversal not found", "root": root}))
        else:
            console.print(f"[red]Error: Traversal not found for root[/red] {root}")
        raise typer.Exit(2)
    except SelectorStoreError as e:
        if json_output:
            print(json.dumps({"error": str(e)}))
        else:
            console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)

    _print_records(f"Traversal: {root}", records, json_output)


def decode_command(
    blob_path: str = typer.Argument(..., help="Path to a raw record blob"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Decode a raw record blob file.
    """
    try:
        data = FsPath(blob_path).read_bytes()
        records = list(LinkIterator(data))
    except FileNotFoundError:
        if json_output:
            print(json.dumps({"error": "Blob file not found", "path": blob_path}))
        else:
            console.print(f"[red]Error: Blob file not found:[/red] {blob_path}")
        raise typer.Exit(2)
    except SelectorStoreError as e:
        if json_output:
            print(json.dumps({"error": str(e)}))
        else:
            console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)

    _print_records(f"Records: {blob_path}", records, json_output)


def list_command(
    directory: Optional[str] = DirOption,
    bucket: Optional[str] = BucketOption,
    prefix: str = PrefixOption,
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    List stored traversal keys.
    """
    try:
        keys = open_datastore(directory, bucket, prefix).keys()
    except SelectorStoreError as e:
        if json_output:
            print(json.dumps({"error": str(e)}))
        else:
            console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)

    if json_output:
        print(json.dumps({"keys": keys, "count": len(keys)}, indent=2))
        return

    if not keys:
        console.print("[yellow]No stored traversals[/yellow]")
        return
    for k in keys:
        console.print(k)
    console.print(f"\n[bold]Total traversals:[/bold] {len(keys)}")
