"""
Shared option parsing for CLI commands.
"""

import json
import os
from pathlib import Path as FsPath
from typing import Any, List, Optional

import typer
from multiformats import CID
from rich.markup import escape

from ..core.links import TraversedLink
from ..datastore import FileDatastore
from ..datastore.store import Datastore

DEFAULT_DATA_DIR = "/tmp/selstore"


def parse_root(root: str) -> CID:
    try:
        return CID.decode(root)
    except (ValueError, KeyError) as e:
        raise typer.BadParameter(f"invalid CID {root!r}: {e}")


def parse_selector(selector: str) -> Any:
    """Selector given inline as JSON or as a path to a JSON file."""
    text = FsPath(selector).read_text(encoding="utf-8") if os.path.isfile(selector) else selector
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise typer.BadParameter(f"selector is neither a JSON file nor JSON: {e}")


def open_datastore(directory: Optional[str], bucket: Optional[str], prefix: str) -> Datastore:
    if bucket:
        from ..datastore.s3_store import S3Datastore

        return S3Datastore(
            bucket=bucket,
            prefix=prefix,
            endpoint_url=os.getenv("SELSTORE_S3_ENDPOINT_URL"),
        )
    return FileDatastore(directory or os.getenv("SELSTORE_DATA_DIR", DEFAULT_DATA_DIR))


def record_dict(index: int, tl: TraversedLink) -> dict:
    return {
        "index": index,
        "cid": str(tl.link),
        "path": str(tl.link_path),
        "error": tl.load_error,
    }


def records_table_rows(records: List[TraversedLink]) -> List[List[str]]:
    rows = []
    for i, tl in enumerate(records):
        status = f"[red]{escape(tl.load_error)}[/red]" if tl.failed else "[green]ok[/green]"
        rows.append([str(i), escape(str(tl.link_path)) or "(root)", str(tl.link), status])
    return rows
