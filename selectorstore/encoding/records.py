"""
Record codec for traversed links.

Each record is one length-delimited frame whose payload is:

    CID bytes (self-delimiting)
    ++ uvarint(len(path))
    ++ UTF-8 path string
    ++ UTF-8 load error text (absent when the load succeeded)

A blob is a plain concatenation of frames with no header or checksum.
"""

import io
from typing import BinaryIO, Iterable, Optional

from multiformats import CID, varint

from ..core.errors import RecordDecodingError, RecordEncodingError
from ..core.links import Link, TraversedLink
from ..core.path import Path
from .frames import ld_read, ld_write, max_frame_size, read_cid, read_uvarint


def _cid_bytes(link: object) -> bytes:
    cid = link.cid if isinstance(link, Link) else link
    if isinstance(cid, CID):
        return bytes(cid)
    raise RecordEncodingError(f"cannot record link of type {type(link).__name__}")


def encode_traversed_link(out: BinaryIO, traversed_link: TraversedLink) -> None:
    """
    Write a traversed link as one frame.

    The frame is assembled in memory first so a failure writes nothing.

    Raises:
        RecordEncodingError: If the link has no CID, the path/error text
            cannot be encoded as UTF-8, or the frame would exceed the
            size limit readers enforce
    """
    cid_bytes = _cid_bytes(traversed_link.link)
    try:
        path_bytes = str(traversed_link.link_path).encode("utf-8")
        err_bytes = (
            traversed_link.load_error.encode("utf-8")
            if traversed_link.load_error is not None
            else b""
        )
    except (UnicodeEncodeError, AttributeError) as e:
        raise RecordEncodingError(f"cannot encode traversed link: {e}") from e

    chunks = (cid_bytes, varint.encode(len(path_bytes)), path_bytes, err_bytes)
    size = sum(len(c) for c in chunks)
    limit = max_frame_size()
    if size > limit:
        raise RecordEncodingError(f"record of {size} bytes exceeds frame limit of {limit}")
    ld_write(out, *chunks)


def decode_traversed_link(stream: BinaryIO) -> Optional[TraversedLink]:
    """
    Read the next traversed link.

    Returns:
        The decoded record, or None at a clean end of the stream

    Raises:
        RecordDecodingError: If the frame is truncated or malformed
    """
    data = ld_read(stream)
    if data is None:
        return None

    cid, n = read_cid(data)
    mv = memoryview(data)
    path_len, n_len = read_uvarint(mv, n)
    start = n + n_len
    end = start + path_len
    if end > len(mv):
        raise RecordDecodingError(
            f"path length {path_len} exceeds remaining {len(mv) - start} bytes"
        )
    try:
        path = Path.parse(bytes(mv[start:end]).decode("utf-8"))
        rest = bytes(mv[end:])
        load_error = rest.decode("utf-8") if rest else None
    except UnicodeDecodeError as e:
        raise RecordDecodingError(f"invalid UTF-8 in record: {e}") from e

    return TraversedLink(link=Link(cid), link_path=path, load_error=load_error)


def encode_traversed_links(traversed_links: Iterable[TraversedLink]) -> bytes:
    """Encode a sequence of records into one blob."""
    buf = io.BytesIO()
    for tl in traversed_links:
        encode_traversed_link(buf, tl)
    return buf.getvalue()
