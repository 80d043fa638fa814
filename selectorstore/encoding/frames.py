"""
Length-delimited framing and self-delimiting CID parsing.

A frame is an unsigned varint length followed by that many payload bytes.
Varint encoding itself comes from multiformats; this module only finds
where each varint, multihash and CID ends.
"""

import os
from typing import BinaryIO, Optional, Tuple

from multiformats import CID, varint

from ..core.errors import RecordDecodingError

# multiformats rejects varints longer than 9 bytes
MAX_VARINT_LEN = 9

DEFAULT_MAX_FRAME_SIZE = 32 << 20

# CIDv0 is a bare sha2-256 multihash: code 0x12, length 0x20, 32 digest bytes
_CIDV0_PREFIX = (0x12, 0x20)
_CIDV0_LEN = 34


def max_frame_size() -> int:
    val = os.getenv("SELSTORE_MAX_FRAME_SIZE")
    if not val:
        return DEFAULT_MAX_FRAME_SIZE
    try:
        parsed = int(val)
    except ValueError:
        return DEFAULT_MAX_FRAME_SIZE
    return parsed if parsed > 0 else DEFAULT_MAX_FRAME_SIZE


def read_uvarint(data: memoryview, offset: int = 0) -> Tuple[int, int]:
    """
    Decode an unsigned varint at offset.

    Returns:
        (value, number of bytes consumed)

    Raises:
        RecordDecodingError: If the varint is missing, truncated or malformed
    """
    window = bytes(data[offset : offset + MAX_VARINT_LEN])
    if not window:
        raise RecordDecodingError("missing varint")
    try:
        value, n, _ = varint.decode_raw(window)
    except (ValueError, IndexError) as e:
        raise RecordDecodingError(f"malformed varint: {e}") from e
    return value, n


def multihash_length(data: memoryview, offset: int = 0) -> int:
    """Total byte length of the multihash starting at offset (code + size + digest)."""
    _, n_code = read_uvarint(data, offset)
    size, n_size = read_uvarint(data, offset + n_code)
    total = n_code + n_size + size
    if offset + total > len(data):
        raise RecordDecodingError(
            f"multihash truncated: need {total} bytes, have {len(data) - offset}"
        )
    return total


def read_cid(data: bytes) -> Tuple[CID, int]:
    """
    Parse the CID at the start of data.

    Returns:
        (cid, number of bytes consumed)

    Raises:
        RecordDecodingError: If no valid CID starts at data[0]
    """
    mv = memoryview(data)
    if len(mv) >= 2 and (mv[0], mv[1]) == _CIDV0_PREFIX:
        n = _CIDV0_LEN
        if len(mv) < n:
            raise RecordDecodingError("CIDv0 truncated")
    else:
        version, n_version = read_uvarint(mv)
        if version != 1:
            raise RecordDecodingError(f"unsupported CID version: {version}")
        _, n_codec = read_uvarint(mv, n_version)
        n = n_version + n_codec + multihash_length(mv, n_version + n_codec)
    try:
        cid = CID.decode(bytes(mv[:n]))
    except (ValueError, KeyError) as e:
        raise RecordDecodingError(f"invalid CID: {e}") from e
    # binary CIDs carry no multibase; v1 links are written and shown in base32
    if cid.version == 1:
        cid = cid.set(base="base32")
    return cid, n


def ld_write(out: BinaryIO, *chunks: bytes) -> None:
    """Write one frame whose payload is the concatenation of chunks."""
    total = sum(len(c) for c in chunks)
    out.write(varint.encode(total) + b"".join(chunks))


def ld_read(stream: BinaryIO, max_size: Optional[int] = None) -> Optional[bytes]:
    """
    Read one frame payload.

    Returns:
        Payload bytes, or None when the stream is exhausted at a frame boundary

    Raises:
        RecordDecodingError: If the length prefix or payload is truncated,
            or the declared length exceeds max_size
    """
    first = stream.read(1)
    if not first:
        return None

    prefix = bytearray(first)
    while prefix[-1] & 0x80:
        if len(prefix) >= MAX_VARINT_LEN:
            raise RecordDecodingError("frame length varint too long")
        nxt = stream.read(1)
        if not nxt:
            raise RecordDecodingError("frame length truncated")
        prefix += nxt

    length, _ = read_uvarint(memoryview(bytes(prefix)))
    limit = max_size if max_size is not None else max_frame_size()
    if length > limit:
        raise RecordDecodingError(f"frame of {length} bytes exceeds limit of {limit}")

    payload = stream.read(length)
    if len(payload) != length:
        raise RecordDecodingError(
            f"frame truncated: declared {length} bytes, got {len(payload)}"
        )
    return payload
