"""
Binary encoding of traversal records.

This module provides:
- ld_write / ld_read: varint length-delimited frames
- read_cid: length-aware CID parser
- encode_traversed_link / decode_traversed_link: record codec
"""

from .frames import ld_read, ld_write, read_cid, read_uvarint
from .records import decode_traversed_link, encode_traversed_link, encode_traversed_links

__all__ = [
    "ld_read",
    "ld_write",
    "read_cid",
    "read_uvarint",
    "encode_traversed_link",
    "decode_traversed_link",
    "encode_traversed_links",
]
