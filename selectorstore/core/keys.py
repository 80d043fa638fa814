"""
Storage key derivation.

Key material is the root's multihash (self-delimiting) immediately
followed by the canonical selector bytes. The storage key is a versioned
SHA-256 of that material, so it fits any backend's key space.
"""

import hashlib
import json
from typing import Any, Tuple

from multiformats import CID

from .canonical import encode_selector
from .errors import KeyDerivationError, RecordDecodingError

# Bumped whenever the selector encoding changes; old keys stop matching.
KEY_VERSION = "v1"


def key_material(root: CID, selector: Any) -> bytes:
    """
    Raw bytes identifying (root, selector).

    Raises:
        KeyDerivationError: If the selector has no canonical encoding
    """
    try:
        selector_bytes = encode_selector(selector)
    except (TypeError, ValueError, RecursionError) as e:
        raise KeyDerivationError(f"selector is not canonically encodable: {e}") from e
    return bytes(root.digest) + selector_bytes


def derive_key(root: CID, selector: Any) -> str:
    """
    Stable storage key for (root, selector).

    Equal root hashes and structurally equal selectors always give the
    same key; the root's codec and CID version do not participate.

    Example:
        derive_key(cid, {"a": 1}) -> "v1-3f9a..."
    """
    digest = hashlib.sha256(key_material(root, selector)).hexdigest()
    return f"{KEY_VERSION}-{digest}"


def parse_key_material(material: bytes, codec: str = "dag-cbor") -> Tuple[CID, Any]:
    """
    Recover (root, selector) from key material.

    The multihash carries no codec, so the CIDv1 is rebuilt with the
    given one.

    Raises:
        KeyDerivationError: If the material is malformed
    """
    # imported here: encoding depends on core
    from ..encoding.frames import multihash_length

    try:
        n = multihash_length(memoryview(material))
        root = CID("base32", 1, codec, material[:n])
        selector = json.loads(material[n:].decode("utf-8"))
    except (RecordDecodingError, ValueError, KeyError) as e:
        raise KeyDerivationError(f"malformed key material: {e}") from e
    return root, selector
