"""
Canonical selector encoding.

Selectors are IPLD data: maps with string keys, lists, strings, numbers,
booleans and null. Storage keys are derived from the bytes produced
here, so structurally equal selectors must always encode identically.
Changing anything in this module invalidates every derived key (bump
KEY_VERSION in keys.py).
"""

import json
from typing import Any


def normalize_selector(selector: Any) -> Any:
    """
    Rebuild a selector with sorted map keys and tuples turned into lists.

    Raises:
        TypeError: If a map key is not a string, or the selector
            contains itself
    """
    return _normalize(selector, set())


def _normalize(node: Any, active: set) -> Any:
    if not isinstance(node, (dict, list, tuple)):
        return node
    if id(node) in active:
        raise TypeError("selector contains a reference to itself")
    active.add(id(node))
    try:
        if isinstance(node, dict):
            for k in node:
                if not isinstance(k, str):
                    raise TypeError(f"selector map key {k!r} is not a string")
            return {k: _normalize(node[k], active) for k in sorted(node)}
        return [_normalize(x, active) for x in node]
    finally:
        active.discard(id(node))


def encode_selector(selector: Any) -> bytes:
    """
    Compact UTF-8 JSON of the normalized selector.

    Raises:
        TypeError: If the selector holds a value JSON cannot represent
        ValueError: If the selector holds NaN or infinity
    """
    text = json.dumps(
        normalize_selector(selector),
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )
    return text.encode("utf-8")
