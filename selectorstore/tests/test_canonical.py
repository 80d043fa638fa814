"""
Tests for canonical selector encoding.

Critical: storage keys depend on these bytes being stable.
"""

import pytest

from selectorstore.core.canonical import encode_selector, normalize_selector


def test_map_key_order_ignored():
    """Map key order must not affect the encoding."""
    d1 = {"z": 1, "a": 2, "m": 3}
    d2 = {"a": 2, "m": 3, "z": 1}

    assert normalize_selector(d1) == normalize_selector(d2)
    assert encode_selector(d1) == encode_selector(d2)


def test_nested_maps_sorted():
    selector = {"R": {"l": {"none": {}}, ":>": {"a": {">": {"@": {}}}}}}

    normalized = normalize_selector(selector)

    assert list(normalized["R"].keys()) == [":>", "l"]


def test_encoding_is_compact():
    """Keys sorted, tuples as lists, no whitespace."""
    assert encode_selector({"b": 2, "a": [1, (2, 3)]}) == b'{"a":[1,[2,3]],"b":2}'


def test_unicode_kept_as_utf8():
    assert encode_selector({"key": "日本語"}) == '{"key":"日本語"}'.encode("utf-8")


def test_shared_subtree_is_not_a_cycle():
    leaf = {"x": 1}

    assert encode_selector({"a": leaf, "b": [leaf, leaf]}) == b'{"a":{"x":1},"b":[{"x":1},{"x":1}]}'


def test_rejects_non_string_map_keys():
    with pytest.raises(TypeError):
        normalize_selector({1: "x"})
    with pytest.raises(TypeError):
        normalize_selector([{"ok": {2.5: None}}])


def test_rejects_self_reference():
    selector = []
    selector.append(selector)

    with pytest.raises(TypeError):
        encode_selector(selector)


def test_rejects_non_json_values():
    """Bytes and NaN have no canonical JSON form."""
    with pytest.raises(TypeError):
        encode_selector({"x": b"raw"})
    with pytest.raises(ValueError):
        encode_selector({"x": float("nan")})
