"""
Tests for FileDatastore.
"""

import os
import tempfile

import pytest

from selectorstore.core.errors import NotFoundError, StorageError
from selectorstore.core.links import Link, LinkContext
from selectorstore.core.path import Path
from selectorstore.datastore.file_store import FileDatastore
from selectorstore.store.simple_store import SimpleSelectorStore
from selectorstore.testutil import BlockLoader, generate_cids


def test_put_get_has():
    with tempfile.TemporaryDirectory() as tmpdir:
        ds = FileDatastore(tmpdir)

        assert not ds.has("v1-abc")
        ds.put("v1-abc", b"\x00\x01record")

        assert ds.has("v1-abc")
        assert ds.get("v1-abc") == b"\x00\x01record"
        assert ds.keys() == ["v1-abc"]


def test_get_missing_raises_not_found():
    with tempfile.TemporaryDirectory() as tmpdir:
        ds = FileDatastore(tmpdir)

        with pytest.raises(NotFoundError):
            ds.get("v1-missing")


def test_put_replaces_and_leaves_no_temp_files():
    with tempfile.TemporaryDirectory() as tmpdir:
        ds = FileDatastore(tmpdir)

        ds.put("v1-abc", b"first")
        ds.put("v1-abc", b"second")

        assert ds.get("v1-abc") == b"second"
        assert not [n for n in os.listdir(tmpdir) if n.startswith(".tmp-")]


def test_invalid_keys_rejected():
    with tempfile.TemporaryDirectory() as tmpdir:
        ds = FileDatastore(tmpdir)

        for key in ["", "../escape", "a/b", ".hidden"]:
            with pytest.raises(StorageError):
                ds.put(key, b"x")


def test_fsync_can_be_disabled(monkeypatch):
    monkeypatch.setenv("SELSTORE_FSYNC", "false")
    with tempfile.TemporaryDirectory() as tmpdir:
        ds = FileDatastore(tmpdir)
        ds.put("v1-abc", b"x")

        assert not ds.fsync
        assert ds.get("v1-abc") == b"x"


def test_traversal_survives_reopen():
    """A committed traversal must be readable by a fresh store on the same directory."""
    selector = {"depth": 2}
    root = generate_cids(1)[0]
    links = [Link(c) for c in generate_cids(3)]

    with tempfile.TemporaryDirectory() as tmpdir:
        store = SimpleSelectorStore(FileDatastore(tmpdir))
        load, commit = store.new_traversal(
            root, selector, BlockLoader(blocks={link: b"" for link in links})
        )
        for link, p in zip(links, ["", "a", "a/0"]):
            load(LinkContext(Path.parse(p)), link)
        commit()

        reopened = SimpleSelectorStore(FileDatastore(tmpdir))
        assert reopened.has(root, selector)
        assert [r.link for r in reopened.get(root, selector)] == links
