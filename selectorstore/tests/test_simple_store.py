"""
End-to-end tests for SimpleSelectorStore.
"""

import threading

import pytest

from selectorstore.core.errors import KeyDerivationError, NotFoundError
from selectorstore.core.links import Link, LinkContext
from selectorstore.core.path import Path
from selectorstore.datastore.memory_store import MemoryDatastore
from selectorstore.store.simple_store import SimpleSelectorStore
from selectorstore.testutil import BlockLoader, generate_cids

SELECTOR = {"R": {"l": {"none": {}}, ":>": {"a": {">": {"@": {}}}}}}
PATHS = ["", "a", "a/0"]


def _traverse(store, root, links, loader, selector=SELECTOR):
    load, commit = store.new_traversal(root, selector, loader)
    for link, p in zip(links, PATHS):
        try:
            load(LinkContext(Path.parse(p)), link)
        except LookupError:
            pass
    commit()


def test_commit_then_get():
    """Three loads at "", "a", "a/0" must replay as three records in order."""
    root = generate_cids(1)[0]
    links = [Link(c) for c in generate_cids(3)]
    loader = BlockLoader(blocks={link: b"data" for link in links})
    store = SimpleSelectorStore(MemoryDatastore())

    assert not store.has(root, SELECTOR)
    _traverse(store, root, links, loader)

    assert store.has(root, SELECTOR)
    records = []
    store.get(root, SELECTOR).iterate(records.append)
    assert [r.link for r in records] == links
    assert [str(r.link_path) for r in records] == PATHS
    assert all(r.load_error is None for r in records)


def test_failed_load_is_replayed():
    root = generate_cids(1)[0]
    links = [Link(c) for c in generate_cids(3)]
    loader = BlockLoader(
        blocks={links[0]: b"x", links[2]: b"z"},
        failures={links[1]: "connection reset"},
    )
    store = SimpleSelectorStore(MemoryDatastore())

    _traverse(store, root, links, loader)

    records = list(store.get(root, SELECTOR))
    assert [r.load_error for r in records] == [None, "connection reset", None]


def test_get_unknown_raises_not_found():
    store = SimpleSelectorStore(MemoryDatastore())

    with pytest.raises(NotFoundError):
        store.get(generate_cids(1)[0], SELECTOR)


def test_different_selector_not_found():
    root = generate_cids(1)[0]
    links = [Link(c) for c in generate_cids(3)]
    store = SimpleSelectorStore(MemoryDatastore())

    _traverse(store, root, links, BlockLoader(blocks={link: b"" for link in links}))

    assert not store.has(root, {"other": True})
    assert not store.has(generate_cids(1)[0], SELECTOR)


def test_uncommitted_traversal_is_invisible():
    root = generate_cids(1)[0]
    link = Link(generate_cids(1)[0])
    store = SimpleSelectorStore(MemoryDatastore())

    load, _ = store.new_traversal(root, SELECTOR, BlockLoader(blocks={link: b""}))
    load(LinkContext(Path()), link)

    assert not store.has(root, SELECTOR)


def test_second_commit_overwrites():
    """Last commit for a key wins; records are not merged."""
    root = generate_cids(1)[0]
    first = [Link(c) for c in generate_cids(3)]
    second = [Link(c) for c in generate_cids(1)]
    store = SimpleSelectorStore(MemoryDatastore())

    _traverse(store, root, first, BlockLoader(blocks={link: b"" for link in first}))
    _traverse(store, root, second, BlockLoader(blocks={link: b"" for link in second}))

    assert [r.link for r in store.get(root, SELECTOR)] == second


class _Stop(Exception):
    pass


def test_visit_error_stops_iteration():
    root = generate_cids(1)[0]
    links = [Link(c) for c in generate_cids(3)]
    store = SimpleSelectorStore(MemoryDatastore())
    _traverse(store, root, links, BlockLoader(blocks={link: b"" for link in links}))
    seen = []

    def visit(tl):
        seen.append(tl)
        if len(seen) == 2:
            raise _Stop("enough")

    it = store.get(root, SELECTOR)
    with pytest.raises(_Stop):
        it.iterate(visit)
    assert len(seen) == 2

    # forward-only: the remaining record is still there
    rest = list(it)
    assert [r.link for r in rest] == links[2:]
    assert list(it) == []


def test_bad_selector_raises_key_derivation_error():
    store = SimpleSelectorStore(MemoryDatastore())
    root = generate_cids(1)[0]

    with pytest.raises(KeyDerivationError):
        store.new_traversal(root, {"x": b"raw"}, BlockLoader())
    with pytest.raises(KeyDerivationError):
        store.has(root, {"x": b"raw"})
    with pytest.raises(KeyDerivationError):
        store.get(root, {"x": b"raw"})


def test_concurrent_traversals_distinct_keys():
    """Independent traversals sharing one datastore must not interfere."""
    store = SimpleSelectorStore(MemoryDatastore())
    roots = generate_cids(8)
    link_sets = [[Link(c) for c in generate_cids(3)] for _ in roots]

    threads = [
        threading.Thread(
            target=_traverse,
            args=(store, root, links, BlockLoader(blocks={link: b"" for link in links})),
        )
        for root, links in zip(roots, link_sets)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    for root, links in zip(roots, link_sets):
        assert [r.link for r in store.get(root, SELECTOR)] == links
