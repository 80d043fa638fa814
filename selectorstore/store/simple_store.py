"""
Datastore-backed selector store.

One blob per (root, selector) key; the store itself holds no state other
than the borrowed datastore, so it can be shared between threads as long
as the datastore can.
"""

from typing import Any, Optional, Tuple

from multiformats import CID

from ..core.keys import derive_key
from ..core.links import BlockReadOpener, TraversalCloser
from ..datastore.store import Datastore
from ..replay.iterator import LinkIterator
from ..traversal.writer import TraversalWriter
from .store import SelectorStore


class SimpleSelectorStore(SelectorStore):
    """
    Selector store over a key-value datastore.

    Concurrent traversals of the same (root, selector) are not
    coordinated: each commits independently and the last commit wins.
    """

    def __init__(
        self, datastore: Datastore, continue_after_encode_error: Optional[bool] = None
    ) -> None:
        """
        Args:
            datastore: Borrowed datastore holding record blobs
            continue_after_encode_error: Passed to every TraversalWriter
        """
        self.datastore = datastore
        self.continue_after_encode_error = continue_after_encode_error

    def new_traversal(
        self, root: CID, selector: Any, underlying_loader: BlockReadOpener
    ) -> Tuple[BlockReadOpener, TraversalCloser]:
        writer = self.new_writer(root, selector, underlying_loader)
        return writer.load, writer.commit

    def new_writer(
        self, root: CID, selector: Any, underlying_loader: BlockReadOpener
    ) -> TraversalWriter:
        """Same as new_traversal but returns the writer itself."""
        key = derive_key(root, selector)
        return TraversalWriter(
            key,
            self.datastore,
            underlying_loader,
            continue_after_encode_error=self.continue_after_encode_error,
        )

    def has(self, root: CID, selector: Any) -> bool:
        return self.datastore.has(derive_key(root, selector))

    def get(self, root: CID, selector: Any) -> LinkIterator:
        return LinkIterator(self.get_raw(root, selector))

    def get_raw(self, root: CID, selector: Any) -> bytes:
        """Stored record blob for (root, selector)."""
        return self.datastore.get(derive_key(root, selector))
