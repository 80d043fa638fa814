"""
SelectorStore abstract interface.

Defines contract for selector store implementations.
"""

from abc import ABC, abstractmethod
from typing import Any, Tuple

from multiformats import CID

from ..core.links import BlockReadOpener, TraversalCloser
from ..replay.iterator import LinkIterator


class SelectorStore(ABC):
    """
    Abstract selector store interface.

    All implementations must guarantee:
    - Equal (root hash, selector) pairs address the same stored traversal
    - A traversal is visible to has()/get() only after its commit succeeds
    - Committing again for the same pair replaces the earlier record
    """

    @abstractmethod
    def new_traversal(
        self, root: CID, selector: Any, underlying_loader: BlockReadOpener
    ) -> Tuple[BlockReadOpener, TraversalCloser]:
        """
        Start recording a traversal of root with selector.

        Args:
            root: Traversal root
            selector: Selector value (JSON data model)
            underlying_loader: Loader the traversal would normally use

        Returns:
            (load, commit): a recording loader to hand to the traversal
            engine, and a function that persists the record

        Raises:
            KeyDerivationError: If the selector cannot be encoded
        """
        ...

    @abstractmethod
    def has(self, root: CID, selector: Any) -> bool:
        """
        Report whether a traversal of root with selector is stored.

        Raises:
            KeyDerivationError: If the selector cannot be encoded
            StorageError: If the datastore lookup fails
        """
        ...

    @abstractmethod
    def get(self, root: CID, selector: Any) -> LinkIterator:
        """
        Replay a stored traversal.

        Raises:
            KeyDerivationError: If the selector cannot be encoded
            NotFoundError: If no traversal is stored
            StorageError: If the datastore read fails
        """
        ...
