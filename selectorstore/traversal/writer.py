"""
Traversal writer: records every link load of one traversal.

The writer wraps the caller's block loader. Each load is delegated
unchanged and a TraversedLink record is appended to an in-memory buffer.
commit() persists the buffer under the traversal's key, but only if
every record was encoded.
"""

import io
import os
from typing import BinaryIO, Optional

from ..core.errors import RecordEncodingError
from ..core.links import BlockReadOpener, Link, LinkContext, TraversedLink, describe_error
from ..datastore.store import Datastore
from ..encoding.records import encode_traversed_link
from ..logging_config import get_logger


def _env_flag(key: str) -> bool:
    return os.getenv(key, "").strip().lower() in ("1", "true", "yes")


class TraversalWriter:
    """
    Recording loader for a single traversal.

    Not safe for concurrent load() calls; a traversal engine drives one
    load at a time.

    Once an encoding error occurs it is kept in write_error and commit()
    refuses to persist. By default further loads then raise that error
    without reaching the underlying loader; with
    continue_after_encode_error they keep loading but are not recorded.
    """

    def __init__(
        self,
        key: str,
        datastore: Datastore,
        underlying_loader: BlockReadOpener,
        continue_after_encode_error: Optional[bool] = None,
    ) -> None:
        """
        Args:
            key: Storage key derived for (root, selector)
            datastore: Borrowed datastore receiving the committed blob
            underlying_loader: Caller's block loader
            continue_after_encode_error: Keep delegating loads after an
                encoding failure (default: SELSTORE_CONTINUE_AFTER_ENCODE_ERROR)
        """
        self.key = key
        self.datastore = datastore
        self.underlying_loader = underlying_loader
        if continue_after_encode_error is None:
            continue_after_encode_error = _env_flag("SELSTORE_CONTINUE_AFTER_ENCODE_ERROR")
        self.continue_after_encode_error = continue_after_encode_error
        self.out = io.BytesIO()
        self.write_error: Optional[RecordEncodingError] = None
        self.recorded = 0
        self.committed = False
        self.logger = get_logger(__name__, key=key)

    def load(self, link_ctx: LinkContext, link: Link) -> BinaryIO:
        """
        Load a block through the underlying loader and record the attempt.

        Returns whatever the underlying loader returns and re-raises
        whatever it raises. Recording failures never change either.

        Raises:
            RecordEncodingError: If an earlier record failed to encode and
                the writer short-circuits
        """
        if self.write_error is not None and not self.continue_after_encode_error:
            raise self.write_error

        try:
            reader = self.underlying_loader(link_ctx, link)
        except Exception as err:
            self._record(link_ctx, link, describe_error(err))
            raise
        self._record(link_ctx, link, None)
        return reader

    def _record(self, link_ctx: LinkContext, link: Link, load_error: Optional[str]) -> None:
        if self.write_error is not None:
            return
        try:
            encode_traversed_link(
                self.out,
                TraversedLink(link=link, link_path=link_ctx.link_path, load_error=load_error),
            )
        except RecordEncodingError as e:
            self.write_error = e
            self.logger.warning(
                "Recording disabled after encoding error: %s", e, extra={"records": self.recorded}
            )
            return
        self.recorded += 1

    def commit(self) -> None:
        """
        Persist the recorded traversal.

        Raises:
            RecordEncodingError: If any record failed to encode (nothing is written)
            StorageError: If the datastore write fails
        """
        if self.write_error is not None:
            raise self.write_error
        self.datastore.put(self.key, self.out.getvalue())
        self.committed = True
        self.logger.debug("Committed traversal", extra={"records": self.recorded})
