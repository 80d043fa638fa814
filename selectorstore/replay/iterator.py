"""
Replay iterator: stream recorded traversed links back in order.

Replay never touches the graph or the datastore; it only decodes the
blob it was handed.
"""

import io
from typing import Callable, Iterator

from ..core.links import TraversedLink
from ..encoding.records import decode_traversed_link


class LinkIterator:
    """
    Forward-only cursor over a record blob.

    Iteration resumes where the previous one stopped; a fully consumed
    iterator yields nothing more.
    """

    def __init__(self, data: bytes) -> None:
        self.reader = io.BytesIO(data)

    def __iter__(self) -> Iterator[TraversedLink]:
        """
        Yields:
            TraversedLink records in recording order

        Raises:
            RecordDecodingError: If a frame is truncated or malformed
        """
        while True:
            traversed_link = decode_traversed_link(self.reader)
            if traversed_link is None:
                return
            yield traversed_link

    def iterate(self, visit: Callable[[TraversedLink], None]) -> None:
        """
        Call visit for each remaining record.

        An exception raised by visit stops iteration and propagates.

        Raises:
            RecordDecodingError: If a frame is truncated or malformed
        """
        for traversed_link in self:
            visit(traversed_link)
