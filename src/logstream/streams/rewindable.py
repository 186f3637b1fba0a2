"""
Streams that can be bookmarked, rewound and prepended to.
"""

import logging
from typing import Any, List, Optional, TypeVar

from logstream.config import config
from logstream.errors import InvalidArgument, NoBookmark
from logstream.memory import monitor
from logstream.streams.merge import MergeStream
from logstream.streams.stream import Stream, is_stream, reraise_first, take_over

T = TypeVar('T')

logger = logging.getLogger(__name__)


class RewindableStream(Stream[T]):
    """
    A stream supporting a single bookmark and reinsertion of elements.

    While a bookmark is set, every element consumed with get() is kept in
    order; rewind() puts all of them back in front of the stream so they are
    read again.  prepend() pushes arbitrary elements to the front of the
    stream.  Saved elements stay in memory until the bookmark is discarded
    or rewound, so long-lived bookmarks over long runs should be avoided.
    """

    def __init__(self, source: Any):
        """
        Initialize rewindable stream.

        Args:
            source: Stream to wrap; it is taken over and should not be used afterwards
        """
        head, self._fallback = take_over(source)

        # Elements to return before the fallback generator, last one first
        self._queue: Optional[List[T]] = [head] if head is not None else None
        self._saved: Optional[List[T]] = None
        self._warned = False

        super().__init__(self._pull)

    def _pull(self) -> Optional[T]:
        """Return the next prepended element, else the next element of the source."""
        if self._queue:
            element = self._queue.pop()
            if not self._queue:
                self._queue = None
            return element
        if self._fallback is not None:
            element = self._fallback()
            if element is None:
                self._fallback = None
            return element
        return None

    def _release(self):
        self._saved = None
        return super()._release()

    @property
    def bookmarked(self) -> bool:
        """Whether a bookmark is currently set."""
        return self._saved is not None

    def get(self) -> Optional[T]:
        """Consume and return the next element, remembering it if bookmarked."""
        element = super().get()
        if element is not None and self._saved is not None:
            self._saved.append(element)
            if len(self._saved) >= config.saved_warning_threshold and not self._warned:
                self._warned = True
                info = monitor.check_memory_pressure()
                logger.warning(
                    f"Bookmark is holding {len(self._saved)} elements; {info}"
                )
        return element

    def bookmark(self) -> bool:
        """Set a bookmark at the current position, replacing any existing one."""
        if self._saved is not None:
            logger.debug(f"Replacing bookmark holding {len(self._saved)} elements")
            self.discard()
        self._saved = []
        return True

    def discard(self) -> bool:
        """Drop the bookmark and its saved elements without moving the stream."""
        if self._saved is None:
            raise NoBookmark()
        self._saved = None
        self._warned = False
        return True

    def saved(self) -> List[T]:
        """Return the elements consumed since the bookmark was set."""
        if self._saved is None:
            raise NoBookmark()
        return list(self._saved)

    def rewind(self) -> bool:
        """Return to the bookmark, so the saved elements are read again."""
        saved = self.saved()
        self.discard()
        return self.prepend(*saved)

    def prepend(self, *elements: T) -> bool:
        """
        Push elements to the front of the stream.

        The first element becomes the new head, followed by the rest in
        order and then by the previous head.  Prepending to an exhausted
        stream revives it.
        """
        if not elements:
            return True
        if any(element is None for element in elements):
            raise InvalidArgument("cannot prepend None to a stream")

        pending = list(elements)
        if self._head is not None:
            pending.append(self._head)
        if self._queue is None:
            self._queue = []
        self._queue.extend(reversed(pending))

        # A pending source failure comes after the prepended elements
        if self._error is not None:
            self._fallback = reraise_first(self._error, self._fallback)
            self._error = None
        self._stale = False

        self._generator = self._pull
        self._advance()
        return True


class RewindableMergeStream(MergeStream[T]):
    """
    Merge streams with a merge function that may rewind them.

    Identical to MergeStream with a merge function, except that every stream
    that is not already a RewindableStream is wrapped in one, so the merge
    function can bookmark, rewind and prepend to all of them.  The merge
    function is mandatory.
    """

    def __init__(self, merge_function, *streams: Any):
        if not callable(merge_function) or is_stream(merge_function):
            raise InvalidArgument("merge function must be callable")

        wrapped = [
            stream if isinstance(stream, RewindableStream) else RewindableStream(stream)
            for stream in streams
        ]
        super().__init__(merge_function, *wrapped)
