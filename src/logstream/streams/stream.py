"""
Lazy pull streams over log data.
"""

import logging
from pathlib import Path
from typing import (
    Any, Callable, Generic, Iterable, Iterator, List, Optional,
    Sequence, Tuple, TypeVar, Union
)

from logstream.errors import InvalidArgument

T = TypeVar('T')
U = TypeVar('U')

#: A zero-argument callable returning the next element, or None at the end.
Generator = Callable[[], Optional[T]]

logger = logging.getLogger(__name__)


def is_stream(obj: Any) -> bool:
    """Check whether obj offers the head()/get() pull protocol."""
    return callable(getattr(obj, 'head', None)) and callable(getattr(obj, 'get', None))


def take_over(stream: Any) -> Tuple[Optional[Any], Optional[Generator]]:
    """
    Take ownership of the pending head and generator of a stream.

    A Stream hands over its state and is left exhausted.  Any other object
    with head() and get() is driven through those methods instead.

    Args:
        stream: Stream (or stream-like object) to take over

    Returns:
        The pending head and the generator producing the elements after it
    """
    if isinstance(stream, Stream):
        return stream._release()
    if not is_stream(stream):
        raise InvalidArgument(f"{stream!r} is not a stream")

    head = stream.head()
    if head is None:
        return None, None

    def generator():
        stream.get()
        return stream.head()

    return head, generator


def drain(stream: Any) -> Generator:
    """
    Take over a stream and return a generator for all of its remaining elements.

    The pending head is returned first; the underlying generator is only
    called once that head has been handed out, so no extra lookahead is done.
    """
    head, generator = take_over(stream)

    def pull():
        nonlocal head, generator
        if head is not None:
            element, head = head, None
            return element
        if generator is None:
            return None
        element = generator()
        if element is None:
            generator = None
        return element

    return pull


def reraise_first(error: Exception, generator: Optional[Generator]) -> Generator:
    """Return a generator that raises error once, then continues with generator."""
    def resume():
        nonlocal error
        if error is not None:
            raised, error = error, None
            raise raised
        return generator() if generator is not None else None

    return resume


class Stream(Generic[T]):
    """
    A lazy stream of log elements with one element of lookahead.

    The stream wraps a generator: a zero-argument callable that returns the
    next element or None once the input is exhausted.  The first element is
    computed on construction and kept as the head; every get() returns the
    head and calls the generator once to compute the next one.  After the
    generator first returns None it is dropped and never called again.

    If the generator raises, the exception is raised by the following head()
    or get() instead, and the call after that asks the generator again.
    """

    def __init__(self, generator: Generator):
        """
        Initialize stream.

        Args:
            generator: Callable returning the next element or None at the end
        """
        if not callable(generator):
            raise InvalidArgument("generator must be callable")

        self._head: Optional[T] = None
        self._generator: Optional[Generator] = generator
        self._error: Optional[Exception] = None
        self._stale = False
        self._advance()

    def _advance(self) -> None:
        """
        Replace the head with the next element from the generator.

        An exception from the generator is kept until the next head() or
        get(), so the element handed out just before it is not lost.
        """
        self._head = None
        if self._generator is None:
            return

        try:
            head = self._generator()
        except Exception as e:
            logger.debug(f"{type(self).__name__} generator failed: {e!r}")
            self._error = e
            return

        if head is None:
            logger.debug(f"{type(self).__name__} exhausted, retiring generator")
            self._generator = None
        self._head = head

    def _settle(self) -> None:
        """Compute a head left out by a failure, or raise a pending failure."""
        if self._stale:
            self._stale = False
            self._advance()
        if self._error is not None:
            error, self._error = self._error, None
            # The generator is retried on the next call
            self._stale = True
            raise error

    def _release(self) -> Tuple[Optional[T], Optional[Generator]]:
        """Hand the head and generator to a new owner and close this stream."""
        head, generator = self._head, self._generator
        if self._error is not None:
            generator = reraise_first(self._error, generator)
        self._head = None
        self._generator = None
        self._error = None
        self._stale = False
        return head, generator

    @property
    def generator(self) -> Optional[Generator]:
        """The generator of this stream, or None once it is exhausted."""
        return self._generator

    @property
    def exhausted(self) -> bool:
        return self._head is None and self._generator is None

    def head(self) -> Optional[T]:
        """Return the next element without consuming it."""
        self._settle()
        return self._head

    def get(self) -> Optional[T]:
        """Consume and return the next element, or None at the end of the stream."""
        self._settle()
        head = self._head
        if head is None:
            return None
        self._advance()
        return head

    def __iter__(self) -> Iterator[T]:
        """Consume the stream element by element."""
        while True:
            element = self.get()
            if element is None:
                return
            yield element

    def __repr__(self) -> str:
        if self.exhausted:
            state = "exhausted"
        elif self._head is None:
            state = "failed" if self._error is not None else "pending"
        else:
            state = f"head={self._head!r}"
        return f"<{type(self).__name__} {state}>"

    # Decorators

    def filter(self, predicate: Callable[[T], bool]) -> 'Stream[T]':
        """Keep only elements matching predicate."""
        from logstream.streams.filter import FilterStream
        return FilterStream(predicate, self)

    def map(self, mapping: Callable[[T], U]) -> 'Stream[U]':
        """Apply mapping to each element."""
        from logstream.streams.transform import TransformStream
        return TransformStream(mapping, self)

    def rewindable(self) -> 'Stream[T]':
        """Add bookmark, rewind and prepend support."""
        from logstream.streams.rewindable import RewindableStream
        return RewindableStream(self)

    def merge(self, *others: Any) -> 'Stream[T]':
        """Interleave this stream with others in round-robin order."""
        from logstream.streams.merge import MergeStream
        return MergeStream(self, *others)

    def parse(self, parser: Optional[Callable[[T], dict]] = None) -> 'Stream[dict]':
        """Parse each element into a record, dropping unparsable ones."""
        from logstream.parsers.base import ParseStream
        return ParseStream(self, parser)

    # Terminal operators

    def collect(self) -> List[T]:
        """Collect all remaining elements into a list."""
        return list(self)

    def count(self) -> int:
        """Count remaining elements."""
        return sum(1 for _ in self)

    def first(self) -> Optional[T]:
        """Consume and return the next element."""
        return self.get()

    def foreach(self, func: Callable[[T], None]) -> None:
        """Apply function to each remaining element."""
        for element in self:
            func(element)

    # Factory methods

    @classmethod
    def from_iterable(cls, iterable: Iterable[T]) -> 'Stream[T]':
        """Create stream from iterable.  A None element ends the stream."""
        iterator = iter(iterable)
        return Stream(lambda: next(iterator, None))

    @classmethod
    def from_files(cls, files: Union[str, Path, Sequence[Union[str, Path]]],
                   compression: Optional[Any] = None) -> 'Stream[str]':
        """Create stream of lines from one or more files, decompressing if needed."""
        from logstream.config import config, CompressionType
        from logstream.sources import FileStream, GzipFileStream

        if compression is None and files is not None:
            paths = [files] if isinstance(files, (str, Path)) else list(files)
            compression = config.compression_for(paths)
        if compression in (CompressionType.GZIP, CompressionType.GZIP.value):
            return GzipFileStream(files)
        return FileStream(files)

    @classmethod
    def from_gzip(cls, files: Union[str, Path, Sequence[Union[str, Path]]]) -> 'Stream[str]':
        """Create stream of lines from one or more gzip-compressed files."""
        from logstream.sources import GzipFileStream
        return GzipFileStream(files)
