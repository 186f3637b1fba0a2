"""
Streams combining several streams into one.
"""

from collections import deque
from typing import Any, Callable, Deque, Optional, Tuple, TypeVar

from logstream.errors import InvalidArgument
from logstream.streams.stream import Generator, Stream, drain, is_stream

T = TypeVar('T')


class MergeStream(Stream[T]):
    """
    Merge several streams into one.

    If the first argument is callable, it is a merge function: it is called
    with all of the remaining streams, in the order given, every time the
    merged stream needs a new element, and returns that element or None to
    end the merged stream.  The same stream objects are passed on every call,
    including streams that have already ended, so the function may keep
    state purely through the streams themselves.

    Without a merge function, the streams are interleaved round robin: one
    element from each stream in turn, dropping streams as they run dry.  The
    merged stream ends once every input has ended.
    """

    def __init__(self, *args: Any):
        """
        Initialize merge.

        Args:
            *args: Optional merge function followed by the streams to merge
        """
        streams = list(args)
        merge_function: Optional[Callable[..., Optional[T]]] = None
        if streams and callable(streams[0]) and not is_stream(streams[0]):
            merge_function = streams.pop(0)

        for stream in streams:
            if not is_stream(stream):
                raise InvalidArgument(f"cannot merge {stream!r}: not a stream")

        self.merge_function = merge_function
        self.streams: Tuple[Any, ...] = tuple(streams)

        if merge_function is not None:
            def generator() -> Optional[T]:
                return merge_function(*self.streams)
        else:
            generator = self._round_robin(self.streams)

        super().__init__(generator)

    @staticmethod
    def _round_robin(streams) -> Generator:
        """Build a generator interleaving the live streams."""
        pulls: Deque[Generator] = deque(drain(stream) for stream in streams)

        def generator() -> Optional[T]:
            while pulls:
                # A failing stream stays in front and is asked again next time
                element = pulls[0]()
                pull = pulls.popleft()
                if element is not None:
                    pulls.append(pull)
                    return element
            return None

        return generator
