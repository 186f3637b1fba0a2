"""
Streams keeping only the elements that match a predicate.
"""

from typing import Any, Callable, Optional, TypeVar

from logstream.errors import InvalidArgument
from logstream.streams.stream import Stream, drain

T = TypeVar('T')


class FilterStream(Stream[T]):
    """
    Filter elements of a stream by predicate.

    Leading elements that do not match are skipped on construction, so the
    head of a FilterStream always matches the predicate (or is None).  The
    predicate is called exactly once for every candidate element, including
    the ones that are discarded.
    """

    def __init__(self, predicate: Callable[[T], bool], source: Any):
        """
        Initialize filter.

        Args:
            predicate: Function returning true for elements to keep
            source: Stream to filter; it is taken over and should not be used afterwards
        """
        if not callable(predicate):
            raise InvalidArgument("predicate must be callable")

        self.predicate = predicate
        pull = drain(source)

        def generator() -> Optional[T]:
            while True:
                element = pull()
                if element is None or predicate(element):
                    return element

        super().__init__(generator)
