"""
Streams applying a mapping function to each element.
"""

from typing import Any, Callable, Optional, TypeVar

from logstream.errors import InvalidArgument
from logstream.streams.stream import Stream, drain

T = TypeVar('T')
U = TypeVar('U')


class TransformStream(Stream[U]):
    """
    Map each element of a stream to a new value.

    The stream ends when the source ends.  Falsy results of the mapping, such
    as an empty string or an empty dict, are kept as elements; only a result
    of None ends the stream.  Use FilterStream on top to drop elements.
    """

    def __init__(self, mapping: Callable[[T], U], source: Any):
        if not callable(mapping):
            raise InvalidArgument("mapping must be callable")

        self.mapping = mapping
        pull = drain(source)

        def generator() -> Optional[U]:
            element = pull()
            if element is None:
                return None
            return mapping(element)

        super().__init__(generator)
