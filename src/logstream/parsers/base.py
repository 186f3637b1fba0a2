"""
Streams of records parsed from lines of log text.
"""

from collections.abc import Mapping
from typing import Any, Callable, Dict, Optional

from logstream.errors import InvalidArgument
from logstream.streams.filter import FilterStream
from logstream.streams.stream import Stream, drain
from logstream.streams.transform import TransformStream

Record = Dict[str, Any]


def is_record(value: Any) -> bool:
    """Check whether a parser result should be kept.  Empty mappings are dropped."""
    return not (isinstance(value, Mapping) and len(value) == 0)


class ParseStream(Stream[Record]):
    """
    Parse each line of a stream into a record.

    The parser is a function from a line to a dict.  An empty dict means the
    line could not be parsed, and that line is left out of the stream.  Other
    falsy results are kept.  Subclasses implement a log format by overriding
    parse(); the default parser wraps each line as {"data": line}.
    """

    def __init__(self, source: Any, parser: Optional[Callable[[Any], Record]] = None):
        """
        Initialize parse stream.

        Args:
            source: Stream of lines; it is taken over and should not be used afterwards
            parser: Function from line to record (None to use self.parse)
        """
        if parser is not None and not callable(parser):
            raise InvalidArgument("parser must be callable")
        self.parser = parser or self.parse

        records = FilterStream(is_record, TransformStream(self.parser, source))
        super().__init__(drain(records))

    def parse(self, line: Any) -> Record:
        return {"data": line}
