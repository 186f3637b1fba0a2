"""
logstream: Lazy, composable streams for processing log files.

Streams are pulled one element at a time with head() and get(), and can be
filtered, transformed, parsed, merged and rewound without reading a whole
log into memory or reading any element twice.
"""

from logstream.config import StreamConfig, CompressionType
from logstream.errors import (
    StreamError,
    InvalidArgument,
    MissingArgument,
    EmptyArgument,
    NoBookmark,
    IOFailure,
)
from logstream.streams import (
    Stream,
    FilterStream,
    TransformStream,
    MergeStream,
    RewindableStream,
    RewindableMergeStream,
)
from logstream.sources import FileStream, GzipFileStream
from logstream.parsers import (
    ParseStream,
    ApacheCombinedStream,
    ApacheErrorStream,
    WebKDCStream,
    SyslogStream,
)
from logstream.correlation import windowed_correlation, correlate

__version__ = "1.0.0"
__license__ = "MIT"

__all__ = [
    "StreamConfig",
    "CompressionType",
    "StreamError",
    "InvalidArgument",
    "MissingArgument",
    "EmptyArgument",
    "NoBookmark",
    "IOFailure",
    "Stream",
    "FilterStream",
    "TransformStream",
    "MergeStream",
    "RewindableStream",
    "RewindableMergeStream",
    "FileStream",
    "GzipFileStream",
    "ParseStream",
    "ApacheCombinedStream",
    "ApacheErrorStream",
    "WebKDCStream",
    "SyslogStream",
    "windowed_correlation",
    "correlate",
]
