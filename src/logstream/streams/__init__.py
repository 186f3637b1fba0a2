"""Lazy, composable log streams."""

from logstream.streams.stream import (
    Stream,
    is_stream,
    take_over,
    drain,
)
from logstream.streams.filter import FilterStream
from logstream.streams.transform import TransformStream
from logstream.streams.merge import MergeStream
from logstream.streams.rewindable import RewindableStream, RewindableMergeStream

__all__ = [
    "Stream",
    "FilterStream",
    "TransformStream",
    "MergeStream",
    "RewindableStream",
    "RewindableMergeStream",
    "is_stream",
    "take_over",
    "drain",
]
