"""Line sources reading log files."""

from logstream.sources.file import FileStream
from logstream.sources.gzipped import GzipFileStream

__all__ = [
    "FileStream",
    "GzipFileStream",
]
