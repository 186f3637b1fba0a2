"""
Streams of lines read from log files.
"""

import logging
from collections import deque
from pathlib import Path
from typing import IO, Deque, List, Optional, Sequence, Union

from logstream.config import config
from logstream.errors import EmptyArgument, IOFailure, MissingArgument
from logstream.streams.stream import Stream

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _file_list(files: Union[PathLike, Sequence[PathLike], None]) -> List[PathLike]:
    """Normalize the files argument of a file stream."""
    if files is None:
        raise MissingArgument("Missing files argument")
    if isinstance(files, (str, Path)):
        return [files]
    paths = list(files)
    if not paths:
        raise EmptyArgument("Empty files argument")
    return paths


class FileStream(Stream[str]):
    """
    Stream lines from one or more files, in order.

    Files are opened one at a time, only once all lines of the previous file
    have been read, so a missing or unreadable file only raises IOFailure
    when the stream gets to it.  Trailing newlines are removed.

    A stream abandoned before its end should be closed, either with close()
    or by using it as a context manager.
    """

    def __init__(self, files: Union[PathLike, Sequence[PathLike]],
                 encoding: Optional[str] = None):
        """
        Initialize file stream.

        Args:
            files: Path or list of paths to read
            encoding: Text encoding (None for the configured encoding)
        """
        self.files = _file_list(files)
        self.encoding = encoding or config.encoding
        self.path: Optional[PathLike] = None
        self._pending: Deque[PathLike] = deque(self.files)
        self._handle: Optional[IO[str]] = None

        super().__init__(self._next_line)

    def __enter__(self) -> 'FileStream':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _open(self, path: PathLike) -> IO[str]:
        return open(path, 'r', encoding=self.encoding, errors=config.encoding_errors)

    def _close(self) -> None:
        """Close the current file once all of it has been read."""
        self._handle.close()

    def _abort(self) -> None:
        """Close the current file before all of it has been read."""
        self._handle.close()

    def _drop_handle(self, finished: bool = False) -> None:
        try:
            if finished:
                self._close()
            else:
                self._abort()
        finally:
            self._handle = None

    def close(self) -> None:
        """
        Stop reading: close the current file and skip the remaining ones.

        The stream is exhausted afterwards.  Closing twice is harmless.
        """
        self._pending.clear()
        self._release()
        if self._handle is not None:
            logger.debug(f"Closing {self.path} before its end")
            self._drop_handle()

    def _next_line(self) -> Optional[str]:
        while True:
            if self._handle is None:
                if not self._pending:
                    return None
                # Drop the file from the list before opening so a failure is not retried
                self.path = self._pending.popleft()
                logger.debug(f"Opening {self.path}")
                try:
                    self._handle = self._open(self.path)
                except OSError as e:
                    raise IOFailure(e.errno, e.strerror, str(self.path)) from e

            try:
                line = self._handle.readline()
            except OSError as e:
                self._drop_handle()
                raise IOFailure(e.errno, e.strerror, str(self.path)) from e

            if line:
                if line.endswith('\n'):
                    line = line[:-1]
                return line

            logger.debug(f"Finished reading {self.path}")
            self._drop_handle(finished=True)
