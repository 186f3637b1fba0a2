"""
Streams of lines read from gzip-compressed log files.
"""

import logging
import subprocess
from typing import IO

from logstream.config import config
from logstream.errors import IOFailure
from logstream.sources.file import FileStream, PathLike

logger = logging.getLogger(__name__)


class GzipFileStream(FileStream):
    """
    Stream lines from one or more gzip-compressed files.

    Each file is decompressed by an external gzip process.  When the output
    of a process ends, its exit status is checked and a failure is raised as
    IOFailure before moving on to the next file.  Closing the stream early
    terminates the running process without checking its status.
    """

    _process = None

    def _open(self, path: PathLike) -> IO[str]:
        self._process = subprocess.Popen(
            [config.gzip_command, '-dc', str(path)],
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            encoding=self.encoding,
            errors=config.encoding_errors,
        )
        return self._process.stdout

    def _close(self) -> None:
        process = self._process
        self._process = None
        process.stdout.close()
        message = process.stderr.read().strip()
        process.stderr.close()
        status = process.wait()
        if status != 0:
            logger.error(f"{config.gzip_command} -dc {self.path} exited with status {status}")
            detail = f": {message}" if message else ""
            raise IOFailure(f"gzip -dc {self.path} failed with exit status {status}{detail}")

    def _abort(self) -> None:
        process = self._process
        self._process = None
        process.stdout.close()
        if process.poll() is None:
            process.terminate()
        status = process.wait()
        process.stderr.close()
        logger.debug(f"Stopped {config.gzip_command} -dc {self.path} (exit status {status})")
