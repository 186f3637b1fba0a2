"""Memory pressure handlers."""

import logging
from typing import Optional

from logstream.memory.monitor import (
    MemoryPressureHandler,
    MemoryPressureLevel,
    MemoryInfo
)


class LoggingHandler(MemoryPressureHandler):
    """
    Log memory pressure seen while a bookmark is holding many elements.

    Checks only happen when a bookmarked stream grows past its warning
    threshold, so each report points at a stream keeping a long history.
    A level is reported once until the pressure changes.
    """

    def __init__(self,
                 logger: Optional[logging.Logger] = None,
                 min_level: MemoryPressureLevel = MemoryPressureLevel.MEDIUM):
        self.logger = logger or logging.getLogger(__name__)
        self.min_level = min_level
        self._last_level: Optional[MemoryPressureLevel] = None

    def can_handle(self, level: MemoryPressureLevel, info: MemoryInfo) -> bool:
        return level >= self.min_level

    def handle(self, level: MemoryPressureLevel, info: MemoryInfo) -> None:
        if level == self._last_level:
            return
        self._last_level = level

        message = (f"{level.name} memory pressure while holding bookmarked elements; "
                   f"discard or rewind long-lived bookmarks ({info})")
        if level >= MemoryPressureLevel.CRITICAL:
            self.logger.critical(message)
        elif level >= MemoryPressureLevel.HIGH:
            self.logger.error(message)
        else:
            self.logger.warning(message)
