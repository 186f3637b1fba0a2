"""Memory monitoring for buffered stream history."""

from logstream.memory.monitor import (
    MemoryMonitor,
    MemoryPressureLevel,
    MemoryInfo,
    MemoryPressureHandler,
    pressure_for,
    monitor,
)
from logstream.memory.handlers import LoggingHandler

# Report pressure through logging by default
monitor.add_handler(LoggingHandler())

__all__ = [
    "MemoryMonitor",
    "MemoryPressureLevel",
    "MemoryInfo",
    "MemoryPressureHandler",
    "LoggingHandler",
    "pressure_for",
    "monitor",
]
