"""Process memory monitoring and pressure detection."""

import time
import psutil
from enum import Enum
from typing import List, Optional
from dataclasses import dataclass
from abc import ABC, abstractmethod

from logstream.config import config


class MemoryPressureLevel(Enum):
    """Memory pressure levels."""
    NONE = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4
    
    def __gt__(self, other):
        if not isinstance(other, MemoryPressureLevel):
            return NotImplemented
        return self.value > other.value
    
    def __ge__(self, other):
        if not isinstance(other, MemoryPressureLevel):
            return NotImplemented
        return self.value >= other.value


@dataclass
class MemoryInfo:
    """Memory usage information."""
    total: int
    available: int
    rss: int
    percent: float
    pressure_level: MemoryPressureLevel
    timestamp: float
    
    @property
    def rss_mb(self) -> float:
        return self.rss / (1024 ** 2)
    
    @property
    def available_gb(self) -> float:
        return self.available / (1024 ** 3)
    
    def __str__(self) -> str:
        return (f"Memory: {self.percent:.1f}% used, "
                f"process RSS {self.rss_mb:.1f} MB, "
                f"{self.available_gb:.2f} GB available, "
                f"Pressure: {self.pressure_level.name}")


def pressure_for(percent: float) -> MemoryPressureLevel:
    """Classify a system memory usage percentage."""
    if percent >= 95:
        return MemoryPressureLevel.CRITICAL
    elif percent >= 85:
        return MemoryPressureLevel.HIGH
    elif percent >= 70:
        return MemoryPressureLevel.MEDIUM
    elif percent >= 50:
        return MemoryPressureLevel.LOW
    return MemoryPressureLevel.NONE


class MemoryPressureHandler(ABC):
    """Abstract base class for memory pressure handlers."""
    
    @abstractmethod
    def can_handle(self, level: MemoryPressureLevel, info: MemoryInfo) -> bool:
        """Check if this handler should handle the given pressure level."""
        pass
    
    @abstractmethod
    def handle(self, level: MemoryPressureLevel, info: MemoryInfo) -> None:
        """Handle memory pressure."""
        pass


class MemoryMonitor:
    """Monitor process and system memory."""
    
    def __init__(self, check_interval: Optional[float] = None):
        """
        Initialize memory monitor.
        
        Args:
            check_interval: Minimum seconds between checks (None for the configured value)
        """
        self.check_interval = check_interval
        self.handlers: List[MemoryPressureHandler] = []
        self._process = psutil.Process()
        self._last_check = 0.0
        self._last_info: Optional[MemoryInfo] = None
    
    def add_handler(self, handler: MemoryPressureHandler) -> None:
        """Add a memory pressure handler."""
        self.handlers.append(handler)
    
    def remove_handler(self, handler: MemoryPressureHandler) -> None:
        """Remove a memory pressure handler."""
        if handler in self.handlers:
            self.handlers.remove(handler)
    
    def get_memory_info(self) -> MemoryInfo:
        """Get current memory information."""
        mem = psutil.virtual_memory()
        return MemoryInfo(
            total=mem.total,
            available=mem.available,
            rss=self._process.memory_info().rss,
            percent=mem.percent,
            pressure_level=pressure_for(mem.percent),
            timestamp=time.time()
        )
    
    def should_check(self) -> bool:
        """Check if enough time has passed for next check."""
        interval = self.check_interval
        if interval is None:
            interval = config.memory_check_interval
        return time.time() - self._last_check >= interval
    
    def check_memory_pressure(self) -> MemoryInfo:
        """Check current memory and notify handlers.
        
        Returns the cached reading when called again within the check interval.
        """
        if self._last_info is not None and not self.should_check():
            return self._last_info
        
        info = self.get_memory_info()
        for handler in self.handlers:
            if handler.can_handle(info.pressure_level, info):
                handler.handle(info.pressure_level, info)
        
        self._last_check = time.time()
        self._last_info = info
        return info


# Global monitor instance
monitor = MemoryMonitor()
