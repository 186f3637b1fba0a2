"""
Configuration management for log streams.
"""

from typing import Optional
from dataclasses import dataclass
from enum import Enum


class CompressionType(Enum):
    """Compression of on-disk log files."""
    NONE = "none"
    GZIP = "gzip"


@dataclass
class StreamConfig:
    """Global configuration for log streams."""
    
    # Decoding of file sources
    encoding: str = "utf-8"
    encoding_errors: str = "replace"
    
    # Compression
    compression: CompressionType = CompressionType.NONE
    gzip_command: str = "gzip"
    
    # Correlation
    correlation_window: int = 10
    
    # Bookmarks
    saved_warning_threshold: int = 100_000
    memory_check_interval: float = 1.0  # seconds
    
    _instance: Optional['StreamConfig'] = None
    
    @classmethod
    def get_instance(cls) -> 'StreamConfig':
        """Get singleton instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance
    
    @classmethod
    def set_defaults(cls, **kwargs) -> None:
        """Set default configuration values."""
        instance = cls.get_instance()
        for key, value in kwargs.items():
            if key == 'compression' and isinstance(value, str):
                value = CompressionType(value)
            if hasattr(instance, key):
                setattr(instance, key, value)
    
    def compression_for(self, files) -> CompressionType:
        """Pick the compression for a list of files."""
        if files and all(str(f).endswith('.gz') for f in files):
            return CompressionType.GZIP
        return self.compression


# Global configuration instance
config = StreamConfig.get_instance()
