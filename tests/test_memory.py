#!/usr/bin/env python3
"""
Tests for memory monitoring.
"""

import logging
import unittest
from logstream.memory import (
    MemoryMonitor,
    MemoryPressureLevel,
    MemoryPressureHandler,
    LoggingHandler,
    pressure_for,
)


class RecordingHandler(MemoryPressureHandler):
    """Handler remembering every call."""
    
    def __init__(self):
        self.calls = []
    
    def can_handle(self, level, info):
        return True
    
    def handle(self, level, info):
        self.calls.append(level)


class TestMemoryMonitor(unittest.TestCase):
    """Test memory readings and pressure levels."""
    
    def test_pressure_levels(self):
        """Test classification of memory usage."""
        self.assertEqual(pressure_for(10), MemoryPressureLevel.NONE)
        self.assertEqual(pressure_for(50), MemoryPressureLevel.LOW)
        self.assertEqual(pressure_for(75), MemoryPressureLevel.MEDIUM)
        self.assertEqual(pressure_for(90), MemoryPressureLevel.HIGH)
        self.assertEqual(pressure_for(99), MemoryPressureLevel.CRITICAL)
        self.assertGreater(MemoryPressureLevel.HIGH, MemoryPressureLevel.LOW)
    
    def test_memory_info(self):
        """Test a memory reading."""
        info = MemoryMonitor().get_memory_info()
        self.assertGreater(info.total, 0)
        self.assertGreater(info.rss, 0)
        self.assertIn("RSS", str(info))
    
    def test_checks_are_throttled(self):
        """Test that handlers run at most once per interval."""
        monitor = MemoryMonitor(check_interval=3600)
        handler = RecordingHandler()
        monitor.add_handler(handler)
        
        first = monitor.check_memory_pressure()
        second = monitor.check_memory_pressure()
        self.assertIs(first, second)
        self.assertEqual(len(handler.calls), 1)
        
        monitor.remove_handler(handler)
        self.assertEqual(monitor.handlers, [])
    
    def test_logging_handler(self):
        """Test that each pressure level is logged once until it changes."""
        logger = logging.getLogger("logstream.test.memory")
        handler = LoggingHandler(logger=logger, min_level=MemoryPressureLevel.LOW)
        info = MemoryMonitor().get_memory_info()

        self.assertFalse(handler.can_handle(MemoryPressureLevel.NONE, info))
        self.assertTrue(handler.can_handle(MemoryPressureLevel.HIGH, info))

        with self.assertLogs(logger, level="WARNING") as logs:
            handler.handle(MemoryPressureLevel.HIGH, info)
            handler.handle(MemoryPressureLevel.HIGH, info)
            handler.handle(MemoryPressureLevel.CRITICAL, info)
            handler.handle(MemoryPressureLevel.MEDIUM, info)
        self.assertEqual([record.levelname for record in logs.records],
                         ["ERROR", "CRITICAL", "WARNING"])
        self.assertIn("HIGH memory pressure while holding bookmarked elements",
                      logs.output[0])
        self.assertIn("RSS", logs.output[0])


if __name__ == "__main__":
    unittest.main()
