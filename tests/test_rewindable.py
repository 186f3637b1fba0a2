#!/usr/bin/env python3
"""
Tests for RewindableStream and RewindableMergeStream.
"""

import unittest
from logstream import (
    Stream,
    RewindableStream,
    RewindableMergeStream,
    MergeStream,
    StreamConfig,
    NoBookmark,
    InvalidArgument,
)


def rewindable(*elements):
    return RewindableStream(Stream.from_iterable(elements))


class TestBookmarks(unittest.TestCase):
    """Test bookmark, saved, discard and rewind."""
    
    def test_plain_reading(self):
        """Test that a rewindable stream reads like its source."""
        stream = rewindable("first", "second", "third")
        self.assertEqual(stream.head(), "first")
        self.assertEqual(stream.collect(), ["first", "second", "third"])
        self.assertIsNone(stream.get())
    
    def test_rewind_round_trip(self):
        """Test that rewind replays everything read since the bookmark."""
        stream = rewindable("first", "second", "third", "fourth")
        
        self.assertEqual(stream.get(), "first")
        self.assertTrue(stream.bookmark())
        self.assertEqual(stream.get(), "second")
        self.assertEqual(stream.get(), "third")
        self.assertEqual(stream.saved(), ["second", "third"])
        
        self.assertTrue(stream.rewind())
        self.assertFalse(stream.bookmarked)
        self.assertEqual(stream.head(), "second")
        self.assertEqual(stream.collect(), ["second", "third", "fourth"])
    
    def test_rewind_after_end(self):
        """Test rewinding a stream that was read to the end."""
        stream = rewindable("a", "b")
        stream.bookmark()
        self.assertEqual(stream.collect(), ["a", "b"])
        self.assertIsNone(stream.head())
        
        stream.rewind()
        self.assertEqual(stream.collect(), ["a", "b"])
    
    def test_rewind_with_nothing_saved(self):
        """Test that rewinding straight after bookmarking changes nothing."""
        stream = rewindable(1, 2)
        stream.bookmark()
        stream.rewind()
        self.assertEqual(stream.collect(), [1, 2])
    
    def test_head_does_not_save(self):
        """Test that only consumed elements are saved."""
        stream = rewindable("a", "b")
        stream.bookmark()
        stream.head()
        stream.head()
        self.assertEqual(stream.saved(), [])
    
    def test_discard(self):
        """Test that discard drops the bookmark without moving the stream."""
        stream = rewindable("a", "b", "c")
        stream.bookmark()
        stream.get()
        self.assertTrue(stream.discard())
        
        self.assertEqual(stream.head(), "b")
        with self.assertRaises(NoBookmark):
            stream.rewind()
        with self.assertRaises(NoBookmark):
            stream.saved()
        with self.assertRaises(NoBookmark):
            stream.discard()
    
    def test_no_bookmark(self):
        """Test bookmark operations on a stream never bookmarked."""
        stream = rewindable("a")
        for operation in (stream.rewind, stream.saved, stream.discard):
            with self.assertRaises(NoBookmark):
                operation()
    
    def test_second_bookmark_replaces_first(self):
        """Test that setting a bookmark discards the previous one."""
        stream = rewindable(1, 2, 3, 4)
        stream.bookmark()
        stream.get()
        stream.bookmark()
        self.assertEqual(stream.saved(), [])
        stream.get()
        stream.rewind()
        self.assertEqual(stream.collect(), [2, 3, 4])
    
    def test_saved_is_a_copy(self):
        """Test that changing the saved list does not affect the bookmark."""
        stream = rewindable("a", "b")
        stream.bookmark()
        stream.get()
        stream.saved().append("junk")
        self.assertEqual(stream.saved(), ["a"])
    
    def test_large_bookmark_warns(self):
        """Test the warning for a bookmark holding many elements."""
        old_threshold = StreamConfig.get_instance().saved_warning_threshold
        StreamConfig.set_defaults(saved_warning_threshold=3)
        try:
            stream = rewindable(*range(10))
            stream.bookmark()
            with self.assertLogs("logstream.streams.rewindable", level="WARNING") as logs:
                stream.get()
                stream.get()
                stream.get()
                stream.get()
            self.assertEqual(len(logs.records), 1)
            self.assertIn("3 elements", logs.output[0])
        finally:
            StreamConfig.set_defaults(saved_warning_threshold=old_threshold)


class TestPrepend(unittest.TestCase):
    """Test pushing elements to the front of a stream."""
    
    def test_prepend_before_head(self):
        """Test that prepended elements come before the pending head."""
        stream = rewindable("h", "rest")
        self.assertTrue(stream.prepend("x", "y"))
        self.assertEqual(stream.head(), "x")
        self.assertEqual(stream.collect(), ["x", "y", "h", "rest"])
    
    def test_prepend_nothing(self):
        """Test that prepending no elements succeeds and changes nothing."""
        stream = rewindable("a")
        self.assertTrue(stream.prepend())
        self.assertEqual(stream.collect(), ["a"])
    
    def test_prepend_revives_exhausted_stream(self):
        """Test prepending to a stream read to the end."""
        stream = rewindable("a")
        stream.get()
        self.assertIsNone(stream.head())
        
        stream.prepend("b", "c")
        self.assertEqual(stream.collect(), ["b", "c"])
        self.assertIsNone(stream.get())
    
    def test_prepend_to_empty_stream(self):
        """Test prepending to a stream that never had elements."""
        stream = rewindable()
        stream.prepend(0)
        self.assertEqual(stream.collect(), [0])
    
    def test_repeated_prepends(self):
        """Test that later prepends go in front of earlier ones."""
        stream = rewindable("tail")
        stream.prepend("c", "d")
        stream.prepend("a", "b")
        self.assertEqual(stream.collect(), ["a", "b", "c", "d", "tail"])
    
    def test_rewind_after_prepend(self):
        """Test rewinding over elements that were prepended."""
        stream = rewindable(3, 4)
        stream.prepend(1, 2)
        stream.get()
        stream.bookmark()
        self.assertEqual([stream.get(), stream.get()], [2, 3])
        stream.rewind()
        self.assertEqual(stream.collect(), [2, 3, 4])
    
    def test_prepend_none(self):
        """Test that None cannot be prepended."""
        stream = rewindable("a")
        with self.assertRaises(InvalidArgument):
            stream.prepend("b", None)
        self.assertEqual(stream.collect(), ["a"])
    
    def test_source_generator_retired_once(self):
        """Test that the source generator is not called after its end, even after prepends."""
        calls = []
        elements = iter([1])
        
        def generator():
            calls.append(1)
            return next(elements, None)
        
        stream = RewindableStream(Stream(generator))
        self.assertEqual(stream.get(), 1)
        stream.prepend(5)
        self.assertEqual(stream.collect(), [5])
        self.assertIsNone(stream.get())
        self.assertEqual(len(calls), 2)
    
    def test_prepend_before_pending_failure(self):
        """Test that prepended elements are read before a pending source failure."""
        elements = iter(["a", "b"])
        calls = []
        
        def generator():
            calls.append(1)
            if len(calls) == 2:
                raise RuntimeError("read failed")
            return next(elements, None)
        
        stream = RewindableStream(Stream(generator))
        self.assertEqual(stream.get(), "a")
        stream.prepend("x")
        self.assertEqual(stream.get(), "x")
        with self.assertRaises(RuntimeError):
            stream.get()
        self.assertEqual(stream.collect(), ["b"])


class TestRewindableMerge(unittest.TestCase):
    """Test merges over rewindable streams."""
    
    def test_streams_are_wrapped(self):
        """Test that every stream given to the merge function is rewindable."""
        already = rewindable(1)
        types = []
        
        def merge(one, two):
            types.append((type(one), type(two), one is already))
            return one.get()
        
        merged = RewindableMergeStream(merge, already, Stream.from_iterable([2]))
        merged.collect()
        
        self.assertTrue(types)
        for one_type, two_type, same in types:
            self.assertIs(one_type, RewindableStream)
            self.assertIs(two_type, RewindableStream)
            self.assertTrue(same)
        self.assertIsInstance(merged, MergeStream)
    
    def test_merge_function_required(self):
        """Test that the merge function is mandatory."""
        with self.assertRaises(InvalidArgument):
            RewindableMergeStream(rewindable(1), rewindable(2))
        with self.assertRaises(InvalidArgument):
            RewindableMergeStream(None)
    
    def test_lookahead_merge(self):
        """Test a merge function that looks ahead and puts elements back."""
        
        def pairs(one, two):
            element = one.get()
            if element is None:
                return None
            two.bookmark()
            for _ in range(3):
                candidate = two.get()
                if candidate is None:
                    break
                if candidate == element.upper():
                    scanned = two.saved()
                    scanned.pop()
                    two.discard()
                    two.prepend(*scanned)
                    return element + candidate
            two.rewind()
            return element + "?"
        
        merged = RewindableMergeStream(
            pairs,
            Stream.from_iterable(["b", "a", "z", "c"]),
            Stream.from_iterable(["A", "B", "C"]),
        )
        self.assertEqual(merged.collect(), ["bB", "aA", "z?", "cC"])


if __name__ == "__main__":
    unittest.main()
