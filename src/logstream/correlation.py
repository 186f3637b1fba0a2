"""
Windowed correlation of two log streams.

The merge function built here pairs each element of a first stream with a
matching element of a second stream, looking only a bounded distance ahead
in the second stream.  It relies on the second stream being rewindable:

1. Take the next element of the first stream.
2. Bookmark the second stream and read forward through the window.
3. On a match, drop the matched element from the saved history, discard
   the bookmark and prepend the rest of the scanned elements, so they can
   be matched against later elements of the first stream.
4. Without a match, rewind the second stream and go back to step 1.

Memory use is bounded by the window, however long the streams are, and
unmatched elements of the second stream are never lost or reordered.
"""

import logging
from typing import Any, Callable, Optional, Tuple, TypeVar

from logstream.config import config
from logstream.errors import InvalidArgument
from logstream.streams.rewindable import RewindableMergeStream, RewindableStream

A = TypeVar('A')
B = TypeVar('B')

logger = logging.getLogger(__name__)


def _pair(first: A, second: B) -> Tuple[A, B]:
    return (first, second)


def windowed_correlation(
    matches: Callable[[A, B], bool],
    window: Optional[int] = None,
    combine: Optional[Callable[[A, B], Any]] = None,
    within: Optional[Callable[[A, B], bool]] = None,
) -> Callable[[RewindableStream, RewindableStream], Any]:
    """
    Build a merge function correlating two rewindable streams.

    Args:
        matches: Function deciding whether an element of the second stream
            matches an element of the first
        window: Maximum number of elements of the second stream to scan for
            each element of the first (None for the configured default)
        combine: Function building the merged element from a match
            (default: the pair of matched elements)
        within: Optional function that stops the scan as soon as it returns
            false, for time-based windows

    Returns:
        Merge function for RewindableMergeStream
    """
    if not callable(matches):
        raise InvalidArgument("matches must be callable")
    if window is None:
        window = config.correlation_window
    if window < 1:
        raise InvalidArgument(f"window must be at least 1, not {window}")
    combine = combine or _pair

    def scan(element: A, second: RewindableStream) -> Optional[B]:
        """Consume the match for element from second, putting back the rest."""
        second.bookmark()
        for _ in range(window):
            candidate = second.head()
            if candidate is None:
                break
            if within is not None and not within(element, candidate):
                break
            second.get()
            if matches(element, candidate):
                # Put back everything scanned except the match
                scanned = second.saved()
                scanned.pop()
                second.discard()
                second.prepend(*scanned)
                return candidate

        logger.debug(f"No match for {element!r} within {window} elements")
        second.rewind()
        return None

    def merge(first: RewindableStream, second: RewindableStream) -> Any:
        while True:
            element = first.get()
            if element is None:
                return None

            try:
                candidate = scan(element, second)
            except Exception:
                # Leave both streams where this element started
                if second.bookmarked:
                    second.rewind()
                first.prepend(element)
                raise
            if candidate is not None:
                return combine(element, candidate)

    return merge


def correlate(
    matches: Callable[[A, B], bool],
    first: Any,
    second: Any,
    **options: Any,
) -> RewindableMergeStream:
    """
    Correlate two streams with windowed_correlation.

    Args:
        matches: Function deciding whether two elements match
        first: Stream whose elements drive the correlation
        second: Stream searched for matches
        **options: window, combine and within, as for windowed_correlation

    Returns:
        Stream of combined matches, in the order of the first stream
    """
    return RewindableMergeStream(windowed_correlation(matches, **options), first, second)
