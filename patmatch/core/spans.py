"""
Normalized span collections.

Matched spans coming out of the matchers are kept normalized: sorted by start,
with overlapping or abutting spans coalesced and empty spans dropped.
"""

from typing import Iterable, List, Tuple

from patmatch.core.interfaces import Span


def normalize_spans(spans: Iterable[Span]) -> Tuple[Span, ...]:
    """
    Sort spans and coalesce any that overlap or touch.

    Args:
        spans: Spans in any order

    Returns:
        Tuple of disjoint, non-adjacent spans sorted by start
    """
    ordered = sorted(span for span in spans if span.length > 0)
    if not ordered:
        return ()

    merged: List[Span] = []
    current_start = ordered[0].start
    current_end = ordered[0].end

    for span in ordered[1:]:
        if span.start <= current_end:
            current_end = max(current_end, span.end)
        else:
            merged.append(Span(current_start, current_end - current_start))
            current_start, current_end = span.start, span.end

    merged.append(Span(current_start, current_end - current_start))
    return tuple(merged)


def union_spans(first: Iterable[Span], second: Iterable[Span]) -> Tuple[Span, ...]:
    """Normalized union of two span collections."""
    return normalize_spans(list(first) + list(second))
