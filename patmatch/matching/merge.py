"""
Merging of sub-matches.

When a pattern is split into several chunks (the words of one segment) or
several segments (container parts), the individual matches are folded into a
single result. The merged result is only as good as its weakest part.
"""

from typing import Iterable, Optional

from patmatch.core.interfaces import MergeStrategy, PatternMatch
from patmatch.core.spans import union_spans


def merge_matches(first: PatternMatch, second: PatternMatch, strategy: MergeStrategy) -> PatternMatch:
    """
    Merge two matches into one.

    Both strategies take the weaker kind. ``SIMPLE`` is used for chunks of the
    same candidate string, ``CONTAINER`` for matches against different
    container parts.

    Args:
        first: First match
        second: Second match
        strategy: Where the two matches came from

    Returns:
        The merged match: weakest kind, case-sensitive only if both are,
        punctuation-stripped if either is, and the union of the spans.
    """
    if not isinstance(strategy, MergeStrategy):
        raise TypeError(f"Unknown merge strategy: {strategy!r}")

    return PatternMatch(
        kind=min(first.kind, second.kind),
        punctuation_stripped=first.punctuation_stripped or second.punctuation_stripped,
        is_case_sensitive=first.is_case_sensitive and second.is_case_sensitive,
        matched_spans=union_spans(first.matched_spans, second.matched_spans),
    )


def merge_all(matches: Iterable[PatternMatch], strategy: MergeStrategy) -> Optional[PatternMatch]:
    """Merge a sequence of matches left to right; None for an empty sequence."""
    merged: Optional[PatternMatch] = None
    for match in matches:
        merged = match if merged is None else merge_matches(merged, match, strategy)
    return merged
