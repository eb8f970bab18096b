"""
Candidate filtering and ranking.

This module runs a matcher over a list of candidates and orders the results
the way a completion list or navigate-to dialog presents them: best kind
first, then case-sensitive before case-insensitive, then matches that kept
punctuation before those that stripped it, then alphabetically.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from patmatch.core.interfaces import MatcherOptions, PatternMatch, PatternMatchKind, Span
from patmatch.matching.factory import create_matcher
from patmatch.matching.matcher import PatternMatcher


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RankedCandidate:
    """A candidate string and how it matched."""
    candidate: str
    match: PatternMatch

    @property
    def kind(self) -> PatternMatchKind:
        return self.match.kind


class MatchRanker:
    """
    Filters candidates through a matcher and ranks the survivors.

    Matching is synchronous; callers that may need to stop early pass an
    ``is_cancelled`` callable, which is checked between candidates.
    """

    def __init__(self, ignore_case: bool = False):
        """
        Initialize the ranker.

        Args:
            ignore_case: Whether case sensitivity is left out of the ordering
        """
        self.ignore_case = ignore_case

    def sort_key(self, ranked: RankedCandidate):
        return ranked.match.sort_key(self.ignore_case) + (ranked.candidate.lower(), ranked.candidate)

    def rank(
        self,
        matcher: PatternMatcher,
        candidates: Iterable[str],
        limit: Optional[int] = None,
        is_cancelled: Optional[Callable[[], bool]] = None
    ) -> List[RankedCandidate]:
        """
        Match every candidate and return the matches, best first.

        Args:
            matcher: Matcher built for the pattern
            candidates: Strings to filter
            limit: Maximum number of results to return
            is_cancelled: Checked before each candidate; when it returns True
                the pass stops and the matches found so far are ranked

        Returns:
            Ranked list of matching candidates
        """
        results: List[RankedCandidate] = []
        seen = 0

        for candidate in candidates:
            if is_cancelled is not None and is_cancelled():
                logger.info(f"Ranking cancelled after {seen} candidates")
                break

            seen += 1
            match = matcher.try_match(candidate)
            if match is not None:
                results.append(RankedCandidate(candidate, match))

        results.sort(key=self.sort_key)
        logger.debug(f"Ranked {len(results)} matches out of {seen} candidates")

        if limit is not None:
            return results[:limit]
        return results

    def select_best(self, matcher: PatternMatcher, candidates: Iterable[str]) -> Optional[RankedCandidate]:
        """
        Get the single best match among the candidates.

        Returns:
            The best RankedCandidate, or None when nothing matches
        """
        ranked = self.rank(matcher, candidates, limit=1)
        return ranked[0] if ranked else None

    def group_by_kind(self, ranked: Iterable[RankedCandidate]) -> Dict[PatternMatchKind, List[RankedCandidate]]:
        """
        Group ranked results by match kind.

        Args:
            ranked: Ranked candidates

        Returns:
            Dictionary mapping each kind present to its candidates, order preserved
        """
        groups: Dict[PatternMatchKind, List[RankedCandidate]] = defaultdict(list)
        for item in ranked:
            groups[item.kind].append(item)
        return dict(groups)


def filter_candidates(
    pattern: str,
    candidates: Iterable[str],
    options: Optional[MatcherOptions] = None,
    limit: Optional[int] = None
) -> List[RankedCandidate]:
    """
    Build a matcher for ``pattern``, rank ``candidates`` with it and dispose it.

    Args:
        pattern: What the user typed
        candidates: Strings to filter
        options: Matcher options; defaults apply when None
        limit: Maximum number of results

    Returns:
        Ranked list of matching candidates
    """
    with create_matcher(pattern, options or MatcherOptions()) as matcher:
        return MatchRanker().rank(matcher, candidates, limit=limit)


def highlight(candidate: str, spans: Sequence[Span], open_marker: str = '[', close_marker: str = ']') -> str:
    """
    Wrap the matched spans of a candidate in markers.

    Args:
        candidate: The candidate text
        spans: Normalized matched spans
        open_marker: Text inserted before each span
        close_marker: Text inserted after each span

    Returns:
        The candidate with markers around every matched span
    """
    pieces = []
    position = 0
    for span in sorted(spans):
        if span.start < position:
            continue
        pieces.append(candidate[position:span.start])
        pieces.append(open_marker + candidate[span.start:span.end] + close_marker)
        position = span.end
    pieces.append(candidate[position:])
    return ''.join(pieces)
