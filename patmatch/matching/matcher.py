"""
Pattern matchers.

A matcher is built once per pattern and then asked about many candidates.
Matching a chunk of the pattern against a candidate runs a cascade of rules,
strongest first:

1. exact (case-insensitive equality)
2. prefix
3. loose substring, when simple substring matching is allowed
4. lowercase chunk found at a hump boundary or right after punctuation
5. mixed-case chunk found case-sensitively
6. camel-case alignment against the candidate humps
7. lowercase chunk found starting on an uppercase candidate character

When all of that fails and fuzzy matching is allowed, the whole pass is
repeated with an edit-distance check instead.

Matchers are thread-safe. The only shared mutable state is the word-break
cache, which lives as long as the matcher and is released by ``dispose()``.
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import AbstractSet, Iterable, List, Optional, Sequence, Tuple

from patmatch.core.cache import WordBreakCache
from patmatch.core.exceptions import MatcherDisposedError
from patmatch.core.interfaces import MergeStrategy, PatternMatch, PatternMatchKind, Span
from patmatch.matching.camel_case import (
    AllLowerCamelCaseMatcher,
    part_starts_with,
    try_upper_case_camel_case_match
)
from patmatch.matching.chunks import PatternSegment, TextChunk
from patmatch.matching.comparison import TextComparer
from patmatch.matching.merge import merge_matches
from patmatch.matching.word_breaker import break_words, is_punctuation


logger = logging.getLogger(__name__)


class PatternMatcher(ABC):
    """
    Base class holding the rule cascade shared by both matching strategies.

    Subclasses decide how the pattern is split into segments and how the
    candidate is lined up against them.
    """

    def __init__(
        self,
        include_matched_spans: bool = False,
        locale: Optional[str] = None,
        allow_fuzzy_matching: bool = False,
        allow_simple_substring_matching: bool = False
    ):
        """
        Initialize the matcher.

        Args:
            include_matched_spans: Whether results carry the matched spans of the candidate
            locale: Locale used for case-insensitive comparison
            allow_fuzzy_matching: Whether close misspellings count as matches
            allow_simple_substring_matching: Whether a substring away from any
                hump boundary counts as a match
        """
        self.locale = locale
        self._comparer = TextComparer(locale)
        self._include_matched_spans = include_matched_spans
        self._allow_fuzzy_matching = allow_fuzzy_matching
        self._allow_simple_substring_matching = allow_simple_substring_matching
        self._word_breaks = WordBreakCache(break_words)
        self._invalid_pattern = False
        self._disposed = False
        self._dispose_lock = threading.Lock()

    @property
    def has_invalid_pattern(self) -> bool:
        """True when the pattern could not be segmented; every match attempt then fails."""
        return self._invalid_pattern

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    @property
    def include_matched_spans(self) -> bool:
        return self._include_matched_spans

    @property
    def allow_fuzzy_matching(self) -> bool:
        return self._allow_fuzzy_matching

    @property
    def allow_simple_substring_matching(self) -> bool:
        return self._allow_simple_substring_matching

    @property
    def cache_size(self) -> int:
        """Number of candidates whose word breaks are cached."""
        return len(self._word_breaks)

    def dispose(self) -> None:
        """
        Release the cached word breaks and chunk state.

        Calling it more than once has no further effect. Using the matcher
        afterwards raises MatcherDisposedError.
        """
        with self._dispose_lock:
            if self._disposed:
                return
            self._disposed = True

        released = self._word_breaks.close()
        for segment in self._segments():
            segment.dispose()
        logger.debug(f"Disposed {type(self).__name__}, released {released} cache entries")

    def __enter__(self) -> "PatternMatcher":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.dispose()

    def try_match(self, candidate: Optional[str]) -> Optional[PatternMatch]:
        """
        Determine whether, and how well, a candidate matches the pattern.

        Args:
            candidate: The string to evaluate

        Returns:
            The match, or None if the candidate does not match, is empty or
            whitespace, or the pattern is invalid.

        Raises:
            MatcherDisposedError: If the matcher has been disposed.
        """
        if self._disposed:
            raise MatcherDisposedError(f"{type(self).__name__} has been disposed")

        if self._skip_match(candidate):
            return None

        return self._try_match(candidate)

    @abstractmethod
    def _try_match(self, candidate: str) -> Optional[PatternMatch]:
        """Match a candidate that is known to be non-blank."""

    @abstractmethod
    def _segments(self) -> Iterable[PatternSegment]:
        """All pattern segments owned by the matcher."""

    def _skip_match(self, candidate: Optional[str]) -> bool:
        return self._invalid_pattern or candidate is None or not candidate.strip()

    def _get_word_spans(self, word: str) -> Tuple[Span, ...]:
        return self._word_breaks.get(word)

    def _get_matched_spans(self, start: int, length: int) -> Tuple[Span, ...]:
        return (Span(start, length),) if self._include_matched_spans else ()

    def _match_segment(
        self,
        candidate: str,
        segment: PatternSegment,
        fuzzy_match: bool,
        segment_offset: int
    ) -> Optional[PatternMatch]:
        """
        Match one pattern segment against the candidate.

        The segment text is first tried as a single chunk, which lets a
        pattern such as ``@int`` match the candidate ``@int`` even though word
        splitting would drop the ``@``. Otherwise every word of the segment
        must match on its own, and the word matches are merged.

        Args:
            candidate: The candidate text (or container part)
            segment: The pattern segment
            fuzzy_match: Whether to use the similarity check instead of the rule cascade
            segment_offset: Index of ``candidate`` within the full candidate string

        Returns:
            The merged match, or None if any word fails to match.
        """
        if fuzzy_match and not self._allow_fuzzy_matching:
            return None

        match = self._match_chunk(
            candidate, segment.total_chunk, punctuation_stripped=False,
            fuzzy_match=fuzzy_match, chunk_offset=segment_offset)
        if match is not None:
            return match

        for sub_chunk in segment.sub_chunks:
            result = self._match_chunk(
                candidate, sub_chunk, punctuation_stripped=True,
                fuzzy_match=fuzzy_match, chunk_offset=segment_offset)
            if result is None:
                return None

            match = result if match is None else merge_matches(match, result, MergeStrategy.SIMPLE)

        return match

    def _match_chunk(
        self,
        candidate: str,
        chunk: TextChunk,
        punctuation_stripped: bool,
        fuzzy_match: bool,
        chunk_offset: int
    ) -> Optional[PatternMatch]:
        if fuzzy_match:
            return self._fuzzy_match_chunk(candidate, chunk, punctuation_stripped)
        return self._non_fuzzy_match_chunk(candidate, chunk, punctuation_stripped, chunk_offset)

    def _fuzzy_match_chunk(
        self,
        candidate: str,
        chunk: TextChunk,
        punctuation_stripped: bool
    ) -> Optional[PatternMatch]:
        checker = chunk.similarity_checker
        if checker is not None and checker.are_similar(candidate):
            return PatternMatch(PatternMatchKind.FUZZY, punctuation_stripped, is_case_sensitive=False)
        return None

    def _non_fuzzy_match_chunk(
        self,
        candidate: str,
        chunk: TextChunk,
        punctuation_stripped: bool,
        chunk_offset: int
    ) -> Optional[PatternMatch]:
        comparer = self._comparer
        text = chunk.text
        whole_chunk = Span(0, len(text))
        case_insensitive_index = comparer.index_of(candidate, text, ignore_case=True)

        if case_insensitive_index == 0:
            if len(text) == len(candidate):
                return PatternMatch(
                    PatternMatchKind.EXACT, punctuation_stripped,
                    is_case_sensitive=candidate == text,
                    matched_spans=self._get_matched_spans(chunk_offset, len(candidate)))

            return PatternMatch(
                PatternMatchKind.PREFIX, punctuation_stripped,
                is_case_sensitive=comparer.is_prefix(candidate, text),
                matched_spans=self._get_matched_spans(chunk_offset, len(text)))

        if case_insensitive_index > 0 and self._allow_simple_substring_matching:
            # Non camel-case names, e.g. 'store.h' against 'afxsettingsstore.h'
            return PatternMatch(
                PatternMatchKind.SUBSTRING, punctuation_stripped,
                is_case_sensitive=part_starts_with(
                    comparer, candidate, Span(case_insensitive_index, len(text)), text, whole_chunk, False),
                matched_spans=self._get_matched_spans(chunk_offset + case_insensitive_index, len(text)))

        if chunk.is_lowercase:
            if case_insensitive_index > 0:
                match = self._lowercase_substring_match(
                    candidate, chunk, punctuation_stripped, case_insensitive_index, chunk_offset)
                if match is not None:
                    return match
        else:
            case_sensitive_index = comparer.index_of(candidate, text)
            if case_sensitive_index > 0:
                return PatternMatch(
                    PatternMatchKind.SUBSTRING, punctuation_stripped, is_case_sensitive=True,
                    matched_spans=self._get_matched_spans(chunk_offset + case_sensitive_index, len(text)))

        match = self._try_camel_case_match(candidate, chunk, punctuation_stripped, chunk_offset)
        if match is not None:
            return match

        if chunk.is_lowercase and len(text) < len(candidate):
            # Only the first occurrence is checked: a lowercase pattern landing on
            # a capital in one place and not another is unlikely to matter.
            if case_insensitive_index != -1 and candidate[case_insensitive_index].isupper():
                return PatternMatch(
                    PatternMatchKind.SUBSTRING, punctuation_stripped, is_case_sensitive=False,
                    matched_spans=self._get_matched_spans(chunk_offset + case_insensitive_index, len(text)))

        return None

    def _lowercase_substring_match(
        self,
        candidate: str,
        chunk: TextChunk,
        punctuation_stripped: bool,
        case_insensitive_index: int,
        chunk_offset: int
    ) -> Optional[PatternMatch]:
        """
        Accept a lowercase chunk found inside the candidate only at the start of a word.

        That keeps 'a' from matching 'Class' while still matching 'FooAttribute'.
        A hit right after punctuation also starts a word: 'mybutton' matches '_myButton'.
        """
        comparer = self._comparer
        text = chunk.text
        whole_chunk = Span(0, len(text))

        if is_punctuation(candidate[case_insensitive_index - 1]) or is_punctuation(text[0]):
            return PatternMatch(
                PatternMatchKind.SUBSTRING, punctuation_stripped,
                is_case_sensitive=part_starts_with(
                    comparer, candidate, Span(case_insensitive_index, len(text)), text, whole_chunk, False),
                matched_spans=self._get_matched_spans(chunk_offset + case_insensitive_index, len(text)))

        for span in self._get_word_spans(candidate):
            if part_starts_with(comparer, candidate, span, text, whole_chunk, True):
                return PatternMatch(
                    PatternMatchKind.SUBSTRING, punctuation_stripped,
                    is_case_sensitive=part_starts_with(comparer, candidate, span, text, whole_chunk, False),
                    matched_spans=self._get_matched_spans(chunk_offset + span.start, len(text)))

        return None

    def _try_camel_case_match(
        self,
        candidate: str,
        chunk: TextChunk,
        punctuation_stripped: bool,
        chunk_offset: int
    ) -> Optional[PatternMatch]:
        candidate_humps = self._get_word_spans(candidate)

        if chunk.is_lowercase:
            # cofipro matches CodeFixProvider
            result = AllLowerCamelCaseMatcher(self._comparer, candidate, candidate_humps, chunk).try_match(chunk_offset)
            if result is not None:
                return PatternMatch(
                    result.kind, punctuation_stripped, is_case_sensitive=False,
                    matched_spans=result.matched_spans if self._include_matched_spans else ())
            return None

        # CoFiPro matches CodeFixProvider, CofiPro does not
        if not chunk.hump_spans:
            return None

        for ignore_case in (False, True):
            result = try_upper_case_camel_case_match(
                self._comparer, candidate, candidate_humps, chunk, ignore_case, chunk_offset)
            if result is not None:
                return PatternMatch(
                    result.kind, punctuation_stripped, is_case_sensitive=not ignore_case,
                    matched_spans=result.matched_spans if self._include_matched_spans else ())

        return None


class SimplePatternMatcher(PatternMatcher):
    """
    Matches the whole candidate against the whole pattern as one segment.

    Suits features like completion filtering where candidates have no
    container structure.
    """

    def __init__(
        self,
        pattern: str,
        locale: Optional[str] = None,
        include_matched_spans: bool = False,
        allow_fuzzy_matching: bool = False,
        allow_simple_substring_matching: bool = False
    ):
        super().__init__(include_matched_spans, locale, allow_fuzzy_matching, allow_simple_substring_matching)

        self.pattern = pattern.strip()
        self._full_pattern_segment = PatternSegment(self.pattern, self._comparer, allow_fuzzy_matching)
        self._invalid_pattern = self._full_pattern_segment.is_invalid

        if self._invalid_pattern:
            logger.debug(f"Pattern {pattern!r} is invalid; every match attempt will fail")

    def _segments(self) -> Iterable[PatternSegment]:
        return (self._full_pattern_segment,)

    def _try_match(self, candidate: str) -> Optional[PatternMatch]:
        match = self._match_segment(candidate, self._full_pattern_segment, fuzzy_match=False, segment_offset=0)

        if match is None and self._allow_fuzzy_matching:
            match = self._match_segment(candidate, self._full_pattern_segment, fuzzy_match=True, segment_offset=0)

        return match


def split_on_characters(text: str, split_characters: AbstractSet[str], remove_empty: bool = False) -> List[Tuple[int, str]]:
    """
    Split ``text`` on any of ``split_characters``.

    Args:
        text: Text to split
        split_characters: Characters acting as separators
        remove_empty: Whether empty pieces are dropped

    Returns:
        List of (start index, piece) tuples in order
    """
    pieces = []
    piece_start = 0

    for index, ch in enumerate(text):
        if ch in split_characters:
            if index > piece_start or not remove_empty:
                pieces.append((piece_start, text[piece_start:index]))
            piece_start = index + 1

    if len(text) > piece_start or not remove_empty:
        pieces.append((piece_start, text[piece_start:]))

    return pieces


class ContainerPatternMatcher(PatternMatcher):
    """
    Matches dotted (or otherwise separated) patterns against container paths.

    Searching ``Apple.Banana.Charlie`` with ``A.B.C`` splits the pattern into
    segments A, B and C. The candidate is split on the same characters, and
    segments are lined up with the candidate parts from the right, so the
    last segment always matches the last part.
    """

    def __init__(
        self,
        pattern_parts: Sequence[str],
        container_split_characters: Iterable[str],
        locale: Optional[str] = None,
        allow_fuzzy_matching: bool = False,
        allow_simple_substring_matching: bool = False,
        include_matched_spans: bool = False
    ):
        """
        Initialize the container matcher.

        Args:
            pattern_parts: The pattern, already split on the container characters
            container_split_characters: Characters candidates are split on
            locale: Locale used for case-insensitive comparison
            allow_fuzzy_matching: Whether close misspellings count as matches
            allow_simple_substring_matching: Whether a substring away from any
                hump boundary counts as a match
            include_matched_spans: Whether results carry the matched spans
        """
        super().__init__(include_matched_spans, locale, allow_fuzzy_matching, allow_simple_substring_matching)

        self.container_split_characters = frozenset(container_split_characters)
        self._pattern_segments: Tuple[PatternSegment, ...] = tuple(
            PatternSegment(part.strip(), self._comparer, allow_fuzzy_matching)
            for part in pattern_parts
        )

        self._invalid_pattern = (
            len(self._pattern_segments) == 0 or
            any(segment.is_invalid for segment in self._pattern_segments)
        )

        if self._invalid_pattern:
            logger.debug(f"Container pattern {list(pattern_parts)!r} is invalid; every match attempt will fail")

    @property
    def segment_count(self) -> int:
        return len(self._pattern_segments)

    def _segments(self) -> Iterable[PatternSegment]:
        return self._pattern_segments

    def _try_match(self, candidate: str) -> Optional[PatternMatch]:
        match = self._try_match_containers(candidate, fuzzy_match=False)
        if match is None:
            match = self._try_match_containers(candidate, fuzzy_match=True)
        return match

    def _try_match_containers(self, candidate: str, fuzzy_match: bool) -> Optional[PatternMatch]:
        if fuzzy_match and not self._allow_fuzzy_matching:
            return None

        container_parts = split_on_characters(candidate, self.container_split_characters, remove_empty=True)

        if len(self._pattern_segments) > len(container_parts):
            # Not enough container parts for every pattern segment
            return None

        match: Optional[PatternMatch] = None

        for segment, (part_offset, part) in zip(reversed(self._pattern_segments), reversed(container_parts)):
            result = self._match_segment(part, segment, fuzzy_match, part_offset)
            if result is None:
                return None

            match = result if match is None else merge_matches(match, result, MergeStrategy.CONTAINER)

        return match
