"""
Pattern chunks and segments.

A pattern is made of segments (one per container part, or one for the whole
pattern). Each segment keeps a chunk for its full text plus one chunk per
alphanumeric word inside it.
"""

from typing import List, Optional, Tuple

from patmatch.core.interfaces import Span
from patmatch.matching.comparison import TextComparer
from patmatch.matching.similarity import SimilarityChecker
from patmatch.matching.word_breaker import break_characters, is_word_character


class TextChunk:
    """
    A fragment of the pattern together with its character humps.

    The similarity checker is only built the first time it is asked for,
    because it is only needed when fuzzy matching kicks in.
    """

    def __init__(self, text: str, comparer: Optional[TextComparer] = None, allow_fuzzy_matching: bool = False):
        self.text = text
        self.hump_spans: Tuple[Span, ...] = break_characters(text)
        self.allow_fuzzy_matching = allow_fuzzy_matching
        self.is_lowercase = not any(ch.isupper() for ch in text)
        self._comparer = comparer or TextComparer()
        self._similarity_checker: Optional[SimilarityChecker] = None

    @property
    def similarity_checker(self) -> Optional[SimilarityChecker]:
        """The fuzzy checker for this chunk, or None when fuzzy matching is off."""
        if not self.allow_fuzzy_matching:
            return None
        if self._similarity_checker is None:
            self._similarity_checker = SimilarityChecker(self.text, self._comparer)
        return self._similarity_checker

    def dispose(self) -> None:
        self._similarity_checker = None

    def __repr__(self) -> str:
        return f"TextChunk({self.text!r})"


def break_into_sub_words(text: str) -> List[Tuple[int, str]]:
    """
    Split text into its runs of letters and digits.

    Args:
        text: Segment text

    Returns:
        List of (start index, word) tuples in order
    """
    words = []
    word_start = -1

    for index, ch in enumerate(text):
        if is_word_character(ch):
            if word_start < 0:
                word_start = index
        elif word_start >= 0:
            words.append((word_start, text[word_start:index]))
            word_start = -1

    if word_start >= 0:
        words.append((word_start, text[word_start:]))

    return words


class PatternSegment:
    """
    One separator-delimited piece of the user's pattern.

    A segment is invalid when its text is empty after trimming whitespace.
    """

    def __init__(self, text: str, comparer: Optional[TextComparer] = None, allow_fuzzy_matching: bool = False):
        self.total_chunk = TextChunk(text, comparer, allow_fuzzy_matching)
        self.sub_chunks: Tuple[TextChunk, ...] = tuple(
            TextChunk(word, comparer, allow_fuzzy_matching)
            for _, word in break_into_sub_words(text)
        )

    @property
    def text(self) -> str:
        return self.total_chunk.text

    @property
    def is_invalid(self) -> bool:
        return not self.total_chunk.text.strip()

    def dispose(self) -> None:
        self.total_chunk.dispose()
        for chunk in self.sub_chunks:
            chunk.dispose()

    def __repr__(self) -> str:
        return f"PatternSegment({self.text!r}, sub_chunks={[c.text for c in self.sub_chunks]})"
