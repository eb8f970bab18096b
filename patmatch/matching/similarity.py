"""
Edit-distance similarity for fuzzy matching.

A pattern chunk and a candidate are similar when their case-insensitive
optimal string alignment distance (Levenshtein plus adjacent transpositions)
is within a threshold scaled to the chunk length.
"""

from typing import Optional

from rapidfuzz.distance import OSA

from patmatch.matching.comparison import TextComparer

# Shorter chunks produce too many spurious hits to be worth checking
MIN_FUZZY_LENGTH = 3


def get_threshold(text: str) -> int:
    """
    Maximum edit distance tolerated for a chunk of this length.

    Args:
        text: The pattern chunk

    Returns:
        1 for chunks of up to four characters, 2 for longer ones
    """
    return 1 if len(text) <= 4 else 2


class SimilarityChecker:
    """
    Decides whether candidates are close enough to one pattern chunk.

    Instances are immutable and safe to share between threads.
    """

    def __init__(self, text: str, comparer: Optional[TextComparer] = None):
        """
        Initialize the checker.

        Args:
            text: The pattern chunk candidates are compared against
            comparer: Comparer providing case folding. Defaults to invariant rules.
        """
        self.text = text
        self.threshold = get_threshold(text)
        self._comparer = comparer or TextComparer()
        self._folded = self._comparer.fold(text)

    def edit_distance(self, candidate: str) -> int:
        """
        Case-insensitive edit distance to ``candidate``.

        Returns:
            The distance, or ``threshold + 1`` when it exceeds the threshold.
        """
        return OSA.distance(
            self._folded,
            self._comparer.fold(candidate),
            score_cutoff=self.threshold,
        )

    def are_similar(self, candidate: str) -> bool:
        """
        Check whether ``candidate`` is within the threshold of the chunk.

        Args:
            candidate: String to compare

        Returns:
            True if the strings are similar
        """
        if len(self.text) < MIN_FUZZY_LENGTH or not candidate:
            return False

        if abs(len(self.text) - len(candidate)) > self.threshold:
            return False

        return self.edit_distance(candidate) <= self.threshold
