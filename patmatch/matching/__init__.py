"""
Pattern matching for identifiers.

This package provides the word breaker, the chunk rule cascade, camel-case
alignment, fuzzy similarity, the simple and container matchers, and
candidate ranking.
"""

from .factory import create_matcher, get_name_and_container
from .matcher import PatternMatcher, SimplePatternMatcher, ContainerPatternMatcher
from .ranking import MatchRanker, RankedCandidate, filter_candidates, highlight
from .similarity import SimilarityChecker
from .word_breaker import break_characters, break_words

__all__ = [
    'create_matcher',
    'get_name_and_container',
    'PatternMatcher',
    'SimplePatternMatcher',
    'ContainerPatternMatcher',
    'MatchRanker',
    'RankedCandidate',
    'filter_candidates',
    'highlight',
    'SimilarityChecker',
    'break_characters',
    'break_words'
]
