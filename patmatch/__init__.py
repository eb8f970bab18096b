"""
Patmatch - camel-case, substring and fuzzy matching of identifiers.

This package ranks and filters short candidate strings (symbol, command and
file names) against what a user typed, for navigation, completion filtering
and quick search.
"""

__version__ = "0.1.0"
__author__ = "Patmatch Team"
__email__ = "contact@patmatch.dev"

from .core.exceptions import PatternMatcherError, ArgumentError, MatcherDisposedError, ConfigurationError
from .core.interfaces import MatcherOptions, MergeStrategy, PatternMatch, PatternMatchKind, Span
from .matching.factory import create_matcher, get_name_and_container
from .matching.ranking import MatchRanker, RankedCandidate, filter_candidates

__all__ = [
    "create_matcher",
    "get_name_and_container",
    "MatcherOptions",
    "MergeStrategy",
    "PatternMatch",
    "PatternMatchKind",
    "Span",
    "MatchRanker",
    "RankedCandidate",
    "filter_candidates",
    "PatternMatcherError",
    "ArgumentError",
    "MatcherDisposedError",
    "ConfigurationError"
]
