"""Core components for patmatch."""

from .cache import CacheStats, WordBreakCache
from .configuration import ConfigurationManager
from .interfaces import (
    MatcherOptions,
    MergeStrategy,
    PatternMatch,
    PatternMatchKind,
    Span
)
from .exceptions import (
    PatternMatcherError,
    ArgumentError,
    MatcherDisposedError,
    ConfigurationError
)
from .spans import normalize_spans, union_spans

__all__ = [
    "CacheStats",
    "WordBreakCache",
    "ConfigurationManager",
    "MatcherOptions",
    "MergeStrategy",
    "PatternMatch",
    "PatternMatchKind",
    "Span",
    "PatternMatcherError",
    "ArgumentError",
    "MatcherDisposedError",
    "ConfigurationError",
    "normalize_spans",
    "union_spans"
]
