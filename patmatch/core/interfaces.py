"""
Core interfaces for patmatch.

This module contains the data model shared by the word breaker, the matchers
and the ranking service: spans, match kinds, match results and matcher options.
"""

from dataclasses import dataclass, field, fields, replace
from enum import Enum, IntEnum
from typing import Any, Dict, FrozenSet, Iterable, Optional, Tuple, Union

from patmatch.core.exceptions import ConfigurationError


@dataclass(frozen=True, order=True)
class Span:
    """
    A run of characters inside a string, given by start index and length.
    """
    start: int
    length: int

    def __post_init__(self):
        if self.start < 0:
            raise ValueError(f"Span start must be non-negative, got {self.start}")
        if self.length < 0:
            raise ValueError(f"Span length must be non-negative, got {self.length}")

    @property
    def end(self) -> int:
        """Index one past the last character of the span."""
        return self.start + self.length

    @property
    def is_empty(self) -> bool:
        return self.length == 0

    def overlaps_with(self, other: "Span") -> bool:
        return max(self.start, other.start) < min(self.end, other.end)

    def text_of(self, text: str) -> str:
        """Return the slice of ``text`` covered by this span."""
        return text[self.start:self.end]


class PatternMatchKind(IntEnum):
    """
    How well a candidate matched, from weakest to strongest.

    The integer values carry the ordering: a larger value is a better match,
    so ``min`` picks the weaker of two kinds.
    """
    FUZZY = 0
    SUBSTRING = 1
    CAMEL_CASE_NON_CONTIGUOUS = 2
    CAMEL_CASE_NON_CONTIGUOUS_FROM_START = 3
    CAMEL_CASE_SUBSTRING = 4
    CAMEL_CASE_CONTIGUOUS = 5
    CAMEL_CASE_CONTIGUOUS_FROM_START = 6
    CAMEL_CASE_EXACT = 7
    PREFIX = 8
    EXACT = 9

    @property
    def is_camel_case(self) -> bool:
        return PatternMatchKind.CAMEL_CASE_NON_CONTIGUOUS <= self <= PatternMatchKind.CAMEL_CASE_EXACT


class MergeStrategy(Enum):
    """How two sub-matches are combined into one result."""
    SIMPLE = "simple"
    CONTAINER = "container"


@dataclass(frozen=True)
class PatternMatch:
    """
    The result of matching one candidate against a pattern.

    ``matched_spans`` is empty unless the matcher was created with
    ``include_matched_spans``; spans are always relative to the full candidate.
    """
    kind: PatternMatchKind
    punctuation_stripped: bool
    is_case_sensitive: bool
    matched_spans: Tuple[Span, ...] = ()

    def with_matched_spans(self, matched_spans: Iterable[Span]) -> "PatternMatch":
        """
        Get a copy of this match carrying the given spans.

        Args:
            matched_spans: Spans to associate with the match

        Returns:
            A new PatternMatch with the same kind and flags
        """
        return replace(self, matched_spans=tuple(matched_spans))

    def compare_to(self, other: "PatternMatch", ignore_case: bool = False) -> int:
        """
        Compare two matches for sorting.

        Args:
            other: Match to compare against
            ignore_case: Whether case sensitivity should be left out of the comparison

        Returns:
            A negative number if this match is better than ``other``, a positive
            number if it is worse, and zero if they rank equally.
        """
        if self.kind != other.kind:
            return -1 if self.kind > other.kind else 1

        if not ignore_case and self.is_case_sensitive != other.is_case_sensitive:
            return -1 if self.is_case_sensitive else 1

        # A match found without stripping punctuation beats one that needed it
        if self.punctuation_stripped != other.punctuation_stripped:
            return 1 if self.punctuation_stripped else -1

        return 0

    def sort_key(self, ignore_case: bool = False) -> Tuple[int, bool, bool]:
        """Ascending sort key that puts the best match first."""
        case_rank = False if ignore_case else not self.is_case_sensitive
        return (-int(self.kind), case_rank, self.punctuation_stripped)


def _normalize_split_characters(value: Union[None, str, Iterable[str]]) -> Optional[FrozenSet[str]]:
    if value is None:
        return None

    characters = set()
    for item in value:
        if not isinstance(item, str) or len(item) != 1:
            raise ConfigurationError(f"Container split characters must be single characters, got {item!r}")
        characters.add(item)

    return frozenset(characters)


def _parse_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ('true', '1', 'yes', 'on'):
            return True
        if lowered in ('false', '0', 'no', 'off'):
            return False
    raise ConfigurationError(f"Option '{key}' expects a boolean, got {value!r}")


@dataclass
class MatcherOptions:
    """
    Options controlling how a pattern matcher compares candidates.

    Setting ``container_split_characters`` (even to characters never found in
    the candidates) selects the container strategy; leaving it ``None``
    selects the simple strategy.
    """
    locale: Optional[str] = None
    allow_fuzzy_matching: bool = False
    allow_simple_substring_matching: bool = False
    include_matched_spans: bool = False
    container_split_characters: Optional[FrozenSet[str]] = field(default=None)

    def __post_init__(self):
        self.container_split_characters = _normalize_split_characters(self.container_split_characters)

    @property
    def uses_containers(self) -> bool:
        return self.container_split_characters is not None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "MatcherOptions":
        """
        Create options from a dictionary, as loaded from a configuration file.

        Args:
            data: Mapping of option names to values

        Returns:
            MatcherOptions instance

        Raises:
            ConfigurationError: If a key is unknown or a value has the wrong type.
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigurationError(f"Matcher options must be a mapping, got {type(data).__name__}")

        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(f"Unknown matcher option(s): {', '.join(sorted(unknown))}")

        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            if key == 'locale':
                if value is not None and not isinstance(value, str):
                    raise ConfigurationError(f"Option 'locale' expects a string, got {value!r}")
                kwargs[key] = value
            elif key == 'container_split_characters':
                if value is not None and not isinstance(value, (str, list, tuple, set, frozenset)):
                    raise ConfigurationError(
                        f"Option 'container_split_characters' expects a string or list, got {value!r}")
                kwargs[key] = value
            else:
                kwargs[key] = _parse_bool(key, value)

        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the options to a plain dictionary.

        Returns:
            Dictionary representation, with split characters as a sorted list
        """
        return {
            'locale': self.locale,
            'allow_fuzzy_matching': self.allow_fuzzy_matching,
            'allow_simple_substring_matching': self.allow_simple_substring_matching,
            'include_matched_spans': self.include_matched_spans,
            'container_split_characters': (
                sorted(self.container_split_characters)
                if self.container_split_characters is not None else None
            ),
        }
