"""
Matcher construction.

``create_matcher`` is the entry point for callers: it validates the pattern
and options and picks the simple or container strategy.
"""

import logging
from typing import Optional, Tuple

from patmatch.core.exceptions import ArgumentError
from patmatch.core.interfaces import MatcherOptions
from patmatch.matching.matcher import (
    ContainerPatternMatcher,
    PatternMatcher,
    SimplePatternMatcher,
    split_on_characters
)


logger = logging.getLogger(__name__)


def create_matcher(pattern: str, options: Optional[MatcherOptions]) -> PatternMatcher:
    """
    Create a pattern matcher for ``pattern``.

    Args:
        pattern: What the user typed
        options: Matcher options. ``container_split_characters`` selects the
            container strategy when set, the simple strategy when None.

    Returns:
        A matcher ready to be called once per candidate

    Raises:
        ArgumentError: If the pattern is empty or whitespace, or options are missing.

    Example:
        >>> matcher = create_matcher("PatMat", MatcherOptions())
        >>> matcher.try_match("PatternMatcher").kind
        <PatternMatchKind.CAMEL_CASE_EXACT: 7>
    """
    if pattern is None or not isinstance(pattern, str):
        raise ArgumentError("A non-empty pattern is required to create a pattern matcher")

    if not pattern.strip():
        raise ArgumentError("A non-empty pattern is required to create a pattern matcher")

    if options is None:
        raise ArgumentError("Matcher options are required to create a pattern matcher")

    if options.container_split_characters is None:
        logger.debug(f"Creating simple pattern matcher for {pattern!r}")
        return SimplePatternMatcher(
            pattern,
            locale=options.locale,
            include_matched_spans=options.include_matched_spans,
            allow_fuzzy_matching=options.allow_fuzzy_matching,
            allow_simple_substring_matching=options.allow_simple_substring_matching,
        )

    if not options.container_split_characters:
        raise ArgumentError("Container split characters must not be empty; use None for a simple matcher")

    pattern_parts = [part for _, part in split_on_characters(pattern, options.container_split_characters)]
    logger.debug(f"Creating container pattern matcher for {pattern!r} with {len(pattern_parts)} segment(s)")

    return ContainerPatternMatcher(
        pattern_parts,
        options.container_split_characters,
        locale=options.locale,
        allow_fuzzy_matching=options.allow_fuzzy_matching,
        allow_simple_substring_matching=options.allow_simple_substring_matching,
        include_matched_spans=options.include_matched_spans,
    )


def get_name_and_container(pattern: str) -> Tuple[str, Optional[str]]:
    """
    Split a dotted pattern into its last part and everything before it.

    Args:
        pattern: Pattern such as ``System.Collections.List``

    Returns:
        Tuple of (name, container); container is None when there is no dot.
    """
    dot_index = pattern.rfind('.')
    if dot_index < 0:
        return pattern, None
    return pattern[dot_index + 1:], pattern[:dot_index]
