"""
Pytest configuration and fixtures for patmatch tests.
"""

import tempfile

import pytest

from patmatch.core.interfaces import MatcherOptions
from patmatch.matching.factory import create_matcher
from tests.fixtures.sample_data import SAMPLE_SYMBOLS, SAMPLE_QUALIFIED_NAMES


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def default_options():
    """Options for a simple matcher with every optional behavior off."""
    return MatcherOptions()


@pytest.fixture
def span_options():
    """Options for a simple matcher that reports matched spans."""
    return MatcherOptions(include_matched_spans=True)


@pytest.fixture
def container_options():
    """Options for a dotted-name container matcher that reports matched spans."""
    return MatcherOptions(container_split_characters='.', include_matched_spans=True)


@pytest.fixture
def make_matcher():
    """Factory building matchers that are disposed when the test ends."""
    created = []

    def _make(pattern, **option_values):
        matcher = create_matcher(pattern, MatcherOptions(**option_values))
        created.append(matcher)
        return matcher

    yield _make

    for matcher in created:
        matcher.dispose()


@pytest.fixture
def sample_symbols():
    """Typical symbol names a navigate-to dialog would search."""
    return list(SAMPLE_SYMBOLS)


@pytest.fixture
def sample_qualified_names():
    """Fully qualified dotted names."""
    return list(SAMPLE_QUALIFIED_NAMES)
