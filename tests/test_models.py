"""
Tests for the match model, merging and matcher options.
"""

import unittest

import pytest

from patmatch.core.exceptions import ConfigurationError
from patmatch.core.interfaces import MatcherOptions, MergeStrategy, PatternMatch, PatternMatchKind, Span
from patmatch.matching.merge import merge_all, merge_matches


def make_match(kind, punctuation_stripped=False, is_case_sensitive=True, spans=()):
    return PatternMatch(kind, punctuation_stripped, is_case_sensitive, tuple(spans))


class TestPatternMatchKind(unittest.TestCase):
    """Test cases for PatternMatchKind."""

    def test_ordering(self):
        kinds = list(PatternMatchKind)
        self.assertEqual(kinds[0], PatternMatchKind.FUZZY)
        self.assertEqual(kinds[-1], PatternMatchKind.EXACT)
        self.assertEqual(kinds, sorted(kinds))
        self.assertGreater(PatternMatchKind.PREFIX, PatternMatchKind.CAMEL_CASE_EXACT)
        self.assertGreater(PatternMatchKind.CAMEL_CASE_NON_CONTIGUOUS, PatternMatchKind.SUBSTRING)

    def test_is_camel_case(self):
        self.assertTrue(PatternMatchKind.CAMEL_CASE_SUBSTRING.is_camel_case)
        self.assertFalse(PatternMatchKind.SUBSTRING.is_camel_case)
        self.assertFalse(PatternMatchKind.PREFIX.is_camel_case)


class TestPatternMatch(unittest.TestCase):
    """Test cases for PatternMatch comparison."""

    def test_better_kind_sorts_first(self):
        exact = make_match(PatternMatchKind.EXACT, is_case_sensitive=False)
        prefix = make_match(PatternMatchKind.PREFIX)
        self.assertLess(exact.compare_to(prefix), 0)
        self.assertGreater(prefix.compare_to(exact), 0)

    def test_case_sensitive_breaks_ties(self):
        sensitive = make_match(PatternMatchKind.PREFIX, is_case_sensitive=True)
        insensitive = make_match(PatternMatchKind.PREFIX, is_case_sensitive=False)
        self.assertLess(sensitive.compare_to(insensitive), 0)
        self.assertEqual(sensitive.compare_to(insensitive, ignore_case=True), 0)

    def test_kept_punctuation_breaks_ties(self):
        kept = make_match(PatternMatchKind.SUBSTRING, punctuation_stripped=False)
        stripped = make_match(PatternMatchKind.SUBSTRING, punctuation_stripped=True)
        self.assertLess(kept.compare_to(stripped), 0)
        self.assertGreater(stripped.compare_to(kept), 0)

    def test_equal_matches(self):
        self.assertEqual(make_match(PatternMatchKind.FUZZY).compare_to(make_match(PatternMatchKind.FUZZY)), 0)

    def test_sort_key_matches_compare_to(self):
        matches = [
            make_match(PatternMatchKind.SUBSTRING, punctuation_stripped=True),
            make_match(PatternMatchKind.EXACT, is_case_sensitive=False),
            make_match(PatternMatchKind.SUBSTRING),
            make_match(PatternMatchKind.EXACT),
        ]
        ordered = sorted(matches, key=lambda m: m.sort_key())
        for first, second in zip(ordered, ordered[1:]):
            self.assertLessEqual(first.compare_to(second), 0)
        self.assertEqual(ordered[0], make_match(PatternMatchKind.EXACT))

    def test_with_matched_spans(self):
        match = make_match(PatternMatchKind.PREFIX)
        updated = match.with_matched_spans([Span(0, 3)])
        self.assertEqual(updated.matched_spans, (Span(0, 3),))
        self.assertEqual(match.matched_spans, ())
        self.assertEqual(updated.kind, match.kind)


class TestMerge(unittest.TestCase):
    """Test cases for merging sub-matches."""

    def test_merge_takes_weakest_kind(self):
        for strategy in MergeStrategy:
            for first, second in [(PatternMatchKind.EXACT, PatternMatchKind.SUBSTRING),
                                  (PatternMatchKind.FUZZY, PatternMatchKind.PREFIX),
                                  (PatternMatchKind.CAMEL_CASE_EXACT, PatternMatchKind.CAMEL_CASE_EXACT)]:
                merged = merge_matches(make_match(first), make_match(second), strategy)
                self.assertEqual(merged.kind, min(first, second))

    def test_merge_flags(self):
        merged = merge_matches(
            make_match(PatternMatchKind.EXACT, punctuation_stripped=True, is_case_sensitive=True),
            make_match(PatternMatchKind.EXACT, punctuation_stripped=False, is_case_sensitive=False),
            MergeStrategy.SIMPLE,
        )
        self.assertTrue(merged.punctuation_stripped)
        self.assertFalse(merged.is_case_sensitive)

    def test_merge_unions_spans(self):
        merged = merge_matches(
            make_match(PatternMatchKind.PREFIX, spans=[Span(7, 3)]),
            make_match(PatternMatchKind.PREFIX, spans=[Span(0, 3), Span(3, 1)]),
            MergeStrategy.CONTAINER)
        self.assertEqual(merged.matched_spans, (Span(0, 4), Span(7, 3)))

    def test_unknown_strategy(self):
        with self.assertRaises(TypeError):
            merge_matches(make_match(PatternMatchKind.EXACT), make_match(PatternMatchKind.EXACT), "simple")

    def test_merge_all(self):
        self.assertIsNone(merge_all([], MergeStrategy.SIMPLE))
        merged = merge_all([make_match(PatternMatchKind.EXACT),
                            make_match(PatternMatchKind.PREFIX),
                            make_match(PatternMatchKind.CAMEL_CASE_CONTIGUOUS)], MergeStrategy.SIMPLE)
        self.assertEqual(merged.kind, PatternMatchKind.CAMEL_CASE_CONTIGUOUS)


class TestMatcherOptions:
    """Test cases for MatcherOptions."""

    def test_defaults(self):
        options = MatcherOptions()
        assert options.locale is None
        assert not options.allow_fuzzy_matching
        assert not options.allow_simple_substring_matching
        assert not options.include_matched_spans
        assert options.container_split_characters is None
        assert not options.uses_containers

    def test_split_characters_normalized(self):
        options = MatcherOptions(container_split_characters="./.")
        assert options.container_split_characters == frozenset({".", "/"})
        assert options.uses_containers

    def test_empty_split_characters_still_select_containers(self):
        assert MatcherOptions(container_split_characters="").uses_containers

    def test_multi_character_separator_rejected(self):
        with pytest.raises(ConfigurationError):
            MatcherOptions(container_split_characters=["::"])

    def test_from_dict(self):
        options = MatcherOptions.from_dict({
            "locale": "tr_TR",
            "allow_fuzzy_matching": "yes",
            "include_matched_spans": True,
            "container_split_characters": [".", "/"],
        })
        assert options.locale == "tr_TR"
        assert options.allow_fuzzy_matching is True
        assert options.include_matched_spans is True
        assert options.container_split_characters == frozenset({".", "/"})

    def test_from_dict_none(self):
        assert MatcherOptions.from_dict(None) == MatcherOptions()

    @pytest.mark.parametrize("data", [
        {"unknown_option": True},
        {"allow_fuzzy_matching": "maybe"},
        {"allow_fuzzy_matching": 3},
        {"locale": 42},
        {"container_split_characters": 7},
        ["not", "a", "mapping"],
    ])
    def test_from_dict_invalid(self, data):
        with pytest.raises(ConfigurationError):
            MatcherOptions.from_dict(data)

    def test_to_dict_round_trip(self):
        options = MatcherOptions(locale="en_US", allow_simple_substring_matching=True,
                                 container_split_characters="/.")
        data = options.to_dict()
        assert data["container_split_characters"] == [".", "/"]
        assert MatcherOptions.from_dict(data) == options


if __name__ == '__main__':
    unittest.main()
