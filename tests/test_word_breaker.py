"""
Unit tests for word breaking.
"""

import unittest

from patmatch.core.interfaces import Span
from patmatch.matching.word_breaker import (
    break_characters,
    break_words,
    hump_texts,
    is_punctuation,
    is_word_character
)


class TestBreakWords(unittest.TestCase):
    """Test cases for break_words."""

    def assertHumps(self, text, expected):
        self.assertEqual(hump_texts(text, break_words(text)), expected)

    def test_empty_string(self):
        self.assertEqual(break_words(""), ())

    def test_simple_camel_case(self):
        self.assertHumps("CodeFixProvider", ["Code", "Fix", "Provider"])
        self.assertHumps("getValue", ["get", "Value"])

    def test_uppercase_run_followed_by_word(self):
        """An uppercase run stays whole and gives up its last letter to the next word."""
        self.assertHumps("XMLHttpRequest", ["XML", "Http", "Request"])
        self.assertHumps("UIElement", ["UI", "Element"])
        self.assertHumps("IFoo", ["I", "Foo"])

    def test_all_uppercase_stays_whole(self):
        self.assertHumps("AM", ["AM"])
        self.assertHumps("CFP", ["CFP"])

    def test_digits_start_new_hump(self):
        self.assertHumps("get_value2", ["get", "value", "2"])
        self.assertHumps("Vector3D", ["Vector", "3", "D"])

    def test_separators_are_never_part_of_a_hump(self):
        self.assertHumps("_myButton", ["my", "Button"])
        self.assertHumps("foo.bar baz", ["foo", "bar", "baz"])
        self.assertEqual(break_words("..."), ())

    def test_spans_are_ordered_and_disjoint(self):
        spans = break_words("System.Collections.Generic.ListOfThings")
        for first, second in zip(spans, spans[1:]):
            self.assertLessEqual(first.end, second.start)

    def test_spans_point_into_text(self):
        self.assertEqual(break_words("getValue"), (Span(0, 3), Span(3, 5)))


class TestBreakCharacters(unittest.TestCase):
    """Test cases for break_characters."""

    def test_every_capital_starts_a_hump(self):
        self.assertEqual(hump_texts("CFP", break_characters("CFP")), ["C", "F", "P"])
        self.assertEqual(hump_texts("AM", break_characters("AM")), ["A", "M"])

    def test_mixed_case_pattern(self):
        self.assertEqual(hump_texts("CoFiPro", break_characters("CoFiPro")), ["Co", "Fi", "Pro"])
        self.assertEqual(hump_texts("SiUI", break_characters("SiUI")), ["Si", "U", "I"])

    def test_lowercase_is_one_hump(self):
        self.assertEqual(break_characters("cofipro"), (Span(0, 7),))


class TestCharacterClasses(unittest.TestCase):
    """Test cases for the character predicates."""

    def test_is_punctuation(self):
        for ch in "_.-@!?(":
            self.assertTrue(is_punctuation(ch), ch)
        for ch in "aZ3 ":
            self.assertFalse(is_punctuation(ch), ch)

    def test_is_word_character(self):
        self.assertTrue(is_word_character("a"))
        self.assertTrue(is_word_character("7"))
        self.assertTrue(is_word_character("é"))
        self.assertFalse(is_word_character("_"))
        self.assertFalse(is_word_character(" "))


if __name__ == '__main__':
    unittest.main()
