"""
Tests for span normalization and the word-break cache.
"""

import threading
import unittest

from patmatch.core.cache import CacheStats, WordBreakCache
from patmatch.core.interfaces import Span
from patmatch.core.spans import normalize_spans, union_spans
from patmatch.matching.word_breaker import break_words


class TestSpan(unittest.TestCase):
    """Test cases for Span."""

    def test_end_and_text(self):
        span = Span(4, 3)
        self.assertEqual(span.end, 7)
        self.assertEqual(span.text_of("CodeFixProvider"), "Fix")
        self.assertFalse(span.is_empty)
        self.assertTrue(Span(2, 0).is_empty)

    def test_negative_values_rejected(self):
        with self.assertRaises(ValueError):
            Span(-1, 2)
        with self.assertRaises(ValueError):
            Span(0, -2)

    def test_overlaps_with(self):
        self.assertTrue(Span(0, 4).overlaps_with(Span(3, 2)))
        self.assertFalse(Span(0, 3).overlaps_with(Span(3, 2)))

    def test_ordering(self):
        self.assertLess(Span(0, 5), Span(1, 1))
        self.assertLess(Span(1, 1), Span(1, 2))


class TestNormalizeSpans(unittest.TestCase):
    """Test cases for normalize_spans and union_spans."""

    def test_sorts_and_coalesces(self):
        spans = [Span(5, 2), Span(0, 3), Span(3, 1)]
        self.assertEqual(normalize_spans(spans), (Span(0, 4), Span(5, 2)))

    def test_overlapping_spans_merge(self):
        self.assertEqual(normalize_spans([Span(0, 4), Span(2, 5)]), (Span(0, 7),))

    def test_contained_span_absorbed(self):
        self.assertEqual(normalize_spans([Span(0, 10), Span(2, 3)]), (Span(0, 10),))

    def test_empty_spans_dropped(self):
        self.assertEqual(normalize_spans([Span(3, 0)]), ())
        self.assertEqual(normalize_spans([]), ())

    def test_union(self):
        self.assertEqual(
            union_spans((Span(7, 3),), (Span(0, 2), Span(4, 2))),
            (Span(0, 2), Span(4, 2), Span(7, 3))
        )


class TestWordBreakCache(unittest.TestCase):
    """Test cases for WordBreakCache."""

    def setUp(self):
        self.cache = WordBreakCache(break_words)

    def test_miss_then_hit(self):
        first = self.cache.get("FooBar")
        second = self.cache.get("FooBar")

        self.assertEqual(first, (Span(0, 3), Span(3, 3)))
        self.assertIs(first, second)

        stats = self.cache.get_stats()
        self.assertEqual(stats.misses, 1)
        self.assertEqual(stats.hits, 1)
        self.assertEqual(stats.size, 1)
        self.assertEqual(stats.hit_rate, 0.5)

    def test_contains_and_len(self):
        self.cache.get("Alpha")
        self.cache.get("Beta")
        self.assertIn("Alpha", self.cache)
        self.assertNotIn("Gamma", self.cache)
        self.assertEqual(len(self.cache), 2)

    def test_clear(self):
        self.cache.get("Alpha")
        self.cache.get("Beta")
        self.assertEqual(self.cache.clear(), 2)
        self.assertEqual(len(self.cache), 0)

    def test_close_refuses_new_entries(self):
        self.cache.get("Alpha")
        self.assertEqual(self.cache.close(), 1)
        self.assertTrue(self.cache.is_closed)

        self.assertEqual(self.cache.get("FooBar"), (Span(0, 3), Span(3, 3)))
        self.assertEqual(len(self.cache), 0)

    def test_close_during_lookup_drops_result(self):
        def closing_break(text):
            cache.close()
            return break_words(text)

        cache = WordBreakCache(closing_break)
        self.assertEqual(cache.get("FooBar"), (Span(0, 3), Span(3, 3)))
        self.assertNotIn("FooBar", cache)

    def test_break_function_called_once_per_key(self):
        calls = []

        def counting_break(text):
            calls.append(text)
            return break_words(text)

        cache = WordBreakCache(counting_break)
        for _ in range(3):
            cache.get("CodeFix")
        self.assertEqual(calls, ["CodeFix"])

    def test_concurrent_access(self):
        words = [f"SymbolName{i}" for i in range(50)]
        errors = []

        def worker():
            try:
                for word in words:
                    self.assertEqual(self.cache.get(word), break_words(word))
            except AssertionError as e:
                errors.append(e)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(errors, [])
        self.assertEqual(len(self.cache), len(words))

    def test_empty_stats(self):
        self.assertEqual(CacheStats().hit_rate, 0.0)


if __name__ == '__main__':
    unittest.main()
