"""
Case-insensitive comparison of unicode strings.

Folding is done one character at a time and never changes the length of the
string, so an index found in folded text is valid in the original text.
"""

from functools import lru_cache
from typing import Optional

# LATIN CAPITAL LETTER I WITH DOT ABOVE
_DOTTED_CAPITAL_I = 'İ'
# LATIN SMALL LETTER DOTLESS I
_DOTLESS_SMALL_I = 'ı'

_TURKIC_LANGUAGES = ('tr', 'az')


@lru_cache(maxsize=4096)
def _fold_char(ch: str) -> str:
    if 'A' <= ch <= 'Z':
        return chr(ord(ch) | 0x20)
    if ch < 'À':
        return ch
    if ch == _DOTTED_CAPITAL_I:
        return 'i'

    lowered = ch.lower()
    # Some characters lowercase to more than one code point; keep those as-is
    return lowered if len(lowered) == 1 else ch


def _is_turkic(locale: Optional[str]) -> bool:
    if not locale:
        return False
    language = locale.replace('-', '_').split('_', 1)[0].lower()
    return language in _TURKIC_LANGUAGES


class TextComparer:
    """
    Locale-bound string operations used by the matchers.

    ``locale`` is a language tag such as ``en_US`` or ``tr-TR``. Only the
    language part matters: Turkish and Azeri fold ``I`` to dotless ``ı``.
    """

    def __init__(self, locale: Optional[str] = None):
        self.locale = locale
        self._turkic = _is_turkic(locale)

    def fold_char(self, ch: str) -> str:
        if self._turkic and ch == 'I':
            return _DOTLESS_SMALL_I
        return _fold_char(ch)

    def fold(self, text: str) -> str:
        """Lowercase ``text`` without changing its length."""
        if self._turkic:
            return ''.join(self.fold_char(ch) for ch in text)
        if text.isascii():
            return text.lower()
        return ''.join(_fold_char(ch) for ch in text)

    def index_of(self, text: str, value: str, ignore_case: bool = False) -> int:
        """
        Find the first occurrence of ``value`` in ``text``.

        Returns:
            The index of the first occurrence, or -1 when there is none.
        """
        if ignore_case:
            return self.fold(text).find(self.fold(value))
        return text.find(value)

    def equals(self, first: str, second: str, ignore_case: bool = False) -> bool:
        if ignore_case:
            return len(first) == len(second) and self.fold(first) == self.fold(second)
        return first == second

    def is_prefix(self, text: str, prefix: str, ignore_case: bool = False) -> bool:
        if len(prefix) > len(text):
            return False
        return self.equals(text[:len(prefix)], prefix, ignore_case)

    def region_equals(
        self,
        text: str,
        text_start: int,
        other: str,
        other_start: int,
        length: int,
        ignore_case: bool = False
    ) -> bool:
        """Compare ``length`` characters of ``text`` and ``other`` at the given offsets."""
        return self.equals(
            text[text_start:text_start + length],
            other[other_start:other_start + length],
            ignore_case,
        )

    def chars_equal(self, first: str, second: str, ignore_case: bool = False) -> bool:
        if ignore_case:
            return self.fold_char(first) == self.fold_char(second)
        return first == second
