"""
Word breaking for identifiers.

Splits a string into humps, the word-like runs a user thinks of when typing
camel-case abbreviations. Two flavours are provided:

- word parts, used for candidates: uppercase runs stay together, so
  ``UIElement`` breaks into ``UI`` and ``Element``.
- character parts, used for pattern chunks: every uppercase letter starts a
  new part, so ``CFP`` breaks into ``C``, ``F`` and ``P``.

In both flavours a new hump also starts on a letter/digit transition, and any
character that is not a letter or digit separates humps without ever being
part of one.
"""

import unicodedata
from typing import List, Tuple

from patmatch.core.interfaces import Span


def is_punctuation(ch: str) -> bool:
    """Check whether ``ch`` is in one of the Unicode punctuation categories."""
    return unicodedata.category(ch).startswith('P')


def is_word_character(ch: str) -> bool:
    return ch.isalnum()


def _transition_from_lower_to_upper(text: str, index: int, word: bool) -> bool:
    last_is_upper = text[index - 1].isupper()
    current_is_upper = text[index].isupper()

    # Breaking on words, "AddMetadata" gives Add/Metadata and "AM" stays whole.
    # Breaking on characters, "AM" gives A/M.
    if word:
        return current_is_upper and not last_is_upper
    return current_is_upper


def _transition_from_upper_to_lower(text: str, index: int, word_start: int, word: bool) -> bool:
    if not word or index == word_start or index + 1 >= len(text):
        return False

    if not (text[index].isupper() and text[index + 1].islower()):
        return False

    # Only split when everything before is uppercase: "IFoo" -> I/Foo and
    # "UIFoo" -> UI/Foo, but "Foo" stays whole.
    return all(ch.isupper() for ch in text[word_start:index])


def _break_into_parts(text: str, word: bool) -> Tuple[Span, ...]:
    parts: List[Span] = []
    word_start = -1

    for index, ch in enumerate(text):
        if not is_word_character(ch):
            if word_start >= 0:
                parts.append(Span(word_start, index - word_start))
                word_start = -1
            continue

        if word_start < 0:
            word_start = index
            continue

        if (text[index - 1].isdigit() != ch.isdigit() or
                _transition_from_lower_to_upper(text, index, word) or
                _transition_from_upper_to_lower(text, index, word_start, word)):
            parts.append(Span(word_start, index - word_start))
            word_start = index

    if word_start >= 0:
        parts.append(Span(word_start, len(text) - word_start))

    return tuple(parts)


def break_words(text: str) -> Tuple[Span, ...]:
    """
    Break a string into word humps.

    Args:
        text: String to break

    Returns:
        Ordered, non-overlapping spans, one per hump. Empty for an empty string.

    Examples:
        ``XMLHttpRequest`` -> ``XML``, ``Http``, ``Request``
        ``get_value2`` -> ``get``, ``value``, ``2``
    """
    return _break_into_parts(text, word=True)


def break_characters(text: str) -> Tuple[Span, ...]:
    """
    Break a string into character humps, starting a new hump at every capital.

    Args:
        text: String to break

    Returns:
        Ordered, non-overlapping spans, one per hump.
    """
    return _break_into_parts(text, word=False)


def hump_texts(text: str, spans: Tuple[Span, ...]) -> List[str]:
    """Return the substrings of ``text`` covered by ``spans``."""
    return [span.text_of(text) for span in spans]
