"""
Camel-case alignment of a pattern chunk against candidate humps.

Two modes are supported:

- mixed case: the chunk is broken into character humps (``CoFiPro`` ->
  ``Co/Fi/Pro``) and each one must be a prefix of a candidate hump, e.g.
  ``CodeFixProvider``.
- all lowercase: the chunk is treated as a run of initials (``cofipro``) that
  is spread over successive candidate humps, each hump taking a prefix.

Both report where the aligned humps sit in the candidate, which
:func:`get_camel_case_kind` turns into a match kind.
"""

from bisect import bisect_left, bisect_right
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from patmatch.core.interfaces import PatternMatchKind, Span
from patmatch.core.spans import normalize_spans
from patmatch.matching.chunks import TextChunk
from patmatch.matching.comparison import TextComparer


def get_camel_case_kind(from_start: bool, contiguous: bool, to_end: bool) -> PatternMatchKind:
    """
    Map the shape of a camel-case alignment to a match kind.

    | from_start | contiguous | to_end | kind                                 |
    |------------|------------|--------|--------------------------------------|
    | True       | True       | True   | CAMEL_CASE_EXACT                     |
    | True       | True       | False  | CAMEL_CASE_CONTIGUOUS_FROM_START     |
    | False      | True       | True   | CAMEL_CASE_CONTIGUOUS                |
    | False      | True       | False  | CAMEL_CASE_SUBSTRING                 |
    | True       | False      | any    | CAMEL_CASE_NON_CONTIGUOUS_FROM_START |
    | False      | False      | any    | CAMEL_CASE_NON_CONTIGUOUS            |

    Setting any flag never makes the kind worse.
    """
    if contiguous:
        if from_start:
            return PatternMatchKind.CAMEL_CASE_EXACT if to_end else PatternMatchKind.CAMEL_CASE_CONTIGUOUS_FROM_START
        return PatternMatchKind.CAMEL_CASE_CONTIGUOUS if to_end else PatternMatchKind.CAMEL_CASE_SUBSTRING

    if from_start:
        return PatternMatchKind.CAMEL_CASE_NON_CONTIGUOUS_FROM_START
    return PatternMatchKind.CAMEL_CASE_NON_CONTIGUOUS


@dataclass(frozen=True)
class CamelCaseResult:
    """Shape of a successful alignment and the candidate spans it covered."""
    from_start: bool
    contiguous: bool
    to_end: bool
    matched_spans: Tuple[Span, ...] = ()

    @property
    def kind(self) -> PatternMatchKind:
        return get_camel_case_kind(self.from_start, self.contiguous, self.to_end)

    def with_offset(self, offset: int) -> "CamelCaseResult":
        """Shift the matched spans by ``offset`` and normalize them."""
        shifted = [Span(span.start + offset, span.length) for span in self.matched_spans]
        return CamelCaseResult(self.from_start, self.contiguous, self.to_end, normalize_spans(shifted))


def part_starts_with(
    comparer: TextComparer,
    candidate: str,
    candidate_part: Span,
    pattern: str,
    pattern_part: Span,
    ignore_case: bool
) -> bool:
    """
    Check whether a part of the candidate starts with a part of the pattern.

    Args:
        comparer: Comparer used for the character comparison
        candidate: The candidate text
        candidate_part: The span within ``candidate``
        pattern: The pattern text
        pattern_part: The span within ``pattern``
        ignore_case: Whether the comparison ignores case

    Returns:
        True if the candidate part starts with the pattern part
    """
    if pattern_part.length > candidate_part.length:
        return False

    return comparer.region_equals(
        candidate, candidate_part.start, pattern, pattern_part.start, pattern_part.length, ignore_case
    )


def try_upper_case_camel_case_match(
    comparer: TextComparer,
    candidate: str,
    candidate_humps: Sequence[Span],
    chunk: TextChunk,
    ignore_case: bool,
    offset: int = 0
) -> Optional[CamelCaseResult]:
    """
    Align the chunk's character humps greedily against the candidate humps.

    More pattern humps than candidate humps is fine: ``SiUI`` against
    ``SimpleUI`` aligns ``Si`` with ``Simple`` and both ``U`` and ``I`` with
    ``UI``. A candidate hump keeps absorbing pattern humps only while the
    previous and the next pattern hump both start with an uppercase letter.

    Args:
        comparer: Comparer for the locale in use
        candidate: The candidate text
        candidate_humps: Word humps of the candidate
        chunk: The pattern chunk
        ignore_case: Whether hump prefixes are compared case-insensitively
        offset: Start of the candidate within the full string being matched

    Returns:
        The alignment result, or None when the pattern humps cannot all be placed.
    """
    pattern = chunk.text
    pattern_humps = chunk.hump_spans
    if not pattern_humps:
        return None

    current_candidate_hump = 0
    current_pattern_hump = 0
    first_match: Optional[int] = None
    last_match: Optional[int] = None
    contiguous: Optional[bool] = None
    matched_spans: List[Span] = []

    while True:
        if current_pattern_hump == len(pattern_humps):
            return CamelCaseResult(
                from_start=first_match == 0,
                contiguous=bool(contiguous),
                to_end=last_match == len(candidate_humps) - 1,
                matched_spans=tuple(matched_spans),
            ).with_offset(offset)

        if current_candidate_hump == len(candidate_humps):
            # Pattern humps left over with nothing to place them on
            return None

        candidate_hump = candidate_humps[current_candidate_hump]
        got_one_match_this_candidate = False

        while current_pattern_hump < len(pattern_humps):
            pattern_hump = pattern_humps[current_pattern_hump]

            if got_one_match_this_candidate:
                previous_hump = pattern_humps[current_pattern_hump - 1]
                if not pattern[previous_hump.start].isupper() or not pattern[pattern_hump.start].isupper():
                    break

            if not part_starts_with(comparer, candidate, candidate_hump, pattern, pattern_hump, ignore_case):
                break

            matched_spans.append(Span(candidate_hump.start, pattern_hump.length))
            got_one_match_this_candidate = True

            if first_match is None:
                first_match = current_candidate_hump
            last_match = current_candidate_hump

            # The first match is contiguous by definition
            if contiguous is None:
                contiguous = True

            candidate_hump = Span(candidate_hump.start + pattern_hump.length,
                                  candidate_hump.length - pattern_hump.length)
            current_pattern_hump += 1

        # Skipping a hump after matching has started breaks contiguity
        if not got_one_match_this_candidate and contiguous is not None:
            contiguous = False

        current_candidate_hump += 1


class AllLowerCamelCaseMatcher:
    """
    Matches an all-lowercase chunk as initials of successive candidate humps.

    ``cofipro`` matches ``CodeFixProvider`` as co/fi/pro. Every way of
    splitting the chunk over the humps is considered and the split with the
    best kind wins.

    The search fills three tables bottom-up, one row per pattern position and
    one bit per hump. A set bit in ``any`` means the rest of the pattern can be
    spread over the humps starting at that hump. ``contiguous`` also requires
    that no hump is skipped; ``to_end`` further requires the last hump.
    Only humps that can be reached with the characters before them, and that
    leave enough characters for the rest of the pattern, are visited.
    """

    def __init__(self, comparer: TextComparer, candidate: str, candidate_humps: Sequence[Span], chunk: TextChunk):
        self._humps = candidate_humps
        self._pattern = comparer.fold(chunk.text)
        self._hump_texts = [comparer.fold(span.text_of(candidate)) for span in candidate_humps]

    def try_match(self, offset: int = 0) -> Optional[CamelCaseResult]:
        """
        Search for the best alignment.

        Args:
            offset: Start of the candidate within the full string being matched

        Returns:
            The best alignment, or None if the chunk cannot be spread over the humps.
        """
        if not self._pattern or not self._humps:
            return None

        tables = self._fill_tables()
        if tables is None:
            return None

        any_rows, contiguous_rows, to_end_rows = tables
        best: Optional[Tuple[PatternMatchKind, int, bool, bool]] = None

        first_row = any_rows[0]
        for hump_index in range(len(self._humps)):
            bit = 1 << hump_index
            if not first_row & bit:
                continue

            contiguous = bool(contiguous_rows[0] & bit)
            to_end = bool(to_end_rows[0] & bit)
            kind = get_camel_case_kind(hump_index == 0, contiguous, to_end)
            if best is None or kind > best[0]:
                best = (kind, hump_index, contiguous, to_end)

        if best is None:
            return None

        _, hump_index, contiguous, to_end = best
        rows = to_end_rows if to_end else contiguous_rows if contiguous else any_rows
        spans = self._trace(rows, hump_index, contiguous, to_end)

        return CamelCaseResult(hump_index == 0, contiguous, to_end, spans).with_offset(offset)

    def _fill_tables(self) -> Optional[Tuple[List[int], List[int], List[int]]]:
        pattern = self._pattern
        texts = self._hump_texts
        length = len(pattern)
        last_hump = len(texts) - 1

        # Characters in the candidate humps before each hump
        hump_starts: List[int] = []
        humps_by_first_char: Dict[str, List[int]] = {}
        total = 0
        for hump_index, text in enumerate(texts):
            hump_starts.append(total)
            total += len(text)
            humps_by_first_char.setdefault(text[0], []).append(hump_index)

        if length > total:
            return None

        any_rows = [0] * length
        contiguous_rows = [0] * length
        to_end_rows = [0] * length

        for position in range(length - 1, -1, -1):
            reachable_from = bisect_left(hump_starts, position)
            reachable_to = bisect_right(hump_starts, total - length + position)
            starting_here = humps_by_first_char.get(pattern[position], [])
            first = bisect_left(starting_here, reachable_from)
            last = bisect_left(starting_here, reachable_to)

            for hump_index in starting_here[first:last]:
                text = texts[hump_index]
                next_bit = 1 << (hump_index + 1)
                found_any = found_contiguous = found_to_end = False

                for size in range(1, min(length - position, len(text)) + 1):
                    if text[size - 1] != pattern[position + size - 1]:
                        break

                    rest = position + size
                    if rest == length:
                        found_any = found_contiguous = True
                        found_to_end = found_to_end or hump_index == last_hump
                        continue

                    if any_rows[rest] >> (hump_index + 1):
                        found_any = True
                    if contiguous_rows[rest] & next_bit:
                        found_contiguous = True
                    if to_end_rows[rest] & next_bit:
                        found_to_end = True

                bit = 1 << hump_index
                if found_any:
                    any_rows[position] |= bit
                if found_contiguous:
                    contiguous_rows[position] |= bit
                if found_to_end:
                    to_end_rows[position] |= bit

        return any_rows, contiguous_rows, to_end_rows

    def _trace(self, rows: List[int], hump_index: int, contiguous: bool, to_end: bool) -> Tuple[Span, ...]:
        """Walk one alignment of the chosen shape, taking the shortest usable prefix of each hump."""
        last_hump = len(self._humps) - 1
        spans: List[Span] = []
        position = 0

        while True:
            size, next_hump = self._step(rows, position, hump_index, contiguous, to_end, last_hump)
            spans.append(Span(self._humps[hump_index].start, size))
            if next_hump is None:
                return tuple(spans)
            position += size
            hump_index = next_hump

    def _step(
        self,
        rows: List[int],
        position: int,
        hump_index: int,
        contiguous: bool,
        to_end: bool,
        last_hump: int
    ) -> Tuple[int, Optional[int]]:
        pattern = self._pattern
        length = len(pattern)
        text = self._hump_texts[hump_index]

        for size in range(1, min(length - position, len(text)) + 1):
            if text[size - 1] != pattern[position + size - 1]:
                break

            rest = position + size
            if rest == length:
                if not to_end or hump_index == last_hump:
                    return size, None
                continue

            following = rows[rest] >> (hump_index + 1)
            if contiguous:
                if following & 1:
                    return size, hump_index + 1
            elif following:
                return size, hump_index + 1 + (following & -following).bit_length() - 1

        raise RuntimeError(f"No camel-case step from pattern position {position} at hump {hump_index}")
