"""
Per-matcher caching of word breaks.

Candidates recur constantly while a user types, so each matcher keeps the
word breaks of every candidate it has seen. The cache is owned by exactly one
matcher, guarded by a single lock, and released when the matcher is disposed.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, Tuple

from patmatch.core.interfaces import Span

logger = logging.getLogger(__name__)

WordBreaks = Tuple[Span, ...]


@dataclass
class CacheStats:
    """Cache statistics."""
    hits: int = 0
    misses: int = 0
    size: int = 0

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate."""
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0


class WordBreakCache:
    """
    Thread-safe map from a string to its word breaks.

    The lock only covers the lookup and the insert. The break function is
    pure, so two threads racing on the same new key compute the same value.
    """

    def __init__(self, break_function: Callable[[str], WordBreaks]):
        """
        Initialize the cache.

        Args:
            break_function: Function computing the word breaks of a string
        """
        self._break_function = break_function
        self._entries: Dict[str, WordBreaks] = {}
        self._lock = threading.Lock()
        self._stats = CacheStats()
        self._closed = False

    @property
    def is_closed(self) -> bool:
        return self._closed

    def get(self, text: str) -> WordBreaks:
        """
        Get the word breaks of ``text``, computing and storing them on a miss.

        Once the cache is closed the breaks are still computed but no longer
        stored.

        Args:
            text: String to break

        Returns:
            The word breaks of the string
        """
        with self._lock:
            breaks = self._entries.get(text)
            if breaks is not None:
                self._stats.hits += 1
                return breaks
            self._stats.misses += 1

        breaks = self._break_function(text)

        with self._lock:
            if self._closed:
                return breaks
            return self._entries.setdefault(text, breaks)

    def clear(self) -> int:
        """
        Release every entry.

        Returns:
            Number of entries released
        """
        with self._lock:
            released = len(self._entries)
            self._entries.clear()
        logger.debug(f"Released {released} cached word break entries")
        return released

    def close(self) -> int:
        """
        Release every entry and refuse further inserts.

        A lookup that was already computing when the cache closed does not
        put its result back.

        Returns:
            Number of entries released
        """
        with self._lock:
            self._closed = True
            released = len(self._entries)
            self._entries.clear()
        logger.debug(f"Closed word break cache, released {released} entries")
        return released

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, text: str) -> bool:
        with self._lock:
            return text in self._entries

    def get_stats(self) -> CacheStats:
        """Get a snapshot of the cache statistics."""
        with self._lock:
            return CacheStats(
                hits=self._stats.hits,
                misses=self._stats.misses,
                size=len(self._entries),
            )
