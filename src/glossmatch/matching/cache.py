from __future__ import annotations

import logging
import threading

from .config import DEFAULT_CONFIG, MatcherConfig
from .phrases import generate_phrase_combinations
from .similarity import similarity

logger = logging.getLogger(__name__)


class MatchCache:
    """
    Memoises phrase decompositions and pairwise similarity scores.

    Both maps are pure memoisation keyed by strings, so they survive glossary
    reloads. When either grows past its configured cap the whole cache is
    flushed instead of evicting individual keys.
    """

    def __init__(self, config: MatcherConfig = DEFAULT_CONFIG) -> None:
        self.config = config
        self._phrases: dict[str, tuple[str, ...]] = {}
        self._similarity: dict[tuple[str, str], float] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0
        self.flushes = 0

    def phrases(self, text: str) -> tuple[str, ...]:
        with self._lock:
            cached = self._phrases.get(text)
            if cached is not None:
                self.hits += 1
                return cached
            self.misses += 1
            result = generate_phrase_combinations(text, self.config)
            self._phrases[text] = result
            return result

    def similarity(self, a: str, b: str) -> float:
        key = (a, b) if a <= b else (b, a)
        with self._lock:
            cached = self._similarity.get(key)
            if cached is not None:
                self.hits += 1
                return cached
            self.misses += 1
            score = similarity(a, b)
            self._similarity[key] = score
            return score

    def flush_if_oversized(self) -> bool:
        with self._lock:
            oversized = (
                len(self._phrases) > self.config.phrase_cache_limit
                or len(self._similarity) > self.config.similarity_cache_limit
            )
            if not oversized:
                return False
            logger.info(
                f"Flushing match cache (phrases={len(self._phrases)}, similarity={len(self._similarity)})"
            )
            self._phrases.clear()
            self._similarity.clear()
            self.flushes += 1
            return True

    def clear(self) -> None:
        with self._lock:
            self._phrases.clear()
            self._similarity.clear()

    def stats(self) -> dict[str, int]:
        with self._lock:
            return {
                "phrases": len(self._phrases),
                "similarity": len(self._similarity),
                "hits": self.hits,
                "misses": self.misses,
                "flushes": self.flushes,
            }
