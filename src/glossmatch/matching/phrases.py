from __future__ import annotations

from .config import DEFAULT_CONFIG, MatcherConfig
from .normalize import is_significant_phrase

# Longest windows first, single words are emitted last.
WINDOW_SIZES = (3, 2)


def _windows(words: list[str], size: int) -> list[str]:
    return [" ".join(words[i : i + size]) for i in range(len(words) - size + 1)]


def generate_phrase_combinations(text: str, config: MatcherConfig = DEFAULT_CONFIG) -> tuple[str, ...]:
    """
    Split ``text`` into candidate phrases in priority order.

    The full text comes first, then every 3-word window, every 2-word window and
    finally each word. Phrases that fail the significance filter are dropped;
    duplicates across windows are kept.
    """
    words = text.split()
    if not words:
        return ()

    candidates = [" ".join(words)]
    for size in WINDOW_SIZES:
        candidates.extend(_windows(words, size))
    candidates.extend(words)
    return tuple(phrase for phrase in candidates if is_significant_phrase(phrase, config))
