"""Word normalisation and the significance filter used before scoring."""

from __future__ import annotations

from typing import Callable

from .config import DEFAULT_CONFIG, MatcherConfig
from .similarity import similarity

SimilarityFn = Callable[[str, str], float]


def normalize_word(word: str, config: MatcherConfig = DEFAULT_CONFIG) -> str:
    """
    Reduce a word to a comparable form.

    Lowercases, strips trailing punctuation, then removes at most one suffix:
    the first entry of ``config.suffixes`` that matches and still leaves
    ``config.min_stem_length`` characters. No recursive stripping.
    """
    lowered = word.strip().lower().rstrip(config.trailing_punctuation)
    for suffix in config.suffixes:
        if lowered.endswith(suffix) and len(lowered) - len(suffix) >= config.min_stem_length:
            return lowered[: -len(suffix)]
    return lowered


def is_significant_word(word: str, config: MatcherConfig = DEFAULT_CONFIG) -> bool:
    cleaned = word.strip().lower().rstrip(config.trailing_punctuation)
    if len(cleaned) <= config.min_significant_length:
        return False
    return cleaned not in config.stop_words


def is_significant_phrase(phrase: str, config: MatcherConfig = DEFAULT_CONFIG) -> bool:
    words = phrase.split()
    if not words:
        return False
    return any(is_significant_word(word, config) for word in words)


def are_words_similar(
    first: str,
    second: str,
    config: MatcherConfig = DEFAULT_CONFIG,
    similarity_fn: SimilarityFn = similarity,
) -> bool:
    """True when two words look like morphological variants of each other."""
    norm_first = normalize_word(first, config)
    norm_second = normalize_word(second, config)
    if not norm_first or not norm_second:
        return False
    if min(len(norm_first), len(norm_second)) < config.min_fuzzy_word_length:
        return norm_first == norm_second
    if abs(len(norm_first) - len(norm_second)) > config.max_length_difference:
        return False
    return similarity_fn(norm_first, norm_second) >= config.word_similarity_threshold
