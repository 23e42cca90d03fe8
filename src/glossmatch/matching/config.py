from __future__ import annotations

from dataclasses import dataclass, fields, replace

DEFAULT_STOP_WORDS: frozenset[str] = frozenset(
    {
        # articles / determiners
        "a", "an", "the", "this", "that", "these", "those", "some", "any", "each", "every",
        # conjunctions
        "and", "or", "but", "nor", "so", "yet", "if", "then", "than", "because", "while",
        "although", "though", "unless", "until", "whether",
        # prepositions
        "of", "in", "on", "at", "to", "for", "from", "by", "with", "about", "into", "onto",
        "over", "under", "upon", "after", "before", "between", "through", "within",
        "without", "during", "against", "among", "around", "toward", "towards",
        # auxiliaries / pronouns
        "is", "am", "are", "was", "were", "be", "been", "being", "do", "does", "did",
        "have", "has", "had", "will", "would", "shall", "should", "can", "could", "may",
        "might", "must", "it", "its", "you", "your", "yours", "they", "them", "their",
        "there", "here", "what", "when", "where", "which", "who", "whom", "whose",
        "also", "just", "not", "very",
    }
)

DEFAULT_SUFFIXES: tuple[str, ...] = ("'s", "ing", "es", "ed", "s")

DEFAULT_TRAILING_PUNCTUATION = ".,;:!?\"')]}…"

# Marks that carry meaning in UI strings (ellipses, quotes, brackets).
DEFAULT_PUNCTUATION_MARKS: tuple[str, ...] = (
    "...", "…", "\"", "“", "”", "«", "»", "「", "」", "『", "』", "【", "】",
)


@dataclass(slots=True, frozen=True)
class MatcherConfig:
    """Every threshold, weight and word list used by the matching engine."""

    # thresholds
    base_fuzzy_threshold: float = 0.7
    base_threshold_increase_multiplier: float = 1.15
    auto_search_dampening: float = 1.05
    single_word_entry_multiplier: float = 1.05

    # fixed scores
    exact_match_score: float = 1.0
    whole_word_score: float = 0.9
    word_variation_base: float = 0.85
    word_variation_boost: float = 0.2
    word_variation_max: float = 0.9
    partial_match_cap: float = 0.95

    # multi-word overlap
    overlap_weight: float = 0.7
    position_weight: float = 0.3
    position_decay: float = 0.5
    min_overlap: float = 0.5
    edit_blend_weight: float = 0.4
    overlap_blend_weight: float = 0.6
    length_penalty_decay: float = 0.9
    length_penalty_floor: float = 0.6

    # words and phrases
    short_phrase_max_chars: int = 3
    min_significant_length: int = 3
    min_fuzzy_word_length: int = 3
    min_stem_length: int = 3
    max_length_difference: int = 2
    word_similarity_threshold: float = 0.75
    stop_words: frozenset[str] = DEFAULT_STOP_WORDS
    suffixes: tuple[str, ...] = DEFAULT_SUFFIXES
    trailing_punctuation: str = DEFAULT_TRAILING_PUNCTUATION
    punctuation_marks: tuple[str, ...] = DEFAULT_PUNCTUATION_MARKS

    # search
    min_query_length: int = 2
    manual_literal_max_words: int = 3
    max_results: int = 50

    # caches
    phrase_cache_limit: int = 500
    similarity_cache_limit: int = 20_000

    def with_overrides(self, **overrides: object) -> "MatcherConfig":
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise TypeError(f"Unknown matcher settings: {sorted(unknown)}")
        return replace(self, **overrides)

    def effective_threshold(self, *, auto: bool, single_word_vs_phrase: bool) -> float:
        threshold = self.base_fuzzy_threshold * self.base_threshold_increase_multiplier
        if auto:
            threshold *= self.auto_search_dampening
        if single_word_vs_phrase:
            threshold *= self.single_word_entry_multiplier
        return threshold


DEFAULT_CONFIG = MatcherConfig()
