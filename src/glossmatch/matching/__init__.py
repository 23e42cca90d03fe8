"""Fuzzy glossary matching engine."""

from .cache import MatchCache  # noqa: F401
from .config import DEFAULT_CONFIG, MatcherConfig  # noqa: F401
from .matcher import GlossaryMatcher  # noqa: F401
from .models import GlossaryEntry, MatchCandidate, SearchOrigin  # noqa: F401
from .normalize import are_words_similar, is_significant_phrase, normalize_word  # noqa: F401
from .phrases import generate_phrase_combinations  # noqa: F401
from .scorer import Scorer  # noqa: F401
from .similarity import levenshtein_distance, similarity  # noqa: F401

__all__ = [
    "DEFAULT_CONFIG",
    "GlossaryEntry",
    "GlossaryMatcher",
    "MatchCache",
    "MatchCandidate",
    "MatcherConfig",
    "Scorer",
    "SearchOrigin",
    "are_words_similar",
    "generate_phrase_combinations",
    "is_significant_phrase",
    "levenshtein_distance",
    "normalize_word",
    "similarity",
]
