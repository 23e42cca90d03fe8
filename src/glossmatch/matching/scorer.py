from __future__ import annotations

import re
from typing import Sequence

from .cache import MatchCache
from .config import DEFAULT_CONFIG, MatcherConfig
from .models import GlossaryEntry
from .normalize import are_words_similar, normalize_word


def _clamp(value: float) -> float:
    return min(1.0, max(0.0, value))


class Scorer:
    """
    Scores one candidate phrase against one glossary entry.

    Rules, in order:

    * exact: the phrase equals the entry source (case-insensitive) -> ``exact_match_score``
    * short phrases (one word, or very few characters): whole-word containment in
      source/target, or a morphological variant of one of their words
    * longer phrases: position-aware word overlap blended with edit similarity,
      raised by substring containment, then penalised when the word counts of the
      phrase and the entry source differ
    """

    def __init__(self, config: MatcherConfig = DEFAULT_CONFIG, cache: MatchCache | None = None) -> None:
        self.config = config
        self.cache = cache or MatchCache(config)

    def _clean(self, text: str) -> str:
        return text.strip().lower().rstrip(self.config.trailing_punctuation)

    def is_exact(self, phrase: str, entry: GlossaryEntry) -> bool:
        cleaned = self._clean(phrase)
        return bool(cleaned) and cleaned == self._clean(entry.source)

    def score(self, phrase: str, entry: GlossaryEntry) -> float:
        cleaned = self._clean(phrase)
        if not cleaned:
            return 0.0
        if cleaned == self._clean(entry.source):
            return self.config.exact_match_score

        words = cleaned.split()
        if len(words) == 1 or len(cleaned) <= self.config.short_phrase_max_chars:
            return _clamp(self._score_short(cleaned, words, entry))
        return _clamp(self._score_phrase(cleaned, words, entry))

    # -- short / single-word phrases -------------------------------------------------

    def _score_short(self, phrase: str, words: Sequence[str], entry: GlossaryEntry) -> float:
        best = 0.0
        pattern = re.compile(r"\b" + re.escape(phrase) + r"\b", re.IGNORECASE)
        if pattern.search(entry.source) or pattern.search(entry.target):
            best = self.config.whole_word_score

        variation = self._best_variation(words, entry.source.split() + entry.target.split())
        if variation is not None:
            boosted = self.config.word_variation_base + (
                variation - self.config.word_similarity_threshold
            ) * self.config.word_variation_boost
            best = max(best, min(self.config.word_variation_max, boosted))
        return best

    def _best_variation(self, words: Sequence[str], entry_words: Sequence[str]) -> float | None:
        best: float | None = None
        for word in words:
            for other in entry_words:
                if not are_words_similar(word, other, self.config, self.cache.similarity):
                    continue
                score = self.cache.similarity(
                    normalize_word(word, self.config), normalize_word(other, self.config)
                )
                if best is None or score > best:
                    best = score
        return best

    # -- multi-word phrases ----------------------------------------------------------

    def overlap(self, words: Sequence[str], target_words: Sequence[str]) -> float:
        """
        Position-aware share of ``words`` found in ``target_words``.

        Each word found earns a match plus a position bonus that decays with the
        distance between its index in the phrase and its index in the target.
        """
        if not words or not target_words:
            return 0.0
        normalized_target = [normalize_word(w, self.config) for w in target_words]
        matches = 0
        position_total = 0.0
        for index, word in enumerate(words):
            normalized = normalize_word(word, self.config)
            if normalized not in normalized_target:
                continue
            matches += 1
            distance = abs(index - normalized_target.index(normalized))
            position_total += 1.0 / (1.0 + distance * self.config.position_decay)
        if not matches:
            return 0.0
        match_ratio = matches / len(words)
        avg_position = position_total / matches
        return _clamp(match_ratio * self.config.overlap_weight + avg_position * self.config.position_weight)

    def _score_against(self, phrase: str, words: Sequence[str], text: str) -> float:
        lowered = text.strip().lower()
        if not lowered:
            return 0.0
        score = 0.0
        overlap = self.overlap(words, lowered.split())
        if overlap > self.config.min_overlap:
            score = (
                self.cache.similarity(phrase, lowered) * self.config.edit_blend_weight
                + overlap * self.config.overlap_blend_weight
            )
        if phrase == lowered or phrase in lowered:
            partial = self.config.partial_match_cap * len(phrase) / len(lowered)
            score = max(score, min(partial, self.config.partial_match_cap))
        return score

    def _score_phrase(self, phrase: str, words: Sequence[str], entry: GlossaryEntry) -> float:
        score = max(
            self._score_against(phrase, words, entry.source),
            self._score_against(phrase, words, entry.target),
        )
        source_words = entry.word_count
        if source_words and source_words != len(words):
            diff = abs(source_words - len(words))
            score *= max(self.config.length_penalty_floor, self.config.length_penalty_decay**diff)
        return score
