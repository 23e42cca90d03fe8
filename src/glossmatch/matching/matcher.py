from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from .cache import MatchCache
from .config import DEFAULT_CONFIG, MatcherConfig
from .models import GlossaryEntry, MatchCandidate, SearchOrigin
from .normalize import is_significant_phrase
from .scorer import Scorer

logger = logging.getLogger(__name__)


def _as_entry(item: GlossaryEntry | Mapping[str, Any]) -> GlossaryEntry:
    if isinstance(item, GlossaryEntry):
        return item
    if isinstance(item, Mapping):
        return GlossaryEntry.from_mapping(item)
    return GlossaryEntry(source="", target="")


def _as_origin(origin: SearchOrigin | str) -> SearchOrigin:
    try:
        return SearchOrigin(origin)
    except ValueError:
        logger.debug(f"Unknown search origin {origin!r}, treating as manual")
        return SearchOrigin.MANUAL


def _rank_key(candidate: MatchCandidate) -> tuple[bool, int, bool, float]:
    return (
        not candidate.is_exact,
        -candidate.phrase_word_count,
        not candidate.entry.category.strip(),
        -candidate.score,
    )


class GlossaryMatcher:
    """Ranks the entries of one in-memory glossary against a piece of context text."""

    def __init__(
        self,
        entries: Iterable[GlossaryEntry | Mapping[str, Any]] = (),
        *,
        config: MatcherConfig | None = None,
        cache: MatchCache | None = None,
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        self.cache = cache or MatchCache(self.config)
        self.scorer = Scorer(self.config, self.cache)
        self._entries: list[GlossaryEntry] = []
        self.load_glossary(entries)

    @property
    def entries(self) -> list[GlossaryEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def load_glossary(self, entries: Iterable[GlossaryEntry | Mapping[str, Any]]) -> None:
        """Replace the active glossary. String-keyed caches stay valid and are kept."""
        self._entries = [_as_entry(item) for item in entries]
        logger.info(f"Loaded glossary with {len(self._entries)} entries")

    def _candidate_phrases(self, text: str, origin: SearchOrigin) -> tuple[str, ...]:
        if origin is SearchOrigin.MANUAL and len(text.split()) <= self.config.manual_literal_max_words:
            # Short manual queries are taken literally; very short ones ("VR", "UI")
            # go to the whole-word path even though no word in them is significant.
            keep = is_significant_phrase(text, self.config) or len(text) <= self.config.short_phrase_max_chars
            return (text,) if keep else ()
        return self.cache.phrases(text)

    def _punctuation_matches(self, text: str) -> list[MatchCandidate]:
        marks = [mark for mark in self.config.punctuation_marks if mark in text]
        if not marks:
            return []
        forced: list[MatchCandidate] = []
        for entry in self._entries:
            for mark in marks:
                if mark in entry.source or mark in entry.target:
                    forced.append(MatchCandidate(entry=entry, score=1.0, matched_phrase=mark))
                    break
        return forced

    def _best_phrase(self, text: str, phrases: tuple[str, ...], entry: GlossaryEntry) -> tuple[float, str]:
        if self.scorer.is_exact(text, entry):
            return self.config.exact_match_score, text
        best_score, best_phrase = 0.0, ""
        for phrase in phrases:
            score = self.scorer.score(phrase, entry)
            # Strict comparison keeps the earlier, longer phrase on ties.
            if score > best_score:
                best_score, best_phrase = score, phrase
            if score >= self.config.exact_match_score:
                break
        return best_score, best_phrase

    def search(self, query: object, origin: SearchOrigin | str = SearchOrigin.MANUAL) -> list[MatchCandidate]:
        """
        Return glossary entries relevant to ``query``, best first.

        ``origin`` distinguishes a manual search box query from passive matching of
        the current context text; passive searches apply a stricter threshold.
        Never raises on malformed input: it simply returns fewer matches.
        """
        if not isinstance(query, str) or not self._entries:
            return []
        text = query.strip()
        if not text:
            return []
        origin = _as_origin(origin)
        if origin is SearchOrigin.MANUAL and len(text) < self.config.min_query_length:
            return []

        phrases = self._candidate_phrases(text, origin)
        logger.debug(f"Searching {len(self._entries)} entries with {len(phrases)} phrases ({origin.value})")

        matches: list[MatchCandidate] = []
        for entry in self._entries:
            score, phrase = self._best_phrase(text, phrases, entry)
            if not phrase:
                continue
            threshold = self.config.effective_threshold(
                auto=origin is SearchOrigin.AUTO,
                single_word_vs_phrase=len(phrase.split()) == 1 and entry.word_count > 1,
            )
            if score >= threshold:
                matches.append(MatchCandidate(entry=entry, score=score, matched_phrase=phrase))

        results: list[MatchCandidate] = []
        seen: set[tuple[str, str]] = set()
        # Scored matches keep their phrase; punctuation only adds entries not matched yet.
        for candidate in matches + self._punctuation_matches(text):
            if candidate.entry.key in seen:
                continue
            seen.add(candidate.entry.key)
            results.append(candidate)

        results.sort(key=_rank_key)
        results = results[: self.config.max_results]
        self.cache.flush_if_oversized()
        logger.info(f"Found {len(results)} glossary matches for {origin.value} search")
        return results
