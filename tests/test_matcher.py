from __future__ import annotations

from pathlib import Path

import pytest

from glossmatch.ingest import load_glossary_csv
from glossmatch.matching import GlossaryEntry, GlossaryMatcher, MatcherConfig, SearchOrigin

FIXTURES = Path(__file__).parent / "fixtures"

APR = GlossaryEntry(
    source="Avatar Performance Rank",
    target="อันดับประสิทธิภาพอวตาร",
    category="Avatar Performance Rank",
)


@pytest.fixture
def apr_matcher():
    return GlossaryMatcher([APR])


@pytest.mark.parametrize("origin", [SearchOrigin.MANUAL, SearchOrigin.AUTO])
def test_exact_phrase_returns_single_perfect_match(apr_matcher, origin):
    results = apr_matcher.search("avatar performance rank", origin)
    assert len(results) == 1
    assert results[0].entry == APR
    assert results[0].score == 1.0


@pytest.mark.parametrize("origin", [SearchOrigin.MANUAL, SearchOrigin.AUTO])
def test_single_word_against_long_entry_is_not_perfect(apr_matcher, origin):
    results = apr_matcher.search("avatar", origin)
    assert len(results) == 1
    assert 0.85 <= results[0].score < 1.0
    assert results[0].matched_phrase == "avatar"


def test_duplicate_source_and_category_are_deduped():
    matcher = GlossaryMatcher(
        [
            GlossaryEntry(source="Settings", target="A", category="Menu"),
            GlossaryEntry(source="Settings", target="B", category="Menu"),
            GlossaryEntry(source="Settings", target="C", category="Options"),
        ]
    )
    results = matcher.search("settings")
    keys = [match.entry.key for match in results]
    assert len(keys) == len(set(keys)) == 2
    targets = {match.entry.target for match in results}
    assert targets == {"A", "C"}


@pytest.mark.parametrize("origin", [SearchOrigin.MANUAL, SearchOrigin.AUTO])
def test_stop_word_query_has_no_matches(origin):
    matcher = load_fixture_matcher()
    assert matcher.search("the of and", origin) == []


@pytest.mark.parametrize("query", ["", "   ", None, 42, "a"])
def test_empty_or_invalid_queries(apr_matcher, query):
    assert apr_matcher.search(query) == []


def test_empty_glossary_returns_nothing():
    assert GlossaryMatcher().search("avatar performance rank") == []


def test_search_is_idempotent():
    matcher = load_fixture_matcher()
    text = "Open the avatar performance rank panel before loading the world"
    assert matcher.search(text, SearchOrigin.AUTO) == matcher.search(text, SearchOrigin.AUTO)


def test_results_stay_correct_after_cache_flush():
    matcher = GlossaryMatcher(load_glossary_csv(FIXTURES / "glossary_sample.csv"), config=MatcherConfig(phrase_cache_limit=1))
    text = "Open the avatar performance rank panel"
    before = matcher.search(text, SearchOrigin.AUTO)
    matcher.search("Send a friend request to someone", SearchOrigin.AUTO)
    matcher.search("Change your world settings here", SearchOrigin.AUTO)
    assert matcher.cache.flushes >= 1
    assert matcher.search(text, SearchOrigin.AUTO) == before


def test_ranking_prefers_longer_matched_phrases():
    matcher = GlossaryMatcher(
        [
            GlossaryEntry(source="World", target="เวิลด์"),
            GlossaryEntry(source="Avatar", target="อวตาร"),
            APR,
            GlossaryEntry(source="Friend Request", target="คำขอเป็นเพื่อน", category="Social"),
        ]
    )
    results = matcher.search("Open the avatar performance rank panel", SearchOrigin.AUTO)
    assert [match.entry.source for match in results] == ["Avatar Performance Rank", "Avatar"]
    assert all(match.score == 1.0 for match in results)
    assert results[0].matched_phrase == "avatar performance rank"


def test_ranking_prefers_categorised_entries():
    matcher = GlossaryMatcher(
        [
            GlossaryEntry(source="Game Settings", target="A"),
            GlossaryEntry(source="Settings Page", target="B", category="UI"),
        ]
    )
    results = matcher.search("settings")
    assert [match.entry.target for match in results] == ["B", "A"]


def test_punctuation_forces_perfect_match():
    matcher = load_fixture_matcher()
    quoted = matcher.search('Say "Hi"')
    forced = [match for match in quoted if match.entry.source == 'Say "Hello"']
    assert len(forced) == 1
    assert forced[0].score == 1.0
    assert forced[0].matched_phrase == '"'


def test_punctuation_does_not_replace_scored_match():
    matcher = load_fixture_matcher()
    results = matcher.search("wait...")
    loading = [match for match in results if match.entry.source == "Loading, please wait..."]
    assert len(loading) == 1
    assert loading[0].matched_phrase == "wait..."

    exact = matcher.search("Loading, please wait...")
    assert exact[0].entry.source == "Loading, please wait..."
    assert exact[0].score == 1.0
    assert exact[0].matched_phrase == "Loading, please wait..."


def test_very_short_manual_query_matches_whole_word():
    matcher = GlossaryMatcher([GlossaryEntry(source="VR Mode", target="โหมด VR")])
    results = matcher.search("VR", SearchOrigin.MANUAL)
    assert len(results) == 1
    assert results[0].score == pytest.approx(0.9)
    assert results[0].matched_phrase == "VR"


def test_results_are_truncated():
    entries = [GlossaryEntry(source=f"Avatar {i}", target=str(i)) for i in range(10)]
    matcher = GlossaryMatcher(entries, config=MatcherConfig(max_results=3))
    assert len(matcher.search("avatar")) == 3


def test_load_glossary_replaces_entries(apr_matcher):
    apr_matcher.load_glossary([{"source": "World", "target": None}])
    assert len(apr_matcher) == 1
    assert apr_matcher.search("avatar performance rank") == []
    results = apr_matcher.search("world")
    assert results[0].entry.target == ""
    assert results[0].score == 1.0


def test_origin_accepts_strings(apr_matcher):
    assert apr_matcher.search("avatar", "auto") == apr_matcher.search("avatar", SearchOrigin.AUTO)
    assert apr_matcher.search("avatar", "bogus") == apr_matcher.search("avatar", SearchOrigin.MANUAL)


def test_manual_short_queries_are_literal(apr_matcher):
    # "rank avatar" is not decomposed, so the single words never get scored alone
    results = apr_matcher.search("rank avatar")
    assert all(match.matched_phrase == "rank avatar" for match in results)


def test_auto_search_is_stricter_than_manual():
    config = MatcherConfig(auto_search_dampening=1.3)
    assert config.effective_threshold(auto=True, single_word_vs_phrase=False) > config.effective_threshold(
        auto=False, single_word_vs_phrase=False
    )
    matcher = GlossaryMatcher([APR], config=config)
    assert len(matcher.search("avatar performance")) == 1
    assert matcher.search("avatar performance", SearchOrigin.AUTO) == []


def test_invariants_hold_across_queries():
    matcher = load_fixture_matcher()
    queries = [
        "Open the avatar performance rank panel",
        "Loading, please wait...",
        "Send a friend request to block user",
        "world settings",
    ]
    for query in queries:
        for origin in SearchOrigin:
            results = matcher.search(query, origin)
            keys = [match.entry.key for match in results]
            assert len(keys) == len(set(keys))
            for match in results:
                assert 0.0 <= match.score <= 1.0
                assert match.matched_phrase.lower() in query.lower()


def load_fixture_matcher() -> GlossaryMatcher:
    return GlossaryMatcher(load_glossary_csv(FIXTURES / "glossary_sample.csv"))
