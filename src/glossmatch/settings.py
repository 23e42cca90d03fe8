from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

from .matching import MatcherConfig

load_dotenv()


@dataclass(slots=True)
class Settings:
    glossary_path: Path | None
    log_level: str
    auto_search_interval: float
    fuzzy_threshold: float | None
    max_results: int | None

    def matcher_config(self) -> MatcherConfig:
        overrides: dict[str, object] = {}
        if self.fuzzy_threshold is not None:
            overrides["base_fuzzy_threshold"] = self.fuzzy_threshold
        if self.max_results is not None:
            overrides["max_results"] = self.max_results
        return MatcherConfig().with_overrides(**overrides)


def _optional_float(name: str) -> float | None:
    raw = os.getenv(name, "").strip()
    return float(raw) if raw else None


def _optional_int(name: str) -> int | None:
    raw = os.getenv(name, "").strip()
    return int(raw) if raw else None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    glossary_raw = os.getenv("GLOSSARY_PATH", "").strip()
    return Settings(
        glossary_path=Path(glossary_raw).expanduser() if glossary_raw else None,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        auto_search_interval=float(os.getenv("AUTO_SEARCH_INTERVAL", "1.5")),
        fuzzy_threshold=_optional_float("MATCH_FUZZY_THRESHOLD"),
        max_results=_optional_int("MATCH_MAX_RESULTS"),
    )
