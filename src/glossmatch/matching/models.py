from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping


def coerce_text(value: object) -> str:
    """Return ``value`` if it is a string, otherwise an empty string."""
    return value if isinstance(value, str) else ""


class SearchOrigin(str, Enum):
    MANUAL = "manual"
    AUTO = "auto"


@dataclass(slots=True, frozen=True)
class GlossaryEntry:
    source: str
    target: str
    note: str = ""
    category: str = ""

    def __post_init__(self) -> None:
        # Entries are built from loosely typed CSV/JSON rows; keep every field a str.
        for name in ("source", "target", "note", "category"):
            object.__setattr__(self, name, coerce_text(getattr(self, name)))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "GlossaryEntry":
        return cls(
            source=data.get("source", ""),
            target=data.get("target", ""),
            note=data.get("note", ""),
            category=data.get("category", ""),
        )

    @property
    def key(self) -> tuple[str, str]:
        return (self.source, self.category)

    @property
    def word_count(self) -> int:
        return len(self.source.split())

    def to_dict(self) -> dict[str, str]:
        return {
            "source": self.source,
            "target": self.target,
            "note": self.note,
            "category": self.category,
        }


@dataclass(slots=True, frozen=True)
class MatchCandidate:
    entry: GlossaryEntry
    score: float
    matched_phrase: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "score", min(1.0, max(0.0, float(self.score))))

    @property
    def is_exact(self) -> bool:
        return self.score == 1.0

    @property
    def phrase_word_count(self) -> int:
        return len(self.matched_phrase.split())

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = self.entry.to_dict()
        payload["score"] = round(self.score, 4)
        payload["matched_phrase"] = self.matched_phrase
        return payload
