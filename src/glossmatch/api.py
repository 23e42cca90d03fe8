from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException, Request, status
from pydantic import BaseModel

from . import __version__
from .ingest import GlossaryFormatError, load_glossary_csv, parse_glossary_csv
from .matching import GlossaryEntry, GlossaryMatcher, SearchOrigin
from .settings import get_settings

logger = logging.getLogger(__name__)

app = FastAPI(title="Glossary Match API", version=__version__)


class EntryPayload(BaseModel):
    source: str
    target: str
    note: str = ""
    category: str = ""


class SearchRequest(BaseModel):
    query: str
    origin: SearchOrigin = SearchOrigin.MANUAL
    limit: Optional[int] = None


class MatchPayload(EntryPayload):
    score: float
    matched_phrase: str


class SearchResponse(BaseModel):
    query: str
    origin: SearchOrigin
    matches: list[MatchPayload]


def _initial_matcher() -> GlossaryMatcher:
    settings = get_settings()
    matcher = GlossaryMatcher(config=settings.matcher_config())
    if settings.glossary_path is not None:
        try:
            matcher.load_glossary(load_glossary_csv(settings.glossary_path))
        except GlossaryFormatError as exc:
            logger.error(f"Could not load startup glossary: {exc}")
    return matcher


matcher = _initial_matcher()


def _glossary_summary() -> dict:
    return {"entries": len(matcher), "cache": matcher.cache.stats()}


@app.get("/")
def root() -> dict:
    return {"message": "Glossary Match API", "version": __version__}


@app.get("/api/glossary")
def glossary_info() -> dict:
    return _glossary_summary()


@app.put("/api/glossary")
def replace_glossary(entries: list[EntryPayload]) -> dict:
    matcher.load_glossary(GlossaryEntry(**entry.model_dump()) for entry in entries)
    return _glossary_summary()


@app.post("/api/glossary/csv")
async def upload_glossary_csv(request: Request) -> dict:
    raw = await request.body()
    try:
        entries = parse_glossary_csv(raw.decode("utf-8-sig"))
    except (GlossaryFormatError, UnicodeDecodeError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid glossary CSV: {exc}") from exc
    if not entries:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Glossary CSV contains no entries")
    matcher.load_glossary(entries)
    return _glossary_summary()


@app.post("/api/search", response_model=SearchResponse)
def search(request: SearchRequest) -> SearchResponse:
    results = matcher.search(request.query, request.origin)
    if request.limit is not None:
        results = results[: max(request.limit, 0)]
    return SearchResponse(
        query=request.query,
        origin=request.origin,
        matches=[MatchPayload(**candidate.to_dict()) for candidate in results],
    )
