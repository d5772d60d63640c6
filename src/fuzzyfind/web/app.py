"""FastAPI application exposing fuzzy path search over HTTP."""

from __future__ import annotations

import logging
from typing import Any, List

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from fuzzyfind.index.search import Finder
from fuzzyfind.models import MatchResult

LOGGER = logging.getLogger(__name__)


class SearchPayload(BaseModel):
    query: str = ""
    top_k: int | None = None


class MatchPayload(BaseModel):
    path: str
    score: float
    positions: List[int]
    highlighted: str

    @classmethod
    def from_result(cls, result: MatchResult) -> "MatchPayload":
        return cls(
            path=result.path,
            score=result.score,
            positions=list(result.positions),
            highlighted=result.highlighted(),
        )


class SearchResponse(BaseModel):
    query: str
    results: List[MatchPayload]


def _finder(request: Request) -> Finder:
    return request.app.state.finder


def create_app(finder: Finder) -> FastAPI:
    """Build the HTTP app around an already indexed ``finder``."""
    app = FastAPI(title="fuzzyfind", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.finder = finder

    @app.post("/search", response_model=SearchResponse)
    async def search_paths(payload: SearchPayload, request: Request) -> SearchResponse:
        current = _finder(request)
        results = current.search(payload.query, limit=payload.top_k)
        return SearchResponse(
            query=payload.query.strip(),
            results=[MatchPayload.from_result(result) for result in results],
        )

    @app.get("/stats")
    async def corpus_stats(request: Request) -> dict[str, Any]:
        current = _finder(request)
        return {
            "root": current.corpus.root,
            "candidates": len(current.corpus),
            "longest": current.corpus.longest,
            "max_files": current.config.max_files,
            "max_results": current.config.max_results,
        }

    LOGGER.debug("Created web app for %r", finder.corpus)
    return app
