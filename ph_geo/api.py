"""
FastAPI service exposing the location resolver.

Endpoints:
  POST /parse        - Resolve one text
  POST /parse/batch  - Resolve many texts in one request
  GET  /health       - Gazetteer index statistics
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from ph_geo.config import get_settings
from ph_geo.formatting import format_location
from ph_geo.gazetteer import get_index
from ph_geo.models import (
    BatchParseRequest,
    BatchParseResponse,
    HealthResponse,
    ParseRequest,
    ParseResponse,
)
from ph_geo.resolver import resolve_location

logger = logging.getLogger(__name__)


# ── Lifespan ──────────────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: build the gazetteer index. A dataset error aborts startup."""
    logger.info("Starting up API server...")
    get_index()
    yield
    logger.info("API server shut down.")


# ── App ───────────────────────────────────────────────────────────────

app = FastAPI(
    title="PH Geo Resolver API",
    description="Resolve Philippine social-media text to region/province/city/barangay",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # tighten in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _parse_one(text: str) -> ParseResponse:
    match = resolve_location(text)
    return ParseResponse(text=text, location=match, formatted=format_location(match))


# ══════════════════════════════════════════════════════════════════════
# ENDPOINTS
# ══════════════════════════════════════════════════════════════════════

@app.post("/parse", response_model=ParseResponse)
def parse(req: ParseRequest):
    return _parse_one(req.text)


@app.post("/parse/batch", response_model=BatchParseResponse)
def parse_batch(req: BatchParseRequest):
    max_batch = get_settings().api.max_batch
    if len(req.texts) > max_batch:
        raise HTTPException(400, f"texts must contain at most {max_batch} items")

    results = [_parse_one(t) for t in req.texts]
    return BatchParseResponse(
        results=results,
        total=len(results),
        resolved=sum(1 for r in results if r.location is not None),
    )


@app.get("/health", response_model=HealthResponse)
def health():
    return HealthResponse(status="ok", **get_index().stats())
