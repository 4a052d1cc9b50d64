from __future__ import annotations

import logging
import time
from datetime import datetime
from typing import Any, Dict, Optional
from uuid import uuid4

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .catalog import EraCatalog
from .errors import EraError, EraNotFound
from .models import (
    CandidatesRequest,
    CandidatesResponse,
    DecodeResponse,
    EncodeRequest,
    EncodeResponse,
    EraDate,
    EraDateResponse,
    EraSummary,
    SearchResponse,
    TextRequest,
    ToEraRequest,
)
from .numerals import decode_numeral, encode_numeral
from .settings import settings
from .toolkit import EraToolkit

LOG_LEVEL = getattr(logging, settings.log_level.upper(), logging.INFO)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger("chinese_era.app")
logger.setLevel(LOG_LEVEL)

ALLOWED_ORIGINS = settings.allowed_origins or ["*"]


app = FastAPI(
    title=settings.app_title,
    description=settings.app_description,
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _uptime_seconds() -> float:
    started_at = getattr(app.state, "started_at", None)
    if not started_at:
        return 0.0
    return max(0.0, (datetime.utcnow() - started_at).total_seconds())


def _load_catalog() -> EraCatalog:
    if settings.catalog_path:
        return EraCatalog.from_file(settings.catalog_path)
    return EraCatalog.default()


def get_toolkit(request: Request) -> EraToolkit:
    toolkit: Optional[EraToolkit] = getattr(request.app.state, "toolkit", None)
    if toolkit is None:
        toolkit = EraToolkit(_load_catalog())
        request.app.state.toolkit = toolkit
    return toolkit


def _ensure_length(text: str) -> None:
    if len(text) > settings.max_input_characters:
        raise HTTPException(
            status_code=400,
            detail=f"文字数が制限を超えています (最大{settings.max_input_characters:,}文字)",
        )


def _era_date_response(toolkit: EraToolkit, era_date: EraDate) -> EraDateResponse:
    definition = era_date.definition
    return EraDateResponse(
        dynasty=definition.dynasty,
        era_name=definition.era_name,
        display_name=definition.display_name,
        year=era_date.year,
        month=era_date.month,
        day=era_date.day,
        text=era_date.to_text(),
        gregorian_year=toolkit.bridge.to_gregorian_year(era_date),
        gregorian_date=toolkit.bridge.to_gregorian_date(era_date),
    )


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid4())
    request.state.request_id = request_id
    start_time = time.perf_counter()
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id

    if settings.enable_request_logging:
        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "Request completed",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )

    return response


@app.exception_handler(EraError)
async def era_error_handler(request: Request, exc: EraError) -> JSONResponse:
    status_code = 404 if isinstance(exc, EraNotFound) else 400
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "error": type(exc).__name__},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    request_id = getattr(request.state, "request_id", str(uuid4()))
    logger.exception(
        "Unhandled server error",
        extra={"request_id": request_id, "path": request.url.path},
    )
    return JSONResponse(
        status_code=500,
        content={
            "detail": "サーバー内部で予期しないエラーが発生しました。",
            "request_id": request_id,
        },
        headers={"X-Request-ID": request_id},
    )


@app.on_event("startup")
async def startup() -> None:
    app.state.started_at = datetime.utcnow()
    app.state.settings = settings
    if getattr(app.state, "toolkit", None) is None:
        app.state.toolkit = EraToolkit(_load_catalog())


@app.get("/health")
async def health(toolkit: EraToolkit = Depends(get_toolkit)) -> Dict[str, Any]:
    return {
        "status": "ok",
        "uptime_seconds": round(_uptime_seconds(), 3),
        "version": app.version,
        "catalog_size": len(toolkit.catalog),
    }


@app.get("/health/live")
async def health_live() -> Dict[str, Any]:
    return {"status": "ok", "uptime_seconds": round(_uptime_seconds(), 3)}


@app.get("/health/ready")
async def health_ready(toolkit: EraToolkit = Depends(get_toolkit)) -> Dict[str, Any]:
    return {
        "status": "ok" if len(toolkit.catalog) else "empty",
        "uptime_seconds": round(_uptime_seconds(), 3),
        "catalog_size": len(toolkit.catalog),
    }


@app.post("/api/numerals/decode", response_model=DecodeResponse)
async def decode(request: TextRequest) -> DecodeResponse:
    _ensure_length(request.text)
    return DecodeResponse(text=request.text, value=decode_numeral(request.text))


@app.post("/api/numerals/encode", response_model=EncodeResponse)
async def encode(request: EncodeRequest) -> EncodeResponse:
    return EncodeResponse(value=request.value, text=encode_numeral(request.value))


@app.post("/api/eras/parse", response_model=EraDateResponse)
async def parse_era(request: TextRequest, toolkit: EraToolkit = Depends(get_toolkit)) -> EraDateResponse:
    _ensure_length(request.text)
    era_date = toolkit.parse(request.text)
    return _era_date_response(toolkit, era_date)


@app.post("/api/eras/candidates", response_model=CandidatesResponse)
async def candidates(request: CandidatesRequest, toolkit: EraToolkit = Depends(get_toolkit)) -> CandidatesResponse:
    _ensure_length(request.text)
    limit = request.limit or settings.default_candidate_limit
    results = toolkit.candidates(request.text, limit)
    return CandidatesResponse(text=request.text, candidates=results, total=len(results))


@app.post("/api/eras/to-era", response_model=EraDateResponse)
async def to_era(request: ToEraRequest, toolkit: EraToolkit = Depends(get_toolkit)) -> EraDateResponse:
    era_date = toolkit.to_era(request.value)
    if era_date is None:
        raise HTTPException(status_code=404, detail=f"{request.value.isoformat()} を含む年號が見つかりませんでした。")
    return _era_date_response(toolkit, era_date)


@app.get("/api/eras/search", response_model=SearchResponse)
async def search(
    q: str = Query(..., min_length=1, description="年號・別名・君主名の部分一致検索"),
    toolkit: EraToolkit = Depends(get_toolkit),
) -> SearchResponse:
    _ensure_length(q)
    results = toolkit.catalog.search(q)
    return SearchResponse(query=q, results=results, total=len(results), generated_at=datetime.utcnow())


@app.get("/api/eras/{name}", response_model=EraSummary)
async def era_summary(name: str, toolkit: EraToolkit = Depends(get_toolkit)) -> EraSummary:
    summary = toolkit.extract(name)
    if summary is None:
        raise HTTPException(status_code=404, detail="年號が見つかりませんでした。")
    return summary
