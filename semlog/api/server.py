"""
Semantic Log Viewer: Read-Only API Server
=========================================

Serves session documents saved in a log directory, and renders
documents posted by the caller. Never writes to disk.

Endpoints:
- GET  /health
- GET  /api/v1/logs               -> Document files, newest first
- GET  /api/v1/logs/{name}        -> Raw document
- GET  /api/v1/logs/{name}/tree   -> Rendered text tree
- POST /api/v1/render             -> Render a posted document (text or html)

Usage:
    SEMLOG_LOG_DIR=/tmp/logs uvicorn semlog.api.server:app --reload
"""
from __future__ import annotations
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Literal, Optional
import logging
import os

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, PlainTextResponse
from pydantic import BaseModel, Field

from ..config import DEFAULT_MAX_LINES, DEFAULT_TREE_DEPTH, LoggerConfig
from ..contracts.errors import LogDataError, LogFileNotFoundError
from ..logfiles import list_log_files, load_document
from ..stree import HtmlRenderer, LogDataParser, RenderConfig, TreeRenderer, parse_threshold

logger = logging.getLogger(__name__)


# =============================================================================
# INFRASTRUCTURE SETUP
# =============================================================================

config: LoggerConfig = LoggerConfig.from_env()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Resolve configuration on startup."""
    global config
    config = LoggerConfig.from_env()
    logger.info("serving semantic logs from %s", config.log_dir)
    yield


app = FastAPI(
    title="Semantic Log Viewer API",
    version="0.1.0",
    description="Read-only viewer for semantic session documents",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


# =============================================================================
# MODELS
# =============================================================================

class LogFileModel(BaseModel):
    name: str
    size: int
    modified_at: str


class LogListModel(BaseModel):
    log_dir: str
    files: List[LogFileModel]


class RenderRequest(BaseModel):
    document: Dict[str, Any]
    format: Literal["text", "html"] = "text"
    depth: int = Field(default=DEFAULT_TREE_DEPTH, ge=0)
    full: bool = False
    threshold: str = "0"
    lines: int = Field(default=DEFAULT_MAX_LINES, ge=0)
    expand: List[str] = Field(default_factory=list)


def _render_config(depth: int, full: bool, threshold: str, lines: int, expand: List[str]) -> RenderConfig:
    try:
        return RenderConfig(
            max_depth=depth,
            expand_kinds=tuple(expand),
            time_threshold=parse_threshold(threshold),
            show_full_tree=full,
            max_lines=lines,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _resolve(name: str) -> str:
    if os.path.basename(name) != name or name in ("", ".", ".."):
        raise HTTPException(status_code=400, detail=f"Invalid log name: {name}")
    return os.path.join(config.log_dir, name)


def _load(name: str) -> Dict[str, Any]:
    try:
        return load_document(_resolve(name))
    except LogFileNotFoundError:
        raise HTTPException(status_code=404, detail=f"Log not found: {name}")
    except LogDataError as e:
        raise HTTPException(status_code=422, detail=str(e))


# =============================================================================
# ENDPOINTS
# =============================================================================

@app.get("/health")
async def health_check():
    return {"status": "online", "mode": "read-only", "log_dir": config.log_dir}


@app.get("/api/v1/logs", response_model=LogListModel)
async def get_logs():
    """Document files matching the configured pattern, newest first."""
    try:
        files = list_log_files(config.log_dir, config.log_pattern)
    except LogFileNotFoundError:
        raise HTTPException(status_code=404, detail=f"Log directory not found: {config.log_dir}")
    return LogListModel(
        log_dir=config.log_dir,
        files=[LogFileModel(**info.to_dict()) for info in files],
    )


@app.get("/api/v1/logs/{name}")
async def get_log(name: str):
    return _load(name)


@app.get("/api/v1/logs/{name}/tree", response_class=PlainTextResponse)
async def get_log_tree(
    name: str,
    depth: int = Query(DEFAULT_TREE_DEPTH, ge=0),
    full: bool = False,
    threshold: str = "0",
    lines: int = Query(DEFAULT_MAX_LINES, ge=0),
    expand: Optional[List[str]] = Query(None),
):
    document = _load(name)
    render_config = _render_config(depth, full, threshold, lines, expand or [])
    try:
        return TreeRenderer(LogDataParser(config.time_fields)).render(document, render_config)
    except LogDataError as e:
        raise HTTPException(status_code=422, detail=str(e))


@app.post("/api/v1/render")
async def render_document(request: RenderRequest):
    """Render a document supplied in the request body."""
    render_config = _render_config(
        request.depth, request.full, request.threshold, request.lines, request.expand
    )
    try:
        tree = LogDataParser(config.time_fields).parse(request.document)
    except LogDataError as e:
        raise HTTPException(status_code=422, detail=str(e))

    if request.format == "html":
        return HTMLResponse(HtmlRenderer().render(tree, render_config))
    return PlainTextResponse(TreeRenderer().render_tree(tree, render_config))
