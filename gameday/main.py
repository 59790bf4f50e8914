# gameday/main.py
from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
import logging
import time

from gameday.core import config
from gameday.core.errors import (
    DetailFetchError,
    EventNotFoundError,
    NoActiveLeaguesError,
    UnknownLeagueError,
)

# ------------ Router imports ------------
from gameday.routers import scoreboard_routes

# ------------ Logging ------------
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("gameday")

# ------------ App ------------
app = FastAPI(
    title="Gameday Scoreboard API",
    version="1.0.0",
    docs_url="/docs",
    redoc_url=None,
    openapi_url="/openapi.json",
)


# ------------ Access log middleware ------------
class AccessLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        t0 = time.perf_counter()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
        finally:
            dt = (time.perf_counter() - t0) * 1000
            logger.info(
                "ACCESS %s %s q=%s -> %s in %.1fms",
                request.method,
                request.url.path,
                request.url.query,
                status,
                dt,
            )
        return response


app.add_middleware(AccessLogMiddleware)

# ------------ CORS (open; can tighten later) ------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ------------ Error handlers ------------
@app.exception_handler(NoActiveLeaguesError)
async def _no_leagues(request: Request, exc: NoActiveLeaguesError):
    return JSONResponse(status_code=400, content={"error": "no_leagues_selected", "message": str(exc)})


@app.exception_handler(UnknownLeagueError)
async def _unknown_league(request: Request, exc: UnknownLeagueError):
    return JSONResponse(status_code=400, content={"error": "unknown_league", "message": str(exc)})


@app.exception_handler(DetailFetchError)
async def _detail_failed(request: Request, exc: DetailFetchError):
    if isinstance(exc, EventNotFoundError):
        return JSONResponse(
            status_code=404,
            content={"error": "event_no_longer_available", "message": str(exc)},
        )
    logger.warning("detail failed: %s %s: %s", request.method, request.url, exc)
    return JSONResponse(status_code=502, content={"error": "detail_unavailable", "message": str(exc)})


@app.exception_handler(Exception)
async def _unhandled(request: Request, exc: Exception):
    logger.exception("UNHANDLED ERROR: %s %s", request.method, request.url)
    return JSONResponse(status_code=500, content={"error": "internal_error"})


# ------------ Health & status ------------
@app.get("/health")
async def health():
    return {"ok": True}


@app.get("/status")
async def status():
    return {
        "ok": True,
        "timezone": config.LOCAL_TZ_NAME,
        "defaultLeagues": config.DEFAULT_LEAGUES,
        "rankCutoff": config.RANK_CUTOFF,
        "leagueTimeout": config.LEAGUE_TIMEOUT,
    }


# ------------ Mount routers ------------
app.include_router(scoreboard_routes.router, prefix="/api")
