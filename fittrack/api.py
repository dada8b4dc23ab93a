# -*- coding: utf-8 -*-
"""
FitTrack API

Workout logging, exercise catalog, macro goals, food log, meal plans and
shopping lists.
"""

from __future__ import annotations

import math
import os
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .app_db import init_app_db
from .auth.api import router as auth_router
from .auth.security import get_current_user_from_request
from .config import settings
from .exercises.api import router as exercises_router
from .goals.api import router as goals_router
from .nutrition.api import router as nutrition_router
from .plans.api import router as meal_plans_router
from .shopping.api import router as shopping_router
from .workouts.api import router as workouts_router

app = FastAPI(
    title="FitTrack",
    description="Workout and nutrition tracking with macro goals and meal planning",
    version="0.1.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_origins != ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def _startup_init_db() -> None:
    init_app_db(settings.app_db_path)


# Ensure the app DB exists even when lifespan events are not triggered (e.g. some test clients).
init_app_db(settings.app_db_path)


_AUTH_EXEMPT_PREFIXES = (
    "/api/auth/login",
    "/api/auth/register",
    "/api/docs",
    "/api/redoc",
    "/api/openapi.json",
)


@app.middleware("http")
async def _auth_gate(request: Request, call_next):
    path = request.url.path
    if path.startswith("/api") and path != "/api/health" and not any(path.startswith(p) for p in _AUTH_EXEMPT_PREFIXES):
        try:
            request.state.user = get_current_user_from_request(request)
        except HTTPException as exc:
            return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})
    return await call_next(request)


def _json_safe(value: Any) -> Any:
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    if isinstance(value, dict):
        return {k: _json_safe(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_json_safe(v) for v in value]
    return value


@app.exception_handler(RequestValidationError)
async def _validation_error(request: Request, exc: RequestValidationError):
    # Bodies may carry Infinity/NaN literals; echo them back as strings.
    return JSONResponse(status_code=422, content={"detail": _json_safe(jsonable_encoder(exc.errors()))})


app.include_router(auth_router)
app.include_router(workouts_router)
app.include_router(exercises_router)
app.include_router(goals_router)
app.include_router(nutrition_router)
app.include_router(meal_plans_router)
app.include_router(shopping_router)


@app.get("/api/health")
def health_check():
    return {
        "status": "ok",
        "version": app.version,
        "timestamp": datetime.now(timezone.utc).isoformat(timespec="seconds"),
        "meal_plan_generation": bool(settings.meal_plan_api_key),
    }


def run() -> None:
    """Console entry point (used by pyproject [project.scripts])."""
    import uvicorn

    host = os.environ.get("FITTRACK_HOST") or os.environ.get("HOST") or "127.0.0.1"
    port_raw = os.environ.get("FITTRACK_PORT") or os.environ.get("PORT") or "8000"
    try:
        port = int(port_raw)
    except ValueError:
        port = 8000

    uvicorn.run("fittrack.api:app", host=host, port=port, reload=False)
