# gymtracker/main.py
import os
import time
import logging
import uuid
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from gymtracker.routers.auth import router as auth_router
from gymtracker.routers.profile import router as profile_router
from gymtracker.routers.training_days import router as training_days_router
from gymtracker.routers.exercises import router as exercises_router
from gymtracker.routers.progress import router as progress_router
from gymtracker.routers.sessions import router as sessions_router
from gymtracker.routers.reports import router as reports_router
from gymtracker.db import SessionLocal  # for healthz DB check
from gymtracker.settings import get_settings

log = logging.getLogger("uvicorn")

app = FastAPI(
    title="GymTracker API",
    openapi_tags=[
        {"name": "auth", "description": "Registration & login"},
        {"name": "profile", "description": "Account profile"},
        {"name": "training-days", "description": "Routine days and their exercises"},
        {"name": "exercises", "description": "Exercises of a training day"},
        {"name": "progress", "description": "Weight history, statistics and chart series"},
        {"name": "sessions", "description": "Workout sessions"},
        {"name": "reports", "description": "PDF progress reports"},
    ],
)


# CORS (relax for local dev; tighten origins in prod via env)
ALLOW_ORIGINS = get_settings().ALLOW_ORIGINS.split(",")
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOW_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition", "X-Request-ID"],
)

@app.middleware("http")
async def add_request_id_and_log(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    response.headers["X-Request-ID"] = req_id
    log.info("rid=%s %s %s -> %s in %.1fms",
             req_id, request.method, request.url.path, response.status_code, duration_ms)
    return response

@app.get("/")
def root():
    return {"ok": True, "name": "GymTracker API"}

@app.get("/ping")
def ping():
    return {"pong": True}

@app.get("/healthz")
def healthz():
    # Quick DB sanity check
    try:
        with SessionLocal() as db:
            db.execute(text("SELECT 1"))
        return {"status": "ok"}
    except Exception as e:
        return {"status": "degraded", "error": str(e)}

@app.get("/version")
def version():
    return {"version": os.getenv("API_VERSION", "dev")}

# Routers
app.include_router(auth_router)
app.include_router(profile_router)
app.include_router(training_days_router)
app.include_router(exercises_router)
app.include_router(progress_router)
app.include_router(sessions_router)
app.include_router(reports_router)
