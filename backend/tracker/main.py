import logging
import sqlite3
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tracker.config import settings
from tracker.errors import TrackerError
from tracker.routers import analytics, applications, calendar, export

logger = logging.getLogger("tracker")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: create schema, integrity-check, optionally seed demo data
    db_ready = False
    try:
        from tracker.database import init_db
        settings.data_path.mkdir(parents=True, exist_ok=True)
        init_db(settings.db_path)
        conn = sqlite3.connect(str(settings.db_path))
        result = conn.execute("PRAGMA integrity_check").fetchone()
        conn.close()
        if result and result[0] == "ok":
            logger.info("Database integrity check passed.")
            db_ready = True
        else:
            logger.error("DATABASE INTEGRITY CHECK FAILED: %s", result)
    except (OSError, sqlite3.Error) as exc:
        logger.error("Could not initialise database at %s: %s", settings.db_path, exc)

    if settings.seed_demo_data and not db_ready:
        logger.warning("Skipping demo data seeding: database is not ready.")
    elif settings.seed_demo_data:
        from tracker.database import SessionLocal
        from tracker.services.seed_service import seed_demo_applications
        db = SessionLocal()
        try:
            seed_demo_applications(db)
        finally:
            db.close()
    yield


app = FastAPI(
    title="Job Application Tracker",
    description="Personal job application tracker with visa sponsorship and follow-up analytics",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TrackerError)
async def tracker_error_handler(request: Request, exc: TrackerError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # Report the first offending field, without the "body"/"query" location prefix
    error = exc.errors()[0]
    loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
    return JSONResponse(
        status_code=400,
        content={"message": error.get("msg", "Invalid request"), "field": ".".join(loc)},
    )


app.include_router(applications.router, prefix=settings.api_prefix)
app.include_router(analytics.router, prefix=settings.api_prefix)
app.include_router(calendar.router, prefix=settings.api_prefix)
app.include_router(export.router, prefix=settings.api_prefix)


@app.get("/health")
async def health():
    return {"status": "ok", "version": "0.1.0"}


def run():
    import uvicorn

    logging.basicConfig(level=settings.log_level)
    uvicorn.run(app, host=settings.host, port=settings.port)
