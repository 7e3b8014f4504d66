"""FastAPI application for the golf analytics API."""

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from analytics.exceptions import BaselineConfigurationError, TeeContextError
from database.connection import db
from database.db_manager import DatabaseManager
from database.exceptions import NotFoundError, RowMappingError

load_dotenv()
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize DB pool on startup, close on shutdown."""
    await db.initialize(dsn=os.environ.get("DATABASE_URL"))
    app.state.db_manager = DatabaseManager(db.pool)
    yield
    await db.close()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Golf Analytics API",
        version="1.0.0",
        lifespan=lifespan,
    )

    origins = os.getenv("CORS_ORIGINS", "http://localhost:5173")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(NotFoundError)
    async def not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(BaselineConfigurationError)
    async def baseline_unavailable(request: Request, exc: BaselineConfigurationError):
        logger.error("Baseline table unavailable: %s", exc)
        return JSONResponse(status_code=503, content={"detail": "Strokes gained is not configured"})

    @app.exception_handler(TeeContextError)
    async def bad_tee(request: Request, exc: TeeContextError):
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(RowMappingError)
    async def bad_row(request: Request, exc: RowMappingError):
        logger.error("Stored data rejected: %s", exc)
        return JSONResponse(status_code=500, content={"detail": "Stored round data is invalid"})

    from api.routers import insights, rounds
    app.include_router(insights.router, prefix="/api/insights", tags=["insights"])
    app.include_router(rounds.router, prefix="/api/rounds", tags=["rounds"])

    @app.get("/api/health")
    async def health():
        healthy = await db.health_check()
        return {"status": "ok" if healthy else "degraded", "database": healthy}

    return app


app = create_app()
