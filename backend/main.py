from contextlib import asynccontextmanager
from pathlib import Path
from typing import List, Optional

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import FileResponse, JSONResponse

from cache import ResponseCache
from logging_config import configure_logging
from models import (
    AnalyticsSummary,
    ResetResponse,
    StressLogIn,
    StressLogOut,
    StressTagsResponse,
    SubmitResponse,
)
from repo_stress_logs import StoreError, StressLogRepo
from service_stress_logs import StressLogService
from settings import settings
from suggestions import STRESS_TAGS, label_scale

logger = structlog.get_logger(__name__)


def build_service() -> StressLogService:
    return StressLogService(StressLogRepo(settings.db_path), ResponseCache(settings.cache_ttl_seconds))


def _mount_front_end(app: FastAPI, static_dir: str) -> None:
    """Serve the bundled front end; unknown paths fall back to index.html."""

    root = Path(static_dir).resolve()
    index = root / "index.html"
    if not index.is_file():
        logger.warning("front_end_missing", static_dir=str(root))
        return

    @app.get("/{full_path:path}", include_in_schema=False)
    def front_end(full_path: str):
        candidate = (root / full_path).resolve()
        if full_path and candidate.is_file() and candidate.is_relative_to(root):
            return FileResponse(candidate)
        return FileResponse(index)


def create_app(svc: Optional[StressLogService] = None, serve_front_end: Optional[bool] = None) -> FastAPI:
    """Build the API around `svc` (a fresh service from settings by default).

    Routes stay thin: they shape HTTP in and out and delegate everything else
    to `StressLogService`. Tests pass their own service backed by a temp DB.
    """

    svc = svc if svc is not None else build_service()
    if serve_front_end is None:
        serve_front_end = settings.is_production

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        svc.startup()
        logger.info("stress_api_ready", db_path=svc.repo.db_path or settings.db_path)
        yield

    app = FastAPI(title="PulsePath Stress Agent API", lifespan=lifespan)
    app.state.service = svc

    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        logger.error("store_failure", path=request.url.path, error=str(exc))
        return JSONResponse(status_code=500, content={"error": str(exc)})

    @app.get("/health")
    def health():
        svc.health_check()
        return {"ok": True}

    @app.post("/api/stress-log", response_model=SubmitResponse)
    def submit_stress_log(log: StressLogIn):
        return svc.submit(log)

    @app.get("/api/stress-logs/{user_id}", response_model=List[StressLogOut])
    def list_stress_logs(user_id: str, limit: Optional[int] = None):
        return svc.list_recent(user_id, limit)

    @app.get("/api/stress-analytics/{user_id}", response_model=AnalyticsSummary)
    def stress_analytics(user_id: str):
        return svc.analytics(user_id)

    @app.delete("/api/reset-database", response_model=ResetResponse)
    def reset_database():
        return svc.reset_all()

    @app.get("/api/stress-tags", response_model=StressTagsResponse)
    def stress_tags():
        return {"tags": STRESS_TAGS, "labels": label_scale()}

    # registered last so the catch-all never shadows an API route
    if serve_front_end:
        _mount_front_end(app, settings.static_dir)

    return app


configure_logging(settings.log_level, json_logs=settings.is_production)
app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host=settings.host, port=settings.port)
