import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.responses import HTMLResponse
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    GCCollector,
    PlatformCollector,
    ProcessCollector,
    generate_latest,
)

from .config import Settings, get_settings
from .metrics import QUEUE_NAMES, QueueCollector
from .schemas import Health, QueueLengths

logger = logging.getLogger(__name__)

LANDING_PAGE = """<html>
<head><title>Postfix exporter</title></head>
<body>
<h1>Postfix exporter</h1>
<p><a href='{metrics_path}'>Metrics</a></p>
</body>
</html>
"""


def _readable_dir(path) -> bool:
    return os.path.isdir(path) and os.access(path, os.R_OK | os.X_OK)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    if not _readable_dir(settings.queue_root):
        logger.warning(
            "Queue root %s is not a readable directory; queues will report 0",
            settings.queue_root,
        )
    logger.info(
        "Serving metrics for %s on %s", settings.queue_root, settings.telemetry_endpoint
    )
    yield


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the exporter app. Serve it with `uvicorn --factory postfix_exporter.main:create_app`
    or through the postfix-exporter command.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Postfix exporter",
        version="0.1.0",
        description="Exposes Postfix queue lengths as Prometheus metrics.",
        lifespan=lifespan,
    )

    registry = CollectorRegistry()
    collector = QueueCollector(settings.queue_root, namespace=settings.namespace)
    registry.register(collector)
    ProcessCollector(registry=registry)
    PlatformCollector(registry=registry)
    GCCollector(registry=registry)

    app.state.settings = settings
    app.state.registry = registry
    app.state.collector = collector

    # Plain def so scrapes run in the threadpool; the collector lock orders them.
    def metrics(request: Request):
        data = generate_latest(request.app.state.registry)
        return Response(data, media_type=CONTENT_TYPE_LATEST)

    app.add_api_route(
        settings.telemetry_endpoint, metrics, methods=["GET"], include_in_schema=False
    )

    @app.get("/", response_class=HTMLResponse, include_in_schema=False)
    async def index():
        return LANDING_PAGE.format(metrics_path=settings.telemetry_endpoint)

    @app.get("/health", response_model=Health)
    async def health():
        queues = {
            name: _readable_dir(os.path.join(settings.queue_root, name))
            for name in QUEUE_NAMES
        }
        return Health(status="ok", queue_root=settings.queue_root, queues=queues)

    @app.get("/ready")
    async def ready():
        """
        Readiness probe: returns 503 if the queue root cannot be read.
        """
        if not _readable_dir(settings.queue_root):
            raise HTTPException(
                status_code=503,
                detail={"queue_root": settings.queue_root, "readable": False},
            )
        return {"status": "ready", "queue_root": settings.queue_root}

    @app.get(
        "/queues",
        response_model=QueueLengths,
        summary="Measure all queues once and return their lengths",
    )
    def queues(request: Request):
        return QueueLengths(**request.app.state.collector.snapshot())

    return app

