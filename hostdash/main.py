from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hostdash.api.routes import router
from hostdash.collectors import (
    ContainerInventoryReader,
    HostMetricsReader,
    LogRetriever,
    ProcessScanner,
    ReachabilityProber,
)
from hostdash.config import settings
from hostdash.engine import SnapshotAggregator
from hostdash.runtime import DockerClient, DockerError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # ── startup ───────────────────────────────────────
    docker = DockerClient(settings.docker_socket, timeout=settings.docker_timeout)
    try:
        await docker.ping()
    except DockerError:
        await docker.close()
        logger.error("Docker daemon unavailable at %s, refusing to start", settings.docker_socket)
        raise

    aggregator = SnapshotAggregator(
        host=HostMetricsReader(),
        scanner=ProcessScanner(
            limit=settings.top_processes,
            floor_mb=settings.process_memory_floor_mb,
        ),
        prober=ReachabilityProber(
            primary=settings.probe_primary,
            fallback=settings.probe_fallback,
            port=settings.probe_port,
        ),
        inventory=ContainerInventoryReader(docker),
    )

    # Store on app.state for route access
    app.state.docker = docker
    app.state.aggregator = aggregator
    app.state.log_retriever = LogRetriever(
        docker,
        window_minutes=settings.log_window_minutes,
        tail_lines=settings.log_tail_lines,
    )

    logger.info("Host dashboard started")

    yield

    # ── shutdown ──────────────────────────────────────
    await docker.close()
    logger.info("Host dashboard shut down")


app = FastAPI(title=settings.app_name, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(router)


def run() -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
