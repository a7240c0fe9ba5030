from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse, PlainTextResponse

from hostdash.config import STATIC_DIR

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", include_in_schema=False)
async def dashboard() -> FileResponse:
    return FileResponse(str(STATIC_DIR / "index.html"))


@router.get("/health")
async def health() -> dict:
    return {"status": "ok"}


@router.get("/api/status")
async def get_status(request: Request) -> dict:
    snapshot = await request.app.state.aggregator.collect()
    return snapshot.model_dump(mode="json")


@router.get("/api/logs/{name}", response_class=PlainTextResponse)
async def get_logs(name: str, request: Request) -> str:
    return await request.app.state.log_retriever.tail_logs(name)
