"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from src.library_api.api.http.deps import get_book_service
from src.library_api.core.services import BookService
from src.library_api.core.storage import RedisBookStorage
from src.library_api.runtime.context import get_config

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health() -> dict[str, str]:
    """Liveness probe: 200 as long as the process is running."""
    return {"status": "healthy", "service": "library-api"}


@router.get("/ready", response_model=None)
async def readiness(
    service: BookService = Depends(get_book_service),
) -> dict[str, Any] | JSONResponse:
    """Readiness probe: 503 when the storage backend cannot be reached."""
    storage = service.storage
    backend = get_config().storage.backend

    healthy = True
    if isinstance(storage, RedisBookStorage):
        healthy = await storage.ping()

    payload = {
        "status": "ready" if healthy else "not_ready",
        "storage": {"backend": backend, "status": "healthy" if healthy else "unhealthy"},
    }
    if not healthy:
        return JSONResponse(status_code=503, content=payload)
    return payload
