"""FastAPI application serving the book API locally."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from loguru import logger
from starlette.responses import JSONResponse

from src.library_api.api.http.routers.books import router as books_router
from src.library_api.api.http.routers.health import router as health_router
from src.library_api.api.lambdas.handlers import get_book_service
from src.library_api.api.utils.app_startup import configure_logging
from src.library_api.runtime.context import get_config

configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.book_service = get_book_service()
    try:
        yield
    finally:
        await app.state.book_service.storage.close()
        logger.info("Book storage closed")


app = FastAPI(
    title="Library API",
    lifespan=lifespan,
    docs_url=None if get_config().app.environment == "production" else "/docs",
    redoc_url=None,
)

__all__ = ["app"]


@app.middleware("http")
async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
    }

    start = time.perf_counter()

    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start")
            response = await call_next(request)

            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=response.status_code,
                duration_ms=round(duration_ms, 1),
            ).info("request.end")

            response.headers.setdefault("X-Request-ID", request_id)
            return response

        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return JSONResponse(
                status_code=500,
                content={"error": "internal server error", "request_id": request_id},
                headers={"X-Request-ID": request_id},
            )


app.include_router(health_router)
app.include_router(books_router)
