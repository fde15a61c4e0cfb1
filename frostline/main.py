import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from frostline.api.v1.router import api_router
from frostline.core.config import settings

logger = logging.getLogger("frostline.requests")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s  %(levelname)-8s  %(name)s: %(message)s",
    )
    yield
    # Shutdown


app = FastAPI(
    title="Frostline API",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next) -> Response:
    start = time.monotonic()
    response = await call_next(request)
    latency_ms = int((time.monotonic() - start) * 1000)
    logger.info(
        "%s %s -> %d (%d ms)",
        request.method,
        request.url.path,
        response.status_code,
        latency_ms,
    )
    return response


@app.get("/api/health", tags=["health"])
async def health():
    return {"status": "ok"}


app.include_router(api_router, prefix="/api/v1")
