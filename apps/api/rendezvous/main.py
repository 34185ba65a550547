"""FastAPI application for the WebRTC signaling relay."""
from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse, Response

from .core.config import settings
from .routers import signaling, status
from .schemas.status import ServerInfoResponse
from .services.signaling import router as signaling_router

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Rendezvous Signaling API", version="0.1.0")

if settings.cors_allow_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

app.include_router(signaling.router, prefix="/api", tags=["signaling"])
app.include_router(status.router, prefix="/api", tags=["meta"])


@app.get("/", response_model=ServerInfoResponse, tags=["meta"])
async def index() -> ServerInfoResponse:
    """Report that the relay is up along with its room and user counts."""

    current = signaling_router.status()
    return ServerInfoResponse(
        message="Signaling server is running",
        active_rooms=current.rooms,
        active_users=current.connections,
    )


@app.head("/", tags=["meta"])
async def index_head() -> Response:
    """Fast health checks issue HEAD /; answer with 200 to avoid noisy 405s."""

    return Response(status_code=200)


@app.get("/api/health", tags=["meta"])
async def health() -> dict[str, str]:
    """Simple liveness probe."""

    return {"status": "ok"}


@app.head("/api/health", tags=["meta"])
async def health_head() -> Response:
    """Allow HEAD for uptime monitors that only need the status code."""

    return Response(status_code=200)


@app.get("/robots.txt", response_class=PlainTextResponse, include_in_schema=False)
async def robots() -> PlainTextResponse:
    """Serve a minimal robots.txt to avoid 404 noise."""

    return PlainTextResponse("User-agent: *\nDisallow: /")


logger.info("Signaling API initialized (env=%s)", settings.app_env)
