"""FastAPI application with lifespan and health endpoint."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from embed_relay.config import get_settings
from embed_relay.links.client import close_http_client
from embed_relay.logging_config import configure_logging
from embed_relay.slack.router import router as slack_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: configure logging on startup, close the HTTP client on shutdown."""
    settings = get_settings()
    configure_logging(settings.log_level)
    app.state.settings = settings
    yield
    await close_http_client()


app = FastAPI(
    title="Embed Relay",
    lifespan=lifespan,
)
app.include_router(slack_router)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "ok",
        "service": "embed-relay",
        "version": "0.1.0",
    }
