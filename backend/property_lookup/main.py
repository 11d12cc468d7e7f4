from __future__ import annotations

from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from property_lookup.core.config import settings
from property_lookup.modules.lookup.router import router as lookup_router

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    logger.info("Starting Property Lookup API")
    if settings.rentcast_configured:
        logger.info("provider_ready", provider="Rentcast", role="primary")
    else:
        logger.warning("provider_missing", provider="Rentcast", hint="Set RENTCAST_API_KEY in .env for best results")
    if settings.perplexity_configured:
        logger.info("provider_ready", provider="Perplexity", role="fallback")
    else:
        logger.warning("provider_missing", provider="Perplexity", hint="Set PERPLEXITY_API_KEY in .env for fallback lookups")
    yield
    logger.info("Shutting down Property Lookup API")


app = FastAPI(
    title=settings.app_name,
    version="0.1.0",
    debug=settings.debug,
    lifespan=lifespan,
    docs_url="/api/docs",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)

# Mount routers
app.include_router(lookup_router, prefix=settings.api_prefix)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
