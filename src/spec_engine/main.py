"""Spec Engine service FastAPI application.

Usage:
    python -m src.spec_engine.main
"""
from __future__ import annotations

import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI

from src.shared.config import SpecEngineConfig
from src.shared.constants import SPEC_ENGINE_PORT, SPEC_ENGINE_SERVICE_NAME, VERSION
from src.shared.errors import register_exception_handlers
from src.shared.logging import TraceIDMiddleware, setup_logging
from src.spec_engine.services.ai_refinement import ApiRefiner
from src.spec_engine.services.catalog import ServiceCatalog
from src.spec_engine.services.completion_client import CompletionClient

config = SpecEngineConfig()
logger = setup_logging(SPEC_ENGINE_SERVICE_NAME, config.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan - initialize and cleanup resources."""
    app.state.start_time = time.time()

    app.state.catalog = ServiceCatalog()
    app.state.completion = CompletionClient.from_config(config)
    app.state.refiner = ApiRefiner(app.state.completion)

    if not app.state.completion.configured:
        logger.warning("OPENAI_API_KEY not set; AI refinement will be skipped")

    logger.info(
        "Service started: name=%s version=%s port=%d model=%s",
        SPEC_ENGINE_SERVICE_NAME, VERSION, SPEC_ENGINE_PORT, config.openai_model,
    )
    yield

    logger.info("Service stopped: name=%s", SPEC_ENGINE_SERVICE_NAME)


app = FastAPI(
    title="Spec Engine",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(TraceIDMiddleware)
register_exception_handlers(app)

# Register all routers
from src.spec_engine.routers.health import router as health_router
from src.spec_engine.routers.domains import router as domains_router
from src.spec_engine.routers.apis import router as apis_router
from src.spec_engine.routers.specs import router as specs_router

app.include_router(health_router)
app.include_router(domains_router)
app.include_router(apis_router)
app.include_router(specs_router)


def run() -> None:
    """Serve the application with uvicorn on the Spec Engine port."""
    uvicorn.run(app, host="0.0.0.0", port=SPEC_ENGINE_PORT)


if __name__ == "__main__":
    run()
