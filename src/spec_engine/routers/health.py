"""Health check router for the Spec Engine service."""
from __future__ import annotations

import time

from fastapi import APIRouter, Request

from src.shared.constants import SPEC_ENGINE_SERVICE_NAME, VERSION
from src.shared.models.common import HealthStatus

router = APIRouter(tags=["health"])


@router.get("/api/health")
async def health(request: Request) -> HealthStatus:
    """Health check endpoint returning service status."""
    catalog = request.app.state.catalog
    completion = request.app.state.completion
    start_time = request.app.state.start_time

    configured = completion is not None and completion.configured
    return HealthStatus(
        status="healthy" if configured else "degraded",
        service_name=SPEC_ENGINE_SERVICE_NAME,
        version=VERSION,
        completion="configured" if configured else "unconfigured",
        domain_count=len(catalog.list_domains()),
        api_count=len(catalog.list_apis()),
        uptime_seconds=time.time() - start_time,
    )
