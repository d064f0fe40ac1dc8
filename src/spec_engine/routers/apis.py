"""API template router for the Spec Engine service."""
from __future__ import annotations

import asyncio

from fastapi import APIRouter, Request

from src.shared.errors import NotFoundError
from src.shared.models.catalog import (
    ApiSuggestionRequest,
    ApiSuggestionResponse,
    ApiTemplate,
    ApiTemplateListResponse,
    CreateApisRequest,
)
from src.spec_engine.services.ai_refinement import suggest_apis

router = APIRouter(prefix="/api/apis", tags=["apis"])


@router.post("")
async def get_apis_for_domains(
    request: Request, body: ApiSuggestionRequest
) -> ApiSuggestionResponse:
    """Flattened API suggestions for domains, refined by use-case text if given."""
    return await asyncio.to_thread(
        suggest_apis,
        request.app.state.catalog,
        request.app.state.refiner,
        body.domains,
        body.use_case_context,
    )


@router.post("/create", status_code=201)
async def create_apis(request: Request, body: CreateApisRequest) -> ApiTemplateListResponse:
    """Register API templates; names that already exist resolve to the existing record."""
    catalog = request.app.state.catalog
    apis = await asyncio.to_thread(catalog.register_apis, body.apis)
    return ApiTemplateListResponse(items=apis, total=len(apis))


@router.get("/{api_name}")
async def get_api(request: Request, api_name: str) -> ApiTemplate:
    """Get one API template by exact name."""
    api = request.app.state.catalog.find_api(api_name)
    if api is None:
        raise NotFoundError(f"API not found: {api_name}")
    return api
