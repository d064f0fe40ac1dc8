"""Service-domain router for the Spec Engine service."""
from __future__ import annotations

import asyncio

from fastapi import APIRouter, Query, Request

from src.shared.errors import NotFoundError
from src.shared.models.catalog import (
    CreateDomainsRequest,
    DomainListResponse,
    DomainSelectionRequest,
    DomainSelectionValidation,
    ServiceDomain,
)

router = APIRouter(prefix="/api/domains", tags=["domains"])


@router.get("")
async def list_domains(
    request: Request,
    search: str | None = Query(
        default=None, min_length=2, description="Filter by name, description or area"
    ),
) -> DomainListResponse:
    """List all service domains, or those matching a search term."""
    catalog = request.app.state.catalog
    term = search.strip() if search else ""
    domains = catalog.search_domains(term) if term else catalog.list_domains()
    return DomainListResponse(items=domains, total=len(domains))


@router.post("", status_code=201)
async def create_domains(request: Request, body: CreateDomainsRequest) -> DomainListResponse:
    """Register domains; names that already exist resolve to the existing record."""
    catalog = request.app.state.catalog
    domains = await asyncio.to_thread(catalog.register_domains, body.domains)
    return DomainListResponse(items=domains, total=len(domains))


@router.post("/validate-selection")
async def validate_domain_selection(
    request: Request, body: DomainSelectionRequest
) -> DomainSelectionValidation:
    """Ask the completion service whether the selected domains fit the use case."""
    catalog = request.app.state.catalog
    refiner = request.app.state.refiner
    available = [domain.name for domain in catalog.list_domains()]
    return await asyncio.to_thread(
        refiner.validate_domain_selection,
        body.domains,
        body.use_case_text,
        available,
    )


@router.get("/{domain_name}")
async def get_domain(request: Request, domain_name: str) -> ServiceDomain:
    """Get one service domain by exact name."""
    domain = request.app.state.catalog.find_domain(domain_name)
    if domain is None:
        raise NotFoundError(f"Service domain not found: {domain_name}")
    return domain
