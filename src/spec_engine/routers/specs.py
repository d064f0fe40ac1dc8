"""OpenAPI document router for the Spec Engine service.

Every generated document is run through the structural validator before
it is returned.  ``?format=yaml`` returns the bare document as YAML with
the verdict in the ``X-Spec-Valid`` header.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any

from fastapi import APIRouter, Query
from fastapi.responses import Response

from src.shared.errors import NotFoundError
from src.shared.models.openapi import (
    RelatedApisResponse,
    SingleSpecRequest,
    SpecResponse,
    UseCase,
    UseCaseApiRequest,
    ValidateSpecRequest,
    ValidationReport,
)
from src.spec_engine.services.spec_synthesizer import (
    render_yaml,
    synthesize_aggregate,
    synthesize_single,
)
from src.spec_engine.services.spec_validator import validate_spec
from src.spec_engine.services.use_case_apis import (
    find_use_case_api,
    group_by_domain,
    related_apis,
    to_flattened_entry,
)

logger = logging.getLogger("spec-engine.routers.specs")

router = APIRouter(prefix="/api/specs", tags=["specs"])

_FORMAT_QUERY = Query(default="json", alias="format", pattern=r"^(json|yaml)$")


def _respond(
    document: dict[str, Any], output_format: str, included_customization: bool = False
) -> SpecResponse | Response:
    validation = validate_spec(document)
    if not validation.valid:
        logger.warning("Generated document failed validation: %s", validation.errors)

    if output_format == "yaml":
        return Response(
            content=render_yaml(document),
            media_type="application/yaml",
            headers={"X-Spec-Valid": str(validation.valid).lower()},
        )
    return SpecResponse(
        spec=document,
        validation=validation,
        included_customization=included_customization,
    )


@router.post("/single", response_model=SpecResponse)
async def generate_single_spec(
    body: SingleSpecRequest, output_format: str = _FORMAT_QUERY
) -> SpecResponse | Response:
    """Generate the document for one flattened API entry."""
    document = await asyncio.to_thread(synthesize_single, body.api, body.customization)
    return _respond(document, output_format, body.customization is not None)


@router.post("/use-case", response_model=SpecResponse)
async def generate_use_case_spec(
    body: UseCase, output_format: str = _FORMAT_QUERY
) -> SpecResponse | Response:
    """Generate one document covering every API of a use case."""
    document = await asyncio.to_thread(synthesize_aggregate, body)
    return _respond(document, output_format)


@router.post("/use-case/api", response_model=SpecResponse)
async def generate_use_case_api_spec(
    body: UseCaseApiRequest, output_format: str = _FORMAT_QUERY
) -> SpecResponse | Response:
    """Generate the document for one API of a use case, addressed by name."""
    api = find_use_case_api(body.use_case, body.api_name)
    if api is None:
        raise NotFoundError(f"API not found in use case: {body.api_name}")
    entry = to_flattened_entry(api)
    document = await asyncio.to_thread(synthesize_single, entry, body.customization)
    return _respond(document, output_format, body.customization is not None)


@router.post("/use-case/related-apis")
async def get_related_apis(body: UseCaseApiRequest) -> RelatedApisResponse:
    """List the use case's APIs related to the named one."""
    current = find_use_case_api(body.use_case, body.api_name)
    if current is None:
        raise NotFoundError(f"API not found in use case: {body.api_name}")
    related = related_apis(body.use_case, current)
    return RelatedApisResponse(
        current_api=current,
        related_apis=related,
        total=len(related),
        grouped_by_domain=group_by_domain(related),
    )


@router.post("/validate")
async def validate_document(body: ValidateSpecRequest) -> ValidationReport:
    """Run the structural check on an arbitrary document."""
    return validate_spec(body.spec)
