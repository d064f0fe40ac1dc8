"""MCP server for the Spec Engine service.

Exposes the service-domain catalog and the OpenAPI document synthesizer
as MCP tools over stdio transport.  Each tool delegates to the same
service functions the REST routers use.

Environment variables (typically set via .mcp.json):
    OPENAI_API_KEY -- Credentials for AI refinement; refinement is skipped
                      when unset.
    OPENAI_MODEL   -- Chat model used for refinement.

Usage:
    python -m src.spec_engine.mcp_server
"""
from __future__ import annotations

import logging
from typing import Any

from mcp.server.fastmcp import FastMCP
from pydantic import ValidationError as PydanticValidationError

from src.shared.config import SpecEngineConfig
from src.shared.models.catalog import ApiCandidate, DomainCandidate, FlattenedApiEntry
from src.shared.models.openapi import Customization, UseCase
from src.spec_engine.services.ai_refinement import ApiRefiner, suggest_apis
from src.spec_engine.services.catalog import ServiceCatalog
from src.spec_engine.services.completion_client import CompletionClient
from src.spec_engine.services.spec_synthesizer import (
    synthesize_aggregate,
    synthesize_single,
)
from src.spec_engine.services.spec_validator import validate_spec

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logger = logging.getLogger("spec-engine.mcp")

# ---------------------------------------------------------------------------
# Module-level initialisation
# ---------------------------------------------------------------------------

config = SpecEngineConfig()

catalog = ServiceCatalog()
refiner = ApiRefiner(CompletionClient.from_config(config))

# ---------------------------------------------------------------------------
# MCP server
# ---------------------------------------------------------------------------

mcp = FastMCP("Spec Engine")


def _dump(model: Any) -> dict[str, Any]:
    return model.model_dump(mode="json", by_alias=True)


def _with_validation(document: dict[str, Any]) -> dict[str, Any]:
    report = validate_spec(document)
    if not report.valid:
        logger.warning("Generated document failed validation: %s", report.errors)
    return {"spec": document, "validation": _dump(report)}


@mcp.tool()
def list_domains(search: str | None = None) -> list[dict[str, Any]]:
    """List the BIAN service domains, optionally filtered by a search term.

    Args:
        search: Case-insensitive substring matched against domain names,
                descriptions and business areas.

    Returns:
        A list of service-domain dicts.
    """
    try:
        term = search.strip() if search else ""
        domains = catalog.search_domains(term) if term else catalog.list_domains()
        return [_dump(domain) for domain in domains]
    # Top-level handler: broad catch intentional
    except Exception as exc:
        logger.exception("Unexpected error listing domains")
        return [{"error": str(exc)}]


@mcp.tool()
def get_domain(name: str) -> dict[str, Any]:
    """Retrieve one service domain by exact name.

    Returns:
        The domain dict, or an error dict when the name is unknown.
    """
    domain = catalog.find_domain(name)
    if domain is None:
        return {"error": f"Service domain not found: {name}"}
    return _dump(domain)


@mcp.tool()
def register_domains(domains: list[dict[str, Any]]) -> dict[str, Any]:
    """Register service domains suggested at runtime.

    Args:
        domains: Dicts with ``name``, ``description`` and an optional
                 ``businessArea``.  Known names resolve to the existing
                 record.

    Returns:
        ``{"items": [...], "total": n}`` with the resolved domains.
    """
    try:
        candidates = [DomainCandidate.model_validate(item) for item in domains]
        registered = catalog.register_domains(candidates)
        return {"items": [_dump(d) for d in registered], "total": len(registered)}
    except PydanticValidationError as exc:
        logger.warning("Invalid domain registration: %s", exc)
        return {"error": str(exc)}
    # Top-level handler: broad catch intentional
    except Exception as exc:
        logger.exception("Unexpected error registering domains")
        return {"error": str(exc)}


@mcp.tool()
def register_apis(apis: list[dict[str, Any]]) -> dict[str, Any]:
    """Register API templates suggested at runtime.

    New templates get generated Initiate, Retrieve and Update endpoints.

    Args:
        apis: Dicts with ``name``, ``domain`` and ``description``.

    Returns:
        ``{"items": [...], "total": n}`` with the resolved templates.
    """
    try:
        candidates = [ApiCandidate.model_validate(item) for item in apis]
        registered = catalog.register_apis(candidates)
        return {"items": [_dump(a) for a in registered], "total": len(registered)}
    except PydanticValidationError as exc:
        logger.warning("Invalid API registration: %s", exc)
        return {"error": str(exc)}
    # Top-level handler: broad catch intentional
    except Exception as exc:
        logger.exception("Unexpected error registering APIs")
        return {"error": str(exc)}


@mcp.tool()
def get_apis_for_domains(
    domains: list[str], use_case_context: str | None = None
) -> dict[str, Any]:
    """Flatten the API templates of some domains into per-endpoint entries.

    When *use_case_context* is given the list is first refined through the
    completion service; any failure there leaves the catalog list as is.

    Returns:
        ``{"domains", "suggestedApis", "total", "refinement"}``.
    """
    try:
        return _dump(suggest_apis(catalog, refiner, domains, use_case_context))
    # Top-level handler: broad catch intentional
    except Exception as exc:
        logger.exception("Unexpected error resolving APIs for domains")
        return {"error": str(exc)}


@mcp.tool(name="generate_openapi_spec")
def generate_openapi_spec(
    api: dict[str, Any], customization: dict[str, Any] | None = None
) -> dict[str, Any]:
    """Generate an OpenAPI 3.0 document for one flattened API entry.

    Args:
        api: A flattened entry as returned by ``get_apis_for_domains``.
        customization: Optional overrides (``customPayload``,
                       ``customHeaders``, ``customParameters``, ``notes``).

    Returns:
        ``{"spec": <document>, "validation": <report>}``.
    """
    try:
        entry = FlattenedApiEntry.model_validate(api)
        overrides = (
            Customization.model_validate(customization)
            if customization is not None
            else None
        )
        return _with_validation(synthesize_single(entry, overrides))
    except PydanticValidationError as exc:
        logger.warning("Invalid API entry for document generation: %s", exc)
        return {"error": str(exc)}
    # Top-level handler: broad catch intentional
    except Exception as exc:
        logger.exception("Unexpected error generating document")
        return {"error": str(exc)}


@mcp.tool(name="generate_use_case_spec")
def generate_use_case_spec(use_case: dict[str, Any]) -> dict[str, Any]:
    """Generate one OpenAPI 3.0 document covering every API of a use case.

    Args:
        use_case: ``{"title", "description", "suggestedApis": [...]}``.

    Returns:
        ``{"spec": <document>, "validation": <report>}``.
    """
    try:
        return _with_validation(synthesize_aggregate(UseCase.model_validate(use_case)))
    except PydanticValidationError as exc:
        logger.warning("Invalid use case for document generation: %s", exc)
        return {"error": str(exc)}
    # Top-level handler: broad catch intentional
    except Exception as exc:
        logger.exception("Unexpected error generating use-case document")
        return {"error": str(exc)}


@mcp.tool(name="validate_openapi_spec")
def validate_openapi_spec(spec: dict[str, Any]) -> dict[str, Any]:
    """Run the structural check on an OpenAPI document.

    Returns:
        ``{"valid": bool, "errors": [...], "isValid": bool}``.
    """
    return _dump(validate_spec(spec))


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    mcp.run()
