"""OpenAPI 3.0 document synthesizer for the Spec Engine.

Builds documents either for a single flattened API entry (optionally
folding in a user's customization) or for every API of a use case.
Component schemas are inferred from the example payloads embedded in the
document.  Every function in this module is a pure function of its
inputs; none of them raise on odd catalog or customization data.

Schema names are the operation's display name with whitespace removed
plus ``Request``/``Response``.  Display names that normalise to the same
token share a schema name; the later schema wins and a warning is logged.
"""
from __future__ import annotations

import copy
import logging
import re
from typing import Any

import yaml

from src.shared.constants import (
    BODY_METHODS,
    DOCUMENT_VERSION,
    OPENAPI_VERSION,
    USE_CASE_SERVERS,
)
from src.shared.models.catalog import FlattenedApiEntry
from src.shared.models.openapi import Customization, UseCase
from src.shared.utils import slugify, strip_whitespace
from src.spec_engine.services.example_payloads import canned_example, response_example
from src.spec_engine.services.operation_classifier import extract_path_parameters
from src.spec_engine.services.schema_inference import infer_properties, json_type

logger = logging.getLogger("spec-engine.synthesizer")

ERROR_SCHEMA_NAME = "ErrorResponse"

_ERROR_RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "success": {"type": "boolean", "example": False},
        "error": {
            "type": "object",
            "properties": {
                "code": {"type": "string", "example": "VALIDATION_ERROR"},
                "message": {"type": "string", "example": "Invalid request data"},
                "details": {"type": "array", "items": {"type": "string"}},
            },
        },
        "timestamp": {"type": "string", "format": "date-time"},
    },
    "required": ["success", "error", "timestamp"],
}

_ERROR_RESPONSES: list[tuple[str, str]] = [
    ("400", "Bad Request"),
    ("401", "Unauthorized"),
    ("404", "Not Found"),
    ("500", "Internal Server Error"),
]

_BEARER_SCHEME: dict[str, Any] = {
    "type": "http",
    "scheme": "bearer",
    "bearerFormat": "JWT",
}

_API_KEY_SCHEME: dict[str, Any] = {
    "type": "apiKey",
    "in": "header",
    "name": "X-API-Key",
}

_NON_ALNUM_RE = re.compile(r"[^a-zA-Z0-9]")


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def schema_base_name(display_name: str) -> str:
    """Derive the component-schema prefix for an operation display name."""
    return strip_whitespace(display_name)


def _ref(schema_name: str) -> dict[str, str]:
    return {"$ref": f"#/components/schemas/{schema_name}"}


def _operation_id(method: str, path: str) -> str:
    return f"{method}{_NON_ALNUM_RE.sub('', path)}"


def _path_parameters(path: str) -> list[dict[str, Any]]:
    """Declare each distinct ``{token}`` of *path* once."""
    parameters: list[dict[str, Any]] = []
    seen: set[str] = set()
    for param in extract_path_parameters(path):
        if param.name in seen:
            continue
        seen.add(param.name)
        parameters.append({
            "name": param.name,
            "in": "path",
            "required": True,
            "description": param.description,
            "schema": {"type": param.type},
        })
    return parameters


def _pagination_parameters() -> list[dict[str, Any]]:
    return [
        {
            "name": "limit",
            "in": "query",
            "description": "Number of results to return",
            "required": False,
            "schema": {"type": "integer", "default": 10, "minimum": 1, "maximum": 100},
        },
        {
            "name": "offset",
            "in": "query",
            "description": "Number of results to skip",
            "required": False,
            "schema": {"type": "integer", "default": 0, "minimum": 0},
        },
    ]


def _customization_parameters(
    customization: Customization, taken: set[tuple[str, str]]
) -> list[dict[str, Any]]:
    """Turn custom headers and parameters into optional operation parameters.

    *taken* holds the ``(name, in)`` pairs already declared on the operation.
    """
    parameters: list[dict[str, Any]] = []
    for name, value in customization.custom_headers.items():
        if (name, "header") in taken:
            continue
        taken.add((name, "header"))
        parameters.append({
            "name": name,
            "in": "header",
            "required": False,
            "schema": {"type": "string"},
            "example": value,
        })
    for name, value in customization.custom_parameters.items():
        if (name, "query") in taken:
            continue
        taken.add((name, "query"))
        parameters.append({
            "name": name,
            "in": "query",
            "required": False,
            "schema": {"type": json_type(value)},
            "example": value,
        })
    return parameters


def _responses(response_schema: str, example: dict[str, Any]) -> dict[str, Any]:
    responses: dict[str, Any] = {
        "200": {
            "description": "Successful operation",
            "content": {
                "application/json": {
                    "schema": _ref(response_schema),
                    "example": example,
                }
            },
        }
    }
    for code, description in _ERROR_RESPONSES:
        responses[code] = {
            "description": description,
            "content": {"application/json": {"schema": _ref(ERROR_SCHEMA_NAME)}},
        }
    return responses


def _resolve_request_example(
    display_name: str, domain: str, customization: Customization | None
) -> dict[str, Any]:
    """Customization payload first, then the keyword example, then generic."""
    if customization is not None and customization.custom_payload is not None:
        return copy.deepcopy(customization.custom_payload)
    return canned_example(display_name, domain)


def _put_schema(schemas: dict[str, Any], name: str, schema: dict[str, Any]) -> None:
    existing = schemas.get(name)
    if existing is not None and existing != schema:
        logger.warning("Schema name collision on %s; keeping the later definition", name)
    schemas[name] = schema


def _build_operation(
    *,
    display_name: str,
    domain: str,
    description: str,
    path: str,
    method: str,
    security: list[dict[str, list[str]]],
    schemas: dict[str, Any],
    customization: Customization | None = None,
    summary: str | None = None,
) -> dict[str, Any]:
    """Build one operation object and register the schemas it references."""
    method = method.upper()
    base = schema_base_name(display_name)
    request_schema = f"{base}Request"
    response_schema = f"{base}Response"

    parameters = _path_parameters(path)
    if method == "GET":
        parameters.extend(_pagination_parameters())
    if customization is not None:
        taken = {(param["name"], param["in"]) for param in parameters}
        parameters.extend(_customization_parameters(customization, taken))

    operation: dict[str, Any] = {
        "summary": summary or display_name,
        "description": description or f"Execute {display_name} operation",
        "operationId": _operation_id(method.lower(), path),
    }
    if domain:
        operation["tags"] = [domain]
    if parameters:
        operation["parameters"] = parameters

    if method in BODY_METHODS:
        request_example = _resolve_request_example(display_name, domain, customization)
        operation["requestBody"] = {
            "required": True,
            "content": {
                "application/json": {
                    "schema": _ref(request_schema),
                    "example": request_example,
                }
            },
        }
        request_body_schema: dict[str, Any] = {
            "type": "object",
            "properties": infer_properties(request_example),
        }
        # OpenAPI 3.0 forbids an empty ``required`` list.
        if request_example:
            request_body_schema["required"] = list(request_example.keys())
        _put_schema(schemas, request_schema, request_body_schema)

    success_example = response_example(display_name, domain, method)
    _put_schema(schemas, response_schema, {
        "type": "object",
        "properties": infer_properties(success_example),
        "required": ["success", "timestamp"],
    })

    operation["responses"] = _responses(response_schema, success_example)
    operation["security"] = security
    return operation


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def synthesize_single(
    api: FlattenedApiEntry,
    customization: Customization | None = None,
) -> dict[str, Any]:
    """Generate an OpenAPI 3.0 document for one API endpoint.

    Args:
        api: The flattened entry (one endpoint of one API template).
        customization: Optional per-user overrides.  Its payload replaces
            the canned request example; headers and parameters are
            declared as optional parameters; notes extend the description.

    Returns:
        The OpenAPI document as a plain dict.
    """
    schemas: dict[str, Any] = {}
    operation = _build_operation(
        display_name=api.name,
        domain=api.domain,
        description=api.description,
        path=api.endpoint,
        method=api.method,
        security=[{"bearerAuth": []}],
        schemas=schemas,
        customization=customization,
    )
    schemas[ERROR_SCHEMA_NAME] = copy.deepcopy(_ERROR_RESPONSE_SCHEMA)

    description = (
        f"API documentation for {api.name}\n\n"
        f"**Service Domain:** {api.domain}\n"
        f"**Description:** {api.description or 'No description available'}"
    )
    if customization is not None and customization.notes:
        description += f"\n\n**Notes:** {customization.notes}"

    document: dict[str, Any] = {
        "openapi": OPENAPI_VERSION,
        "info": {
            "title": f"{api.name} API",
            "version": DOCUMENT_VERSION,
            "description": description,
        },
        "paths": {api.endpoint: {api.method.lower(): operation}},
        "components": {
            "schemas": schemas,
            "securitySchemes": {"bearerAuth": dict(_BEARER_SCHEME)},
        },
    }
    logger.info("OpenAPI document generated for API: %s", api.name)
    return document


def synthesize_aggregate(use_case: UseCase) -> dict[str, Any]:
    """Generate one OpenAPI 3.0 document covering every API of a use case.

    Each (API, endpoint) pair becomes one path operation built with the
    same parameter, request-body and response rules as
    :func:`synthesize_single`.  Customizations are never applied here.
    """
    paths: dict[str, Any] = {}
    schemas: dict[str, Any] = {}
    tags: list[dict[str, str]] = []
    seen_domains: set[str] = set()
    security = [{"bearerAuth": []}, {"apiKeyAuth": []}]

    for api in use_case.suggested_apis:
        if api.domain not in seen_domains:
            seen_domains.add(api.domain)
            tags.append({"name": api.domain, "description": f"APIs of the {api.domain} domain"})

        for endpoint in api.endpoints:
            path = endpoint.path or f"/{slugify(api.domain)}-{slugify(api.name)}"
            method = endpoint.method.lower()
            display_name = (
                f"{api.name} - {endpoint.operation}" if endpoint.operation else api.name
            )
            description = (
                f"{api.description}\n\n"
                f"**Operation:** {endpoint.operation or 'N/A'}\n"
                f"**Domain:** {api.domain}"
            )
            operation = _build_operation(
                display_name=display_name,
                domain=api.domain,
                description=description,
                path=path,
                method=method,
                security=security,
                schemas=schemas,
                summary=endpoint.description or api.name,
            )
            path_item = paths.setdefault(path, {})
            if method in path_item:
                logger.warning("Duplicate operation %s %s; keeping the later one", method.upper(), path)
            path_item[method] = operation

    schemas[ERROR_SCHEMA_NAME] = copy.deepcopy(_ERROR_RESPONSE_SCHEMA)

    document: dict[str, Any] = {
        "openapi": OPENAPI_VERSION,
        "info": {
            "title": f"APIs for: {use_case.title}",
            "description": f"API documentation for use case: {use_case.description}",
            "version": DOCUMENT_VERSION,
        },
        "servers": [dict(server) for server in USE_CASE_SERVERS],
        "paths": paths,
        "components": {
            "schemas": schemas,
            "securitySchemes": {
                "bearerAuth": dict(_BEARER_SCHEME),
                "apiKeyAuth": dict(_API_KEY_SCHEME),
            },
        },
        "tags": tags,
    }
    logger.info(
        "OpenAPI document generated for use case %r: %d path(s)",
        use_case.title, len(paths),
    )
    return document


class _NoAliasDumper(yaml.SafeDumper):
    """Safe dumper that writes shared example objects out in full."""

    def ignore_aliases(self, data: Any) -> bool:
        return True


def render_yaml(document: dict[str, Any]) -> str:
    """Serialise a generated document as YAML, keeping key order."""
    return yaml.dump(
        document, Dumper=_NoAliasDumper, sort_keys=False, allow_unicode=True
    )
