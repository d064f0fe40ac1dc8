"""Lookups over the APIs already resolved onto a use case."""
from __future__ import annotations

from src.shared.constants import BIAN_VERSION
from src.shared.models.catalog import FlattenedApiEntry
from src.shared.models.openapi import SuggestedApi, UseCase
from src.spec_engine.services.operation_classifier import (
    classify_operation,
    extract_path_parameters,
)

DEFAULT_ENDPOINT_PATH = "/api/endpoint"
MIN_KEYWORD_LENGTH = 4


def find_use_case_api(use_case: UseCase, api_name: str) -> SuggestedApi | None:
    """Find an API by exact name, else by the part of *api_name* before ``" - "``.

    The fallback lets a flattened display name such as
    ``"Payment Order - Initiate"`` address its parent API.
    """
    for api in use_case.suggested_apis:
        if api.name == api_name:
            return api
    prefix = api_name.split(" - ")[0]
    for api in use_case.suggested_apis:
        if prefix in api.name:
            return api
    return None


def to_flattened_entry(api: SuggestedApi) -> FlattenedApiEntry:
    """Project a use-case API onto its first endpoint."""
    endpoint = api.endpoints[0] if api.endpoints else None
    path = endpoint.path if endpoint and endpoint.path else DEFAULT_ENDPOINT_PATH
    method = endpoint.method if endpoint else "GET"
    return FlattenedApiEntry(
        name=api.name,
        domain=api.domain,
        description=api.description or "No description available",
        version=BIAN_VERSION,
        operation_type=classify_operation(endpoint.operation if endpoint else ""),
        endpoint=path,
        method=method,
        available_methods=[e.method for e in api.endpoints],
        parameters=extract_path_parameters(path),
    )


def _keywords(name: str) -> set[str]:
    return {word for word in name.lower().split() if len(word) >= MIN_KEYWORD_LENGTH}


def related_apis(use_case: UseCase, current: SuggestedApi) -> list[SuggestedApi]:
    """Other APIs of the use case in the same domain or sharing a name keyword."""
    current_keywords = _keywords(current.name)
    related: list[SuggestedApi] = []
    for api in use_case.suggested_apis:
        if api.name == current.name:
            continue
        if api.domain == current.domain or current_keywords & _keywords(api.name):
            related.append(api)
    return related


def group_by_domain(apis: list[SuggestedApi]) -> dict[str, list[SuggestedApi]]:
    grouped: dict[str, list[SuggestedApi]] = {}
    for api in apis:
        grouped.setdefault(api.domain or "Other", []).append(api)
    return grouped
