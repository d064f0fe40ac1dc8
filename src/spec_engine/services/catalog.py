"""In-memory service-domain and API-template catalog.

A :class:`ServiceCatalog` owns its registries; the application keeps one
on ``app.state`` and tests build their own.  Registration is append-only
and idempotent by name, and is serialized by a lock so concurrent
requests can register safely while readers work on list snapshots.
"""
from __future__ import annotations

import logging
import threading
from typing import Iterable

from src.shared.constants import AI_SUGGESTED_AREA, BIAN_VERSION
from src.shared.models.catalog import (
    ApiCandidate,
    ApiTemplate,
    DomainCandidate,
    Endpoint,
    FlattenedApiEntry,
    ServiceDomain,
)
from src.shared.utils import slugify
from src.spec_engine.services.operation_classifier import (
    classify_operation,
    extract_path_parameters,
)
from src.spec_engine.services.seed_catalog import seed_api_templates, seed_domains

logger = logging.getLogger("spec-engine.catalog")


def flatten_templates(templates: Iterable[ApiTemplate]) -> list[FlattenedApiEntry]:
    """Project templates into one caller-facing entry per endpoint."""
    entries: list[FlattenedApiEntry] = []
    for template in templates:
        sibling_methods = [endpoint.method for endpoint in template.endpoints]
        for endpoint in template.endpoints:
            entries.append(
                FlattenedApiEntry(
                    name=f"{template.name} - {endpoint.operation}",
                    domain=template.domain,
                    description=endpoint.description or template.description,
                    version=BIAN_VERSION,
                    operation_type=classify_operation(endpoint.operation),
                    endpoint=endpoint.path,
                    method=endpoint.method,
                    available_methods=list(sibling_methods),
                    parameters=extract_path_parameters(endpoint.path),
                )
            )
    return entries


def _generated_endpoints(api_name: str) -> list[Endpoint]:
    slug = slugify(api_name)
    return [
        Endpoint(
            path=f"/{slug}/initiate",
            method="POST",
            operation="Initiate",
            description=f"Initiate a {api_name} operation",
        ),
        Endpoint(
            path=f"/{slug}/{{id}}/retrieve",
            method="GET",
            operation="Retrieve",
            description=f"Retrieve {api_name} information",
        ),
        Endpoint(
            path=f"/{slug}/{{id}}/update",
            method="PUT",
            operation="Update",
            description=f"Update {api_name}",
        ),
    ]


class ServiceCatalog:
    """Registry of service domains and API templates.

    Args:
        domains: Initial domains; defaults to the built-in seed list.
        templates: Initial API templates; defaults to the built-in seed list.
    """

    def __init__(
        self,
        domains: Iterable[ServiceDomain] | None = None,
        templates: Iterable[ApiTemplate] | None = None,
    ) -> None:
        self._lock = threading.Lock()
        self._domains: list[ServiceDomain] = list(
            seed_domains() if domains is None else domains
        )
        self._templates: dict[str, ApiTemplate] = {}
        for template in seed_api_templates() if templates is None else templates:
            self._templates.setdefault(template.name, template)

    # ------------------------------------------------------------------
    # Domains
    # ------------------------------------------------------------------

    def list_domains(self) -> list[ServiceDomain]:
        """Return all domains, seed first, then in registration order."""
        return list(self._domains)

    def find_domain(self, name: str) -> ServiceDomain | None:
        """Return the domain called *name*, or ``None``."""
        for domain in list(self._domains):
            if domain.name == name:
                return domain
        return None

    def search_domains(self, term: str) -> list[ServiceDomain]:
        """Case-insensitive substring search over name, description and areas."""
        needle = term.lower()
        return [
            domain
            for domain in list(self._domains)
            if needle in domain.name.lower()
            or needle in domain.description.lower()
            or any(needle in area.lower() for area in domain.business_areas)
        ]

    def register_domains(self, candidates: Iterable[DomainCandidate]) -> list[ServiceDomain]:
        """Register domains by name, returning the record resolved for each.

        A candidate whose name is already known resolves to the existing
        record untouched, so repeated calls are safe.
        """
        resolved: list[ServiceDomain] = []
        with self._lock:
            for candidate in candidates:
                existing = next(
                    (d for d in self._domains if d.name == candidate.name), None
                )
                if existing is not None:
                    logger.info("Domain already registered: %s", candidate.name)
                    resolved.append(existing)
                    continue

                domain = ServiceDomain(
                    name=candidate.name,
                    description=candidate.description,
                    business_areas=[candidate.business_area or AI_SUGGESTED_AREA],
                    common_apis=[f"{candidate.name} API"],
                )
                self._domains.append(domain)
                resolved.append(domain)
                logger.info("Domain registered: %s", candidate.name)
        return resolved

    # ------------------------------------------------------------------
    # API templates
    # ------------------------------------------------------------------

    def list_apis(self) -> list[ApiTemplate]:
        """Return all API templates in registration order."""
        return list(self._templates.values())

    def find_api(self, name: str) -> ApiTemplate | None:
        """Return the API template called *name*, or ``None``."""
        return self._templates.get(name)

    def register_apis(self, candidates: Iterable[ApiCandidate]) -> list[ApiTemplate]:
        """Register API templates by name, returning the record resolved for each.

        New templates get generated Initiate/Retrieve/Update endpoints;
        known names resolve to the existing template untouched.
        """
        resolved: list[ApiTemplate] = []
        with self._lock:
            for candidate in candidates:
                existing = self._templates.get(candidate.name)
                if existing is not None:
                    logger.info("API already registered: %s", candidate.name)
                    resolved.append(existing)
                    continue

                template = ApiTemplate(
                    name=candidate.name,
                    domain=candidate.domain,
                    description=candidate.description,
                    endpoints=_generated_endpoints(candidate.name),
                    coverage=[
                        f"{candidate.domain} operations",
                        "basic management",
                        "queries",
                    ],
                    limitations=["generated automatically", "basic functionality"],
                )
                self._templates[candidate.name] = template
                resolved.append(template)
                logger.info(
                    "API registered: %s for domain %s", candidate.name, candidate.domain
                )
        return resolved

    def resolve_templates(self, domain_names: Iterable[str]) -> list[ApiTemplate]:
        """Collect the templates belonging to the requested domains.

        First the common APIs each requested domain declares (in catalog
        order), then any other template whose ``domain`` is requested.  The
        second pass surfaces templates registered at runtime that no domain
        lists as common.
        """
        requested = set(domain_names)
        templates = dict(self._templates)
        collected: list[ApiTemplate] = []
        seen: set[str] = set()

        for domain in list(self._domains):
            if domain.name not in requested:
                continue
            for api_name in domain.common_apis:
                template = templates.get(api_name)
                if template is not None and api_name not in seen:
                    collected.append(template)
                    seen.add(api_name)

        for name, template in templates.items():
            if template.domain in requested and name not in seen:
                collected.append(template)
                seen.add(name)

        return collected

    def apis_for_domains(self, domain_names: Iterable[str]) -> list[FlattenedApiEntry]:
        """Return the flattened endpoints of every template for the domains."""
        return flatten_templates(self.resolve_templates(domain_names))
