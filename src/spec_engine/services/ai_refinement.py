"""AI-assisted refinement of catalog API suggestions.

The refiner asks the text-completion collaborator to tailor a base list
of API templates to a use case and merges its answer back into the list.
Nothing here ever fails outright: if the collaborator is unavailable or
answers with something unusable, the base list comes back unchanged and
the outcome records why.
"""
from __future__ import annotations

import logging
from typing import Iterable

from pydantic import ValidationError as PydanticValidationError

from src.shared.errors import CompletionError
from src.shared.models.catalog import (
    ApiSuggestionResponse,
    ApiTemplate,
    DomainSelectionValidation,
)
from src.shared.models.openapi import (
    RecommendedApi,
    RefinementOutcome,
    RefinementResponse,
)
from src.spec_engine.services.catalog import ServiceCatalog, flatten_templates
from src.spec_engine.services.completion_client import TextCompletion

logger = logging.getLogger("spec-engine.ai_refinement")

REASON_COMPLETION_FAILED = "completion_failed"
REASON_MALFORMED_RESPONSE = "malformed_response"
REASON_NO_RECOMMENDATIONS = "no_recommendations"

_REFINE_PROMPT = """\
Using the use case and the basic BIAN APIs available below, refine the suggestions.

USE CASE:
{context}

SELECTED DOMAINS:
{domains}

AVAILABLE BASIC APIS:
{apis}

Please:
1. Select the APIs most relevant to this specific use case
2. Suggest additional endpoints that may be needed
3. Identify which aspects of the use case these APIs do NOT cover

Answer in JSON:
{{
  "recommendedApis": [
    {{
      "name": "API Name",
      "domain": "Domain Name",
      "description": "Description",
      "relevanceScore": 0.9,
      "additionalEndpoints": [
        {{
          "path": "/additional-endpoint",
          "method": "POST",
          "operation": "CustomOperation",
          "description": "Description"
        }}
      ],
      "coverage": ["aspect 1", "aspect 2"],
      "limitations": ["limitation 1", "limitation 2"]
    }}
  ],
  "uncoveredAspects": ["uncovered aspect 1", "uncovered aspect 2"]
}}
"""

_DOMAIN_SELECTION_PROMPT = """\
Check whether the following BIAN domains are appropriate for this use case.

USE CASE:
{use_case}

SELECTED DOMAINS:
{selected}

AVAILABLE DOMAINS:
{available}

Answer in JSON:
{{
  "valid": true,
  "suggestions": ["alternative domain 1", "alternative domain 2"],
  "reasoning": "Explanation of the verdict"
}}
"""


def build_refinement_prompt(
    base_apis: Iterable[ApiTemplate], use_case_context: str, domains: Iterable[str]
) -> str:
    """Render the refinement prompt for the collaborator."""
    return _REFINE_PROMPT.format(
        context=use_case_context,
        domains=", ".join(domains),
        apis="\n".join(f"- {api.name}: {api.description}" for api in base_apis),
    )


def merge_recommendations(
    base_apis: list[ApiTemplate], recommended: list[RecommendedApi]
) -> list[ApiTemplate]:
    """Merge the collaborator's recommendations onto the base templates.

    A recommendation naming a base API extends that API's endpoints and
    replaces its coverage and limitations when it supplies them.  Other
    recommendations are taken as new templates verbatim.
    """
    by_name = {api.name: api for api in base_apis}
    merged: list[ApiTemplate] = []

    for suggestion in recommended:
        base = by_name.get(suggestion.name)
        if base is not None:
            merged.append(
                base.model_copy(
                    update={
                        "endpoints": [*base.endpoints, *suggestion.additional_endpoints],
                        "coverage": (
                            list(suggestion.coverage)
                            if suggestion.coverage is not None
                            else base.coverage
                        ),
                        "limitations": (
                            list(suggestion.limitations)
                            if suggestion.limitations is not None
                            else base.limitations
                        ),
                    }
                )
            )
            continue

        endpoints = (
            suggestion.endpoints
            if suggestion.endpoints is not None
            else suggestion.additional_endpoints
        )
        merged.append(
            ApiTemplate(
                name=suggestion.name,
                domain=suggestion.domain,
                description=suggestion.description,
                endpoints=list(endpoints),
                coverage=list(suggestion.coverage or []),
                limitations=list(suggestion.limitations or []),
            )
        )

    return merged


class ApiRefiner:
    """Refines API suggestions through a text-completion collaborator.

    Args:
        completion: The collaborator; ``None`` makes every refinement
            degrade immediately.
    """

    def __init__(self, completion: TextCompletion | None) -> None:
        self._completion = completion

    def _degraded(
        self, base_apis: list[ApiTemplate], reason: str
    ) -> RefinementOutcome:
        return RefinementOutcome(status="degraded", apis=list(base_apis), reason=reason)

    def refine_with_outcome(
        self,
        base_apis: list[ApiTemplate],
        use_case_context: str,
        domains: Iterable[str],
    ) -> RefinementOutcome:
        """Refine *base_apis* for a use case and report how it went."""
        base_apis = list(base_apis)
        if self._completion is None:
            logger.warning("API refinement skipped: no completion service")
            return self._degraded(base_apis, REASON_COMPLETION_FAILED)

        prompt = build_refinement_prompt(base_apis, use_case_context, list(domains))
        try:
            payload = self._completion.complete(prompt)
        except CompletionError as exc:
            logger.warning("API refinement degraded, completion failed: %s", exc.detail)
            return self._degraded(base_apis, REASON_COMPLETION_FAILED)
        except Exception as exc:  # any collaborator failure degrades
            logger.warning("API refinement degraded, completion raised: %s", exc)
            return self._degraded(base_apis, REASON_COMPLETION_FAILED)

        try:
            response = RefinementResponse.model_validate(payload)
        except PydanticValidationError as exc:
            logger.warning(
                "API refinement degraded, malformed response: %d error(s)",
                exc.error_count(),
            )
            return self._degraded(base_apis, REASON_MALFORMED_RESPONSE)

        if not response.recommended_apis:
            logger.info("API refinement returned no recommendations")
            return self._degraded(base_apis, REASON_NO_RECOMMENDATIONS)

        merged = merge_recommendations(base_apis, response.recommended_apis)
        logger.info(
            "API refinement produced %d API(s) from %d base API(s)",
            len(merged), len(base_apis),
        )
        return RefinementOutcome(status="refined", apis=merged)

    def refine(
        self,
        base_apis: list[ApiTemplate],
        use_case_context: str,
        domains: Iterable[str],
    ) -> list[ApiTemplate]:
        """Return the refined list, or *base_apis* unchanged on any failure."""
        return self.refine_with_outcome(base_apis, use_case_context, domains).apis

    def validate_domain_selection(
        self,
        domains: list[str],
        use_case_text: str,
        available_domains: Iterable[str],
    ) -> DomainSelectionValidation:
        """Ask the collaborator whether *domains* suit the use case.

        Falls back to a permissive verdict when no answer can be obtained.
        """
        fallback = DomainSelectionValidation(
            valid=True, reasoning="Automatic validation unavailable"
        )
        if self._completion is None:
            return fallback

        prompt = _DOMAIN_SELECTION_PROMPT.format(
            use_case=use_case_text,
            selected=", ".join(domains),
            available=", ".join(available_domains),
        )
        try:
            payload = self._completion.complete(prompt)
            return DomainSelectionValidation.model_validate(payload)
        except PydanticValidationError as exc:
            logger.warning("Domain selection check returned malformed data: %s", exc)
        except Exception as exc:  # any collaborator failure falls back
            logger.warning("Domain selection check failed: %s", exc)
        return fallback


def suggest_apis(
    catalog: ServiceCatalog,
    refiner: ApiRefiner,
    domain_names: list[str],
    use_case_context: str | None = None,
) -> ApiSuggestionResponse:
    """Resolve, optionally refine, and flatten the APIs for some domains.

    Refinement only runs when there is use-case text and at least one base
    API to refine.
    """
    templates = catalog.resolve_templates(domain_names)
    refinement = "skipped"

    if use_case_context and use_case_context.strip() and templates:
        outcome = refiner.refine_with_outcome(templates, use_case_context, domain_names)
        templates = outcome.apis
        refinement = outcome.status

    entries = flatten_templates(templates)
    return ApiSuggestionResponse(
        domains=list(domain_names),
        suggested_apis=entries,
        total=len(entries),
        refinement=refinement,
    )
