"""Use-case, customization and OpenAPI synthesis Pydantic v2 data models."""
from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, computed_field

from src.shared.models.catalog import ApiTemplate, Endpoint, FlattenedApiEntry
from src.shared.models.common import CAMEL_CONFIG


class Customization(BaseModel):
    """A user's per-API override bundle, owned by the persistence layer."""
    use_case_id: str | None = None
    api_name: str | None = None
    user_id: str | None = None
    custom_payload: dict[str, Any] | None = None
    custom_headers: dict[str, str] = Field(default_factory=dict)
    custom_parameters: dict[str, Any] = Field(default_factory=dict)
    notes: str | None = Field(default=None, max_length=2000)

    model_config = CAMEL_CONFIG


class SuggestedApi(BaseModel):
    """An API already resolved onto a use case."""
    name: str = Field(..., min_length=1)
    domain: str = ""
    description: str = ""
    endpoints: list[Endpoint] = Field(default_factory=list)
    coverage: list[str] = Field(default_factory=list)
    limitations: list[str] = Field(default_factory=list)

    model_config = CAMEL_CONFIG


class UseCase(BaseModel):
    """The slice of a use-case record the synthesizer consumes."""
    id: str | None = None
    title: str = Field(..., min_length=1)
    description: str = ""
    selected_domains: list[str] = Field(default_factory=list)
    suggested_apis: list[SuggestedApi] = Field(default_factory=list)

    model_config = CAMEL_CONFIG


class ValidationReport(BaseModel):
    """Outcome of the structural sanity check of a generated document."""
    valid: bool
    errors: list[str] = Field(default_factory=list)

    model_config = CAMEL_CONFIG

    @computed_field(alias="isValid")  # type: ignore[prop-decorator]
    @property
    def is_valid(self) -> bool:
        return self.valid


class RefinementOutcome(BaseModel):
    """Tagged result of the AI refinement step.

    ``refined`` carries the merged list; ``degraded`` carries the untouched
    base list plus the reason the collaborator's answer was not used.
    """
    status: Literal["refined", "degraded"]
    apis: list[ApiTemplate]
    reason: str | None = None

    model_config = CAMEL_CONFIG


class RecommendedApi(BaseModel):
    """One entry of the collaborator's ``recommendedApis`` list."""
    name: str = Field(..., min_length=1)
    domain: str = ""
    description: str = ""
    relevance_score: float | None = None
    endpoints: list[Endpoint] | None = None
    additional_endpoints: list[Endpoint] = Field(default_factory=list)
    coverage: list[str] | None = None
    limitations: list[str] | None = None

    model_config = {**CAMEL_CONFIG, "extra": "ignore"}


class RefinementResponse(BaseModel):
    """Expected shape of the collaborator's refinement answer."""
    recommended_apis: list[RecommendedApi] | None = None
    uncovered_aspects: list[str] = Field(default_factory=list)

    model_config = {**CAMEL_CONFIG, "extra": "ignore"}


class SingleSpecRequest(BaseModel):
    """Request to synthesize a document for one flattened API entry."""
    api: FlattenedApiEntry
    customization: Customization | None = None

    model_config = CAMEL_CONFIG


class UseCaseApiRequest(BaseModel):
    """Request addressing one API inside a use case."""
    use_case: UseCase
    api_name: str = Field(..., min_length=1)
    customization: Customization | None = None

    model_config = CAMEL_CONFIG


class ValidateSpecRequest(BaseModel):
    """Request to run the structural check on an arbitrary document."""
    spec: dict[str, Any]

    model_config = CAMEL_CONFIG


class SpecResponse(BaseModel):
    """A synthesized document together with its validation report."""
    spec: dict[str, Any]
    validation: ValidationReport
    included_customization: bool = False

    model_config = CAMEL_CONFIG


class RelatedApisResponse(BaseModel):
    """APIs of a use case related to a given one."""
    current_api: SuggestedApi
    related_apis: list[SuggestedApi]
    total: int
    grouped_by_domain: dict[str, list[SuggestedApi]] = Field(default_factory=dict)

    model_config = CAMEL_CONFIG
