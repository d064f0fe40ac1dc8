"""Catalog Pydantic v2 data models: service domains, API templates and
the flattened per-endpoint projection handed to callers."""
from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator

from src.shared.constants import BIAN_VERSION
from src.shared.models.common import CAMEL_CONFIG


class OperationKind(str, Enum):
    """BIAN operation classification of an endpoint verb."""
    CREATE = "CR"
    UPDATE = "UP"
    REQUEST = "RQ"
    BEHAVIOR_QUALIFIER = "BQ"


class Endpoint(BaseModel):
    """One (path template, HTTP method, operation verb) triple."""
    path: str
    method: str = "GET"
    operation: str = ""
    description: str = ""

    model_config = {**CAMEL_CONFIG, "frozen": True}

    @field_validator("method")
    @classmethod
    def upper_method(cls, value: str) -> str:
        return value.strip().upper() or "GET"


class ServiceDomain(BaseModel):
    """A named business capability area grouping related APIs."""
    name: str = Field(..., min_length=1)
    description: str
    business_areas: list[str] = Field(default_factory=list)
    common_apis: list[str] = Field(default_factory=list)

    model_config = {**CAMEL_CONFIG, "frozen": True}


class ApiTemplate(BaseModel):
    """Reusable definition of one banking capability's endpoints."""
    name: str = Field(..., min_length=1)
    domain: str
    description: str = ""
    endpoints: list[Endpoint] = Field(default_factory=list)
    coverage: list[str] = Field(default_factory=list)
    limitations: list[str] = Field(default_factory=list)

    model_config = {**CAMEL_CONFIG, "frozen": True}


class PathParameter(BaseModel):
    """A templated path token such as ``{payment-order-id}``."""
    name: str
    type: str = "string"
    required: bool = True
    description: str = ""

    model_config = CAMEL_CONFIG


class FlattenedApiEntry(BaseModel):
    """Caller-facing projection of a single endpoint of an API template."""
    name: str
    domain: str
    description: str = ""
    version: str = BIAN_VERSION
    operation_type: OperationKind = OperationKind.REQUEST
    endpoint: str
    method: str = "GET"
    available_methods: list[str] = Field(default_factory=list)
    parameters: list[PathParameter] = Field(default_factory=list)
    request_schema: dict[str, Any] = Field(default_factory=dict)
    response_schema: dict[str, Any] = Field(default_factory=dict)

    model_config = CAMEL_CONFIG

    @field_validator("method")
    @classmethod
    def upper_method(cls, value: str) -> str:
        return value.strip().upper() or "GET"


class DomainCandidate(BaseModel):
    """A domain proposed for runtime registration."""
    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    business_area: str | None = None

    model_config = CAMEL_CONFIG


class ApiCandidate(BaseModel):
    """An API proposed for runtime registration."""
    name: str = Field(..., min_length=1)
    domain: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)

    model_config = CAMEL_CONFIG


class CreateDomainsRequest(BaseModel):
    """Request to register domains."""
    domains: list[DomainCandidate] = Field(..., min_length=1)

    model_config = CAMEL_CONFIG


class CreateApisRequest(BaseModel):
    """Request to register API templates."""
    apis: list[ApiCandidate] = Field(..., min_length=1)

    model_config = CAMEL_CONFIG


class DomainListResponse(BaseModel):
    """List of service domains."""
    items: list[ServiceDomain]
    total: int

    model_config = CAMEL_CONFIG


class ApiTemplateListResponse(BaseModel):
    """List of API templates."""
    items: list[ApiTemplate]
    total: int

    model_config = CAMEL_CONFIG


class ApiSuggestionRequest(BaseModel):
    """Request for the flattened APIs of a set of domains."""
    domains: list[str] = Field(..., min_length=1)
    use_case_context: str | None = None

    model_config = CAMEL_CONFIG


class ApiSuggestionResponse(BaseModel):
    """Flattened API suggestions for a set of domains."""
    domains: list[str]
    suggested_apis: list[FlattenedApiEntry]
    total: int
    refinement: str = Field(
        default="skipped",
        pattern=r"^(skipped|refined|degraded)$"
    )

    model_config = CAMEL_CONFIG


class DomainSelectionRequest(BaseModel):
    """Request to check a domain selection against use-case text."""
    domains: list[str] = Field(..., min_length=1)
    use_case_text: str = Field(..., min_length=10)

    model_config = CAMEL_CONFIG


class DomainSelectionValidation(BaseModel):
    """Verdict on whether selected domains suit a use case."""
    valid: bool = True
    suggestions: list[str] = Field(default_factory=list)
    reasoning: str = ""

    model_config = CAMEL_CONFIG
