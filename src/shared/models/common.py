"""Common Pydantic v2 data models shared across services."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

# Boundary models speak camelCase JSON but accept snake_case on input.
CAMEL_CONFIG: dict[str, Any] = {
    "from_attributes": True,
    "populate_by_name": True,
    "alias_generator": to_camel,
}


class HealthStatus(BaseModel):
    """Health status of a service."""
    status: str = Field(
        default="healthy",
        pattern=r"^(healthy|degraded|unhealthy)$"
    )
    service_name: str
    version: str
    completion: str = Field(
        default="configured",
        pattern=r"^(configured|unconfigured)$"
    )
    domain_count: int = Field(default=0, ge=0)
    api_count: int = Field(default=0, ge=0)
    uptime_seconds: float
    details: dict[str, Any] = Field(default_factory=dict)

    model_config = {"from_attributes": True}
