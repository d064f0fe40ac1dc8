"""Shared constants used across all services."""
from __future__ import annotations

# Application version
VERSION: str = "1.0.0"

# Port numbers
SPEC_ENGINE_PORT: int = 8004
INTERNAL_PORT: int = 8000

# Service names
SPEC_ENGINE_SERVICE_NAME: str = "spec-engine"

# Generated document settings
OPENAPI_VERSION: str = "3.0.0"
DOCUMENT_VERSION: str = "1.0.0"
BIAN_VERSION: str = "13.0.0"

# Business area given to domains registered at runtime without one
AI_SUGGESTED_AREA: str = "AI-Suggested"

# Servers advertised by aggregate use-case documents
USE_CASE_SERVERS: list[dict[str, str]] = [
    {"url": "https://api.bian.org/v13", "description": "BIAN v13 server (production)"},
    {"url": "https://sandbox.bian.org/v13", "description": "BIAN v13 server (sandbox)"},
]

# HTTP methods that carry a request body in generated documents
BODY_METHODS: frozenset[str] = frozenset({"POST", "PUT", "PATCH"})
