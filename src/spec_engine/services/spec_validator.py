"""Structural sanity check for generated OpenAPI documents.

The check is shallow: it confirms the handful of fields every
generated document must carry and that every operation declares its
responses.  It does not validate against the OpenAPI meta-schema.
"""
from __future__ import annotations

from typing import Any

from src.shared.models.openapi import ValidationReport


def validate_spec(document: Any) -> ValidationReport:
    """Check a document's required structure, collecting every problem.

    Checks performed:
        1. ``openapi`` version field present
        2. ``info.title`` and ``info.version`` present
        3. at least one path
        4. every path item is an object
        5. every operation is an object with a ``responses`` key

    Returns:
        ValidationReport with ``valid`` False and one message per failed
        check.  Never raises.
    """
    if not isinstance(document, dict):
        return ValidationReport(
            valid=False,
            errors=[f"Document must be an object, got {type(document).__name__}"],
        )

    errors: list[str] = []

    if not document.get("openapi"):
        errors.append("Missing openapi version")

    info = document.get("info")
    if not isinstance(info, dict) or not info.get("title") or not info.get("version"):
        errors.append("Missing or incomplete info section")

    paths = document.get("paths")
    if not isinstance(paths, dict) or not paths:
        errors.append("No paths defined")
        paths = {}

    for path, path_item in paths.items():
        if not isinstance(path_item, dict):
            errors.append(f"Invalid path item for {path}")
            continue
        for method, operation in path_item.items():
            if not isinstance(operation, dict) or "responses" not in operation:
                errors.append(f"Invalid operation {str(method).upper()} for path {path}")

    return ValidationReport(valid=not errors, errors=errors)
