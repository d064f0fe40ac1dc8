"""Heuristic JSON Schema inference from example payloads.

Turns an example object into a ``properties`` map in a single pass:
scalars map to their JSON type, nested objects recurse, and arrays are
typed after their first element only.  Mixed-type arrays are therefore
described by whatever comes first.  Empty arrays get ``string`` items and
arrays led by ``None`` get ``object`` items.

Examples are expected to be JSON-like trees.  Cyclic containers and
nesting deeper than ``max_depth`` collapse to a bare ``{"type": "object"}``
node so inference always terminates.
"""
from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger("spec-engine.schema_inference")

DEFAULT_MAX_DEPTH = 32


def json_type(value: Any) -> str:
    """Return the JSON Schema type name for a single example value."""
    # bool is a subclass of int, so it must be tested first.
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, (list, tuple)):
        return "array"
    return "string"


def _stringify(value: Any) -> str:
    if value is None:
        return "null"
    try:
        return str(value)
    except Exception:  # str() of arbitrary objects may raise
        return f"<{type(value).__name__}>"


def _infer_field(value: Any, depth: int, max_depth: int, path: set[int]) -> dict[str, Any]:
    if isinstance(value, (str, bool, int, float)):
        return {"type": json_type(value), "example": value}

    if isinstance(value, (list, tuple)):
        if len(value) == 0:
            item_type = "string"
        elif value[0] is None:
            item_type = "object"
        else:
            item_type = json_type(value[0])
        return {"type": "array", "items": {"type": item_type}, "example": value}

    if isinstance(value, dict):
        if id(value) in path or depth >= max_depth:
            logger.debug("Collapsing nested example at depth %d", depth)
            return {"type": "object"}
        return {
            "type": "object",
            "properties": _infer_object(value, depth + 1, max_depth, path),
            "example": value,
        }

    return {"type": "string", "example": _stringify(value)}


def _infer_object(
    example: dict[Any, Any], depth: int, max_depth: int, path: set[int]
) -> dict[str, Any]:
    path.add(id(example))
    try:
        return {
            str(key): _infer_field(value, depth, max_depth, path)
            for key, value in example.items()
        }
    finally:
        path.discard(id(example))


def infer_properties(
    example: Any, max_depth: int = DEFAULT_MAX_DEPTH
) -> dict[str, dict[str, Any]]:
    """Infer a JSON Schema ``properties`` map from an example object.

    Args:
        example: The example payload.  Only objects (dicts) are described;
            any other top-level value yields an empty map.
        max_depth: Maximum number of nested objects to descend into.

    Returns:
        Mapping of field name to ``{type, example, properties?, items?}``.
    """
    if not isinstance(example, dict):
        logger.debug(
            "Top-level example is %s, not an object; no properties inferred",
            type(example).__name__,
        )
        return {}
    return _infer_object(example, 0, max_depth, set())
