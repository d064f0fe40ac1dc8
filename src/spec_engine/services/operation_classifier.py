"""Operation classifier for the Spec Engine.

Maps free-text BIAN operation verbs onto an :class:`OperationKind` and
pulls templated parameters out of endpoint paths.  Both functions are
total: they never raise, whatever they are given.
"""
from __future__ import annotations

import re

from src.shared.models.catalog import OperationKind, PathParameter

_OPERATION_KINDS: dict[str, OperationKind] = {
    "register": OperationKind.CREATE,
    "initiate": OperationKind.CREATE,
    "create": OperationKind.CREATE,
    "update": OperationKind.UPDATE,
    "modify": OperationKind.UPDATE,
    "retrieve": OperationKind.REQUEST,
    "get": OperationKind.REQUEST,
    "request": OperationKind.REQUEST,
    "evaluate": OperationKind.BEHAVIOR_QUALIFIER,
    "execute": OperationKind.BEHAVIOR_QUALIFIER,
    "process": OperationKind.BEHAVIOR_QUALIFIER,
}

_PATH_TOKEN_RE = re.compile(r"\{([^}]+)\}")


def classify_operation(verb: str) -> OperationKind:
    """Classify an operation verb such as ``"Initiate"`` or ``"Retrieve"``.

    Unknown verbs fall back to :attr:`OperationKind.REQUEST`.
    """
    if not isinstance(verb, str):
        return OperationKind.REQUEST
    return _OPERATION_KINDS.get(verb.strip().lower(), OperationKind.REQUEST)


def extract_path_parameters(path_template: str) -> list[PathParameter]:
    """Return one required string parameter per ``{token}`` in *path_template*.

    Order of appearance is kept and repeated tokens are returned as
    repeats; callers that need unique names de-duplicate themselves.
    """
    if not isinstance(path_template, str):
        return []
    return [
        PathParameter(name=name, description=f"Path parameter: {name}")
        for name in _PATH_TOKEN_RE.findall(path_template)
    ]
