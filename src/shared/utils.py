"""Shared utility functions."""
import hashlib
import re

_WHITESPACE_RE = re.compile(r"\s+")


def slugify(name: str) -> str:
    """Lower-case *name* and replace whitespace runs with hyphens."""
    return _WHITESPACE_RE.sub("-", name.lower())


def strip_whitespace(name: str) -> str:
    """Remove every whitespace character from *name*."""
    return _WHITESPACE_RE.sub("", name)


def short_hash(value: str, length: int = 9) -> str:
    """Return a stable upper-case hex digest prefix for *value*."""
    return hashlib.sha256(value.encode("utf-8")).hexdigest()[:length].upper()
