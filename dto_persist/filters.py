"""Helpers for trimming projections down to what a model accepts."""

from typing import Any, Dict, Iterable, Mapping


def intersect_keys(data: Mapping[str, Any], writable: Iterable[str]) -> Dict[str, Any]:
    """Return the entries of ``data`` whose key is in ``writable``."""
    allowed = set(writable)
    return {key: value for key, value in data.items() if key in allowed}
