import hashlib
import json
import logging
from collections.abc import Mapping
from typing import Any

# Create the library logger
logger = logging.getLogger("paginant")

# Add NullHandler to prevent "No handlers could be found" warnings
# if the application doesn't configure logging.
logger.addHandler(logging.NullHandler())


def _flatten(value: Any, prefix: str = "") -> dict[str, Any]:
    """Flattens nested filter mappings into dotted paths, e.g. {"age.$gt": 12}."""
    if not isinstance(value, Mapping):
        return {prefix: value}
    flat: dict[str, Any] = {}
    for k, v in value.items():
        path = f"{prefix}.{k}" if prefix else str(k)
        flat.update(_flatten(v, path))
    return flat


def _hash_value(value: Any) -> str:
    # sort_keys makes equal filters hash equally whatever their key order
    encoded = json.dumps(value, sort_keys=True, default=str).encode("utf-8")
    return hashlib.sha256(encoded).hexdigest()[:8]


def redact_filter(filter_value: Mapping[str, Any] | Any | None) -> str | None:
    """
    Redacts a filter for logging.

    Nested conditions are flattened into dotted field paths and every leaf
    value is hashed, so log lines show which fields were filtered on and can
    be correlated across calls without revealing what the caller searched for.

    Example:
        {"gender": "m", "age": {"$gt": 12}} -> "{'age.$gt': '<hash>', 'gender': '<hash>'}"
    """
    if filter_value is None:
        return None
    try:
        if not isinstance(filter_value, Mapping):
            return _hash_value(filter_value)
        flat = _flatten(filter_value)
        return str({path: _hash_value(flat[path]) for path in sorted(flat)})
    except Exception:
        return "<redaction_failed>"
