"""
Deterministic identifiers.

Identical input always yields identical ids, so re-imported or re-planned
data can be compared directly.
"""
import hashlib
import json


def content_id(prefix: str, *parts) -> str:
    """
    Build an id from a prefix and a hash of JSON-serializable parts.

    Example:
        >>> content_id("route", [[6.86, 45.92]], False)
        'route-...'
    """
    payload = json.dumps(parts, sort_keys=True, default=str, separators=(",", ":"))
    digest = hashlib.sha1(payload.encode("utf-8")).hexdigest()[:12]
    return f"{prefix}-{digest}"
