#!/usr/bin/env python3
"""
KUBEGETINFO DOCUMENT ACCESSORS
------------------------------
Safe, read-only lookups into retrieved objects. Every accessor walks a
path of keys and returns None when a segment is missing, when an
intermediate node is not a mapping, or when the leaf has the wrong type.

A JSON null counts as missing. Nothing here ever raises on document content.

Author: KubeGetInfo Team
Date: 2026-10-18
"""

from typing import Any, Dict, List, Optional, Sequence

_MISSING = object()


def nested_value(doc: Any, path: Sequence[str]) -> Any:
    """Returns the raw node at `path`, or None if any segment is absent."""
    node = doc
    for key in path:
        if not isinstance(node, dict):
            return None
        node = node.get(key, _MISSING)
        if node is _MISSING:
            return None
    return node


def nested_map(doc: Any, path: Sequence[str]) -> Optional[Dict[str, Any]]:
    value = nested_value(doc, path)
    return value if isinstance(value, dict) else None


def nested_string_map(doc: Any, path: Sequence[str]) -> Optional[Dict[str, str]]:
    """A mapping whose values are all strings; a single odd value voids it."""
    value = nested_map(doc, path)
    if value is None:
        return None
    if not all(isinstance(v, str) for v in value.values()):
        return None
    return value


def nested_list(doc: Any, path: Sequence[str]) -> Optional[List[Any]]:
    value = nested_value(doc, path)
    return value if isinstance(value, list) else None


def nested_string(doc: Any, path: Sequence[str]) -> Optional[str]:
    value = nested_value(doc, path)
    return value if isinstance(value, str) else None


def nested_int(doc: Any, path: Sequence[str]) -> Optional[int]:
    value = nested_value(doc, path)
    # bool is an int subclass in Python; a flag is never a number here
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def nested_bool(doc: Any, path: Sequence[str]) -> Optional[bool]:
    value = nested_value(doc, path)
    return value if isinstance(value, bool) else None
