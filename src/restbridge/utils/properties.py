"""
properties.py
-------------
Helpers for key/value property lists (headers, params, form fields).
"""
import json
from typing import Any, Dict, Iterable, List, Optional

from ..models import Property


def param_has_key_value(prop: Optional[Property]) -> bool:
    """A pair is effective when it has a key and is not explicitly disabled."""
    if prop is None or not prop.key:
        return False
    return prop.enabled is not False


def concat_properties(*lists: Optional[Iterable[Optional[Property]]]) -> List[Optional[Property]]:
    merged = []
    for items in lists:
        merged.extend(items or [])
    return merged


def effective_pairs(*lists: Optional[Iterable[Optional[Property]]]) -> List[Property]:
    """Concatenate the lists in order and keep only effective pairs."""
    return [p for p in concat_properties(*lists) if param_has_key_value(p)]


def fold_headers(pairs: Iterable[Optional[Property]]) -> Dict[str, Any]:
    """Later pairs overwrite earlier ones sharing the exact same key."""
    headers = {}
    for p in pairs:
        if not p or not p.key:
            continue
        headers[p.key] = p.value if p.value is None else property_text(p.value)
    return headers


def property_text(value: Any) -> str:
    """String form of a property value; structured and scalar JSON values are JSON-encoded."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, bool, int, float)):
        return json.dumps(value)
    return str(value)


def has_header(headers: Dict[str, Any], name: str) -> bool:
    name = name.lower()
    return any(k.lower() == name for k in headers)
