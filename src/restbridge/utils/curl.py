"""
curl.py
-------
Renders a REST API step as an equivalent cURL command for display.
"""
import json
import shlex
from typing import Any, List, Optional
from urllib.parse import urlencode

from ..models import BodyType, Property
from .properties import effective_pairs, has_header, property_text
from .request_body import DEFAULT_FILE_NAME

LINE_SEPARATOR = " \\\n  "


def make_curl_string(
    method: str,
    url: str,
    headers: Optional[List[Optional[Property]]] = None,
    params: Optional[List[Optional[Property]]] = None,
    body: Any = None,
    form_data: Optional[List[Optional[Property]]] = None,
    body_type: Optional[BodyType] = None,
    file_name: Optional[str] = None,
    file_form_key: Optional[str] = None,
) -> str:
    method = getattr(method, "value", method)
    parts = [f"curl --location --request {method} {shlex.quote(_with_params(url, params))}"]

    header_pairs = effective_pairs(headers)
    for p in header_pairs:
        header = "%s: %s" % (p.key, property_text(p.value))
        parts.append(f"--header {shlex.quote(header)}")

    if body_type is None and not _is_empty(body):
        body_type = BodyType.JSON

    if body_type == BodyType.JSON and not _is_empty(body):
        if not has_header({p.key: p.value for p in header_pairs}, "Content-Type"):
            parts.append(f"--header {shlex.quote('Content-Type: application/json')}")
        parts.append(f"--data-raw {shlex.quote(_serialize(body))}")
    elif body_type == BodyType.RAW and not _is_empty(body):
        parts.append(f"--data-raw {shlex.quote(_serialize(body))}")
    elif body_type == BodyType.FORM:
        for p in effective_pairs(form_data):
            field = "%s=%s" % (p.key, property_text(p.value))
            parts.append(f"--data-urlencode {shlex.quote(field)}")
    elif body_type == BodyType.MULTIPART:
        for p in effective_pairs(form_data):
            field = "%s=%s" % (p.key, json.dumps(property_text(p.value)))
            parts.append(f"--form {shlex.quote(field)}")
        if file_form_key:
            upload = "%s=@%s" % (file_form_key, json.dumps(file_name or DEFAULT_FILE_NAME))
            parts.append(f"--form {shlex.quote(upload)}")

    return LINE_SEPARATOR.join(parts)


def _with_params(url: str, params) -> str:
    pairs = [(p.key, property_text(p.value)) for p in effective_pairs(params)]
    if not pairs:
        return url
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{urlencode(pairs)}"


def _serialize(body: Any) -> str:
    if isinstance(body, bytes):
        return body.decode("utf-8", errors="replace")
    if isinstance(body, str):
        return body
    return json.dumps(body)


def _is_empty(body: Any) -> bool:
    return body is None or body == "" or body == b""

