"""
request_body.py
---------------
Builds the request payload for a REST API step from its body type and attaches
it to the transport descriptor, adding content headers as needed.
"""
import json
from typing import Any, Dict
from urllib.parse import urlencode

from urllib3 import encode_multipart_formdata

from ..models import ActionConfiguration, BodyType, RequestOptions
from .properties import effective_pairs, has_header, property_text

DEFAULT_FILE_NAME = "file"


def update_request_body(
    action_configuration: ActionConfiguration,
    headers: Dict[str, Any],
    options: RequestOptions,
) -> None:
    """
    Mutates ``headers`` and ``options`` in place. When no body type is given
    but a body is, the body is sent as JSON.
    """
    body = action_configuration.body
    body_type = action_configuration.body_type
    if body_type is None:
        body_type = BodyType.NONE if _is_empty(body) else BodyType.JSON

    if body_type == BodyType.NONE:
        return

    if body_type == BodyType.JSON:
        if _is_empty(body):
            return
        data = _to_bytes(body if isinstance(body, (str, bytes)) else json.dumps(body))
        _set_default(headers, "Content-Type", "application/json")
    elif body_type == BodyType.RAW:
        if _is_empty(body):
            return
        data = _to_bytes(body if isinstance(body, (str, bytes)) else str(body))
        _set_default(headers, "Content-Type", "text/plain")
    elif body_type == BodyType.FORM:
        pairs = effective_pairs(action_configuration.form_data)
        data = _to_bytes(urlencode([(p.key, property_text(p.value)) for p in pairs]))
        _set_default(headers, "Content-Type", "application/x-www-form-urlencoded")
    elif body_type == BodyType.MULTIPART:
        data, content_type = _multipart(action_configuration)
        _replace(headers, "Content-Type", content_type)
    else:
        raise ValueError(f"Unsupported body type: {body_type}")

    options.data = data
    _replace(headers, "Content-Length", str(len(data)))


def _multipart(action_configuration: ActionConfiguration):
    fields = [
        (p.key, property_text(p.value))
        for p in effective_pairs(action_configuration.form_data)
    ]
    if action_configuration.file_form_key:
        body = action_configuration.body
        if body is None:
            content = b""
        elif isinstance(body, (str, bytes)):
            content = body
        else:
            content = json.dumps(body)
        file_name = action_configuration.file_name or DEFAULT_FILE_NAME
        fields.append((action_configuration.file_form_key, (file_name, content)))
    return encode_multipart_formdata(fields)


def _is_empty(body: Any) -> bool:
    return body is None or body == "" or body == b""


def _to_bytes(value) -> bytes:
    if isinstance(value, bytes):
        return value
    return value.encode("utf-8")


def _set_default(headers: Dict[str, Any], name: str, value: str) -> None:
    if not has_header(headers, name):
        headers[name] = value


def _replace(headers: Dict[str, Any], name: str, value: str) -> None:
    for key in [k for k in headers if k.lower() == name.lower()]:
        del headers[key]
    headers[name] = value
