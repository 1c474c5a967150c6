"""
http_client.py
--------------
Executes a fully resolved request with ``requests`` and normalizes the response
into an ExecutionOutput. Enforces the timeout and body size limits carried by
the RequestOptions and decodes the body according to the declared response type.
"""
import base64
import codecs
import json
import logging
import time
from typing import Any

import requests

from .errors import RequestExecutionError
from .models import ExecutionOutput, RequestOptions, ResponseType

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024
DEFAULT_CHARSET = "utf-8"

TEXT_MIME_TYPES = {
    "application/xml",
    "application/javascript",
    "application/x-www-form-urlencoded",
}


def execute_request(options: RequestOptions, response_type=ResponseType.AUTO) -> ExecutionOutput:
    body_size = len(options.data) if options.data is not None else 0
    if options.max_body_length is not None and body_size > options.max_body_length:
        raise RequestExecutionError(
            f"Request body size {body_size} exceeds limit of {options.max_body_length} bytes"
        )

    timeout = options.timeout / 1000 if options.timeout else None
    logger.debug("Sending %s %s (timeout=%s s)", options.method, options.url, timeout)
    started = time.monotonic()
    try:
        response = requests.request(
            options.method,
            options.url,
            headers=options.headers,
            data=options.data,
            timeout=timeout,
            stream=True,
        )
        try:
            content = _read_body(response, options.max_content_length, started, options.timeout)
        finally:
            response.close()
    except requests.exceptions.Timeout as e:
        raise RequestExecutionError(f"Timed out after {options.timeout} ms") from e
    except requests.exceptions.RequestException as e:
        raise RequestExecutionError(f"Request failed, {e}") from e
    elapsed_ms = int((time.monotonic() - started) * 1000)

    status_code = response.status_code
    content_type = response.headers.get("Content-Type", "")
    logger.info("%s %s -> %s in %d ms", options.method, options.url, status_code, elapsed_ms)

    if status_code >= 400:
        detail = extract_response_data(content, content_type, ResponseType.AUTO)
        if not isinstance(detail, str):
            detail = json.dumps(detail)
        raise RequestExecutionError(
            f"Request failed with status code {status_code}, body: {detail}",
            status_code=status_code,
        )

    return ExecutionOutput(
        output=extract_response_data(content, content_type, response_type),
        status_code=status_code,
        headers=dict(response.headers),
        execution_time_ms=elapsed_ms,
        log=[f"{options.method} {options.url} returned {status_code} in {elapsed_ms} ms"],
    )


def _read_body(response, limit, started, timeout_ms) -> bytes:
    """Read the streamed body, enforcing the size limit and the overall execution timeout."""
    declared = response.headers.get("Content-Length")
    if limit is not None and declared and declared.isdigit() and int(declared) > limit:
        raise RequestExecutionError(f"Response size exceeded limit of {limit} bytes")

    chunks = []
    received = 0
    for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
        received += len(chunk)
        if limit is not None and received > limit:
            raise RequestExecutionError(f"Response size exceeded limit of {limit} bytes")
        if timeout_ms and (time.monotonic() - started) * 1000 > timeout_ms:
            raise RequestExecutionError(f"Timed out after {timeout_ms} ms")
        chunks.append(chunk)
    return b"".join(chunks)


def extract_response_data(content: bytes, content_type: str, response_type=ResponseType.AUTO) -> Any:
    """
    Decode a raw response body.

    json: parsed, invalid JSON is an error
    text/raw: decoded with the charset from the content type
    binary: base64 encoded
    auto: chosen from the content type; empty bodies give None
    """
    response_type = ResponseType(response_type or ResponseType.AUTO)
    charset = _charset(content_type)

    if response_type == ResponseType.BINARY:
        return base64.b64encode(content).decode("ascii")
    if response_type in (ResponseType.TEXT, ResponseType.RAW):
        return content.decode(charset, errors="replace")
    if response_type == ResponseType.JSON:
        if not content:
            return None
        try:
            return json.loads(content.decode(charset))
        except ValueError as e:
            raise RequestExecutionError(f"Failed to parse response as JSON, {e}") from e

    if not content:
        return None
    mime = content_type.split(";")[0].strip().lower()
    if mime == "application/json" or mime.endswith("+json"):
        text = content.decode(charset, errors="replace")
        try:
            return json.loads(text)
        except ValueError:
            return text
    if mime.startswith("text/") or mime in TEXT_MIME_TYPES or mime.endswith("+xml"):
        return content.decode(charset, errors="replace")
    if not mime:
        try:
            return content.decode(charset)
        except UnicodeDecodeError:
            pass
    return base64.b64encode(content).decode("ascii")


def _charset(content_type: str) -> str:
    for param in (content_type or "").split(";")[1:]:
        name, _, value = param.partition("=")
        if name.strip().lower() == "charset":
            charset = value.strip().strip("\"'")
            try:
                codecs.lookup(charset)
            except LookupError:
                break
            return charset
    return DEFAULT_CHARSET
