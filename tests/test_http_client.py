"""
Tests for restbridge.http_client request execution and response decoding.
"""
import base64
import time

import pytest
import requests

from restbridge.errors import RequestExecutionError
from restbridge.http_client import execute_request, extract_response_data
from restbridge.models import RequestOptions, ResponseType


def _options(**overrides):
    values = dict(
        url="https://api.example.com/items",
        method="GET",
        headers={"User-Agent": "ua"},
        timeout=2500,
        max_body_length=16,
        max_content_length=16,
    )
    values.update(overrides)
    return RequestOptions(**values)


def test_execute_request_returns_output(mock_request, make_response):
    mock_request.return_value = make_response(
        status_code=201, body=b"created", headers={"Content-Type": "text/plain"}
    )

    result = execute_request(_options(method="POST", data=b"{}"), ResponseType.AUTO)

    mock_request.assert_called_once_with(
        "POST",
        "https://api.example.com/items",
        headers={"User-Agent": "ua"},
        data=b"{}",
        timeout=2.5,
        stream=True,
    )
    assert result.output == "created"
    assert result.status_code == 201
    assert result.headers == {"Content-Type": "text/plain"}
    assert result.execution_time_ms >= 0
    assert result.log and "201" in result.log[0]
    mock_request.return_value.close.assert_called_once()


def test_oversized_request_body_is_rejected_before_sending(mock_request):
    with pytest.raises(RequestExecutionError, match="exceeds limit of 16 bytes"):
        execute_request(_options(data=b"x" * 17))
    mock_request.assert_not_called()


def test_oversized_response_is_rejected(mock_request, make_response):
    mock_request.return_value = make_response(body=b"y" * 17)
    with pytest.raises(RequestExecutionError, match="Response size exceeded limit of 16 bytes"):
        execute_request(_options())


def test_declared_content_length_over_limit(mock_request, make_response):
    mock_request.return_value = make_response(headers={"Content-Length": "1000"})
    with pytest.raises(RequestExecutionError, match="Response size exceeded"):
        execute_request(_options())
    mock_request.return_value.iter_content.assert_not_called()


def test_timeout_is_wrapped(mock_request):
    mock_request.side_effect = requests.exceptions.ReadTimeout("read timed out")
    with pytest.raises(RequestExecutionError, match="Timed out after 2500 ms"):
        execute_request(_options())


def test_connection_error_is_wrapped(mock_request):
    mock_request.side_effect = requests.exceptions.ConnectionError("refused")
    with pytest.raises(RequestExecutionError, match="Request failed, refused"):
        execute_request(_options())


def test_slow_body_hits_overall_timeout(mock_request, make_response):
    def trickle(chunk_size):
        for _ in range(5):
            time.sleep(0.04)
            yield b"."

    mock_request.return_value = make_response()
    mock_request.return_value.iter_content.side_effect = trickle
    with pytest.raises(RequestExecutionError, match="Timed out after 50 ms"):
        execute_request(_options(timeout=50, max_content_length=1024))
    mock_request.return_value.close.assert_called_once()


def test_error_status_raises_with_body(mock_request, make_response):
    mock_request.return_value = make_response(
        status_code=404, body=b'{"error":"missing"}', headers={"Content-Type": "application/json"}
    )
    with pytest.raises(RequestExecutionError) as excinfo:
        execute_request(_options(max_content_length=64))
    assert excinfo.value.status_code == 404
    assert str(excinfo.value) == 'Request failed with status code 404, body: {"error": "missing"}'


@pytest.mark.parametrize(
    "content, content_type, response_type, expected",
    [
        (b'{"a": 1}', "application/json; charset=utf-8", ResponseType.AUTO, {"a": 1}),
        (b"not json", "application/json", ResponseType.AUTO, "not json"),
        (b"<a/>", "application/xml", ResponseType.AUTO, "<a/>"),
        (b"plain", "", ResponseType.AUTO, "plain"),
        (b"", "application/json", ResponseType.AUTO, None),
        (b'{"a": 1}', "text/plain", ResponseType.JSON, {"a": 1}),
        (b'{"a": 1}', "application/json", ResponseType.TEXT, '{"a": 1}'),
        (b"caf\xe9", "text/plain; charset=latin-1", ResponseType.RAW, "café"),
        (b"\x00\x01", "application/json", ResponseType.BINARY, "AAE="),
    ],
)
def test_extract_response_data(content, content_type, response_type, expected):
    assert extract_response_data(content, content_type, response_type) == expected


def test_auto_binary_content_is_base64():
    png = b"\x89PNG\r\n\x1a\n"
    assert extract_response_data(png, "image/png") == base64.b64encode(png).decode()
    assert extract_response_data(b"\xff\xfe\xfd", "") == base64.b64encode(b"\xff\xfe\xfd").decode()


def test_invalid_json_with_json_response_type():
    with pytest.raises(RequestExecutionError, match="Failed to parse response as JSON"):
        extract_response_data(b"nope", "application/json", ResponseType.JSON)


def test_unknown_charset_falls_back_to_utf8():
    assert extract_response_data("é".encode(), "text/plain; charset=bogus", "text") == "é"
