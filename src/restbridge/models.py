"""
models.py
---------
Pydantic schemas for REST API steps: datasource/action configuration, key/value
properties and the normalized execution output. Also defines the mutable
transport descriptor handed to the HTTP client.
"""
import enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, field_validator
from pydantic.alias_generators import to_camel


# Enums

class HttpMethod(str, enum.Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            return cls.__members__.get(value.upper())
        return None


class BodyType(str, enum.Enum):
    NONE = "none"
    JSON = "json"
    RAW = "raw"
    FORM = "form"
    MULTIPART = "multipart"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            value = _LEGACY_BODY_TYPES.get(value, value.lower())
            for member in cls:
                if member.value == value:
                    return member
        return None


_LEGACY_BODY_TYPES = {
    "jsonBody": "json",
    "rawBody": "raw",
    "formData": "form",
    "fileForm": "multipart",
}


class ResponseType(str, enum.Enum):
    AUTO = "auto"
    JSON = "json"
    TEXT = "text"
    BINARY = "binary"
    RAW = "raw"


class RestApiFields(str, enum.Enum):
    URL_BASE = "urlBase"
    URL_PATH = "urlPath"
    PARAMS = "params"
    HEADERS = "headers"
    BODY_TYPE = "bodyType"
    BODY = "body"
    FORM_DATA = "formData"
    FILE_NAME = "fileName"
    FILE_FORM_KEY = "fileFormKey"


# Schemas

class _CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True


class Property(_CamelModel):
    key: Optional[str] = None
    value: Any = None
    enabled: Optional[bool] = None
    description: Optional[str] = None


class DatasourceConfiguration(_CamelModel):
    url_base: Optional[str] = ""
    headers: Optional[List[Optional[Property]]] = None
    params: Optional[List[Optional[Property]]] = None


class ActionConfiguration(_CamelModel):
    http_method: Optional[HttpMethod] = None
    url_path: Optional[str] = None
    headers: Optional[List[Optional[Property]]] = None
    params: Optional[List[Optional[Property]]] = None
    body_type: Optional[BodyType] = None
    body: Any = None
    form_data: Optional[List[Optional[Property]]] = None
    file_name: Optional[str] = None
    file_form_key: Optional[str] = None
    response_type: ResponseType = ResponseType.AUTO

    @field_validator("http_method", "body_type", mode="before")
    @classmethod
    def _blank_as_missing(cls, value):
        if value == "":
            return None
        return value

    @field_validator("response_type", mode="before")
    @classmethod
    def _default_response_type(cls, value):
        if not value:
            return ResponseType.AUTO
        return value


class ExecutionOutput(_CamelModel):
    output: Any = None
    log: List[str] = []
    error: Optional[str] = None
    status_code: Optional[int] = None
    headers: Dict[str, str] = {}
    execution_time_ms: Optional[int] = None


# Transport descriptor

@dataclass
class RequestOptions:
    """
    Fully resolved request handed to the HTTP client. The body builder attaches
    the payload and content headers in place; ``headers`` is the same dict the
    caller holds.
    """
    url: str
    method: str
    headers: Dict[str, Any] = field(default_factory=dict)
    response_type: str = "binary"
    timeout: Optional[int] = None
    max_body_length: Optional[int] = None
    max_content_length: Optional[int] = None
    data: Optional[bytes] = None
