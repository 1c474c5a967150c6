"""
restapi.py
----------
Implements RestApiPlugin: merges datasource and action configuration of a REST
API step into one HTTP request and executes it through the shared HTTP client.
"""
import logging
from urllib.parse import urlencode, urlsplit, urlunsplit

from pydantic import ValidationError
from requests.exceptions import RequestException
from requests.models import PreparedRequest

from ..config import PluginConfiguration
from ..errors import ConfigurationError
from ..http_client import execute_request
from ..models import (
    ActionConfiguration,
    DatasourceConfiguration,
    ExecutionOutput,
    RequestOptions,
    RestApiFields,
)
from ..utils.curl import make_curl_string
from ..utils.properties import (
    concat_properties,
    effective_pairs,
    fold_headers,
    has_header,
    property_text,
)
from ..utils.request_body import update_request_body

logger = logging.getLogger(__name__)


def register(register_plugin):
    register_plugin("restapi", RestApiPlugin)


class RestApiPlugin:
    def __init__(self, configuration: PluginConfiguration = None):
        self.configuration = configuration or PluginConfiguration()

    def execute(self, context, datasource_configuration, action_configuration) -> ExecutionOutput:
        datasource = _coerce(DatasourceConfiguration, datasource_configuration)
        action = _coerce(ActionConfiguration, action_configuration)

        if not action.http_method:
            raise ConfigurationError("No HTTP method specified for REST API step")

        url = build_url(f"{datasource.url_base or ''}{action.url_path or ''}")
        params = effective_pairs(datasource.params, action.params)
        if params:
            url = _append_params(url, [(p.key, property_text(p.value)) for p in params])

        try:
            headers = fold_headers(effective_pairs(datasource.headers, action.headers))
        except Exception as e:
            raise ConfigurationError(f"Headers failed to transform, {e}") from e

        if not has_header(headers, "user-agent"):
            headers["User-Agent"] = self.configuration.default_user_agent

        options = RequestOptions(
            url=url,
            method=action.http_method.value,
            headers=headers,
            response_type="binary",
            timeout=self.configuration.rest_api_execution_timeout_ms,
            max_body_length=self.configuration.rest_api_max_content_length_bytes,
            max_content_length=self.configuration.rest_api_max_content_length_bytes,
        )
        update_request_body(action, headers, options)

        logger.info("Executing REST API step %s %s", options.method, options.url)
        logger.debug("Request headers: %s", sorted(headers))
        return execute_request(options, action.response_type)

    def describe_request(self, action_configuration, datasource_configuration) -> str:
        datasource = _coerce(DatasourceConfiguration, datasource_configuration)
        action = _coerce(ActionConfiguration, action_configuration)

        if not action.http_method:
            raise ConfigurationError("HTTP method not specified")

        return make_curl_string(
            method=action.http_method,
            url=f"{datasource.url_base or ''}{action.url_path or ''}",
            headers=concat_properties(datasource.headers, action.headers),
            params=concat_properties(datasource.params, action.params),
            body=action.body,
            form_data=action.form_data,
            body_type=action.body_type,
            file_name=action.file_name,
            file_form_key=action.file_form_key,
        )

    def dynamic_fields(self):
        return [
            RestApiFields.URL_BASE.value,
            RestApiFields.URL_PATH.value,
            RestApiFields.PARAMS.value,
            RestApiFields.HEADERS.value,
            RestApiFields.BODY_TYPE.value,
            RestApiFields.BODY.value,
            RestApiFields.FORM_DATA.value,
            RestApiFields.FILE_NAME.value,
            RestApiFields.FILE_FORM_KEY.value,
        ]

    def escaped_fields(self):
        return [RestApiFields.BODY.value]

    def introspect_schema(self, datasource_configuration):
        return {}

    def check_connection(self, datasource_configuration):
        return None


def build_url(raw_url: str) -> str:
    """Parse ``raw_url`` as an absolute URL, raising ConfigurationError if it is not one."""
    prepared = PreparedRequest()
    try:
        prepared.prepare_url(raw_url, None)
    except (RequestException, ValueError) as e:
        raise ConfigurationError(f"URL is not valid, {e}") from e
    return prepared.url


def _append_params(url: str, params) -> str:
    """Append one query entry per (key, text) pair after any existing query."""
    parts = urlsplit(url)
    encoded = urlencode(params)
    query = f"{parts.query}&{encoded}" if parts.query else encoded
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def _coerce(model, value):
    if isinstance(value, model):
        return value
    try:
        return model.model_validate(value or {})
    except ValidationError as e:
        raise ConfigurationError(f"Invalid {model.__name__}, {e}") from e
