# Re-export main modules and objects for easier imports
from .config import settings, PluginConfiguration
from .errors import IntegrationError, ConfigurationError, RequestExecutionError
from .models import (
    ActionConfiguration,
    BodyType,
    DatasourceConfiguration,
    ExecutionOutput,
    HttpMethod,
    Property,
    RequestOptions,
    ResponseType,
)
from .plugins.restapi import RestApiPlugin
from .registry import get_plugin, register_plugin, run_operation
