"""
base.py
-------
Defines the IntegrationPlugin contract. A plugin is any class providing these
operations; it is registered by name with the plugin registry.
"""
from typing import Any, Dict, List, Protocol, runtime_checkable

from ..models import ExecutionOutput

PLUGIN_OPERATIONS = (
    "execute",
    "describe_request",
    "dynamic_fields",
    "escaped_fields",
    "check_connection",
    "introspect_schema",
)


@runtime_checkable
class IntegrationPlugin(Protocol):
    def execute(self, context: Dict[str, Any], datasource_configuration, action_configuration) -> ExecutionOutput:
        """
        context: execution context supplied by the host
        Returns: normalized output of one call to the integration
        """
        ...

    def describe_request(self, action_configuration, datasource_configuration) -> str:
        """Human-readable rendering of the request execute would send."""
        ...

    def dynamic_fields(self) -> List[str]:
        ...

    def escaped_fields(self) -> List[str]:
        ...

    def check_connection(self, datasource_configuration) -> None:
        ...

    def introspect_schema(self, datasource_configuration) -> Dict[str, Any]:
        ...
