"""
registry.py
-----------
Plugin registry. Plugins are registered by name and instantiated with the
process PluginConfiguration. Every module in restbridge.plugins exposing a
``register`` hook is loaded as a plugin.
"""
import importlib
import logging
import os

from .config import PluginConfiguration
from .plugins.base import PLUGIN_OPERATIONS

logger = logging.getLogger(__name__)

PLUGIN_REGISTRY = {}


def register_plugin(name, plugin_cls):
    missing = [op for op in PLUGIN_OPERATIONS if not callable(getattr(plugin_cls, op, None))]
    if missing:
        raise TypeError(f"Plugin {name!r} is missing operations: {', '.join(missing)}")
    PLUGIN_REGISTRY[name] = plugin_cls
    logger.debug("Registered plugin %s -> %s", name, plugin_cls.__name__)


def load_plugins():
    plugin_dir = os.path.join(os.path.dirname(__file__), "plugins")
    for fname in sorted(os.listdir(plugin_dir)):
        if fname.endswith(".py") and not fname.startswith("__"):
            mod = importlib.import_module(f"restbridge.plugins.{fname[:-3]}")
            if hasattr(mod, "register"):
                mod.register(register_plugin)


def get_plugin(name, configuration: PluginConfiguration = None):
    if name in PLUGIN_REGISTRY:
        return PLUGIN_REGISTRY[name](configuration or PluginConfiguration.from_settings())
    raise ValueError(f"Unknown plugin: {name}")


def run_operation(name, operation, payload=None, configuration: PluginConfiguration = None):
    """
    Run one plugin operation from a JSON payload and return JSON-safe data.
    payload keys: context, datasourceConfiguration, actionConfiguration
    """
    if operation not in PLUGIN_OPERATIONS:
        raise ValueError(f"Unknown operation: {operation}")
    plugin = get_plugin(name, configuration)
    payload = payload or {}
    datasource = payload.get("datasourceConfiguration") or {}
    action = payload.get("actionConfiguration") or {}

    if operation == "execute":
        result = plugin.execute(payload.get("context") or {}, datasource, action)
        return result.model_dump(mode="json", by_alias=True)
    if operation == "describe_request":
        return plugin.describe_request(action, datasource)
    if operation in ("dynamic_fields", "escaped_fields"):
        return list(getattr(plugin, operation)())
    if operation == "check_connection":
        plugin.check_connection(datasource)
        return {"success": True}
    return plugin.introspect_schema(datasource)


def plugin_names():
    return sorted(PLUGIN_REGISTRY)


load_plugins()
