"""
Discovers the plugins shipped in the plugins package and boots the host.

A plugin is a sub package of forum_notices.plugins exposing an activate(hooks) function.
activate should only add hooks (typically on plugins_loaded), the plugin does its actual
setup once the host fires them.
"""

import importlib
import logging
import pkgutil
from types import ModuleType

from forum_notices.host.context import HostContext
from forum_notices.host.hooks import HostEvent

logger = logging.getLogger(__name__)

PLUGINS_PACKAGE = "forum_notices.plugins"


def discover_plugins(package_name: str = PLUGINS_PACKAGE) -> list[ModuleType]:
    """Import every plugin package found in the plugins package, in alphabetical order."""
    package = importlib.import_module(package_name)
    plugins = []

    for module_info in sorted(pkgutil.iter_modules(package.__path__), key=lambda info: info.name):
        if not module_info.ispkg or module_info.name.startswith("_"):
            continue

        module_name = f"{package_name}.{module_info.name}"
        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            logger.error(f"Error loading plugin module {module_name}: {e}")
            continue

        if not callable(getattr(module, "activate", None)):
            logger.warning(f"Plugin module {module_name} has no activate function, skipping it.")
            continue

        plugins.append(module)
        logger.info(f"Discovered plugin: {module_name}")

    return plugins


def boot_host(context: HostContext, package_name: str = PLUGINS_PACKAGE) -> list[ModuleType]:
    """
    Activate all plugins, then fire the startup hooks in order:
    1. plugins_loaded, once every plugin is activated.
    2. init, once every plugin has been set up.
    """
    plugins = discover_plugins(package_name)
    for plugin in plugins:
        plugin.activate(context.hooks)
        logger.info(f"Plugin activated: {plugin.__name__}")

    context.hooks.do_action(HostEvent.PLUGINS_LOADED, context)
    context.hooks.do_action(HostEvent.INIT)
    logger.info(f"Host booted with {len(plugins)} plugin(s).")
    return plugins
