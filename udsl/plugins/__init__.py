"""
Plugins — effect handlers grouped by namespace.

    from udsl import plugins as P

    P.register_plugin(P.plugin("custom").on("greet", greet))
    P.list_namespaces()  # ["custom"]

"$do": "custom.greet" dispatches to greet(args, ctx); an effect without a
dot lives in the "core" namespace.
"""

from udsl.plugins._types import (
    EffectHandler,
    Plugin,
    plugin,
)
from udsl.plugins._registry import (
    CORE_NAMESPACE,
    split_effect,
    PluginRegistry,
    default_registry,
    register_plugin,
    unregister_plugin,
    clear_plugins,
    list_namespaces,
)
from udsl.plugins._entity import entity_plugin

__all__ = (
    "EffectHandler",
    "Plugin",
    "plugin",
    "CORE_NAMESPACE",
    "split_effect",
    "PluginRegistry",
    "default_registry",
    "register_plugin",
    "unregister_plugin",
    "clear_plugins",
    "list_namespaces",
    "entity_plugin",
)
