"""
Plugin registry — namespace → Plugin, plus effect-name resolution.

A process-wide `default_registry` backs the module-level helpers. Runs that
need isolation pass their own PluginRegistry through RunOptions.
"""

from __future__ import annotations

import logging

from udsl._errors import UnknownEffect, UnknownNamespace
from udsl.plugins._types import EffectHandler, Plugin

logger = logging.getLogger("udsl.plugins")

CORE_NAMESPACE = "core"
"""Namespace of an effect written without a dot."""


def split_effect(effect: str) -> tuple[str, str]:
    """
    "entity.create"  → ("entity", "create")
    "log"            → ("core", "log")
    "a.b.c"          → ("a", "b.c")
    """
    namespace, dot, name = effect.partition(".")
    if not dot:
        return CORE_NAMESPACE, effect
    return namespace, name


class PluginRegistry:
    """
    Mutable namespace → plugin mapping. Last registration wins.

    No locking: do not mutate a registry while runs using it are in flight.

    Example:
        registry = PluginRegistry()
        registry.register(entity_plugin)
        handler = registry.lookup("entity.create")
    """

    __slots__ = ("_plugins",)

    def __init__(self, *plugins: Plugin) -> None:
        self._plugins: dict[str, Plugin] = {}
        for p in plugins:
            self.register(p)

    def register(self, plugin: Plugin) -> None:
        if plugin.namespace in self._plugins:
            logger.debug("replacing plugin for namespace %r", plugin.namespace)
        else:
            logger.debug("registering plugin %r (%d effects)", plugin.namespace, len(plugin.effects))
        self._plugins[plugin.namespace] = plugin

    def unregister(self, namespace: str) -> None:
        if self._plugins.pop(namespace, None) is not None:
            logger.debug("unregistered plugin %r", namespace)

    def clear(self) -> None:
        self._plugins.clear()

    def namespaces(self) -> list[str]:
        return list(self._plugins)

    def get(self, namespace: str) -> Plugin | None:
        return self._plugins.get(namespace)

    def lookup(self, effect: str) -> EffectHandler:
        """
        Find the handler for a qualified effect name.

        Raises UnknownNamespace / UnknownEffect.
        """
        namespace, name = split_effect(effect)
        found = self._plugins.get(namespace)
        if found is None:
            raise UnknownNamespace(namespace)
        handler = found.handler(name)
        if handler is None:
            raise UnknownEffect(effect)
        return handler

    def __contains__(self, namespace: object) -> bool:
        return namespace in self._plugins

    def __len__(self) -> int:
        return len(self._plugins)

    def __repr__(self) -> str:
        return f"PluginRegistry({', '.join(self._plugins)})"


# ═══════════════════════════════════════════════════════════════════════════════
# Process-wide Registry
# ═══════════════════════════════════════════════════════════════════════════════

default_registry = PluginRegistry()


def register_plugin(plugin: Plugin) -> None:
    """Register on the default registry."""
    default_registry.register(plugin)


def unregister_plugin(namespace: str) -> None:
    default_registry.unregister(namespace)


def clear_plugins() -> None:
    default_registry.clear()


def list_namespaces() -> list[str]:
    return default_registry.namespaces()


__all__ = (
    "CORE_NAMESPACE",
    "split_effect",
    "PluginRegistry",
    "default_registry",
    "register_plugin",
    "unregister_plugin",
    "clear_plugins",
    "list_namespaces",
)
