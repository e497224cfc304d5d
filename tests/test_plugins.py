import pytest

from udsl import (
    Plugin,
    PluginRegistry,
    UnknownEffect,
    UnknownNamespace,
    clear_plugins,
    entity_plugin,
    list_namespaces,
    plugin,
    register_plugin,
    unregister_plugin,
)
from udsl.plugins import CORE_NAMESPACE, default_registry, split_effect


def _noop(args, ctx):
    return None


def test_split_effect():
    assert split_effect("entity.create") == ("entity", "create")
    assert split_effect("log") == (CORE_NAMESPACE, "log")
    assert split_effect("a.b.c") == ("a", "b.c")


def test_register_and_list_namespaces():
    register_plugin(Plugin(namespace="http", effects={"post": _noop}))

    assert list_namespaces() == ["entity", "http"]


def test_last_registration_wins():
    first = plugin("custom").on("a", _noop)
    second = plugin("custom").on("b", _noop)
    register_plugin(first)
    register_plugin(second)

    assert default_registry.get("custom") is second
    with pytest.raises(UnknownEffect):
        default_registry.lookup("custom.a")


def test_unregister_and_clear():
    register_plugin(plugin("custom").on("a", _noop))
    unregister_plugin("custom")
    unregister_plugin("never-registered")

    assert list_namespaces() == ["entity"]

    clear_plugins()
    assert list_namespaces() == []


def test_lookup_errors(registry):
    with pytest.raises(UnknownNamespace, match="Unknown plugin namespace: missing") as info:
        registry.lookup("missing.ns")
    assert info.value.namespace == "missing"

    with pytest.raises(UnknownEffect, match="Unknown effect: entity.bogus") as info:
        registry.lookup("entity.bogus")
    assert info.value.effect == "entity.bogus"


def test_undotted_effect_goes_to_core(registry):
    with pytest.raises(UnknownNamespace, match="core"):
        registry.lookup("log")

    registry.register(plugin("core").on("log", _noop))
    assert registry.lookup("log") is _noop


def test_registries_are_independent(registry):
    other = PluginRegistry()

    assert "entity" in registry
    assert "entity" not in other
    assert len(other) == 0


def test_plugin_on_returns_new_plugin():
    base = plugin("custom")
    extended = base.on("a", _noop)

    assert base.handler("a") is None
    assert extended.handler("a") is _noop


def test_plugin_effects_are_read_only():
    p = Plugin(namespace="custom", effects={"a": _noop})

    with pytest.raises(TypeError):
        p.effects["b"] = _noop  # type: ignore[index]


def test_plugin_requires_namespace():
    with pytest.raises(ValueError):
        Plugin(namespace="")


def test_entity_plugin_describes_mutations(make_ctx):
    ctx = make_ctx()
    create = entity_plugin.handler("create")
    delete = entity_plugin.handler("delete")

    assert create({"type": "User", "name": "John"}, ctx) == {"$op": "create", "$type": "User", "name": "John"}
    assert delete({"type": "User", "id": "u1", "extra": 1}, ctx) == {"$op": "delete", "$type": "User", "id": "u1"}
