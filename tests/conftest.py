from types import MappingProxyType

import pytest

from udsl import EvalContext, PluginRegistry, clear_plugins, entity_plugin, register_plugin, reset_temp_ids


@pytest.fixture(autouse=True)
def _fresh_globals():
    reset_temp_ids()
    clear_plugins()
    register_plugin(entity_plugin)
    yield
    clear_plugins()


@pytest.fixture
def registry():
    return PluginRegistry(entity_plugin)


@pytest.fixture
def make_ctx():
    def factory(input=None, results=None, **kwargs):
        return EvalContext(
            input=MappingProxyType(dict(input or {})),
            results=MappingProxyType(results if results is not None else {}),
            **kwargs,
        )

    return factory
