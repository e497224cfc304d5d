"""
udsl — mutations as data.

Describe operations once as JSON, execute them anywhere through plugins.

    from udsl import build as B    # Fluent document builder
    from udsl import run as R      # Execute operations / pipelines
    from udsl import plugins as P  # Effect handler registry
    from udsl import expr as X     # Expression grammar + resolver
"""

from udsl import expr
from udsl import plugins
from udsl import run
from udsl import build
from udsl._types import (
    Result,
    Ok,
    Error,
    LazyCoroResult,
    Json,
    JsonObject,
    Missing,
    MISSING,
)
from udsl._errors import (
    EvaluationError,
    UnknownNamespace,
    UnknownEffect,
    UnresolvedReference,
    InvalidDSL,
)
from udsl.expr import resolve_value, is_truthy, TempIds, reset_temp_ids
from udsl.plugins import (
    Plugin,
    PluginRegistry,
    plugin,
    register_plugin,
    unregister_plugin,
    clear_plugins,
    list_namespaces,
    entity_plugin,
)
from udsl.run import (
    Operation,
    Branch,
    Pipeline,
    OperationResult,
    PipelineResult,
    RunOptions,
    EvalContext,
    parse,
    execute_operation,
    execute_pipeline,
    execute,
    attempt,
)

__version__ = "0.1.0"

__all__ = (
    # Subpackages
    "expr",
    "plugins",
    "run",
    "build",
    # Core types
    "Result",
    "Ok",
    "Error",
    "LazyCoroResult",
    "Json",
    "JsonObject",
    "Missing",
    "MISSING",
    # Errors
    "EvaluationError",
    "UnknownNamespace",
    "UnknownEffect",
    "UnresolvedReference",
    "InvalidDSL",
    # Resolution
    "resolve_value",
    "is_truthy",
    "TempIds",
    "reset_temp_ids",
    # Plugins
    "Plugin",
    "PluginRegistry",
    "plugin",
    "register_plugin",
    "unregister_plugin",
    "clear_plugins",
    "list_namespaces",
    "entity_plugin",
    # Execution
    "Operation",
    "Branch",
    "Pipeline",
    "OperationResult",
    "PipelineResult",
    "RunOptions",
    "EvalContext",
    "parse",
    "execute_operation",
    "execute_pipeline",
    "execute",
    "attempt",
)
