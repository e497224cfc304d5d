"""
Run — execute operations and pipelines against registered plugins.

    from udsl import run as R

    result = await R.execute(
        {"$pipe": [{"$do": "entity.create", "$with": {"type": "User"}, "$as": "user"}]},
        {"name": "John"},
        R.RunOptions(temp_ids=TempIds()),
    )
"""

from udsl.run._types import (
    Operation,
    Branch,
    Step,
    Pipeline,
    DSL,
    is_operation,
    is_branch,
    is_pipeline,
    is_dsl,
    parse_step,
    parse,
    OperationResult,
    PipelineResult,
    RunOptions,
)
from udsl.run._context import EvalContext
from udsl.run._operation import execute_operation
from udsl.run._pipeline import execute_pipeline, execute, attempt

__all__ = (
    "Operation",
    "Branch",
    "Step",
    "Pipeline",
    "DSL",
    "is_operation",
    "is_branch",
    "is_pipeline",
    "is_dsl",
    "parse_step",
    "parse",
    "OperationResult",
    "PipelineResult",
    "RunOptions",
    "EvalContext",
    "execute_operation",
    "execute_pipeline",
    "execute",
    "attempt",
)
