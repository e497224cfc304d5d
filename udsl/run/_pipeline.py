"""
Pipeline orchestrator — ordered steps over a shared results environment.

Steps run strictly one after another: a later `$ref` may depend on an
earlier step's output, so each handler is awaited before the next step.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from combinators import lift as L
from kungfu import LazyCoroResult

from udsl._errors import InvalidDSL
from udsl._types import Json
from udsl.expr import is_truthy
from udsl.run._context import EvalContext
from udsl.run._operation import execute_operation
from udsl.run._types import (
    DSL,
    Branch,
    Operation,
    OperationResult,
    Pipeline,
    PipelineResult,
    RunOptions,
    Step,
    parse,
)

logger = logging.getLogger("udsl.run")

# ═══════════════════════════════════════════════════════════════════════════════
# Run State
# ═══════════════════════════════════════════════════════════════════════════════


class _Run:
    """Mutable state of one pipeline execution."""

    __slots__ = ("input", "options", "results", "operations")

    def __init__(self, input: Mapping[str, Any], options: RunOptions) -> None:
        self.input = MappingProxyType(dict(input))
        self.options = options
        self.results: dict[str, Any] = {}
        self.operations: list[OperationResult] = []

    def context(self) -> EvalContext:
        """Fresh view over the current results."""
        return EvalContext.create(self.input, self.results, self.options)

    def resolve(self, value: Json, where: str) -> Json:
        try:
            return self.context().resolve(value)
        except Exception:
            logger.warning("pipeline aborted at %s", where)
            raise

    async def run_steps(self, steps: tuple[Step, ...], path: str = "") -> None:
        for index, step in enumerate(steps, start=1):
            where = f"{path}{index}"
            match step:
                case Operation():
                    await self.run_operation(step, where)
                case Branch():
                    await self.run_branch(step, where)

    async def run_operation(self, op: Operation, where: str) -> None:
        try:
            outcome = await execute_operation(op, self.context())
        except Exception:
            logger.warning(
                "pipeline aborted at step %s (%s as %s)",
                where,
                op.effect,
                op.result_name or "-",
            )
            raise

        self.operations.append(outcome)
        if outcome.name and not outcome.skipped:
            self.results[outcome.name] = outcome.result

    async def run_branch(self, branch: Branch, where: str) -> None:
        taken = is_truthy(self.resolve(branch.condition, f"step {where} (branch condition)"))
        logger.debug("branch %s condition is %s", where, "truthy" if taken else "falsy")
        if taken:
            await self.run_steps(branch.then, f"{where}.then.")
        else:
            await self.run_steps(branch.otherwise, f"{where}.else.")


# ═══════════════════════════════════════════════════════════════════════════════
# execute_pipeline()
# ═══════════════════════════════════════════════════════════════════════════════


async def execute_pipeline(
    pipeline: Pipeline | Json,
    input: Mapping[str, Any] | None = None,
    options: RunOptions | None = None,
) -> PipelineResult:
    """
    Execute a pipeline of operations.

    Named, non-skipped results are stored for later `$ref`s (last write
    wins). The return value is `$return` resolved at the end, or the
    results dict itself. The first error aborts the run and propagates;
    no partial result is returned.

    Example:
        result = await execute_pipeline(
            {
                "$pipe": [
                    {"$do": "entity.create", "$with": {"type": "Session", "title": {"$input": "title"}}, "$as": "session"},
                ],
            },
            {"title": "Chat"},
        )
        result.result  # {"session": {"$op": "create", "$type": "Session", "title": "Chat"}}
    """
    pipe = pipeline if isinstance(pipeline, Pipeline) else Pipeline.from_json(pipeline)
    state = _Run(input or {}, options if options is not None else RunOptions())

    await state.run_steps(pipe.steps)

    if pipe.return_expr is not None:
        returned = state.resolve(pipe.return_expr, "$return")
    else:
        returned = state.results

    return PipelineResult(operations=tuple(state.operations), result=returned)


# ═══════════════════════════════════════════════════════════════════════════════
# execute() — Operation or Pipeline
# ═══════════════════════════════════════════════════════════════════════════════


async def execute(
    dsl: DSL | Json,
    input: Mapping[str, Any] | None = None,
    options: RunOptions | None = None,
) -> PipelineResult:
    """
    Execute a DSL document: a single operation runs as a one-step pipeline.

    Raises InvalidDSL when `dsl` is neither shape.
    """
    match parse(dsl):
        case Pipeline() as pipe:
            return await execute_pipeline(pipe, input, options)
        case Operation() as op:
            return await execute_pipeline(Pipeline(steps=(op,)), input, options)
        case other:
            raise InvalidDSL(f"cannot execute {other!r}")


# ═══════════════════════════════════════════════════════════════════════════════
# attempt() — Result-returning execute
# ═══════════════════════════════════════════════════════════════════════════════


def attempt(
    dsl: DSL | Json,
    input: Mapping[str, Any] | None = None,
    options: RunOptions | None = None,
) -> LazyCoroResult[PipelineResult, Exception]:
    """
    Lazy, non-raising execute.

    Example:
        match await attempt(dsl, {"title": "Chat"}):
            case Ok(res):
                print(res.result)
            case Error(e):
                print(f"failed: {e}")
    """
    return L.catching_async(
        lambda: execute(dsl, input, options),
        on_error=lambda e: e,
    )


__all__ = ("execute_pipeline", "execute", "attempt")
